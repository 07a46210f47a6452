"""Promotion label parsing and version comparison utilities."""

from typing import Iterable

from packaging import version as pkg_version

from .models import MinecraftVersion, PromotionType


def is_promotion_version(label: str) -> bool:
    """Return True when ``label`` is a promotion label rather than a version."""
    return label.strip().lower() in {p.value for p in PromotionType}


def parse_promotion(label: str) -> PromotionType:
    """Normalize a promotion label case-insensitively.

    Raises:
        ValueError: If the label is not a known promotion.
    """
    try:
        return PromotionType(label.strip().lower())
    except ValueError:
        raise ValueError(
            f"Unknown promotion {label!r}; expected one of "
            + ", ".join(p.value for p in PromotionType)
        ) from None


def is_version_acceptable(mc_version: MinecraftVersion, acceptable_minors: Iterable[int]) -> bool:
    """True for ``1.x`` releases whose minor is listed in ``acceptable_minors``."""
    if mc_version.major == 1:
        return mc_version.minor in set(acceptable_minors)
    return False


def version_gte(version: str, minimum: str) -> bool:
    """Compare two dotted versions numerically (``1.20.10 >= 1.20.2``)."""
    return pkg_version.Version(version) >= pkg_version.Version(minimum)


def is_forge_gradle2(library_version: str) -> bool:
    """True for 1.12.2 Forge builds at or below 14.23.5.2847 (pre-installer format)."""
    max_fg2 = [14, 23, 5, 2847]
    try:
        parts = [int(p) for p in library_version.split("-")[-1].split(".")]
    except ValueError:
        return False
    for current, limit in zip(parts, max_fg2):
        if current != limit:
            return current < limit
    return True
