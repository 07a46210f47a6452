"""NeoForge promotion resolver backed by the Maven versions API."""

from typing import Any, List, Optional

from constants import Constants, LoaderFamilies

from ..models import MinecraftVersion, PromotionType
from .base import PromotionResolver

BETA_SUFFIX = "-beta"


def working_version(target: MinecraftVersion) -> str:
    """NeoForge versions drop the leading ``1.``: 1.20.4 -> ``20.4``."""
    return f"{target.minor}.{target.revision or 0}"


def find_promoted_version(versions: List[str], stable: bool, prefix: str) -> Optional[str]:
    """Walk an oldest-first list keeping the last build under ``prefix``.

    A build must continue ``prefix`` with a dot, so ``21.1`` never matches
    ``21.10.x``. With ``stable`` set, ``-beta`` builds are skipped.
    """
    latest_available = None
    for candidate in versions:
        if candidate != prefix and not candidate.startswith(prefix + "."):
            continue
        if stable and candidate.endswith(BETA_SUFFIX):
            continue
        latest_available = candidate
    return latest_available


class NeoForgePromotionResolver(PromotionResolver):
    """Stability is encoded as a version suffix; there is no promos map."""

    family = LoaderFamilies.NEOFORGE.value

    def default_index_url(self) -> str:
        return Constants.NEOFORGE_VERSIONS_URL

    def lookup(self, index: Any, target: MinecraftVersion, promotion: PromotionType) -> Optional[str]:
        versions = index.get("versions") if isinstance(index, dict) else None
        if not isinstance(versions, list):
            return None
        return find_promoted_version(
            [v for v in versions if isinstance(v, str)],
            promotion is PromotionType.RECOMMENDED,
            working_version(target),
        )
