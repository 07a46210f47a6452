"""Promotion resolvers for different loader families."""

from constants import LoaderFamilies

from .base import PromotionResolver
from .forge import ForgePromotionResolver
from .neoforge import NeoForgePromotionResolver
from .fabric import FabricPromotionResolver

_RESOLVERS = {
    LoaderFamilies.FORGE.value: ForgePromotionResolver,
    LoaderFamilies.NEOFORGE.value: NeoForgePromotionResolver,
    LoaderFamilies.FABRIC.value: FabricPromotionResolver,
}


def get_promotion_resolver(family: str) -> PromotionResolver:
    """Return a resolver instance for ``family``.

    Raises:
        ValueError: If the family is not supported.
    """
    cls = _RESOLVERS.get(family.lower())
    if cls is None:
        raise ValueError(f"Unsupported loader family: {family}")
    return cls()


__all__ = [
    "PromotionResolver",
    "ForgePromotionResolver",
    "NeoForgePromotionResolver",
    "FabricPromotionResolver",
    "get_promotion_resolver",
]
