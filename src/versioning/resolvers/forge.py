"""Forge promotion resolver backed by promotions_slim.json."""

from typing import Any, Optional

from constants import Constants, LoaderFamilies

from ..models import MinecraftVersion, PromotionType
from .base import PromotionResolver


class ForgePromotionResolver(PromotionResolver):
    """Looks up ``<mc>-<label>`` in the flat ``promos`` map."""

    family = LoaderFamilies.FORGE.value

    def default_index_url(self) -> str:
        return Constants.FORGE_PROMOTIONS_URL

    def lookup(self, index: Any, target: MinecraftVersion, promotion: PromotionType) -> Optional[str]:
        promos = index.get("promos") if isinstance(index, dict) else None
        if not isinstance(promos, dict):
            return None
        return promos.get(f"{target}-{promotion.value}")
