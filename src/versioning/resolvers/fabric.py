"""Fabric loader promotion resolver backed by Fabric meta."""

from typing import Any, Optional

from constants import Constants, LoaderFamilies

from ..models import MinecraftVersion, PromotionType
from .base import PromotionResolver


class FabricPromotionResolver(PromotionResolver):
    """The loader is game-version independent; the list is newest-first."""

    family = LoaderFamilies.FABRIC.value

    def default_index_url(self) -> str:
        return f"{Constants.FABRIC_META_URL}/versions/loader"

    def lookup(self, index: Any, target: MinecraftVersion, promotion: PromotionType) -> Optional[str]:
        if not isinstance(index, list):
            return None
        for entry in index:
            if not isinstance(entry, dict) or not entry.get("version"):
                continue
            if promotion is PromotionType.LATEST or entry.get("stable"):
                return entry["version"]
        return None
