"""Shared promotion-resolution flow for loader families."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from common.http_client import get_json
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from errors import IndexFetchError, PromotionNotFoundError

from ..models import MinecraftVersion, PromotionType
from ..parser import parse_promotion

logger = logging.getLogger(__name__)


class PromotionResolver(ABC):
    """Resolve a promotion label to a concrete loader version.

    Subclasses supply the index location and the family-specific lookup;
    normalization, fetching and the single fallback to ``latest`` live here.
    The index is fetched on every call and never modified.
    """

    family: str = ""

    def __init__(self, index_url: Optional[str] = None):
        self.index_url = index_url or self.default_index_url()

    @abstractmethod
    def default_index_url(self) -> str:
        """Remote location of the family's promotion index."""

    @abstractmethod
    def lookup(self, index: Any, target: MinecraftVersion, promotion: PromotionType) -> Optional[str]:
        """Return the version promoted under ``promotion`` or None."""

    def fetch_index(self) -> Any:
        """GET and parse the promotion index.

        Raises:
            IndexFetchError: On transport failure, non-200 status or invalid JSON.
        """
        status_code, _, data = get_json(self.index_url)
        if status_code != 200 or data is None:
            raise IndexFetchError(
                f"Unable to fetch {self.family} version index from {safe_url(self.index_url)} "
                f"(status {status_code})"
            )
        return data

    def resolve(self, target: MinecraftVersion, promotion_label: str) -> str:
        """Resolve ``promotion_label`` for ``target``, falling back to latest once.

        Raises:
            PromotionNotFoundError: If neither lookup yields a version.
        """
        promotion = parse_promotion(promotion_label)
        index = self.fetch_index()

        version = self.lookup(index, target, promotion)
        if version is None and promotion is not PromotionType.LATEST:
            logger.warning(
                "No %s version found for %s %s, attempting latest instead.",
                promotion.value, self.family, target,
            )
            version = self.lookup(index, target, PromotionType.LATEST)
        if version is None:
            raise PromotionNotFoundError(f"No latest version found for {self.family} {target}.")

        if is_debug_enabled(logger):
            logger.debug(
                "Resolved promotion",
                extra=extra_context(
                    event="decision",
                    component="promotion_resolver",
                    action="resolve",
                    outcome=version,
                    loader=self.family,
                ),
            )
        return version
