"""Abstract read-only repository for catalog items."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from orderflow.domain.model.catalog import CatalogItem


class CatalogRepository(ABC):

    @abstractmethod
    async def find_catalog_items(self, ids: Iterable[int]) -> list[CatalogItem]:
        """Return the catalog items whose id is in *ids*.

        Unknown ids are simply absent from the result.
        """
