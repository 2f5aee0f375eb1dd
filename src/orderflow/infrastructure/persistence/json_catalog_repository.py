"""JSON-file-backed, read-only implementation of CatalogRepository."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from orderflow.domain.model.catalog import CatalogItem
from orderflow.domain.repository.catalog_repository import CatalogRepository


class JsonCatalogRepository(CatalogRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    async def find_catalog_items(self, ids: Iterable[int]) -> list[CatalogItem]:
        wanted = set(ids)
        if not wanted or not self._file_path.exists():
            return []
        return [
            CatalogItem(id=raw["id"], name=raw["name"], picture_uri=raw["picture_uri"])
            for raw in json.loads(self._file_path.read_text(encoding="utf-8"))
            if raw["id"] in wanted
        ]
