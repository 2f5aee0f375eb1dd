"""Catalog item as seen by ordering: a read-only snapshot source."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogItem:
    id: int
    name: str
    picture_uri: str  # relative reference, resolved by a UriComposer
