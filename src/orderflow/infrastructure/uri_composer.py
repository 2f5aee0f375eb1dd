"""Catalog picture URI resolution."""

from __future__ import annotations

from orderflow.domain.service.uri_composer import UriComposer

# Catalog seed data stores picture references under this placeholder host.
PICTURE_BASE_PLACEHOLDER = "http://catalogbaseurltobereplaced"


class CatalogUriComposer(UriComposer):

    def __init__(self, catalog_base_url: str) -> None:
        self._base_url = catalog_base_url.rstrip("/")

    def compose_picture_uri(self, picture_ref: str) -> str:
        if picture_ref.startswith(PICTURE_BASE_PLACEHOLDER):
            return self._base_url + picture_ref[len(PICTURE_BASE_PLACEHOLDER):]
        if picture_ref.startswith(("http://", "https://")):
            return picture_ref
        return f"{self._base_url}/{picture_ref.lstrip('/')}"
