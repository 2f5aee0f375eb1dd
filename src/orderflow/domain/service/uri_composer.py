"""Port for turning a catalog picture reference into an absolute URI."""

from __future__ import annotations

from abc import ABC, abstractmethod


class UriComposer(ABC):

    @abstractmethod
    def compose_picture_uri(self, picture_ref: str) -> str:
        """Return the absolute URI for a catalog picture reference."""
