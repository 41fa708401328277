"""Catalog collaborator interfaces: where listings come from and where links go."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogProduct:
    """Minimal listing record the duplicate finder needs."""

    id: str
    name: str
    source: str
    shaper: str | None = None
    dimensions: str | None = None


class BaseCatalogReader(ABC):
    """Abstract source of listings to scan for duplicates."""

    @abstractmethod
    def fetch_products(self) -> list[CatalogProduct]:
        """Return every listing that should take part in a duplicate scan."""
        ...


class BaseLinkWriter(ABC):
    """Abstract sink for related-listing links between two products."""

    @abstractmethod
    def link(self, product_id: str, matched_product_id: str, confidence: float | None = None) -> bool:
        """Link both listings to each other. Return True on success."""
        ...

    @abstractmethod
    def unlink(self, product_id: str, matched_product_id: str) -> bool:
        """Remove the link in both directions. Return True on success."""
        ...
