"""Domain-Oriented Observability for the catalog application layer."""

from catalog.application.observability.catalog_probe import (
    CatalogProbe,
    DefaultCatalogProbe,
)

__all__ = [
    "CatalogProbe",
    "DefaultCatalogProbe",
]
