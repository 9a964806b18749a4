"""Catalog application layer."""

from catalog.application.catalog_service import CatalogService

__all__ = ["CatalogService"]
