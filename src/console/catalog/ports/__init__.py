"""Ports (interfaces) for the catalog bounded context."""

from catalog.ports.repositories import ICatalogRepository

__all__ = ["ICatalogRepository"]
