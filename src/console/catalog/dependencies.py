"""FastAPI dependencies for the catalog bounded context."""

from typing import Annotated

from fastapi import Depends

from catalog.application import CatalogService
from catalog.application.observability import CatalogProbe, DefaultCatalogProbe
from catalog.infrastructure.catalog_repository import PlatformCatalogRepository
from infrastructure.dependencies import get_platform_client
from infrastructure.platform import PlatformClient


def get_catalog_probe() -> CatalogProbe:
    """Get CatalogProbe instance."""
    return DefaultCatalogProbe()


def get_catalog_service(
    client: Annotated[PlatformClient, Depends(get_platform_client)],
    probe: Annotated[CatalogProbe, Depends(get_catalog_probe)],
) -> CatalogService:
    """Get a request-scoped CatalogService.

    A new instance per request keeps the catalog cache scoped to a single
    view, so every page load starts from a fresh snapshot.
    """
    return CatalogService(
        repository=PlatformCatalogRepository(client=client),
        probe=probe,
    )
