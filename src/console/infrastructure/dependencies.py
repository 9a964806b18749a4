"""Shared infrastructure dependencies.

Provides ONLY raw infrastructure resources (the platform HTTP client).
Does NOT import from bounded contexts to maintain DDD boundaries.
"""

from functools import lru_cache

from infrastructure.platform import PlatformClient
from infrastructure.settings import get_platform_settings


@lru_cache
def get_platform_client() -> PlatformClient:
    """Get application-scoped platform client (singleton).

    The underlying httpx connection pool is shared across all requests and
    closed by the application lifespan.

    Returns:
        PlatformClient configured from PlatformSettings.
    """
    settings = get_platform_settings()
    return PlatformClient(
        base_url=settings.api_base_url,
        timeout_seconds=settings.timeout_seconds,
        access_token=settings.access_token.get_secret_value(),
        verify_tls=settings.verify_tls,
    )
