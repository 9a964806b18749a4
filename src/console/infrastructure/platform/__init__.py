"""Platform REST API access shared by the console's bounded contexts."""

from infrastructure.platform.client import PlatformClient

__all__ = ["PlatformClient"]
