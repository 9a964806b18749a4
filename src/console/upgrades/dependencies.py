"""FastAPI dependencies for the upgrades bounded context."""

from functools import lru_cache

from infrastructure.dependencies import get_platform_client
from upgrades.application import ActivationController
from upgrades.application.observability import (
    ActivationProbe,
    DefaultActivationProbe,
)
from upgrades.infrastructure.target_store import PlatformUpgradeTargetStore


def get_activation_probe() -> ActivationProbe:
    """Get ActivationProbe instance."""
    return DefaultActivationProbe()


@lru_cache
def get_activation_controller() -> ActivationController:
    """Get application-scoped ActivationController (singleton).

    The controller is shared across requests so that its per-target
    in-flight guard sees a second toggle of the same row arriving while
    the first is still running.

    Returns:
        ActivationController bound to the shared platform client
    """
    return ActivationController(
        store=PlatformUpgradeTargetStore(client=get_platform_client()),
        probe=get_activation_probe(),
    )
