"""Unit tests for upgrades dependencies."""

from upgrades.application import ActivationController
from upgrades.dependencies import get_activation_controller
from upgrades.infrastructure.target_store import PlatformUpgradeTargetStore


class TestGetActivationController:
    """Tests for the application-scoped controller."""

    def test_controller_is_shared_across_calls(self):
        get_activation_controller.cache_clear()
        try:
            first = get_activation_controller()
            second = get_activation_controller()
        finally:
            get_activation_controller.cache_clear()

        assert first is second
        assert isinstance(first, ActivationController)
        assert isinstance(first._store, PlatformUpgradeTargetStore)
