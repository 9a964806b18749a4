"""Upgrades application layer."""

from upgrades.application.activation_controller import ActivationController

__all__ = ["ActivationController"]
