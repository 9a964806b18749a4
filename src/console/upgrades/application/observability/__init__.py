"""Domain-Oriented Observability for the upgrades application layer."""

from upgrades.application.observability.activation_probe import (
    ActivationProbe,
    DefaultActivationProbe,
)

__all__ = [
    "ActivationProbe",
    "DefaultActivationProbe",
]
