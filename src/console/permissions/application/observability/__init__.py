"""Domain-Oriented Observability for the permissions application layer."""

from permissions.application.observability.policy_admin_probe import (
    DefaultPolicyAdministrationProbe,
    PolicyAdministrationProbe,
)

__all__ = [
    "DefaultPolicyAdministrationProbe",
    "PolicyAdministrationProbe",
]
