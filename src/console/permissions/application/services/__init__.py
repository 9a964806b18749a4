"""Application services for the permissions bounded context."""

from permissions.application.services.policy_admin_service import (
    PolicyAdministrationService,
)

__all__ = ["PolicyAdministrationService"]
