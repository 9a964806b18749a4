"""Permissions application layer."""

from permissions.application.services import PolicyAdministrationService

__all__ = ["PolicyAdministrationService"]
