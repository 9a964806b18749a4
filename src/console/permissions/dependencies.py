"""FastAPI dependencies for the permissions bounded context."""

from typing import Annotated

from fastapi import Depends

from catalog.application import CatalogService
from catalog.dependencies import get_catalog_service
from infrastructure.dependencies import get_platform_client
from infrastructure.platform import PlatformClient
from infrastructure.settings import ConsoleSettings, get_console_settings
from permissions.application.observability import (
    DefaultPolicyAdministrationProbe,
    PolicyAdministrationProbe,
)
from permissions.application.services import PolicyAdministrationService
from permissions.infrastructure.policy_store import PlatformPolicyStore
from permissions.presentation.dialogs import (
    RolePolicyDialog,
    UserPolicyDialog,
    UserRoleDialog,
)


def get_policy_admin_probe() -> PolicyAdministrationProbe:
    """Get PolicyAdministrationProbe instance.

    Returns:
        DefaultPolicyAdministrationProbe instance for observability
    """
    return DefaultPolicyAdministrationProbe()


def get_policy_admin_service(
    client: Annotated[PlatformClient, Depends(get_platform_client)],
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
    probe: Annotated[PolicyAdministrationProbe, Depends(get_policy_admin_probe)],
) -> PolicyAdministrationService:
    """Get PolicyAdministrationService instance.

    Args:
        client: Shared platform client
        catalog_service: Request-scoped catalog cache
        probe: Domain probe for observability

    Returns:
        PolicyAdministrationService instance
    """
    return PolicyAdministrationService(
        policy_store=PlatformPolicyStore(client=client),
        catalog_service=catalog_service,
        probe=probe,
    )


ServiceDep = Annotated[PolicyAdministrationService, Depends(get_policy_admin_service)]
SettingsDep = Annotated[ConsoleSettings, Depends(get_console_settings)]


def get_role_policy_dialog(
    service: ServiceDep, settings: SettingsDep
) -> RolePolicyDialog:
    """Get an add-role-policy dialog bound to the request's service."""
    return RolePolicyDialog(
        submit=service.add_role_policy,
        default_tenant=settings.default_tenant_id,
    )


def get_user_policy_dialog(
    service: ServiceDep, settings: SettingsDep
) -> UserPolicyDialog:
    """Get an add-user-policy dialog bound to the request's service."""
    return UserPolicyDialog(
        submit=service.add_user_policy,
        default_tenant=settings.default_tenant_id,
    )


def get_user_role_dialog(service: ServiceDep, settings: SettingsDep) -> UserRoleDialog:
    """Get an assign-role dialog bound to the request's service."""
    return UserRoleDialog(
        submit=service.add_user_role,
        default_tenant=settings.default_tenant_id,
    )
