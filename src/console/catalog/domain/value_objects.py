"""Value objects for the Entity Catalog.

The catalog is a read-only snapshot of the entities every administration
view joins against by id: users, tenants, and the object/action
vocabularies of the policy store.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class UserSummary:
    """A platform user as listed by the catalog."""

    id: str
    name: str


@dataclass(frozen=True)
class TenantSummary:
    """A tenant (policy domain) as listed by the catalog."""

    id: str
    name: str


@dataclass(frozen=True)
class EntityCatalog:
    """Immutable snapshot of the entities referenced by policy tuples.

    Lookups return None for unknown ids; callers decide how to degrade.
    """

    users: tuple[UserSummary, ...] = ()
    tenants: tuple[TenantSummary, ...] = ()
    objects: tuple[str, ...] = ()
    actions: tuple[str, ...] = ()
    _user_names: dict[str, str] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )
    _tenant_names: dict[str, str] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        # frozen dataclass: indexes are filled once at construction
        self._user_names.update({user.id: user.name for user in self.users})
        self._tenant_names.update({tenant.id: tenant.name for tenant in self.tenants})

    @classmethod
    def empty(cls) -> EntityCatalog:
        """Catalog with no entities; every lookup misses."""
        return cls()

    def user_name(self, user_id: str) -> str | None:
        """Return the user's display name, or None if unknown."""
        return self._user_names.get(user_id)

    def tenant_name(self, tenant_id: str) -> str | None:
        """Return the tenant's display name, or None if unknown."""
        return self._tenant_names.get(tenant_id)

    def has_user(self, user_id: str) -> bool:
        return user_id in self._user_names

    def has_tenant(self, tenant_id: str) -> bool:
        return tenant_id in self._tenant_names
