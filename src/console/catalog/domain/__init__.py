"""Catalog domain module.

Contains the read-only entity snapshot joined against by the
administration views.
"""

from catalog.domain.value_objects import EntityCatalog, TenantSummary, UserSummary

__all__ = [
    "EntityCatalog",
    "TenantSummary",
    "UserSummary",
]
