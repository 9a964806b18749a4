"""Ports (interfaces) for the upgrades bounded context."""

from upgrades.ports.exceptions import (
    ActiveTargetDeletionError,
    CollectionRefreshError,
    OperationInProgressError,
)
from upgrades.ports.target_store import IUpgradeTargetStore

__all__ = [
    "ActiveTargetDeletionError",
    "CollectionRefreshError",
    "IUpgradeTargetStore",
    "OperationInProgressError",
]
