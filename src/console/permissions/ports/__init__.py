"""Ports (interfaces) for the permissions bounded context.

Ports define the contracts for the policy store without specifying
implementation details, keeping the application layer independent of the
platform's REST surface.
"""

from permissions.ports.policy_store import IPolicyStore

__all__ = ["IPolicyStore"]
