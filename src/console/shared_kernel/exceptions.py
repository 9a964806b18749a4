"""Error taxonomy shared by the administration contexts.

Every failure the console can surface to a view is one of these types.
They are raised by ports and infrastructure and recovered at the
presentation boundary, where each one becomes an inline message or an
HTTP error response. None of them is ever silently ignored.
"""

from __future__ import annotations


class ConsoleError(Exception):
    """Base exception for administration console failures.

    Attributes:
        message: Human-readable reason, shown verbatim to the administrator
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PolicyValidationError(ConsoleError):
    """Raised when a request is missing or has invalid required fields.

    Detected client-side before any network call is made.

    Attributes:
        field_errors: Mapping of field name to the reason it was rejected
    """

    def __init__(self, field_errors: dict[str, str]):
        self.field_errors = dict(field_errors)
        fields = ", ".join(sorted(self.field_errors))
        super().__init__(f"Invalid or missing fields: {fields}")


class ProtectedSubjectError(ConsoleError):
    """Raised when a mutation targets an admin/owner row.

    Protected rows never expose a mutation control; handlers behind
    removal controls still refuse them.
    """

    pass


class ConflictError(ConsoleError):
    """Raised when the platform rejects a mutation as conflicting.

    Covers duplicate policy tuples and deleting an active upgrade target.
    """

    pass


class NotFoundError(ConsoleError):
    """Raised when the targeted tuple, assignment or resource no longer exists.

    Treated as terminal: a stale row in the view is a bug worth surfacing.
    """

    pass


class NetworkFailureError(ConsoleError):
    """Raised on transport-level failures talking to the platform.

    Only retried by an explicit user action, never automatically.
    """

    pass


class PlatformError(ConsoleError):
    """Raised when the platform returns any other non-success envelope.

    Attributes:
        code: The envelope code reported by the platform
    """

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        self.code = code
