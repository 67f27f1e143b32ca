"""Domain-specific exceptions.

Custom exceptions provide better error handling and clearer intent
than generic exceptions.
"""


class BackofficeError(Exception):
    """Base exception for all application errors."""


# ============================================================================
# Domain Errors
# ============================================================================


class ValidationError(BackofficeError):
    """Raised when a candidate record breaks a field rule.

    ``message`` is the human-readable text shown to the user.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EntityNotFoundError(BackofficeError):
    """Raised when an update/delete targets an id that is not stored."""

    def __init__(self, entity_id: int) -> None:
        super().__init__(f"Entity not found: {entity_id}")
        self.entity_id = entity_id


class InvalidTransitionError(BackofficeError):
    """Raised when a manager action is not allowed in its current state."""


# ============================================================================
# Session Errors
# ============================================================================


class SessionError(BackofficeError):
    """Base exception for session/auth problems."""


class UnknownRoleError(SessionError):
    """Raised when a role outside the known set is assigned."""


# ============================================================================
# Persistence Errors
# ============================================================================


class PersistenceError(BackofficeError):
    """Base exception for persistence-related errors."""


class FixtureNotFoundError(PersistenceError):
    """Raised when a fixture file is not found."""


class InvalidFixtureError(PersistenceError):
    """Raised when a fixture file is malformed."""


class StorageError(PersistenceError):
    """Raised when the key-value session storage cannot be read or written."""


class ExportError(PersistenceError):
    """Raised when export operation fails."""
