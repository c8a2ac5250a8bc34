"""Errors raised by the grievance lifecycle services."""


class GrievanceError(Exception):
    """Base class for lifecycle failures surfaced to callers."""


class NotFoundError(GrievanceError):
    """Raised when a complaint or user does not exist."""


class ForbiddenError(GrievanceError):
    """Raised when the acting user may not perform the operation."""


class InvalidOperationError(GrievanceError):
    """Raised when the complaint's state does not allow the transition."""


class ConflictError(GrievanceError):
    """Raised when a concurrent transition changed the complaint first."""


class PersistenceError(GrievanceError):
    """Raised when the store fails; the transaction has been rolled back."""


class NotificationError(Exception):
    """Raised when a notification cannot be delivered.

    Only raised inside the notification dispatcher, which logs and swallows it.
    """
