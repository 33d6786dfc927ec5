"""
Domain error kinds raised by the service layer.
Challenge: Distinguishable failures so the HTTP layer can map them without guessing.
Design: Absence and uniqueness are domain errors; store errors are SQLAlchemy's own and pass through.
"""

from sqlalchemy.exc import SQLAlchemyError

# Store failures (connectivity, unexpected constraint violations, bad SQL) are never
# wrapped: callers catch SQLAlchemy's base exception under this name.
StoreFailure = SQLAlchemyError


class DomainError(Exception):
    """Base class for business-rule failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """No active (non-soft-deleted) record matches the requested id or email."""


class ConflictError(DomainError):
    """Creation would violate a uniqueness rule, e.g. a duplicate active email."""
