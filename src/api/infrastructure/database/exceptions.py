"""Database-specific exceptions."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class TransactionError(DatabaseError):
    """Raised when committing a unit of work fails."""

    pass
