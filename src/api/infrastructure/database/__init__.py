"""Database infrastructure - declarative base, engines and sessions."""

from infrastructure.database.exceptions import DatabaseError, TransactionError
from infrastructure.database.models import Base, TimestampMixin, UtcDateTime

__all__ = [
    "Base",
    "DatabaseError",
    "TimestampMixin",
    "TransactionError",
    "UtcDateTime",
]
