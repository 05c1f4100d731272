"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Self

from ulid import ULID


@dataclass(frozen=True)
class EntityId:
    """Base identifier for IAM aggregates and entities.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> Self:
        """Generate a new identifier using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create an identifier from a string value.

        Args:
            value: ULID string

        Returns:
            Identifier instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid {cls.__name__}: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class UserId(EntityId):
    """Identifier for an AppUser aggregate."""


@dataclass(frozen=True)
class RoleId(EntityId):
    """Identifier for a Role aggregate."""


@dataclass(frozen=True)
class PermissionId(EntityId):
    """Identifier for a permission granted through roles."""


@dataclass(frozen=True)
class RoleName:
    """Validated role name.

    Names are stripped of surrounding whitespace and must be 1-100
    characters long.
    """

    value: str

    MAX_LENGTH: ClassVar[int] = 100

    def __post_init__(self) -> None:
        stripped = self.value.strip()
        if not stripped:
            raise ValueError("Role name must not be empty")
        if len(stripped) > self.MAX_LENGTH:
            raise ValueError(
                f"Role name must be at most {self.MAX_LENGTH} characters"
            )
        object.__setattr__(self, "value", stripped)

    def __str__(self) -> str:
        """Return string representation."""
        return self.value
