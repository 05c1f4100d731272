"""Pydantic models for user API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from iam.domain.aggregates import AppUser


class CreateUserRequest(BaseModel):
    """Request model for creating a user."""

    identity_id: str = Field(
        ..., description="Login identity ID", min_length=1, max_length=255
    )


class UserResponse(BaseModel):
    """Response model for user."""

    id: str = Field(..., description="User ID (ULID format)")
    identity_id: str = Field(..., description="Login identity ID")
    roles: list[str] = Field(default_factory=list, description="Assigned role IDs")

    @classmethod
    def from_domain(cls, user: AppUser) -> UserResponse:
        """Convert domain AppUser aggregate to API response."""
        return cls(
            id=user.id.value,
            identity_id=user.identity_id,
            roles=[r.value for r in user.roles],
        )
