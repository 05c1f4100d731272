"""Pydantic models for role API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from iam.domain.aggregates import Role


class CreateRoleRequest(BaseModel):
    """Request model for creating a role."""

    name: str = Field(..., description="Role name", min_length=1, max_length=100)
    is_default: bool = Field(
        default=False, description="Assign this role to new users"
    )


class UpdateRoleRequest(BaseModel):
    """Request model for renaming a role."""

    name: str = Field(..., description="Role name", min_length=1, max_length=100)


class RoleResponse(BaseModel):
    """Response model for role."""

    id: str = Field(..., description="Role ID (ULID format)")
    name: str = Field(..., description="Role name")
    is_default: bool = Field(..., description="Assigned to new users")
    permissions: list[str] = Field(
        default_factory=list, description="Granted permission IDs"
    )

    @classmethod
    def from_domain(cls, role: Role) -> RoleResponse:
        """Convert domain Role aggregate to API response."""
        return cls(
            id=role.id.value,
            name=role.name.value,
            is_default=role.is_default,
            permissions=[p.value for p in role.permissions],
        )
