"""SQLAlchemy ORM models for the roles and role_permissions tables."""

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, TimestampMixin


class RoleModel(Base, TimestampMixin):
    """ORM model for roles table.

    Role names are unique across the system. Deleted roles are kept with
    is_deleted set so that audit history keeps resolving.
    """

    __tablename__ = "roles"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    permissions: Mapped[list["RolePermissionModel"]] = relationship(
        back_populates="role",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<RoleModel(id={self.id}, name={self.name})>"


class RolePermissionModel(Base):
    """ORM model for permissions granted to a role."""

    __tablename__ = "role_permissions"

    role_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    permission_id: Mapped[str] = mapped_column(String(26), primary_key=True)

    role: Mapped[RoleModel] = relationship(back_populates="permissions")
