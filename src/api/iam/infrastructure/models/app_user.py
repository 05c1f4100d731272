"""SQLAlchemy ORM models for the app_users and app_user_roles tables."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, TimestampMixin


class AppUserModel(Base, TimestampMixin):
    """ORM model for app_users table."""

    __tablename__ = "app_users"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    identity_id: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True
    )

    roles: Mapped[list["AppUserRoleModel"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<AppUserModel(id={self.id}, identity_id={self.identity_id})>"


class AppUserRoleModel(Base):
    """ORM model for role assignments of a user.

    Foreign Key Constraint:
    - role_id references roles.id with RESTRICT delete; roles are only
      ever soft-deleted
    """

    __tablename__ = "app_user_roles"

    user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("app_users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    role_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("roles.id", ondelete="RESTRICT"),
        primary_key=True,
    )

    user: Mapped[AppUserModel] = relationship(back_populates="roles")
