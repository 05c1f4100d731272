"""create outbox messages table

Create the outbox table for the transactional outbox pattern. Domain events
are written here in the same transaction as the business change and
dispatched later by the relay.

Revision ID: 8e4d2c6f0a51
Revises: 3f1c9a2b7d10
Create Date: 2026-10-12 09:31:47.118204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "8e4d2c6f0a51"
down_revision: Union[str, Sequence[str], None] = "3f1c9a2b7d10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "outbox_messages",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column(
            "aggregate_type", sa.String(length=100), nullable=False
        ),  # e.g., "role"
        sa.Column("aggregate_id", sa.String(length=26), nullable=False),
        sa.Column(
            "event_type", sa.String(length=255), nullable=False
        ),  # e.g., "RoleCreated"
        sa.Column("content", sa.JSON(), nullable=False),
        sa.Column("occurred_on_utc", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "processed_on_utc", sa.DateTime(timezone=True), nullable=True
        ),  # NULL until processed
        sa.Column("error", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    # Fetch order of pending entries
    op.create_index(
        "ix_outbox_messages_pending",
        "outbox_messages",
        ["occurred_on_utc", "id"],
        unique=False,
        postgresql_where=sa.text("processed_on_utc IS NULL"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_outbox_messages_pending", table_name="outbox_messages")
    op.drop_table("outbox_messages")
