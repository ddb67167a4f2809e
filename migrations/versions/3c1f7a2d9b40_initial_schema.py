"""initial_schema

Create the foundational schema for Relay:
- Comments (threaded by parent_id, soft delete and freeze flags)
- Events (one row per published event)
- Event deliveries (per-recipient event log, append ordered)
- Read receipts (read ledger, one row per event and recipient)

Revision ID: 3c1f7a2d9b40
Revises:
Create Date: 2026-10-17 10:12:44.218305

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f7a2d9b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("thread_id", sa.UUID(), nullable=False),
        # No foreign key: hard deletes leave replies pointing at a missing parent
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("author_id", sa.UUID(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_frozen", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "char_length(content) BETWEEN 1 AND 2000", name="ck_comment_content_length"
        ),
    )
    op.create_index(
        "idx_comments_thread_created", "comments", ["thread_id", "created_at"]
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index("idx_comments_author_id", "comments", ["author_id"])

    # ========================================================================
    # EVENTS table
    # ========================================================================
    op.create_table(
        "events",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("kind", sa.String(50), nullable=False),
        sa.Column("sender_id", sa.UUID(), nullable=True),
        sa.Column("recipient_ids", postgresql.ARRAY(sa.UUID()), nullable=False),
        sa.Column(
            "payload",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # ========================================================================
    # EVENT_DELIVERIES table (per-recipient event log)
    # ========================================================================
    op.create_table(
        "event_deliveries",
        sa.Column("seq", sa.BigInteger(), sa.Identity(always=True), nullable=False),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("recipient_id", sa.UUID(), nullable=False),
        sa.Column(
            "delivered_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("seq"),
        sa.UniqueConstraint("event_id", "recipient_id", name="uq_event_delivery"),
    )
    op.create_index(
        "idx_event_deliveries_recipient_seq",
        "event_deliveries",
        ["recipient_id", "seq"],
    )

    # ========================================================================
    # READ_RECEIPTS table (read ledger)
    # ========================================================================
    op.create_table(
        "read_receipts",
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("recipient_id", sa.UUID(), nullable=False),
        sa.Column(
            "read_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("event_id", "recipient_id", name="pk_read_receipts"),
    )
    op.create_index("idx_read_receipts_recipient", "read_receipts", ["recipient_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_read_receipts_recipient", table_name="read_receipts")
    op.drop_table("read_receipts")
    op.drop_index(
        "idx_event_deliveries_recipient_seq", table_name="event_deliveries"
    )
    op.drop_table("event_deliveries")
    op.drop_table("events")
    op.drop_index("idx_comments_author_id", table_name="comments")
    op.drop_index("idx_comments_parent_id", table_name="comments")
    op.drop_index("idx_comments_thread_created", table_name="comments")
    op.drop_table("comments")
