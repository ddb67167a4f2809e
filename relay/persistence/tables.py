"""SQLAlchemy table definitions for Relay.

These table definitions are used with SQLAlchemy Core queries.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    ForeignKey,
    Identity,
    Index,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("thread_id", UUID, nullable=False),
    # No foreign key: hard deletes leave replies pointing at a missing parent
    Column("parent_id", UUID, nullable=True),
    Column("author_id", UUID, nullable=True),
    Column("content", Text, nullable=False),
    Column("is_frozen", Boolean, nullable=False, server_default="false"),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_thread_created", comments_table.c.thread_id, comments_table.c.created_at)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# EVENTS TABLE
# ============================================================================
events_table = Table(
    "events",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("kind", String(50), nullable=False),
    Column("sender_id", UUID, nullable=True),
    Column("recipient_ids", ARRAY(UUID), nullable=False),
    Column("payload", JSONB, nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# EVENT DELIVERIES TABLE (per-recipient event log)
# ============================================================================
event_deliveries_table = Table(
    "event_deliveries",
    metadata,
    # Monotonic sequence keeps each recipient's log in append order
    Column("seq", BigInteger, Identity(always=True), primary_key=True),
    Column(
        "event_id", UUID, ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    ),
    Column("recipient_id", UUID, nullable=False),
    Column(
        "delivered_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default="NOW()",
    ),
    UniqueConstraint("event_id", "recipient_id", name="uq_event_delivery"),
)

Index(
    "idx_event_deliveries_recipient_seq",
    event_deliveries_table.c.recipient_id,
    event_deliveries_table.c.seq,
)

# ============================================================================
# READ RECEIPTS TABLE (read ledger)
# ============================================================================
read_receipts_table = Table(
    "read_receipts",
    metadata,
    Column(
        "event_id", UUID, ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    ),
    Column("recipient_id", UUID, nullable=False),
    Column(
        "read_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("event_id", "recipient_id", name="pk_read_receipts"),
)

Index("idx_read_receipts_recipient", read_receipts_table.c.recipient_id)
