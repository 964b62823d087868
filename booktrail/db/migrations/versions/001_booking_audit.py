"""Create booking audit tables.

Revision ID: 001
Revises:
Create Date: 2026-10-18

Tables: booking_audit_actors, booking_audits
"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import JSONB, UUID

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create booking audit tables."""
    # booking_audit_actors table: one row per natural key
    op.create_table(
        "booking_audit_actors",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("user_uuid", sa.Text),
        sa.Column("attendee_id", sa.Integer),
        sa.Column("email", sa.Text),
        sa.Column("name", sa.Text),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("NOW()")),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("NOW()")),
        sa.CheckConstraint(
            "type IN ('USER', 'ATTENDEE', 'GUEST', 'SYSTEM', 'APP')",
            name="ck_booking_audit_actors_type",
        ),
        # Natural keys are unique within each actor variant
        sa.UniqueConstraint("type", "user_uuid", name="uq_booking_audit_actors_user_uuid"),
        sa.UniqueConstraint("type", "attendee_id", name="uq_booking_audit_actors_attendee_id"),
        sa.UniqueConstraint("type", "email", name="uq_booking_audit_actors_email"),
    )

    # booking_audits table: append-only, booking_uid is a weak reference
    op.create_table(
        "booking_audits",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("sequence", sa.BigInteger, sa.Identity(always=True), nullable=False),
        sa.Column("booking_uid", sa.Text, nullable=False),
        sa.Column(
            "actor_id",
            UUID,
            sa.ForeignKey("booking_audit_actors.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("timestamp", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("source", sa.String(20), nullable=False),
        sa.Column("operation_id", sa.Text, nullable=False, unique=True),
        sa.Column("data", JSONB, nullable=False),
        sa.Column("context", JSONB),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("NOW()")),
    )
    op.create_index(
        "idx_booking_audits_timeline",
        "booking_audits",
        ["booking_uid", "timestamp", "sequence"],
    )
    op.create_index("idx_booking_audits_actor", "booking_audits", ["actor_id"])
    op.create_index(
        "idx_booking_audits_rescheduled_to",
        "booking_audits",
        [sa.text("(data->'fields'->'rescheduledToUid'->>'new')")],
        postgresql_where=sa.text("action = 'RESCHEDULED'"),
    )


def downgrade() -> None:
    """Drop booking audit tables."""
    op.drop_table("booking_audits")
    op.drop_table("booking_audit_actors")
