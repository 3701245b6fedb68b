"""Initial schema - admins, influencers, campaigns, phases, applications, visibility, messages, notifications.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), nullable=False,
        server_default=sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "admins",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("auth_id", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("name", sa.String(200), nullable=False),
        _created_at(),
    )

    op.create_table(
        "influencers",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("auth_id", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("instagram", sa.String(100), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("follower_count", sa.Integer, nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("categories", sa.JSON, nullable=True),
        sa.Column("profile_completed", sa.Boolean, nullable=False, server_default="false"),
        _created_at(),
    )

    op.create_table(
        "campaigns",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("min_followers", sa.Integer, nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("categories", sa.JSON, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        _created_at(),
    )
    op.create_index("ix_campaigns_status", "campaigns", ["status"])

    op.create_table(
        "campaign_phases",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "campaign_id", UUID(as_uuid=True),
            sa.ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("phase_number", sa.Integer, nullable=False),
        sa.Column("budget_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="false"),
        _created_at(),
        sa.UniqueConstraint(
            "campaign_id", "phase_number", name="uq_campaign_phase_number",
        ),
    )

    op.create_table(
        "applications",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "campaign_id", UUID(as_uuid=True),
            sa.ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "influencer_id", UUID(as_uuid=True),
            sa.ForeignKey("influencers.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("budget_applied_for", sa.Numeric(12, 2), nullable=True),
        sa.Column("is_negotiated", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("final_offer_amount", sa.Numeric(12, 2), nullable=True),
        _created_at(),
        sa.UniqueConstraint(
            "campaign_id", "influencer_id", name="uq_application_campaign_influencer",
        ),
    )

    op.create_table(
        "influencer_campaign_visibility",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "campaign_id", UUID(as_uuid=True),
            sa.ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "influencer_id", UUID(as_uuid=True),
            sa.ForeignKey("influencers.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("assigned_phase", sa.Integer, nullable=True),
        sa.Column("negotiation_visible", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("custom_offer_amount", sa.Numeric(12, 2), nullable=True),
        sa.UniqueConstraint(
            "campaign_id", "influencer_id", name="uq_visibility_campaign_influencer",
        ),
    )

    op.create_table(
        "messages",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("sender_type", sa.String(20), nullable=False),
        sa.Column("sender_id", UUID(as_uuid=True), nullable=False),
        sa.Column("receiver_type", sa.String(20), nullable=False),
        sa.Column("receiver_id", UUID(as_uuid=True), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("read", sa.Boolean, nullable=False, server_default="false"),
        _created_at(),
    )
    op.create_index("ix_messages_receiver", "messages", ["receiver_type", "receiver_id"])
    op.create_index("ix_messages_sender", "messages", ["sender_type", "sender_id"])

    op.create_table(
        "notifications",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("type", sa.String(30), nullable=False),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("target_type", sa.String(20), nullable=False),
        sa.Column("target_id", UUID(as_uuid=True), nullable=False),
        sa.Column("read", sa.Boolean, nullable=False, server_default="false"),
        _created_at(),
    )
    op.create_index(
        "ix_notifications_target", "notifications", ["target_type", "target_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_notifications_target", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("ix_messages_sender", table_name="messages")
    op.drop_index("ix_messages_receiver", table_name="messages")
    op.drop_table("messages")
    op.drop_table("influencer_campaign_visibility")
    op.drop_table("applications")
    op.drop_table("campaign_phases")
    op.drop_index("ix_campaigns_status", table_name="campaigns")
    op.drop_table("campaigns")
    op.drop_table("influencers")
    op.drop_table("admins")
