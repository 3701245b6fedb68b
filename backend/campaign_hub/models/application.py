"""Application ORM - one influencer applying to one campaign.

Invariants:
    - (campaign_id, influencer_id) is unique: duplicate applications fail
    - status transitions: pending -> approved | rejected (both terminal)
    - budget_applied_for is frozen at application time and never recomputed
    - final_offer_amount is informational only

Design Decisions:
    - Unique constraint backs the service-level duplicate check, so concurrent
      applies still fail at commit
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Numeric, Boolean, DateTime, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from campaign_hub.db.base import Base


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint(
            "campaign_id", "influencer_id", name="uq_application_campaign_influencer",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    campaign_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("campaigns.id", ondelete="CASCADE"),
        nullable=False,
    )
    influencer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("influencers.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending",
    )
    budget_applied_for: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True,
    )
    is_negotiated: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    final_offer_amount: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    campaign: Mapped["Campaign"] = relationship(
        "Campaign", back_populates="applications",
    )
    influencer: Mapped["Influencer"] = relationship(
        "Influencer", back_populates="applications",
    )
