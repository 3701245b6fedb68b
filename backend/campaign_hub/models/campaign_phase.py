"""CampaignPhase ORM - a numbered, independently activatable budget tier.

Invariants:
    - (campaign_id, phase_number) is unique
    - phase_number is positive but not assumed contiguous
    - several phases of one campaign may be active at once
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Integer, Numeric, Boolean, DateTime, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from campaign_hub.db.base import Base


class CampaignPhase(Base):
    __tablename__ = "campaign_phases"
    __table_args__ = (
        UniqueConstraint(
            "campaign_id", "phase_number", name="uq_campaign_phase_number",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    campaign_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("campaigns.id", ondelete="CASCADE"),
        nullable=False,
    )
    phase_number: Mapped[int] = mapped_column(Integer, nullable=False)
    budget_amount: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    campaign: Mapped["Campaign"] = relationship(
        "Campaign", back_populates="phases",
    )
