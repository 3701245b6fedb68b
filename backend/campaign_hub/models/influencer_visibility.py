"""InfluencerVisibility ORM - per-influencer budget and negotiation overrides.

Invariants:
    - (campaign_id, influencer_id) is unique; writes are upserts
    - assigned_phase references a phase_number, not a phase id, and may go stale
      when that phase is deleted (resolver falls through)
    - custom_offer_amount overrides every phase rule when non-null and non-zero
"""

import uuid

from sqlalchemy import Integer, Numeric, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from campaign_hub.db.base import Base


class InfluencerVisibility(Base):
    __tablename__ = "influencer_campaign_visibility"
    __table_args__ = (
        UniqueConstraint(
            "campaign_id", "influencer_id", name="uq_visibility_campaign_influencer",
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
    assigned_phase: Mapped[int | None] = mapped_column(Integer, nullable=True)
    negotiation_visible: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    custom_offer_amount: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True,
    )

    campaign: Mapped["Campaign"] = relationship(
        "Campaign", back_populates="visibility_settings",
    )
    influencer: Mapped["Influencer"] = relationship(
        "Influencer", back_populates="visibility_settings",
    )
