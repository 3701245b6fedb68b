"""Campaign ORM - a brand solicitation with targeting criteria and a lifecycle status.

Invariants:
    - status in {draft, active, completed, archived}; only active accepts applications
    - min_followers NULL or 0 means unrestricted
    - city NULL or "" means unrestricted
    - categories empty list means unrestricted

Design Decisions:
    - cascade delete for phases, applications, visibility rows: deleting a campaign
      removes it from every eligibility and budget computation
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from campaign_hub.db.base import Base


class Campaign(Base):
    """Campaign aggregate root - owns phases, applications and visibility rows."""
    __tablename__ = "campaigns"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    min_followers: Mapped[int | None] = mapped_column(Integer, nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    categories: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="draft", index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    phases: Mapped[list["CampaignPhase"]] = relationship(
        "CampaignPhase", back_populates="campaign",
        cascade="all, delete-orphan", lazy="selectin",
    )
    applications: Mapped[list["Application"]] = relationship(
        "Application", back_populates="campaign",
        cascade="all, delete-orphan", lazy="selectin",
    )
    visibility_settings: Mapped[list["InfluencerVisibility"]] = relationship(
        "InfluencerVisibility", back_populates="campaign",
        cascade="all, delete-orphan", lazy="selectin",
    )
