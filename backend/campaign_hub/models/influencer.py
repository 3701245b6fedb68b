"""Influencer ORM - applicant profiles matched against campaign criteria.

Invariants:
    - id is the stable primary key (dbId), distinct from the external auth_id
    - follower_count, city, categories are nullable: missing data never disqualifies
    - categories stored as a JSON list of tag ids

Design Decisions:
    - JSON over ARRAY for categories: portable across PostgreSQL and SQLite test DB
    - cascade delete for applications and visibility rows
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, Boolean, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from campaign_hub.db.base import Base


class Influencer(Base):
    """Influencer profile - the applicant side of every campaign."""
    __tablename__ = "influencers"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    auth_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    instagram: Mapped[str | None] = mapped_column(String(100), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    follower_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    categories: Mapped[list | None] = mapped_column(JSON, nullable=True)
    profile_completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    applications: Mapped[list["Application"]] = relationship(
        "Application", back_populates="influencer",
        cascade="all, delete-orphan", lazy="selectin",
    )
    visibility_settings: Mapped[list["InfluencerVisibility"]] = relationship(
        "InfluencerVisibility", back_populates="influencer",
        cascade="all, delete-orphan", lazy="selectin",
    )
