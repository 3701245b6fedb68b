"""Influencer Schemas - applicant profiles and the influencer-side campaign view.

Invariants:
    - follower_count >= 0 when provided
    - Empty city normalised to None; categories deduplicated
    - InfluencerCampaignView.budget is null when no budget is visible
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from campaign_hub.core.domain_types import BudgetRule, CampaignStatus
from campaign_hub.schemas.campaign import _blank_to_none, _clean_categories


class InfluencerCreate(BaseModel):
    email: str = Field(max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    name: str = Field(min_length=1, max_length=200)
    auth_id: str | None = Field(None, max_length=255)
    instagram: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=50)
    follower_count: int | None = Field(None, ge=0)
    city: str | None = Field(None, max_length=100)
    categories: list[str] | None = None

    @field_validator("city")
    @classmethod
    def normalise_city(cls, v: str | None) -> str | None:
        return _blank_to_none(v)

    @field_validator("categories")
    @classmethod
    def normalise_categories(cls, v: list[str] | None) -> list[str] | None:
        return _clean_categories(v)


class InfluencerUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    instagram: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=50)
    follower_count: int | None = Field(None, ge=0)
    city: str | None = Field(None, max_length=100)
    categories: list[str] | None = None

    @field_validator("city")
    @classmethod
    def normalise_city(cls, v: str | None) -> str | None:
        return _blank_to_none(v)

    @field_validator("categories")
    @classmethod
    def normalise_categories(cls, v: list[str] | None) -> list[str] | None:
        return _clean_categories(v)


class InfluencerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str
    instagram: str | None
    follower_count: int | None
    city: str | None
    categories: list[str] | None
    profile_completed: bool
    created_at: datetime


class EligibleInfluencerResponse(BaseModel):
    """Eligible influencer with the applied badge shown on the admin side."""
    id: UUID
    name: str
    instagram: str | None
    follower_count: int | None
    city: str | None
    categories: list[str] | None
    has_applied: bool


class InfluencerCampaignView(BaseModel):
    """One active campaign as a given influencer sees it."""
    id: UUID
    title: str
    description: str
    min_followers: int | None
    city: str | None
    categories: list[str]
    status: CampaignStatus
    eligible: bool
    has_applied: bool
    budget: float | None
    budget_rule: BudgetRule
    negotiation_enabled: bool


class CampaignBudgetResponse(BaseModel):
    """Budget one influencer sees for one campaign."""
    campaign_id: UUID
    budget: float | None
    budget_rule: BudgetRule
    negotiation_enabled: bool
    has_applied: bool
