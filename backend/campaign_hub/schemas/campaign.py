"""Campaign Schemas - campaigns, budget phases and visibility overrides.

Invariants:
    - Campaign titles (create and update): 1-200 chars, stripped, non-empty
    - Empty city strings are normalised to None (unrestricted)
    - categories deduplicated, order kept
    - PhaseCreate.phase_number >= 1, budget_amount >= 0
    - VisibilityUpdate is partial: only fields present in the body are written,
      and an explicit null clears the field

Design Decisions:
    - model_fields_set distinguishes "omitted" from "null" on partial updates
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from campaign_hub.core.domain_types import BudgetRule, CampaignStatus


def _clean_categories(v: list[str] | None) -> list[str] | None:
    if v is None:
        return None
    seen: list[str] = []
    for tag in v:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def _blank_to_none(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    return v or None


def _strip_title(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    if not v:
        raise ValueError("title cannot be empty or whitespace")
    return v


class CampaignCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field("", max_length=10_000)
    min_followers: int | None = Field(None, ge=0)
    city: str | None = Field(None, max_length=100)
    categories: list[str] = Field(default_factory=list)
    status: CampaignStatus = CampaignStatus.DRAFT

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return _strip_title(v)

    @field_validator("city")
    @classmethod
    def normalise_city(cls, v: str | None) -> str | None:
        return _blank_to_none(v)

    @field_validator("categories")
    @classmethod
    def normalise_categories(cls, v: list[str] | None) -> list[str] | None:
        return _clean_categories(v)


class CampaignUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=10_000)
    min_followers: int | None = Field(None, ge=0)
    city: str | None = Field(None, max_length=100)
    categories: list[str] | None = None
    status: CampaignStatus | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        return _strip_title(v)

    @field_validator("city")
    @classmethod
    def normalise_city(cls, v: str | None) -> str | None:
        return _blank_to_none(v)

    @field_validator("categories")
    @classmethod
    def normalise_categories(cls, v: list[str] | None) -> list[str] | None:
        return _clean_categories(v)


class CampaignResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    min_followers: int | None
    city: str | None
    categories: list[str]
    status: CampaignStatus
    created_at: datetime


# --- Budget phases ------------------------------------------------------------

class PhaseCreate(BaseModel):
    phase_number: int = Field(ge=1)
    budget_amount: float = Field(ge=0)
    is_active: bool = False


class PhaseUpdate(BaseModel):
    phase_number: int | None = Field(None, ge=1)
    budget_amount: float | None = Field(None, ge=0)
    is_active: bool | None = None


class PhaseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    campaign_id: UUID
    phase_number: int
    budget_amount: float
    is_active: bool


# --- Visibility overrides -----------------------------------------------------

class VisibilityUpdate(BaseModel):
    assigned_phase: int | None = Field(None, ge=1)
    negotiation_visible: bool | None = None
    custom_offer_amount: float | None = Field(None, ge=0)

    def provided_fields(self) -> dict:
        """Fields present in the request body, including explicit nulls."""
        values = self.model_dump(include=self.model_fields_set)
        if values.get("negotiation_visible") is None:
            values.pop("negotiation_visible", None)
        return values


class VisibilityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    campaign_id: UUID
    influencer_id: UUID
    assigned_phase: int | None
    negotiation_visible: bool
    custom_offer_amount: float | None


class BudgetRowResponse(BaseModel):
    """Admin budget table row: what one influencer sees and which rule produced it."""
    influencer_id: UUID
    name: str
    instagram: str | None
    follower_count: int | None
    budget: float | None
    budget_rule: BudgetRule
    assigned_phase: int | None
    stale_assignment: bool
    negotiation_enabled: bool
    application_status: str | None
