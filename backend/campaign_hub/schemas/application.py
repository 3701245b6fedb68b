"""Application Schemas - applying to campaigns and deciding on applications.

Invariants:
    - ApplicationCreate.budget_applied_for omitted => resolver figure is frozen in
    - ApplicationCreate.status defaults to pending; an admin may record an
      approved or rejected application directly for an eligible influencer
    - ApplicationDecision.status is approved or rejected only (pending is initial)
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from campaign_hub.core.domain_types import ApplicationStatus


class ApplicationCreate(BaseModel):
    campaign_id: UUID
    influencer_id: UUID
    budget_applied_for: float | None = Field(None, ge=0)
    is_negotiated: bool = False
    status: Literal["pending", "approved", "rejected"] = "pending"


class ApplicationDecision(BaseModel):
    status: Literal["approved", "rejected"]
    final_offer_amount: float | None = Field(None, ge=0)


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    campaign_id: UUID
    influencer_id: UUID
    status: ApplicationStatus
    budget_applied_for: float | None
    is_negotiated: bool
    final_offer_amount: float | None
    created_at: datetime
