"""Campaign Routes - campaign CRUD plus the admin-side eligibility listing.

Invariants:
    - Deleting a campaign cascades to its phases, applications and visibility rows
    - eligible-influencers lists applicants in profile creation order
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campaign_hub.config import get_settings
from campaign_hub.core.domain_types import CampaignStatus
from campaign_hub.infrastructure.database import get_db
from campaign_hub.models.campaign import Campaign
from campaign_hub.schemas.campaign import (
    CampaignCreate, CampaignResponse, CampaignUpdate,
)
from campaign_hub.schemas.influencer import EligibleInfluencerResponse
from campaign_hub.services.budget_admin import get_campaign_or_404
from campaign_hub.services.campaign_views import eligible_influencers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/campaigns", tags=["campaigns"])


@router.post(
    "", response_model=CampaignResponse, status_code=status.HTTP_201_CREATED,
)
async def create_campaign(body: CampaignCreate, db: AsyncSession = Depends(get_db)):
    campaign = Campaign(
        title=body.title,
        description=body.description,
        min_followers=body.min_followers,
        city=body.city,
        categories=body.categories,
        status=body.status.value,
    )
    db.add(campaign)
    await db.commit()
    await db.refresh(campaign)
    logger.info("Campaign created", extra={"campaign_id": campaign.id})
    return campaign


@router.get("", response_model=list[CampaignResponse])
async def list_campaigns(
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    status_filter: CampaignStatus | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    """List campaigns, newest first."""
    query = select(Campaign).order_by(Campaign.created_at.desc())
    if status_filter:
        query = query.where(Campaign.status == status_filter.value)
    limit = get_settings().page_limit(limit)
    result = await db.execute(query.limit(limit).offset(offset))
    return result.scalars().all()


@router.get("/{campaign_id}", response_model=CampaignResponse)
async def get_campaign(campaign_id: UUID, db: AsyncSession = Depends(get_db)):
    return await get_campaign_or_404(db, campaign_id)


@router.patch("/{campaign_id}", response_model=CampaignResponse)
async def update_campaign(
    campaign_id: UUID, body: CampaignUpdate, db: AsyncSession = Depends(get_db),
):
    campaign = await get_campaign_or_404(db, campaign_id)
    updates = body.model_dump(include=body.model_fields_set)
    # title, categories and status are non-nullable columns
    for name in ("title", "categories", "status", "description"):
        if updates.get(name) is None:
            updates.pop(name, None)
    if "status" in updates:
        updates["status"] = CampaignStatus(updates["status"]).value
    for name, value in updates.items():
        setattr(campaign, name, value)
    await db.commit()
    await db.refresh(campaign)
    logger.info("Campaign updated", extra={"campaign_id": campaign.id})
    return campaign


@router.delete("/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_campaign(campaign_id: UUID, db: AsyncSession = Depends(get_db)):
    campaign = await get_campaign_or_404(db, campaign_id)
    await db.delete(campaign)
    await db.commit()
    logger.info("Campaign deleted", extra={"campaign_id": campaign_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{campaign_id}/eligible-influencers",
    response_model=list[EligibleInfluencerResponse],
)
async def list_eligible_influencers(
    campaign_id: UUID, db: AsyncSession = Depends(get_db),
):
    """Influencers who qualify for the campaign, with an applied flag."""
    return await eligible_influencers(db, campaign_id)
