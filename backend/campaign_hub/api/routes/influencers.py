"""Influencer Routes - profiles and the influencer-side campaign listing.

Invariants:
    - /campaigns lists active campaigns only; eligible_only narrows to eligible ones
    - budget is null whenever nothing is visible to the influencer
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campaign_hub.config import get_settings
from campaign_hub.core.domain_types import NotificationType
from campaign_hub.core.errors import DuplicateParticipantError, ResourceNotFoundError
from campaign_hub.infrastructure.database import get_db
from campaign_hub.models.influencer import Influencer
from campaign_hub.schemas.influencer import (
    CampaignBudgetResponse,
    InfluencerCampaignView,
    InfluencerCreate,
    InfluencerResponse,
    InfluencerUpdate,
)
from campaign_hub.services.campaign_views import influencer_budgets, influencer_campaigns
from campaign_hub.services.notifications import notify_admins

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/influencers", tags=["influencers"])

PROFILE_FIELDS = ("follower_count", "city", "categories", "instagram")


def _profile_completed(influencer: Influencer) -> bool:
    return all(getattr(influencer, name) for name in PROFILE_FIELDS)


async def _get_influencer_or_404(db: AsyncSession, influencer_id: UUID) -> Influencer:
    influencer = await db.get(Influencer, influencer_id)
    if influencer is None:
        raise ResourceNotFoundError("Influencer", str(influencer_id))
    return influencer


@router.post(
    "", response_model=InfluencerResponse, status_code=status.HTTP_201_CREATED,
)
async def create_influencer(body: InfluencerCreate, db: AsyncSession = Depends(get_db)):
    influencer = Influencer(**body.model_dump())
    influencer.profile_completed = _profile_completed(influencer)
    await notify_admins(
        db, NotificationType.NEW_INFLUENCER, f"New influencer signed up: {body.name}",
    )
    db.add(influencer)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateParticipantError("influencer")
    await db.refresh(influencer)
    logger.info("Influencer created", extra={"influencer_id": influencer.id})
    return influencer


@router.get("", response_model=list[InfluencerResponse])
async def list_influencers(
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    limit = get_settings().page_limit(limit)
    result = await db.execute(
        select(Influencer).order_by(Influencer.created_at).limit(limit).offset(offset),
    )
    return result.scalars().all()


@router.get("/{influencer_id}", response_model=InfluencerResponse)
async def get_influencer(influencer_id: UUID, db: AsyncSession = Depends(get_db)):
    return await _get_influencer_or_404(db, influencer_id)


@router.patch("/{influencer_id}", response_model=InfluencerResponse)
async def update_influencer(
    influencer_id: UUID, body: InfluencerUpdate, db: AsyncSession = Depends(get_db),
):
    """Complete or edit a profile; explicit nulls clear optional fields."""
    influencer = await _get_influencer_or_404(db, influencer_id)
    updates = body.model_dump(include=body.model_fields_set)
    if updates.get("name") is None:
        updates.pop("name", None)
    for name, value in updates.items():
        setattr(influencer, name, value)
    influencer.profile_completed = _profile_completed(influencer)
    await db.commit()
    await db.refresh(influencer)
    return influencer


@router.delete("/{influencer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_influencer(influencer_id: UUID, db: AsyncSession = Depends(get_db)):
    influencer = await _get_influencer_or_404(db, influencer_id)
    await db.delete(influencer)
    await db.commit()
    logger.info("Influencer deleted", extra={"influencer_id": influencer_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{influencer_id}/campaigns", response_model=list[InfluencerCampaignView])
async def list_influencer_campaigns(
    influencer_id: UUID,
    eligible_only: bool = Query(False),
    db: AsyncSession = Depends(get_db),
):
    return await influencer_campaigns(db, influencer_id, eligible_only)


@router.get("/{influencer_id}/budgets", response_model=list[CampaignBudgetResponse])
async def list_influencer_budgets(influencer_id: UUID, db: AsyncSession = Depends(get_db)):
    return await influencer_budgets(db, influencer_id)
