"""Budget Routes - budget phases, per-influencer visibility overrides, budget table.

Invariants:
    - Phases listed ascending by phase_number
    - PUT visibility is an upsert: one row per (campaign, influencer)
    - budget-table shows exactly what each eligible influencer would see
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campaign_hub.infrastructure.database import get_db
from campaign_hub.models.campaign_phase import CampaignPhase
from campaign_hub.models.influencer_visibility import InfluencerVisibility
from campaign_hub.schemas.campaign import (
    BudgetRowResponse,
    PhaseCreate,
    PhaseResponse,
    PhaseUpdate,
    VisibilityResponse,
    VisibilityUpdate,
)
from campaign_hub.services import budget_admin
from campaign_hub.services.campaign_views import budget_table

router = APIRouter(prefix="/api/v1/campaigns/{campaign_id}", tags=["budget"])


# ─── Phases ──────────────────────────────────────────────────────

@router.get("/phases", response_model=list[PhaseResponse])
async def list_phases(campaign_id: UUID, db: AsyncSession = Depends(get_db)):
    await budget_admin.get_campaign_or_404(db, campaign_id)
    result = await db.execute(
        select(CampaignPhase)
        .where(CampaignPhase.campaign_id == campaign_id)
        .order_by(CampaignPhase.phase_number),
    )
    return result.scalars().all()


@router.post(
    "/phases", response_model=PhaseResponse, status_code=status.HTTP_201_CREATED,
)
async def create_phase(
    campaign_id: UUID, body: PhaseCreate, db: AsyncSession = Depends(get_db),
):
    return await budget_admin.create_phase(db, campaign_id, body)


@router.patch("/phases/{phase_id}", response_model=PhaseResponse)
async def update_phase(
    campaign_id: UUID, phase_id: UUID, body: PhaseUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await budget_admin.update_phase(db, campaign_id, phase_id, body)


@router.delete("/phases/{phase_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_phase(
    campaign_id: UUID, phase_id: UUID, db: AsyncSession = Depends(get_db),
):
    await budget_admin.delete_phase(db, campaign_id, phase_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ─── Visibility ──────────────────────────────────────────────────

@router.get("/visibility", response_model=list[VisibilityResponse])
async def list_visibility(campaign_id: UUID, db: AsyncSession = Depends(get_db)):
    await budget_admin.get_campaign_or_404(db, campaign_id)
    result = await db.execute(
        select(InfluencerVisibility)
        .where(InfluencerVisibility.campaign_id == campaign_id),
    )
    return result.scalars().all()


@router.put("/visibility/{influencer_id}", response_model=VisibilityResponse)
async def upsert_visibility(
    campaign_id: UUID, influencer_id: UUID, body: VisibilityUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await budget_admin.upsert_visibility(db, campaign_id, influencer_id, body)


# ─── Budget table ────────────────────────────────────────────────

@router.get("/budget-table", response_model=list[BudgetRowResponse])
async def get_budget_table(campaign_id: UUID, db: AsyncSession = Depends(get_db)):
    return await budget_table(db, campaign_id)
