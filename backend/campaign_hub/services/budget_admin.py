"""Budget Administration - phase CRUD and visibility upserts for one campaign.

Invariants:
    - phase_number unique per campaign: create/update collisions raise DuplicatePhaseError
    - Deleting a phase leaves visibility rows pointing at it untouched (they go stale
      and the resolver falls through)
    - upsert_visibility writes only the fields present in the request; losing an
      insert race to a concurrent upsert turns into an update of the winning row

Design Decisions:
    - Pre-check plus unique constraint: friendly 409 in the common case, integrity
      error mapped to the same 409 under a race
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campaign_hub.core.errors import (
    DuplicatePhaseError, ErrorContext, ResourceNotFoundError,
)
from campaign_hub.models.campaign import Campaign
from campaign_hub.models.campaign_phase import CampaignPhase
from campaign_hub.models.influencer import Influencer
from campaign_hub.models.influencer_visibility import InfluencerVisibility
from campaign_hub.schemas.campaign import PhaseCreate, PhaseUpdate, VisibilityUpdate

logger = logging.getLogger(__name__)


async def get_campaign_or_404(db: AsyncSession, campaign_id: UUID) -> Campaign:
    campaign = await db.get(Campaign, campaign_id)
    if campaign is None:
        raise ResourceNotFoundError("Campaign", str(campaign_id))
    return campaign


async def get_phase_or_404(
    db: AsyncSession, campaign_id: UUID, phase_id: UUID,
) -> CampaignPhase:
    phase = await db.get(CampaignPhase, phase_id)
    if phase is None or phase.campaign_id != campaign_id:
        raise ResourceNotFoundError("CampaignPhase", str(phase_id))
    return phase


async def _phase_number_taken(
    db: AsyncSession, campaign_id: UUID, phase_number: int,
    exclude_id: UUID | None = None,
) -> bool:
    query = select(CampaignPhase.id).where(
        CampaignPhase.campaign_id == campaign_id,
        CampaignPhase.phase_number == phase_number,
    )
    if exclude_id is not None:
        query = query.where(CampaignPhase.id != exclude_id)
    result = await db.execute(query)
    return result.first() is not None


async def _commit_phase(db: AsyncSession, phase: CampaignPhase) -> None:
    number, campaign_id = phase.phase_number, phase.campaign_id
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicatePhaseError(
            number, ErrorContext(campaign_id=str(campaign_id)),
        )
    await db.refresh(phase)


async def create_phase(
    db: AsyncSession, campaign_id: UUID, body: PhaseCreate,
) -> CampaignPhase:
    await get_campaign_or_404(db, campaign_id)
    if await _phase_number_taken(db, campaign_id, body.phase_number):
        raise DuplicatePhaseError(
            body.phase_number, ErrorContext(campaign_id=str(campaign_id)),
        )
    phase = CampaignPhase(
        campaign_id=campaign_id,
        phase_number=body.phase_number,
        budget_amount=body.budget_amount,
        is_active=body.is_active,
    )
    db.add(phase)
    await _commit_phase(db, phase)
    logger.info(
        f"Phase {phase.phase_number} created",
        extra={"campaign_id": campaign_id},
    )
    return phase


async def update_phase(
    db: AsyncSession, campaign_id: UUID, phase_id: UUID, body: PhaseUpdate,
) -> CampaignPhase:
    phase = await get_phase_or_404(db, campaign_id, phase_id)
    updates = body.model_dump(exclude_none=True)
    new_number = updates.get("phase_number")
    if new_number is not None and new_number != phase.phase_number:
        if await _phase_number_taken(db, campaign_id, new_number, phase_id):
            raise DuplicatePhaseError(
                new_number, ErrorContext(campaign_id=str(campaign_id)),
            )
    for name, value in updates.items():
        setattr(phase, name, value)
    await _commit_phase(db, phase)
    return phase


async def delete_phase(db: AsyncSession, campaign_id: UUID, phase_id: UUID) -> None:
    phase = await get_phase_or_404(db, campaign_id, phase_id)
    await db.delete(phase)
    await db.commit()
    logger.info(
        f"Phase {phase.phase_number} deleted",
        extra={"campaign_id": campaign_id},
    )


async def _find_visibility(
    db: AsyncSession, campaign_id: UUID, influencer_id: UUID,
) -> InfluencerVisibility | None:
    result = await db.execute(
        select(InfluencerVisibility).where(
            InfluencerVisibility.campaign_id == campaign_id,
            InfluencerVisibility.influencer_id == influencer_id,
        ),
    )
    return result.scalar_one_or_none()


async def upsert_visibility(
    db: AsyncSession, campaign_id: UUID, influencer_id: UUID, body: VisibilityUpdate,
) -> InfluencerVisibility:
    """Insert or update the single visibility row for (campaign, influencer)."""
    await get_campaign_or_404(db, campaign_id)
    if await db.get(Influencer, influencer_id) is None:
        raise ResourceNotFoundError("Influencer", str(influencer_id))

    fields = body.provided_fields()
    setting = await _find_visibility(db, campaign_id, influencer_id)
    if setting is None:
        setting = InfluencerVisibility(
            campaign_id=campaign_id,
            influencer_id=influencer_id,
            negotiation_visible=False,
        )
        db.add(setting)
    for name, value in fields.items():
        setattr(setting, name, value)
    try:
        await db.commit()
    except IntegrityError:
        # A concurrent upsert inserted the row first.
        await db.rollback()
        setting = await _find_visibility(db, campaign_id, influencer_id)
        if setting is None:
            raise
        for name, value in fields.items():
            setattr(setting, name, value)
        await db.commit()
    await db.refresh(setting)
    logger.info(
        "Visibility updated",
        extra={
            "campaign_id": campaign_id,
            "influencer_id": influencer_id,
            "assigned_phase": setting.assigned_phase,
        },
    )
    return setting
