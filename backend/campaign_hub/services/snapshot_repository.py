"""Snapshot Repository - loads immutable core snapshots from the database.

Invariants:
    - Implements core.repository_protocols.CampaignSnapshotSource
    - Every read for one request goes through the same AsyncSession, so the
      resolvers see one consistent snapshot (no torn reads across tables)
    - Converters are the only place ORM rows become core snapshots

Design Decisions:
    - Explicitly scoped per request (constructed from the request's session):
      replaces page-lifetime global state with dependency injection
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campaign_hub.core.domain_types import (
    ApplicationId, ApplicationStatus, CampaignId, CampaignStatus, InfluencerId,
)
from campaign_hub.core.snapshots import (
    ApplicantProfile,
    ApplicationSnapshot,
    CampaignSnapshot,
    PhaseSnapshot,
    VisibilitySnapshot,
)
from campaign_hub.models.application import Application
from campaign_hub.models.campaign import Campaign
from campaign_hub.models.campaign_phase import CampaignPhase
from campaign_hub.models.influencer import Influencer
from campaign_hub.models.influencer_visibility import InfluencerVisibility


# ─── Converters ──────────────────────────────────────────────────

def to_campaign_snapshot(row: Campaign) -> CampaignSnapshot:
    return CampaignSnapshot(
        id=CampaignId(row.id),
        status=CampaignStatus(row.status),
        min_followers=row.min_followers,
        city=row.city,
        categories=tuple(row.categories or ()),
        title=row.title,
        description=row.description,
    )


def to_applicant_profile(row: Influencer) -> ApplicantProfile:
    return ApplicantProfile(
        db_id=InfluencerId(row.id),
        follower_count=row.follower_count,
        city=row.city,
        categories=tuple(row.categories) if row.categories is not None else None,
        name=row.name,
        instagram=row.instagram,
    )


def to_application_snapshot(row: Application) -> ApplicationSnapshot:
    return ApplicationSnapshot(
        id=ApplicationId(row.id),
        campaign_id=CampaignId(row.campaign_id),
        influencer_id=InfluencerId(row.influencer_id),
        status=ApplicationStatus(row.status),
        budget_applied_for=row.budget_applied_for,
        is_negotiated=bool(row.is_negotiated),
        final_offer_amount=row.final_offer_amount,
    )


def to_phase_snapshot(row: CampaignPhase) -> PhaseSnapshot:
    return PhaseSnapshot(
        campaign_id=CampaignId(row.campaign_id),
        phase_number=row.phase_number,
        budget_amount=row.budget_amount,
        is_active=bool(row.is_active),
    )


def to_visibility_snapshot(row: InfluencerVisibility) -> VisibilitySnapshot:
    return VisibilitySnapshot(
        campaign_id=CampaignId(row.campaign_id),
        influencer_id=InfluencerId(row.influencer_id),
        assigned_phase=row.assigned_phase,
        negotiation_visible=bool(row.negotiation_visible),
        custom_offer_amount=row.custom_offer_amount,
    )


# ─── Repository ──────────────────────────────────────────────────

class SqlSnapshotRepository:
    """Snapshot source backed by the request's AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get_campaign(self, campaign_id: CampaignId) -> CampaignSnapshot | None:
        row = await self._db.get(Campaign, campaign_id)
        return to_campaign_snapshot(row) if row else None

    async def list_campaigns(
        self, status: CampaignStatus | None = None,
    ) -> list[CampaignSnapshot]:
        query = select(Campaign).order_by(Campaign.created_at.desc())
        if status is not None:
            query = query.where(Campaign.status == status.value)
        result = await self._db.execute(query)
        return [to_campaign_snapshot(r) for r in result.scalars().all()]

    async def get_applicant(
        self, influencer_id: InfluencerId,
    ) -> ApplicantProfile | None:
        row = await self._db.get(Influencer, influencer_id)
        return to_applicant_profile(row) if row else None

    async def list_applicants(self) -> list[ApplicantProfile]:
        result = await self._db.execute(
            select(Influencer).order_by(Influencer.created_at),
        )
        return [to_applicant_profile(r) for r in result.scalars().all()]

    async def list_phases(
        self, campaign_id: CampaignId | None = None,
    ) -> list[PhaseSnapshot]:
        query = select(CampaignPhase).order_by(CampaignPhase.phase_number)
        if campaign_id is not None:
            query = query.where(CampaignPhase.campaign_id == campaign_id)
        result = await self._db.execute(query)
        return [to_phase_snapshot(r) for r in result.scalars().all()]

    async def list_visibility(
        self,
        campaign_id: CampaignId | None = None,
        influencer_id: InfluencerId | None = None,
    ) -> list[VisibilitySnapshot]:
        query = select(InfluencerVisibility)
        if campaign_id is not None:
            query = query.where(InfluencerVisibility.campaign_id == campaign_id)
        if influencer_id is not None:
            query = query.where(InfluencerVisibility.influencer_id == influencer_id)
        result = await self._db.execute(query)
        return [to_visibility_snapshot(r) for r in result.scalars().all()]

    async def list_applications(
        self,
        campaign_id: CampaignId | None = None,
        influencer_id: InfluencerId | None = None,
    ) -> list[ApplicationSnapshot]:
        query = select(Application).order_by(Application.created_at)
        if campaign_id is not None:
            query = query.where(Application.campaign_id == campaign_id)
        if influencer_id is not None:
            query = query.where(Application.influencer_id == influencer_id)
        result = await self._db.execute(query)
        return [to_application_snapshot(r) for r in result.scalars().all()]
