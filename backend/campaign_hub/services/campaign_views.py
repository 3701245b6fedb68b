"""Campaign Views - read models composed from one snapshot and the pure resolvers.

Invariants:
    - Each view loads its snapshot through one SqlSnapshotRepository (one session)
    - Budget figures come only from core.budget_visibility; nothing recomputes them here
    - Stale phase assignments reported by the resolver are logged as warnings,
      never repaired

Design Decisions:
    - Influencer-side listings show active campaigns only, with an eligible flag
      rather than hiding ineligible ones (eligible_only narrows the list)
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from campaign_hub.core.budget_visibility import (
    BudgetResolution, budget_overview, campaign_budget_table,
)
from campaign_hub.core.domain_types import CampaignId, CampaignStatus, InfluencerId
from campaign_hub.core.eligibility import eligible_applicants, has_applied, is_eligible
from campaign_hub.core.errors import ResourceNotFoundError
from campaign_hub.core.repository_protocols import CampaignSnapshotSource
from campaign_hub.core.snapshots import ApplicantProfile, CampaignSnapshot
from campaign_hub.schemas.campaign import BudgetRowResponse
from campaign_hub.schemas.influencer import (
    CampaignBudgetResponse, EligibleInfluencerResponse, InfluencerCampaignView,
)
from campaign_hub.services.snapshot_repository import SqlSnapshotRepository

logger = logging.getLogger(__name__)


def _warn_if_stale(
    resolution: BudgetResolution, campaign_id: UUID, influencer_id: UUID,
) -> None:
    if resolution.stale_assignment:
        logger.warning(
            "Assigned phase no longer exists; showing fallback budget",
            extra={
                "campaign_id": campaign_id,
                "influencer_id": influencer_id,
                "assigned_phase": resolution.assigned_phase,
                "budget_rule": resolution.rule.value,
            },
        )


async def _campaign_or_404(
    repo: CampaignSnapshotSource, campaign_id: UUID,
) -> CampaignSnapshot:
    campaign = await repo.get_campaign(CampaignId(campaign_id))
    if campaign is None:
        raise ResourceNotFoundError("Campaign", str(campaign_id))
    return campaign


async def _applicant_or_404(
    repo: CampaignSnapshotSource, influencer_id: UUID,
) -> ApplicantProfile:
    applicant = await repo.get_applicant(InfluencerId(influencer_id))
    if applicant is None:
        raise ResourceNotFoundError("Influencer", str(influencer_id))
    return applicant


async def eligible_influencers(
    db: AsyncSession, campaign_id: UUID,
) -> list[EligibleInfluencerResponse]:
    repo = SqlSnapshotRepository(db)
    campaign = await _campaign_or_404(repo, campaign_id)
    applicants = eligible_applicants(campaign, await repo.list_applicants())
    applications = await repo.list_applications(campaign_id=campaign.id)
    return [
        EligibleInfluencerResponse(
            id=a.db_id,
            name=a.name,
            instagram=a.instagram,
            follower_count=a.follower_count,
            city=a.city,
            categories=list(a.categories) if a.categories is not None else None,
            has_applied=has_applied(applications, campaign.id, a.db_id),
        )
        for a in applicants
    ]


async def budget_table(db: AsyncSession, campaign_id: UUID) -> list[BudgetRowResponse]:
    """Per-influencer budget view for admins, over the campaign's eligible applicants."""
    repo = SqlSnapshotRepository(db)
    campaign = await _campaign_or_404(repo, campaign_id)
    applicants = eligible_applicants(campaign, await repo.list_applicants())
    by_id = {a.db_id: a for a in applicants}
    rows = campaign_budget_table(
        campaign,
        await repo.list_phases(campaign.id),
        await repo.list_visibility(campaign_id=campaign.id),
        await repo.list_applications(campaign_id=campaign.id),
        applicants,
    )
    response = []
    for row in rows:
        _warn_if_stale(row.resolution, campaign.id, row.influencer_id)
        applicant = by_id[row.influencer_id]
        response.append(BudgetRowResponse(
            influencer_id=row.influencer_id,
            name=applicant.name,
            instagram=applicant.instagram,
            follower_count=applicant.follower_count,
            budget=row.resolution.amount,
            budget_rule=row.resolution.rule,
            assigned_phase=row.resolution.assigned_phase,
            stale_assignment=row.resolution.stale_assignment,
            negotiation_enabled=row.negotiation_enabled,
            application_status=(
                row.application_status.value if row.application_status else None
            ),
        ))
    return response


async def influencer_campaigns(
    db: AsyncSession, influencer_id: UUID, eligible_only: bool = False,
) -> list[InfluencerCampaignView]:
    """Active campaigns as one influencer sees them, newest first."""
    repo = SqlSnapshotRepository(db)
    applicant = await _applicant_or_404(repo, influencer_id)
    campaigns = await repo.list_campaigns(CampaignStatus.ACTIVE)
    if eligible_only:
        campaigns = [c for c in campaigns if is_eligible(c, applicant)]

    applications = await repo.list_applications(influencer_id=applicant.db_id)
    overview = budget_overview(
        campaigns,
        await repo.list_phases(),
        await repo.list_visibility(influencer_id=applicant.db_id),
        applications,
        applicant.db_id,
    )
    views = []
    for campaign in campaigns:
        budget = overview[campaign.id]
        views.append(InfluencerCampaignView(
            id=campaign.id,
            title=campaign.title,
            description=campaign.description,
            min_followers=campaign.min_followers,
            city=campaign.city,
            categories=list(campaign.categories),
            status=campaign.status,
            eligible=is_eligible(campaign, applicant),
            has_applied=budget.has_applied,
            budget=budget.budget,
            budget_rule=budget.rule,
            negotiation_enabled=budget.negotiation_enabled,
        ))
    return views


async def influencer_budgets(
    db: AsyncSession, influencer_id: UUID,
) -> list[CampaignBudgetResponse]:
    """Visible budget and negotiation flag for every active campaign."""
    repo = SqlSnapshotRepository(db)
    applicant = await _applicant_or_404(repo, influencer_id)
    overview = budget_overview(
        await repo.list_campaigns(CampaignStatus.ACTIVE),
        await repo.list_phases(),
        await repo.list_visibility(influencer_id=applicant.db_id),
        await repo.list_applications(influencer_id=applicant.db_id),
        applicant.db_id,
    )
    return [
        CampaignBudgetResponse(
            campaign_id=view.campaign_id,
            budget=view.budget,
            budget_rule=view.rule,
            negotiation_enabled=view.negotiation_enabled,
            has_applied=view.has_applied,
        )
        for view in overview.values()
    ]
