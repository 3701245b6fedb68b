"""Application Service - apply to campaigns and decide on applications.

Invariants:
    - Applying requires an active campaign, an eligible applicant and no prior
      application for the pair (core.enforce_application)
    - budget_applied_for is frozen at apply time: the caller's figure when given,
      otherwise the budget the applicant currently sees
    - A concurrent duplicate that slips past the pre-check fails on the unique
      constraint and is reported as DuplicateApplicationError
    - Decisions are one-shot: approved/rejected applications cannot change status
    - An application created already decided notifies the influencer instead
      of the admins

Design Decisions:
    - Notifications are written in the same transaction as the state change
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campaign_hub.core.budget_visibility import resolve_budget
from campaign_hub.core.domain_types import (
    ApplicationStatus, CampaignId, InfluencerId, NotificationType, UserType,
)
from campaign_hub.core.enforce_application import can_transition, check_new_application
from campaign_hub.core.errors import (
    ApplicationAlreadyDecidedError,
    CampaignNotOpenError,
    DuplicateApplicationError,
    ErrorContext,
    InvalidStatusTransitionError,
    NotEligibleError,
    ResourceNotFoundError,
)
from campaign_hub.models.application import Application
from campaign_hub.models.campaign import Campaign
from campaign_hub.schemas.application import ApplicationCreate, ApplicationDecision
from campaign_hub.services.notifications import notify, notify_admins
from campaign_hub.services.snapshot_repository import SqlSnapshotRepository

logger = logging.getLogger(__name__)


def _raise_for_check(error: dict, context: ErrorContext, status: str) -> None:
    match error["error_code"]:
        case "CAMPAIGN_NOT_OPEN":
            raise CampaignNotOpenError(status, context)
        case "NOT_ELIGIBLE":
            raise NotEligibleError(context)
        case "DUPLICATE_APPLICATION":
            raise DuplicateApplicationError(context)


async def apply_to_campaign(db: AsyncSession, body: ApplicationCreate) -> Application:
    """Create an application (pending unless an admin decides it up front)."""
    repo = SqlSnapshotRepository(db)
    campaign_id = CampaignId(body.campaign_id)
    influencer_id = InfluencerId(body.influencer_id)
    context = ErrorContext(
        campaign_id=str(campaign_id), influencer_id=str(influencer_id),
    )

    campaign = await repo.get_campaign(campaign_id)
    if campaign is None:
        raise ResourceNotFoundError("Campaign", str(campaign_id), context)
    applicant = await repo.get_applicant(influencer_id)
    if applicant is None:
        raise ResourceNotFoundError("Influencer", str(influencer_id), context)

    applications = await repo.list_applications(campaign_id=campaign_id)
    error = check_new_application(campaign, applicant, applications)
    if error:
        _raise_for_check(error, context, campaign.status.value)

    budget = body.budget_applied_for
    if budget is None:
        resolution = resolve_budget(
            campaign,
            await repo.list_phases(campaign_id),
            await repo.list_visibility(campaign_id, influencer_id),
            applications,
            influencer_id,
        )
        budget = resolution.amount

    status = ApplicationStatus(body.status)
    application = Application(
        campaign_id=campaign_id,
        influencer_id=influencer_id,
        status=status.value,
        budget_applied_for=budget,
        is_negotiated=body.is_negotiated,
    )
    if status is ApplicationStatus.PENDING:
        await notify_admins(
            db, NotificationType.NEW_APPLICATION,
            f"{applicant.name or 'An influencer'} applied to {campaign.title}",
        )
    else:
        notify(
            db, NotificationType.APPLICATION_STATUS,
            f"Your application to {campaign.title} was {status.value}",
            UserType.INFLUENCER, influencer_id,
        )
    db.add(application)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateApplicationError(context)
    await db.refresh(application)

    logger.info(
        "Application created",
        extra={
            "application_id": application.id,
            "status": status.value,
            "campaign_id": campaign_id,
            "influencer_id": influencer_id,
        },
    )
    return application


async def decide_application(
    db: AsyncSession, application_id: UUID, decision: ApplicationDecision,
) -> Application:
    """Approve or reject a pending application and notify the influencer."""
    application = await db.get(Application, application_id)
    if application is None:
        raise ResourceNotFoundError("Application", str(application_id))

    context = ErrorContext(
        campaign_id=str(application.campaign_id),
        influencer_id=str(application.influencer_id),
    )
    current = ApplicationStatus(application.status)
    target = ApplicationStatus(decision.status)
    if current.is_terminal:
        raise ApplicationAlreadyDecidedError(current.value, context)
    if not can_transition(current, target):
        raise InvalidStatusTransitionError(target.value, context)

    application.status = target.value
    if decision.final_offer_amount is not None:
        application.final_offer_amount = decision.final_offer_amount

    campaign = await db.get(Campaign, application.campaign_id)
    title = campaign.title if campaign else "a campaign"
    notify(
        db, NotificationType.APPLICATION_STATUS,
        f"Your application to {title} was {target.value}",
        UserType.INFLUENCER, application.influencer_id,
    )
    await db.commit()
    await db.refresh(application)

    logger.info(
        f"Application {target.value}",
        extra={"application_id": application.id, "campaign_id": application.campaign_id},
    )
    return application
