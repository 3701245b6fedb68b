"""Application Routes - apply, list and decide.

Invariants:
    - POST returns 201 with the frozen budget; duplicates return 409
    - PATCH /status only moves pending applications to approved or rejected
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campaign_hub.core.domain_types import ApplicationStatus
from campaign_hub.infrastructure.database import get_db
from campaign_hub.models.application import Application
from campaign_hub.schemas.application import (
    ApplicationCreate, ApplicationDecision, ApplicationResponse,
)
from campaign_hub.services.applications import apply_to_campaign, decide_application

router = APIRouter(prefix="/api/v1/applications", tags=["applications"])


@router.post(
    "", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED,
)
async def create_application(
    body: ApplicationCreate, db: AsyncSession = Depends(get_db),
):
    return await apply_to_campaign(db, body)


@router.get("", response_model=list[ApplicationResponse])
async def list_applications(
    campaign_id: UUID | None = Query(None),
    influencer_id: UUID | None = Query(None),
    status_filter: ApplicationStatus | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    query = select(Application).order_by(Application.created_at.desc())
    if campaign_id:
        query = query.where(Application.campaign_id == campaign_id)
    if influencer_id:
        query = query.where(Application.influencer_id == influencer_id)
    if status_filter:
        query = query.where(Application.status == status_filter.value)
    result = await db.execute(query)
    return result.scalars().all()


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: UUID, body: ApplicationDecision,
    db: AsyncSession = Depends(get_db),
):
    return await decide_application(db, application_id, body)
