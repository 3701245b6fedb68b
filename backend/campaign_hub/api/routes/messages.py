"""Message & Notification Routes - inbox threads, conversation summaries, notices.

Invariants:
    - Participants are addressed as (user_type, id) pairs in the path
    - Listing a thread does not mark it read; POST .../read does
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from campaign_hub.core.domain_types import UserType
from campaign_hub.infrastructure.database import get_db
from campaign_hub.schemas.messaging import (
    ConversationResponse, MessageCreate, MessageResponse, NotificationResponse,
)
from campaign_hub.services import messaging

router = APIRouter(prefix="/api/v1", tags=["messages"])


@router.post(
    "/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED,
)
async def send_message(body: MessageCreate, db: AsyncSession = Depends(get_db)):
    return await messaging.send_message(db, body)


@router.get(
    "/inbox/{user_type}/{user_id}/conversations",
    response_model=list[ConversationResponse],
)
async def list_conversations(
    user_type: UserType, user_id: UUID, db: AsyncSession = Depends(get_db),
):
    return await messaging.list_conversations(db, user_type, user_id)


@router.get(
    "/inbox/{user_type}/{user_id}/conversations/{counterpart_type}/{counterpart_id}",
    response_model=list[MessageResponse],
)
async def get_thread(
    user_type: UserType, user_id: UUID,
    counterpart_type: UserType, counterpart_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    return await messaging.get_thread(
        db, user_type, user_id, counterpart_type, counterpart_id,
    )


@router.post(
    "/inbox/{user_type}/{user_id}/conversations/{counterpart_type}/{counterpart_id}/read",
)
async def mark_thread_read(
    user_type: UserType, user_id: UUID,
    counterpart_type: UserType, counterpart_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    updated = await messaging.mark_thread_read(
        db, user_type, user_id, counterpart_type, counterpart_id,
    )
    return {"marked_read": updated}


@router.get(
    "/notifications/{user_type}/{user_id}",
    response_model=list[NotificationResponse],
)
async def list_notifications(
    user_type: UserType, user_id: UUID,
    unread_only: bool = Query(False),
    db: AsyncSession = Depends(get_db),
):
    return await messaging.list_notifications(db, user_type, user_id, unread_only)


@router.post(
    "/notifications/{notification_id}/read", response_model=NotificationResponse,
)
async def mark_notification_read(
    notification_id: UUID, db: AsyncSession = Depends(get_db),
):
    return await messaging.mark_notification_read(db, notification_id)
