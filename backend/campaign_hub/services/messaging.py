"""Messaging Service - admin/influencer messages and the notifications they raise.

Invariants:
    - Both participants must exist in their respective tables
    - Sending a message queues a NEW_MESSAGE notification for the receiver in the
      same transaction
    - Reading a thread never marks messages read; mark_thread_read does, and only
      for messages addressed to the viewer
"""

import logging
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from campaign_hub.core.conversations import (
    MessageSnapshot, summarize_conversations, thread_between,
)
from campaign_hub.core.domain_types import NotificationType, UserType
from campaign_hub.core.errors import ResourceNotFoundError
from campaign_hub.models.admin import Admin
from campaign_hub.models.influencer import Influencer
from campaign_hub.models.message import Message
from campaign_hub.models.notification import Notification
from campaign_hub.schemas.messaging import ConversationResponse, MessageCreate
from campaign_hub.services.notifications import notify

logger = logging.getLogger(__name__)

_PARTICIPANT_MODELS = {UserType.ADMIN: Admin, UserType.INFLUENCER: Influencer}


def to_message_snapshot(row: Message) -> MessageSnapshot:
    return MessageSnapshot(
        id=row.id,
        sender_type=UserType(row.sender_type),
        sender_id=row.sender_id,
        receiver_type=UserType(row.receiver_type),
        receiver_id=row.receiver_id,
        content=row.content,
        read=bool(row.read),
        created_at=row.created_at,
    )


async def participant_name(db: AsyncSession, user_type: UserType, user_id: UUID) -> str:
    row = await db.get(_PARTICIPANT_MODELS[user_type], user_id)
    if row is None:
        raise ResourceNotFoundError(user_type.value.capitalize(), str(user_id))
    return row.name


async def _messages_for(
    db: AsyncSession, user_type: UserType, user_id: UUID,
) -> list[MessageSnapshot]:
    result = await db.execute(
        select(Message).where(or_(
            (Message.sender_type == user_type.value) & (Message.sender_id == user_id),
            (Message.receiver_type == user_type.value) & (Message.receiver_id == user_id),
        )).order_by(Message.created_at),
    )
    return [to_message_snapshot(m) for m in result.scalars().all()]


async def send_message(db: AsyncSession, body: MessageCreate) -> Message:
    sender_name = await participant_name(db, body.sender_type, body.sender_id)
    await participant_name(db, body.receiver_type, body.receiver_id)

    message = Message(
        sender_type=body.sender_type.value,
        sender_id=body.sender_id,
        receiver_type=body.receiver_type.value,
        receiver_id=body.receiver_id,
        content=body.content,
        read=False,
    )
    db.add(message)
    notify(
        db, NotificationType.NEW_MESSAGE, f"New message from {sender_name}",
        body.receiver_type, body.receiver_id,
    )
    await db.commit()
    await db.refresh(message)
    return message


async def list_conversations(
    db: AsyncSession, viewer_type: UserType, viewer_id: UUID,
) -> list[ConversationResponse]:
    await participant_name(db, viewer_type, viewer_id)
    summaries = summarize_conversations(
        await _messages_for(db, viewer_type, viewer_id), viewer_type, viewer_id,
    )
    response = []
    for s in summaries:
        counterpart = await db.get(_PARTICIPANT_MODELS[s.counterpart_type], s.counterpart_id)
        response.append(ConversationResponse(
            counterpart_type=s.counterpart_type,
            counterpart_id=s.counterpart_id,
            # Counterpart may have been deleted since the thread started
            name=counterpart.name if counterpart else "Unknown",
            last_message=s.last_message,
            last_message_at=s.last_message_at,
            unread=s.unread,
        ))
    return response


async def get_thread(
    db: AsyncSession,
    viewer_type: UserType,
    viewer_id: UUID,
    counterpart_type: UserType,
    counterpart_id: UUID,
) -> list[MessageSnapshot]:
    return thread_between(
        await _messages_for(db, viewer_type, viewer_id),
        viewer_type, viewer_id, counterpart_type, counterpart_id,
    )


async def mark_thread_read(
    db: AsyncSession,
    viewer_type: UserType,
    viewer_id: UUID,
    counterpart_type: UserType,
    counterpart_id: UUID,
) -> int:
    """Mark messages from counterpart to viewer as read. Returns rows updated."""
    result = await db.execute(
        update(Message)
        .where(
            Message.receiver_type == viewer_type.value,
            Message.receiver_id == viewer_id,
            Message.sender_type == counterpart_type.value,
            Message.sender_id == counterpart_id,
            Message.read.is_(False),
        )
        .values(read=True),
    )
    await db.commit()
    return result.rowcount


async def list_notifications(
    db: AsyncSession, target_type: UserType, target_id: UUID, unread_only: bool = False,
) -> list[Notification]:
    query = select(Notification).where(
        Notification.target_type == target_type.value,
        Notification.target_id == target_id,
    ).order_by(Notification.created_at.desc())
    if unread_only:
        query = query.where(Notification.read.is_(False))
    result = await db.execute(query)
    return list(result.scalars().all())


async def mark_notification_read(db: AsyncSession, notification_id: UUID) -> Notification:
    notification = await db.get(Notification, notification_id)
    if notification is None:
        raise ResourceNotFoundError("Notification", str(notification_id))
    notification.read = True
    await db.commit()
    await db.refresh(notification)
    return notification
