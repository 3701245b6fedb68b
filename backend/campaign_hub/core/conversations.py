"""Conversations - groups a participant's messages into per-counterpart threads.

Invariants:
    - A thread is keyed by the counterpart's (user_type, id), never by message id
    - unread counts only messages addressed TO the viewer that are not read
    - Threads are ordered by most recent message first; ties keep first-seen order
    - Pure: input messages are not mutated

Design Decisions:
    - Display names are resolved by the shell (needs influencer/admin rows)
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from campaign_hub.core.domain_types import UserType


@dataclass(frozen=True)
class MessageSnapshot:
    id: UUID
    sender_type: UserType
    sender_id: UUID
    receiver_type: UserType
    receiver_id: UUID
    content: str
    read: bool
    created_at: datetime


@dataclass(frozen=True)
class ConversationSummary:
    counterpart_type: UserType
    counterpart_id: UUID
    last_message: str
    last_message_at: datetime
    unread: int


def _counterpart(
    message: MessageSnapshot, viewer_type: UserType, viewer_id: UUID,
) -> tuple[UserType, UUID] | None:
    if message.sender_type == viewer_type and message.sender_id == viewer_id:
        return message.receiver_type, message.receiver_id
    if message.receiver_type == viewer_type and message.receiver_id == viewer_id:
        return message.sender_type, message.sender_id
    return None


def summarize_conversations(
    messages: Iterable[MessageSnapshot], viewer_type: UserType, viewer_id: UUID,
) -> list[ConversationSummary]:
    """One summary per counterpart the viewer has exchanged messages with."""
    latest: dict[tuple[UserType, UUID], MessageSnapshot] = {}
    unread: dict[tuple[UserType, UUID], int] = {}
    for message in messages:
        key = _counterpart(message, viewer_type, viewer_id)
        if key is None:
            continue
        current = latest.get(key)
        if current is None or message.created_at > current.created_at:
            latest[key] = message
        incoming = message.receiver_id == viewer_id and message.receiver_type == viewer_type
        unread[key] = unread.get(key, 0) + (1 if incoming and not message.read else 0)

    summaries = [
        ConversationSummary(
            counterpart_type=key[0],
            counterpart_id=key[1],
            last_message=msg.content,
            last_message_at=msg.created_at,
            unread=unread[key],
        )
        for key, msg in latest.items()
    ]
    summaries.sort(key=lambda s: s.last_message_at, reverse=True)
    return summaries


def thread_between(
    messages: Iterable[MessageSnapshot],
    viewer_type: UserType,
    viewer_id: UUID,
    counterpart_type: UserType,
    counterpart_id: UUID,
) -> list[MessageSnapshot]:
    """Messages exchanged between two participants, oldest first."""
    thread = [
        m for m in messages
        if _counterpart(m, viewer_type, viewer_id) == (counterpart_type, counterpart_id)
    ]
    thread.sort(key=lambda m: m.created_at)
    return thread
