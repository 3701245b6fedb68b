"""Messaging Schemas - direct messages, conversation summaries and notifications.

Invariants:
    - MessageCreate.content: 1-5000 chars, stripped, non-empty
    - sender and receiver must be of different user types
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from campaign_hub.core.domain_types import NotificationType, UserType


class MessageCreate(BaseModel):
    sender_type: UserType
    sender_id: UUID
    receiver_type: UserType
    receiver_id: UUID
    content: str = Field(min_length=1, max_length=5000)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("content cannot be empty or whitespace")
        return v

    @model_validator(mode="after")
    def validate_participants(self):
        if self.sender_type == self.receiver_type:
            raise ValueError("messages go between an admin and an influencer")
        return self


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    sender_type: UserType
    sender_id: UUID
    receiver_type: UserType
    receiver_id: UUID
    content: str
    read: bool
    created_at: datetime


class ConversationResponse(BaseModel):
    counterpart_type: UserType
    counterpart_id: UUID
    name: str
    last_message: str
    last_message_at: datetime
    unread: int


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: NotificationType
    message: str
    target_type: UserType
    target_id: UUID
    read: bool
    created_at: datetime
