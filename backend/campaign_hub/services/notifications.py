"""Notifications - raises in-app notices for the other side of an interaction.

Invariants:
    - Notifications are added to the caller's session; the caller commits
    - Admin-targeted notices fan out to every admin row
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campaign_hub.core.domain_types import NotificationType, UserType
from campaign_hub.models.admin import Admin
from campaign_hub.models.notification import Notification

logger = logging.getLogger(__name__)


def notify(
    db: AsyncSession,
    kind: NotificationType,
    message: str,
    target_type: UserType,
    target_id: UUID,
) -> Notification:
    notification = Notification(
        type=kind.value, message=message,
        target_type=target_type.value, target_id=target_id,
    )
    db.add(notification)
    return notification


async def notify_admins(
    db: AsyncSession, kind: NotificationType, message: str,
) -> int:
    """Queue one notification per admin. Returns how many were queued."""
    result = await db.execute(select(Admin.id))
    admin_ids = list(result.scalars().all())
    for admin_id in admin_ids:
        notify(db, kind, message, UserType.ADMIN, admin_id)
    if not admin_ids:
        logger.warning(f"No admins to notify for {kind.value}")
    return len(admin_ids)
