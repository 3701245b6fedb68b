"""Admin Routes - campaign manager accounts (messaging and notification targets)."""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from campaign_hub.core.errors import DuplicateParticipantError
from campaign_hub.infrastructure.database import get_db
from campaign_hub.models.admin import Admin

router = APIRouter(prefix="/api/v1/admins", tags=["admins"])


class AdminCreate(BaseModel):
    email: str = Field(max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    name: str = Field(min_length=1, max_length=200)
    auth_id: str | None = Field(None, max_length=255)


class AdminResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str


@router.post("", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
async def create_admin(body: AdminCreate, db: AsyncSession = Depends(get_db)):
    admin = Admin(**body.model_dump())
    db.add(admin)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateParticipantError("admin")
    await db.refresh(admin)
    return admin


@router.get("", response_model=list[AdminResponse])
async def list_admins(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Admin).order_by(Admin.created_at))
    return result.scalars().all()
