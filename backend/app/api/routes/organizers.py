from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.common import MAX_ID, DeleteResponse
from app.schemas.organizer import OrganizerCreate, OrganizerUpdate, OrganizerResponse
from app.services.organizer_service import (
    list_organizers,
    create_organizer,
    update_organizer,
    delete_organizer,
)

router = APIRouter(prefix="/organizers", tags=["Organizers"])


@router.get("", response_model=list[OrganizerResponse])
async def list_organizers_endpoint(db: AsyncSession = Depends(get_db)):
    return await list_organizers(db)


@router.post("", response_model=OrganizerResponse, status_code=status.HTTP_201_CREATED)
async def create_organizer_endpoint(organizer_data: OrganizerCreate, db: AsyncSession = Depends(get_db)):
    return await create_organizer(db, organizer_data)


@router.put("", response_model=OrganizerResponse)
async def update_organizer_endpoint(organizer_data: OrganizerUpdate, db: AsyncSession = Depends(get_db)):
    return await update_organizer(db, organizer_data)


@router.delete("", response_model=DeleteResponse)
async def delete_organizer_endpoint(
    organizer_id: Optional[int] = Query(None, alias="id", ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
):
    if organizer_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Organizer ID is required")
    await delete_organizer(db, organizer_id)
    return DeleteResponse(message="Organizer deleted successfully", id=organizer_id)
