"""
Trip endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.common import MAX_ID, DeleteResponse
from app.schemas.trip import TripCreate, TripUpdate, TripResponse
from app.services.trip_service import list_trips, create_trip, update_trip, delete_trip

router = APIRouter(prefix="/trips", tags=["Trips"])


@router.get("", response_model=list[TripResponse])
async def list_trips_endpoint(db: AsyncSession = Depends(get_db)):
    """List trips, most recently created first."""
    return await list_trips(db)


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip_endpoint(trip_data: TripCreate, db: AsyncSession = Depends(get_db)):
    return await create_trip(db, trip_data)


@router.put("", response_model=TripResponse)
async def update_trip_endpoint(trip_data: TripUpdate, db: AsyncSession = Depends(get_db)):
    return await update_trip(db, trip_data)


@router.delete("", response_model=DeleteResponse)
async def delete_trip_endpoint(
    trip_id: Optional[int] = Query(None, alias="id", ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
):
    """Delete a trip. Trips that still have bookings are refused with 409."""
    if trip_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Trip ID is required")
    await delete_trip(db, trip_id)
    return DeleteResponse(message="Trip deleted successfully", id=trip_id)
