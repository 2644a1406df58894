"""
User endpoints. Updates carry the id in the body; deletes take it as ?id=.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.common import MAX_ID, DeleteResponse
from app.schemas.user import UserCreate, UserUpdate, UserResponse
from app.services.user_service import list_users, create_user, update_user, delete_user

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=list[UserResponse])
async def list_users_endpoint(db: AsyncSession = Depends(get_db)):
    return await list_users(db)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user_endpoint(user_data: UserCreate, db: AsyncSession = Depends(get_db)):
    """Create a user. Emails are unique (409 on conflict)."""
    return await create_user(db, user_data)


@router.put("", response_model=UserResponse)
async def update_user_endpoint(user_data: UserUpdate, db: AsyncSession = Depends(get_db)):
    return await update_user(db, user_data)


@router.delete("", response_model=DeleteResponse)
async def delete_user_endpoint(
    user_id: Optional[int] = Query(None, alias="id", ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
):
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID is required")
    await delete_user(db, user_id)
    return DeleteResponse(message="User deleted successfully", id=user_id)
