"""
Account API Endpoints

The signed-in user's own account record, plus administrator removal of
an account by id.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.deps import get_current_admin_user, get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.auth import UserResponse
from app.schemas.common import MessageResponse
from app.schemas.user import ProfileUpdate
from app.services import user_management

router = APIRouter()


@router.get("/", response_model=UserResponse)
async def get_account(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/", response_model=UserResponse)
async def update_account(
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return user_management.update_profile(db, current_user, data)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_account(
    user_id: int,
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
):
    user_management.delete_user(db, current_user, user_id)
    return {"message": f"Account {user_id} deleted"}
