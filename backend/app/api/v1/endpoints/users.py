"""
Users API Endpoints

Administrator directory of accounts: list, provision, edit, activate or
deactivate, and delete.
"""
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.deps import PageParams, get_current_admin_user, get_page_params
from app.core.status_config import UserRole
from app.db.session import get_db
from app.models.user import User
from app.schemas.auth import UserResponse
from app.schemas.common import MessageResponse, PaginationMeta
from app.schemas.user import AdminUserCreate, AdminUserUpdate, UserListResponse
from app.services import user_management
from app.services.user_management import UserFilters

router = APIRouter()


@router.get("/", response_model=UserListResponse)
async def list_users(
    role: Optional[UserRole] = None,
    is_active: Optional[bool] = None,
    search: Optional[str] = None,
    page: PageParams = Depends(get_page_params),
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
):
    """
    List users, newest first

    - **role**: REGISTERED_USER or ADMINISTRATOR
    - **is_active**: filter by account status
    - **search**: substring of first name, last name or email
    """
    filters = UserFilters(role=role.value if role else None, is_active=is_active, search=search)
    items, total = user_management.list_users(db, filters, page.page, page.page_size)
    return {
        "items": items,
        "pagination": PaginationMeta.for_page(total, page.page, page.page_size, len(items)),
    }


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: AdminUserCreate,
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
):
    return user_management.create_user(db, data, role=data.role, email_verified=data.email_verified)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
):
    return user_management.get_user(db, user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    data: AdminUserUpdate,
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
):
    """Edit profile, role and account flags. Cannot change your own role or deactivate yourself."""
    return user_management.update_user(db, current_user, user_id, data)


@router.patch("/{user_id}/toggle-status", response_model=UserResponse)
async def toggle_user_status(
    user_id: int,
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
):
    return user_management.toggle_user_active(db, current_user, user_id)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
):
    """Delete an account with no shipments; deactivate it otherwise"""
    user_management.delete_user(db, current_user, user_id)
    return {"message": f"User {user_id} deleted"}
