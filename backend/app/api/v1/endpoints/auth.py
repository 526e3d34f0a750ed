"""
Authentication endpoints

Handles user registration, login and the signed-in user's own profile
"""
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.api.v1.deps import get_current_user
from app.core.config import settings
from app.core.limiter import limiter
from app.core.security import create_access_token, verify_password
from app.db.session import get_db
from app.exceptions import ForbiddenError, InvalidCredentialsError
from app.logging_config import get_logger
from app.models.user import User
from app.schemas.auth import TokenResponse, UserRegister, UserResponse
from app.schemas.common import MessageResponse
from app.schemas.user import PasswordChange, ProfileUpdate
from app.services import user_management

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


# ============================================================================
# ENDPOINT: User Registration
# ============================================================================

@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.AUTH_RATE_LIMIT)  # type: ignore
async def register_user(
    request: Request,
    user_data: UserRegister,
    db: Session = Depends(get_db)
):
    """
    Register a new user

    New accounts are always REGISTERED_USER; administrators are provisioned
    out of band.

    Raises:
        DuplicateError (409) if email is already registered
        NotFoundError (404) if country_id does not exist
    """
    new_user = user_management.create_user(db, user_data)
    logger.info("User registered", extra={"user_id": new_user.id})
    return new_user


# ============================================================================
# ENDPOINT: User Login
# ============================================================================

@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)  # type: ignore
async def login_user(
    request: Request,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: Session = Depends(get_db)
):
    """
    Login with email and password

    Uses OAuth2 password flow (username field contains email).

    Raises:
        InvalidCredentialsError (401) if credentials are incorrect
        ForbiddenError (403) if the account is inactive
    """
    user = db.query(User).filter(User.email == form_data.username.lower()).first()

    if not user or not verify_password(form_data.password, user.password_hash):
        logger.info("Failed login attempt")
        raise InvalidCredentialsError()

    if not user.is_active:
        raise ForbiddenError("User account is inactive")

    user.last_login_at = datetime.utcnow()
    db.commit()

    return {
        "access_token": create_access_token(user.id, role=user.role),
        "token_type": "bearer",
    }


# ============================================================================
# ENDPOINT: Get Current User
# ============================================================================

@router.get("/me", response_model=UserResponse)
async def get_current_user_profile(
    current_user: Annotated[User, Depends(get_current_user)]
):
    """Profile of the currently authenticated user"""
    return current_user


# ============================================================================
# ENDPOINT: Self-service profile
# ============================================================================

@router.put("/update-details", response_model=UserResponse)
async def update_details(
    data: ProfileUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Session = Depends(get_db),
):
    """
    Update the signed-in user's own profile

    Role, active flag and email verification are not editable here.
    """
    return user_management.update_profile(db, current_user, data)


@router.put("/update-password", response_model=MessageResponse)
async def update_password(
    data: PasswordChange,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Session = Depends(get_db),
):
    """
    Change password; the current password must be supplied

    Raises:
        InvalidCredentialsError (401) if current_password is wrong
        ValidationError (400) if the new password equals the current one
    """
    user_management.change_password(db, current_user, data.current_password, data.new_password)
    return {"message": "Password updated"}
