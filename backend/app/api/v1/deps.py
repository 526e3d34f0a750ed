"""
API Dependencies

Authentication dependencies and common query parameter dependencies
shared by every router.
"""
from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Query
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import get_user_from_token
from app.db.session import get_db
from app.exceptions import AuthenticationError, ForbiddenError, InvalidTokenError
from app.models.user import User
from app.services.shipment_access import Actor

# Missing tokens are rejected in get_current_user
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


async def get_current_user(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get the current authenticated user from access token

    Raises:
        AuthenticationError (401): no bearer token
        InvalidTokenError / TokenExpiredError (401): token rejected or user gone
        ForbiddenError (403): the account is inactive
    """
    if not token:
        raise AuthenticationError()

    user = db.get(User, get_user_from_token(token, expected_type="access"))
    if user is None:
        raise InvalidTokenError(details={"reason": "unknown user"})

    if not user.is_active:
        raise ForbiddenError("User account is inactive")

    return user


async def get_current_admin_user(
    current_user: Annotated[User, Depends(get_current_user)]
) -> User:
    """
    Dependency to require administrator access (reference data management,
    shipment deletion, customer views, admin dashboard).
    """
    if not current_user.is_admin:
        raise ForbiddenError("Admin access required")
    return current_user


async def get_current_actor(
    current_user: Annotated[User, Depends(get_current_user)]
) -> Actor:
    """The authenticated user as the Actor handed to shipment services"""
    return Actor.from_user(current_user)


@dataclass
class PageParams:
    page: int
    page_size: int


def get_page_params(
    page: int = Query(default=1, ge=1, description="1-based page number"),
    page_size: int = Query(
        default=settings.DEFAULT_PAGE_SIZE,
        ge=1,
        le=settings.MAX_PAGE_SIZE,
        description="Records per page",
    ),
) -> PageParams:
    """Dependency for page-number pagination on shipment lists"""
    return PageParams(page=page, page_size=page_size)
