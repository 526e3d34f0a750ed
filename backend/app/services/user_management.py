"""
User Management Service

Account creation, self-service profile and password changes, and the
administrator's user directory.

Administrators cannot lock themselves out: changing their own role,
deactivating or deleting their own account are rejected.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy import desc, func, or_
from sqlalchemy.orm import Session

from app.core.security import hash_password, verify_password
from app.core.status_config import UserRole
from app.exceptions import (
    ConflictError,
    DuplicateError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from app.logging_config import get_logger
from app.models.shipment import Shipment
from app.models.user import User
from app.schemas.auth import UserRegister
from app.schemas.user import AdminUserUpdate, ProfileUpdate
from app.services.query_helpers import LIKE_ESCAPE, contains_pattern
from app.services.reference_data import get_country

logger = get_logger(__name__)


@dataclass
class UserFilters:
    role: Optional[str] = None
    is_active: Optional[bool] = None
    search: Optional[str] = None


def _ensure_email_free(db: Session, email: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(User).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first():
        raise DuplicateError("User", field="email", value=email)


def _apply_profile_changes(db: Session, user: User, changes: dict) -> None:
    if "email" in changes:
        changes["email"] = changes["email"].lower()
        if changes["email"] != user.email:
            _ensure_email_free(db, changes["email"], exclude_id=user.id)
    if changes.get("country_id") is not None:
        get_country(db, changes["country_id"])

    for field, value in changes.items():
        if isinstance(value, UserRole):
            value = value.value
        setattr(user, field, value)


# ============================================================================
# ACCOUNTS
# ============================================================================

def create_user(
    db: Session,
    data: UserRegister,
    role: UserRole = UserRole.REGISTERED_USER,
    email_verified: bool = False,
) -> User:
    """
    Create an account from registration data.

    Raises:
        DuplicateError: email already registered
        NotFoundError: country_id does not exist
    """
    email = data.email.lower()
    _ensure_email_free(db, email)
    if data.country_id is not None:
        get_country(db, data.country_id)

    user = User(
        email=email,
        password_hash=hash_password(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        date_of_birth=data.date_of_birth,
        contact_number=data.contact_number,
        street=data.street,
        city=data.city,
        state=data.state,
        zip_code=data.zip_code,
        country_id=data.country_id,
        role=UserRole(role).value,
        is_active=True,
        email_verified=email_verified,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("User created", extra={"user_id": user.id, "role": user.role})
    return user


def update_profile(db: Session, user: User, data: ProfileUpdate) -> User:
    changes = data.model_dump(exclude_unset=True)
    _apply_profile_changes(db, user, changes)
    db.commit()
    db.refresh(user)

    logger.info("Profile updated", extra={"user_id": user.id, "fields": sorted(changes)})
    return user


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    """
    Raises:
        InvalidCredentialsError: current_password does not match
        ValidationError: new password equals the current one
    """
    if not verify_password(current_password, user.password_hash):
        raise InvalidCredentialsError("Current password is incorrect")
    if current_password == new_password:
        raise ValidationError(
            "New password must differ from the current password", field="new_password"
        )

    user.password_hash = hash_password(new_password)
    db.commit()
    logger.info("Password changed", extra={"user_id": user.id})


# ============================================================================
# ADMIN DIRECTORY
# ============================================================================

def list_users(
    db: Session,
    filters: Optional[UserFilters] = None,
    page: int = 1,
    page_size: int = 10,
) -> Tuple[List[User], int]:
    """Newest-first page of users. search matches first name, last name or email."""
    filters = filters or UserFilters()
    query = db.query(User)

    if filters.role:
        query = query.filter(User.role == filters.role)
    if filters.is_active is not None:
        query = query.filter(User.is_active.is_(filters.is_active))

    search = (filters.search or "").strip()
    if search:
        pattern = contains_pattern(search)
        query = query.filter(
            or_(
                User.first_name.ilike(pattern, escape=LIKE_ESCAPE),
                User.last_name.ilike(pattern, escape=LIKE_ESCAPE),
                User.email.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )

    total = query.count()
    items = (
        query.order_by(desc(User.created_at), desc(User.id))
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return items, total


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    return user


def update_user(db: Session, admin: User, user_id: int, data: AdminUserUpdate) -> User:
    """
    Raises:
        ValidationError: an administrator changing their own role or deactivating themselves
    """
    user = get_user(db, user_id)
    changes = data.model_dump(exclude_unset=True)

    if user.id == admin.id:
        if "role" in changes and UserRole(changes["role"]).value != user.role:
            raise ValidationError("Cannot change your own role", field="role")
        if changes.get("is_active") is False:
            raise ValidationError("Cannot deactivate your own account", field="is_active")

    _apply_profile_changes(db, user, changes)
    db.commit()
    db.refresh(user)

    logger.info(
        "User updated",
        extra={"user_id": user.id, "updated_by_id": admin.id, "fields": sorted(changes)},
    )
    return user


def toggle_user_active(db: Session, admin: User, user_id: int) -> User:
    user = get_user(db, user_id)
    if user.id == admin.id:
        raise ValidationError("Cannot deactivate your own account", field="is_active")

    user.is_active = not user.is_active
    db.commit()
    db.refresh(user)
    logger.info(f"User {user.id} active={user.is_active}", extra={"updated_by_id": admin.id})
    return user


def delete_user(db: Session, admin: User, user_id: int) -> None:
    """
    Hard-delete an account that has never sent a shipment.

    Raises:
        ValidationError: an administrator deleting their own account
        ConflictError: the user has shipments
    """
    user = get_user(db, user_id)
    if user.id == admin.id:
        raise ValidationError("Cannot delete your own account")

    shipment_refs = db.query(func.count(Shipment.id)).filter(Shipment.sender_id == user_id).scalar()
    if shipment_refs:
        raise ConflictError(
            "User has shipments; deactivate the account instead",
            details={"shipments": shipment_refs},
        )

    db.delete(user)
    db.commit()
    logger.info(f"User {user_id} deleted", extra={"deleted_by_id": admin.id})
