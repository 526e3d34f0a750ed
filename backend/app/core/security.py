"""
Security utilities: password hashing and JWT access tokens
"""
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from app.core.config import settings
from app.exceptions import InvalidTokenError, TokenExpiredError
from app.logging_config import get_logger

logger = get_logger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """Hash a plain-text password with bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain-text password against its bcrypt hash"""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    user_id: int,
    role: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed JWT access token

    Args:
        user_id: Subject of the token
        role: User role, embedded for clients; the server re-reads it from the DB
        expires_delta: Override for ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        Encoded JWT string
    """
    expire = datetime.utcnow() + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "type": "access",
        "exp": expire,
    }
    if role:
        payload["role"] = role
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Decode and verify a JWT. Raises jwt.PyJWTError on failure."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


def get_user_from_token(token: str, expected_type: str = "access") -> int:
    """
    Extract the user ID from a token

    Raises:
        TokenExpiredError: signature valid but past its exp claim
        InvalidTokenError: bad signature, wrong token type or malformed subject
    """
    try:
        payload = decode_token(token)
    except jwt.ExpiredSignatureError as exc:
        logger.info("Rejected expired token")
        raise TokenExpiredError() from exc
    except jwt.PyJWTError as exc:
        logger.info("Rejected invalid token")
        raise InvalidTokenError() from exc

    if payload.get("type") != expected_type:
        raise InvalidTokenError(details={"reason": "wrong token type"})

    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError) as exc:
        raise InvalidTokenError(details={"reason": "malformed subject"}) from exc
