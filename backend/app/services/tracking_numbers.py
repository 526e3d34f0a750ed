"""
Tracking number generation

Format: BOX-<epoch millis>-<6 uppercase alphanumerics>, e.g.
BOX-1718031234567-K3Z9QF. Uniqueness is ultimately enforced by the
unique index on shipments.tracking_number.
"""
import secrets
import string
import time
from typing import Callable

from app.core.config import settings

TrackingNumberGenerator = Callable[[], str]

_ALPHABET = string.ascii_uppercase + string.digits


def generate_tracking_number() -> str:
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(6))
    return f"{settings.TRACKING_NUMBER_PREFIX}-{millis}-{suffix}"
