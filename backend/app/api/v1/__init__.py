"""
API v1 Router - BoxShip
"""
from fastapi import APIRouter
from app.api.v1.endpoints import (
    account,
    auth,
    boxes,
    countries,
    dashboard,
    shipments,
    users,
)

router = APIRouter()

# Authentication
router.include_router(auth.router)

# Accounts
router.include_router(
    account.router,
    prefix="/account",
    tags=["account"]
)

router.include_router(
    users.router,
    prefix="/users",
    tags=["users"]
)

# Reference data
router.include_router(
    countries.router,
    prefix="/countries",
    tags=["countries"]
)

router.include_router(
    boxes.router,
    prefix="/boxes",
    tags=["boxes"]
)

# Shipments
router.include_router(
    shipments.router,
    prefix="/shipments",
    tags=["shipments"]
)

# Dashboard
router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["dashboard"]
)
