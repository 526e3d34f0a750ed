"""
BoxShip API application

Wires settings, logging, middleware, error handlers and the v1 router into
one FastAPI app. Run with `uvicorn app.main:app` from backend/.
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.v1 import router as api_v1_router
from app.core.config import settings
from app.core.limiter import apply_rate_limiting
from app.exceptions import AuthenticationError, BoxShipException, DatabaseError
from app.logging_config import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)

SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


def init_database():
    """Create any missing tables. Schema changes go through Alembic."""
    from app.db.base import Base
    from app.db.session import engine
    import app.models  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.error(f"Database initialization failed: {e}")
        raise
    logger.info("Database tables ready")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"Starting {settings.PROJECT_NAME} API",
        extra={"version": settings.VERSION, "environment": settings.ENVIRONMENT},
    )
    init_database()
    yield
    logger.info(f"Stopping {settings.PROJECT_NAME} API")


app = FastAPI(
    title=f"{settings.PROJECT_NAME} API",
    description="Box shipment pricing, lifecycle and tracking",
    version=settings.VERSION,
    lifespan=lifespan,
)

_, rate_limiting_on = apply_rate_limiting(app)
if not rate_limiting_on:
    logger.warning("Rate limiting disabled (RATE_LIMIT_ENABLED=false)")

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept"],
)


# ===================
# Exception Handlers
# ===================

def error_response(
    status_code: int,
    body: Dict[str, Any],
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Every error leaves the API as {error, message, details, timestamp}."""
    content = {"details": {}, **body, "timestamp": datetime.utcnow().isoformat() + "Z"}
    return JSONResponse(status_code=status_code, content=content, headers=headers)


@app.exception_handler(BoxShipException)
async def boxship_exception_handler(request: Request, exc: BoxShipException):
    logger.warning(
        f"{exc.error_code}: {exc.message}",
        extra={"error_code": exc.error_code, "details": exc.details, "path": request.url.path},
    )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return error_response(exc.status_code, exc.to_dict(), headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(f"Validation error on {request.url.path}", extra={"errors": errors})
    return error_response(
        422,
        {"error": "VALIDATION_ERROR", "message": "Request validation failed", "details": {"errors": errors}},
    )


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.url.path}: {exc}", exc_info=True)
    error = DatabaseError()
    return error_response(error.status_code, error.to_dict())


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error on {request.url.path}: {exc}", exc_info=True)
    return error_response(
        500,
        {"error": "INTERNAL_ERROR", "message": "An unexpected error occurred. Please try again later."},
    )


app.include_router(api_v1_router, prefix=settings.API_V1_STR)


@app.get("/")
async def root():
    return {"message": f"{settings.PROJECT_NAME} API", "version": settings.VERSION, "status": "online"}


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": settings.VERSION}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=settings.is_development)
