"""
Database session management
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.logging_config import get_logger

logger = get_logger(__name__)

connection_string = settings.database_url

# Log connection info (without password)
logger.info(f"Database connection: {connection_string.split('@')[-1]}")

engine = create_engine(
    connection_string,
    echo=False,  # Set to True for SQL query logging
    pool_pre_ping=True,  # Verify connections before using
    pool_recycle=3600,  # Recycle connections after 1 hour
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """
    Dependency for getting database session

    Usage in FastAPI endpoints:
        @router.get("/shipments")
        def list_shipments(db: Session = Depends(get_db)):
            return db.query(Shipment).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
