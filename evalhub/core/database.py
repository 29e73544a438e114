"""Database configuration and session management."""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from typing import Generator

from evalhub.core.config import settings


def _engine_options() -> dict:
    if settings.is_sqlite:
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,          # Verify connections before use
        "pool_recycle": 300,            # Recycle connections every 5 minutes
        "pool_timeout": 30,             # Wait up to 30s for a connection from pool
        "connect_args": {"connect_timeout": 20},
    }


# Create engine
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.ENVIRONMENT == "development" and settings.LOG_LEVEL.upper() == "DEBUG",
    **_engine_options(),
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency to get database session.

    Usage:
        @router.get("/forms")
        def list_forms(db: Session = Depends(get_db)):
            return db.query(Form).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
