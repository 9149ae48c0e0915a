"""Database session management for calculation result storage"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from housing_calculator.config import settings

# One short insert or read per request; pool sized from settings
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_recycle=1800,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create the calculation_result table if it does not exist yet"""
    from housing_calculator.infrastructure.database.models import Base

    Base.metadata.create_all(bind=engine)


def get_db() -> Session:
    """Request-scoped session; the route commits or rolls back"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
