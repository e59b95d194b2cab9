"""
Database configuration and session management.
"""

import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings

logger = logging.getLogger("nutriplan.database")

# Create SQLAlchemy Base
Base = declarative_base()

_engine_kwargs = {"echo": settings.db_echo, "future": True}
if settings.database_url.startswith("sqlite"):
    # One shared connection so in-memory databases survive across sessions
    _engine_kwargs.update(
        connect_args={"check_same_thread": False}, poolclass=StaticPool
    )

# Create engine
engine = create_engine(settings.database_url, **_engine_kwargs)

# Create session factory
SessionLocal = sessionmaker(bind=engine, future=True)


def init_database():
    """Initialize database schema"""
    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
        logger.info("Database tables created successfully")


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
