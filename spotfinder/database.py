# spotfinder/database.py
"""
Database connection, session management, and table creation.
Uses SQLAlchemy with PostgreSQL in production and SQLite for tests.
All models are auto-imported here so create_tables() creates every table in one call.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from spotfinder.config import settings


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # Request handlers run on a thread pool; let sessions cross threads
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,   # Auto-reconnect if DB connection drops
        "pool_size": 10,
        "max_overflow": 20,
        "connect_args": {"connect_timeout": settings.DB_CONNECT_TIMEOUT},
    }


engine = create_engine(settings.DATABASE_URL, echo=False, **_engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency — yields a DB session and closes it after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def dialect_insert(db: Session):
    """
    Return the dialect-specific insert() construct for the session's engine.
    Both PostgreSQL and SQLite inserts support on_conflict_do_nothing/do_update.
    """
    name = db.get_bind().dialect.name
    if name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise NotImplementedError(f"Upserts are not supported on dialect '{name}'")
    return insert


def create_tables(bind=None):
    """
    Creates all DB tables on startup. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from spotfinder.models.location import Location, location_tags   # noqa
    from spotfinder.models.tag import Tag                             # noqa
    from spotfinder.models.occupancy_report import OccupancyReport    # noqa
    from spotfinder.models.user_reputation import UserReputation      # noqa

    Base.metadata.create_all(bind=bind or engine)
