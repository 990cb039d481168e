"""
SQLAlchemy engine and session. Supports PostgreSQL and SQLite (for local testing without Docker).
Sync usage; personal data (tests, bookings) is always scoped by user_id.
"""
import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from app.config import settings

logger = logging.getLogger(__name__)

_is_sqlite = "sqlite" in settings.database_url
_connect_args = {"check_same_thread": False} if _is_sqlite else {}
engine = create_engine(
    settings.database_url,
    pool_pre_ping=not _is_sqlite,
    connect_args=_connect_args,
    echo=False,  # Set True for SQL logging during development
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db():
    """Create tables on SQLite (Postgres uses Alembic), then seed reference data once. Call at app startup."""
    # Import all models so they register with Base before create_all
    from app.models import user, session, test_attempt, college, teacher, booking  # noqa: F401
    if _is_sqlite:
        Base.metadata.create_all(bind=engine)
    if not settings.seed_on_startup:
        return
    from app.services.seed import seed_reference_data
    db = SessionLocal()
    try:
        seed_reference_data(db)
    finally:
        db.close()


def get_db():
    """Dependency: yield a DB session, close after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
