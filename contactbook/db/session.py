# contactbook/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from contactbook.core.config import get_settings, Settings
from contactbook.db.models import Base


def create_db_engine(settings: Settings) -> Engine:
    """Builds the engine; pool sizing only applies to server databases."""
    if settings.is_sqlite:
        # Sessions are opened in a dependency and used by the endpoint, which
        # may run on different worker threads.
        return create_engine(
            settings.DATABASE_URL,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW
    )


engine = create_db_engine(get_settings())

# Create a configured "Session" class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables():
    """Creates any missing tables. Existing tables are left untouched."""
    Base.metadata.create_all(bind=engine)


def get_db():
    """
    FastAPI dependency that provides a SQLAlchemy database session.
    Writes are committed by the customer service while the request is
    handled; here the session is rolled back if the endpoint raised, and
    always closed.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
