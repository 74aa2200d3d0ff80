from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from mawared.core.config import settings

# Support both PostgreSQL and SQLite via centralized settings
DATABASE_URL = settings.database_url

if DATABASE_URL.startswith("postgresql"):
    engine = create_engine(DATABASE_URL)
else:
    # SQLite configuration for local development/testing
    engine = create_engine(
        DATABASE_URL, connect_args={"check_same_thread": False}
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    """
    One session per request, closed afterwards.
    SqlLeaveStore commits its own writes and rolls back on failure;
    the dashboard router only reads.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    """
    Registers all domain models and initializes the database schema.
    Called once from the application lifespan.
    """
    from mawared.models import (  # noqa: F401
        employee, attendance, leave_type, leave_balance, leave_request
    )
    Base.metadata.create_all(bind=engine)
