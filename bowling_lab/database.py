from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from bowling_lab.config import settings

DATABASE_URL = f"sqlite:///{settings.DATABASE_PATH}"

engine = create_engine(DATABASE_URL, echo=False)
SessionLocal = sessionmaker(bind=engine)


class Base(DeclarativeBase):
    pass


def init_db(bind=None):
    """Create all tables"""
    from bowling_lab.models import bowler, roster_meta  # noqa
    Base.metadata.create_all(bind=bind or engine)


def get_session():
    """Get a database session - for direct use (caller must close)"""
    return SessionLocal()


def get_db():
    """FastAPI dependency - yields session and closes after request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
