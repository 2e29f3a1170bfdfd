from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from pomotrack.config import DATABASE_URL
from pomotrack.models.models import Base

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

__all__ = ["Base", "engine", "SessionLocal", "get_db"]


def get_db():
    """Yield a database session scoped to a single request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
