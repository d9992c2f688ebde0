"""SQLAlchemy engine, session factory and declarative base."""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from classreg.config import Settings, settings

Base = declarative_base()


def build_engine(config: Settings) -> Engine:
    """Create the engine for the configured database URL."""
    connect_args = {}
    if config.DATABASE_URL.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(config.DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)


engine = build_engine(settings)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """FastAPI dependency yielding one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
