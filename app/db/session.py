"""Database session management."""
from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.settings import Settings, settings


def build_engine(config: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured store.

    SQLite shares a single connection so in-memory databases survive
    across sessions; every other backend gets the configured pool.
    """
    url = config.get_database_url()
    options: Dict[str, Any] = {"echo": config.DB_ECHO}

    if config.is_sqlite():
        options["connect_args"] = {"check_same_thread": False}
        options["poolclass"] = StaticPool
    else:
        options["pool_pre_ping"] = True
        options["pool_size"] = config.DB_POOL_SIZE
        options["max_overflow"] = config.DB_POOL_OVERFLOW

    return create_engine(url, **options)


# Create database engine using the get_database_url method
engine = build_engine(settings)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/statistics")
        def read_statistics(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
