"""
Database engine and session management.

Connection lifecycle:
- The engine (and its connection pool) is created once, when this module is
  imported, and lives until close_db() disposes it at application shutdown.
- Each request borrows a Session through the get_db() dependency and never
  owns the engine. Routes receive the session explicitly; nothing else keeps
  a handle to the database.
- get_db() is the only place that commits. Repositories add/flush, the
  dependency commits on success and rolls back on error.
"""

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from blog.config import settings

# SQLite needs check_same_thread=False because FastAPI runs sync
# dependencies in a threadpool
engine_args: dict[str, Any] = {
    "echo": settings.DEBUG,
}

if settings.DATABASE_URL.startswith("sqlite"):
    engine_args["connect_args"] = {"check_same_thread": False}
elif settings.DATABASE_URL.startswith("postgresql"):
    engine_args["pool_pre_ping"] = True
    if settings.LOW_MEMORY_MODE:
        engine_args["pool_size"] = 3
        engine_args["max_overflow"] = 2
    else:
        engine_args["pool_size"] = 10
        engine_args["max_overflow"] = 20
    engine_args["pool_recycle"] = 3600
else:
    engine_args["pool_pre_ping"] = True

engine = create_engine(settings.DATABASE_URL, **engine_args)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


class Base(DeclarativeBase):
    """Base class for all ORM models"""

    pass


def get_db():
    """
    Dependency that lends a database session to one request.

    Commits when the request completes, rolls back and re-raises on error,
    and always returns the connection to the pool.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db():
    """Create tables that do not exist yet"""
    # Models must be imported so their tables are registered on Base.metadata
    import blog.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def close_db():
    """Dispose of the connection pool"""
    engine.dispose()
