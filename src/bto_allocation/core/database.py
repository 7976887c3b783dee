"""
Database Configuration
SQLAlchemy 2.0 sync engine and session factory
"""
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings


# Base class for ORM models
Base = declarative_base()


def build_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """Create an engine; in-memory SQLite shares one connection"""
    url = database_url or settings.DATABASE_URL
    engine_args = {"echo": settings.DB_ECHO if echo is None else echo}
    
    if url.startswith("sqlite"):
        engine_args["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url == "sqlite://":
            engine_args["poolclass"] = StaticPool
    else:
        engine_args["pool_pre_ping"] = True
    
    return create_engine(url, **engine_args)


def build_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to an engine"""
    return sessionmaker(
        bind=engine,
        class_=Session,
        expire_on_commit=False,
        autoflush=False,
    )


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """
    Transactional session scope
    
    Usage:
        with session_scope(factory) as session:
            session.execute(query)
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(engine: Engine) -> None:
    """Initialize database (create tables)"""
    # Register ORM models on the metadata
    from ..infrastructure.persistence import models  # noqa: F401
    Base.metadata.create_all(bind=engine)


def health_check(engine: Engine) -> bool:
    """Database health check"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
