from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Base class for all database models
# All models inherit from this to get SQLAlchemy ORM functionality
Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """
    Create the database engine for a connection string.

    The engine is built once by the app factory and disposed on shutdown,
    there is no module-level connection.
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, pool_pre_ping=True)

    # SQLite connections are used from FastAPI's threadpool
    connect_args = {"check_same_thread": False}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # In-memory databases live inside one connection, so every session must share it
        return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(database_url, connect_args=connect_args)


def build_session_factory(engine: Engine) -> sessionmaker:
    """
    Create the session factory bound to an engine.

    autoflush=False: Don't auto-flush before queries
    expire_on_commit=False: Returned users stay readable after their session closes
    """
    return sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create tables for all models that inherit from Base"""
    # Import models so their tables are registered on Base.metadata
    from authapi.models import user  # noqa: F401

    # In production, use migrations (Alembic) instead of create_all
    Base.metadata.create_all(bind=engine)
