from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


# ------------------------------------------------------------------------------
# DATABASE ENGINE & SESSION
# ------------------------------------------------------------------------------
def make_engine(database_url: str):
    """Create an engine for database_url (in-memory SQLite shares one connection)."""
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url == "sqlite://":
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(
        database_url,
        pool_pre_ping=True,   # prevents "MySQL server has gone away" issues
        pool_recycle=280,     # helps with idle connection timeouts
    )


def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ------------------------------------------------------------------------------
# INITIALIZATION
# ------------------------------------------------------------------------------
def init_db(engine):
    """Create database tables if they do not exist yet."""
    from string_analyzer import models  # noqa: F401  ensure models are imported
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully.")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
