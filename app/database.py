"""
Database Session Management - Core database connectivity layer
"""

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool
from typing import Generator
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

IN_MEMORY_SQLITE_URLS = {"sqlite://", "sqlite:///:memory:"}

def _engine_options(database_url: str) -> dict:
    """Build create_engine() keyword arguments for the configured backend"""
    if database_url.startswith("sqlite"):
        options = {
            "connect_args": {"check_same_thread": False},  # Sessions are used from the request threadpool
            "echo": settings.DEBUG,
        }
        if database_url in IN_MEMORY_SQLITE_URLS:
            options["poolclass"] = StaticPool  # One shared connection, otherwise each connection sees an empty database
        return options

    return {
        "pool_size": settings.DB_POOL_SIZE,  # Number of persistent connections
        "max_overflow": settings.DB_MAX_OVERFLOW,  # Additional connections when pool is exhausted
        "pool_timeout": settings.DB_POOL_TIMEOUT,  # Wait time for available connection
        "pool_pre_ping": True,  # Verify connection health before using
        "echo": settings.DEBUG,  # Log all SQL queries in debug mode
    }

# Create database engine
engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

@event.listens_for(engine, "connect")
def receive_connect(dbapi_conn, connection_record):
    # SQLite leaves foreign keys (and ON DELETE CASCADE) off unless asked
    if engine.dialect.name == "sqlite":
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
    logger.debug("🔌 New database connection established")

@event.listens_for(engine, "close")
def receive_close(dbapi_conn, connection_record):
    logger.debug("🔌 Database connection closed")

# Session factory - one session per request
SessionLocal = sessionmaker(
    autocommit=False,  # Require explicit commits
    autoflush=False,   # Control when changes are flushed to database
    bind=engine,
)

# Base class for all SQLAlchemy models
Base = declarative_base()

def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides database session per request.
    Automatically handles session lifecycle and cleanup.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"❌ Database error during request: {str(e)}", exc_info=True)
        db.rollback()  # Never leave a half-applied transaction behind
        raise
    finally:
        db.close()
        logger.debug("✅ Database session closed")

def init_db() -> None:
    """
    Create all tables.
    Used for development setup and tests - production should use migrations.
    """
    logger.info("🏗️  Creating database tables...")
    try:
        from app.models import user, task  # noqa: F401 - register models with Base
        Base.metadata.create_all(bind=engine)
        logger.info("✅ Database tables created successfully")
    except Exception as e:
        logger.error(f"❌ Failed to create database tables: {str(e)}", exc_info=True)
        raise

def check_db_connection() -> bool:
    """
    Verify database connectivity - used for health checks and startup validation.
    Returns True if connection successful, False otherwise.
    """
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        logger.debug("✅ Database connection successful")
        return True
    except Exception as e:
        logger.error(f"❌ Database connection failed: {str(e)}", exc_info=True)
        return False

def get_pool_stats() -> dict:
    """
    Get current database connection pool statistics.
    Only queue pools report usage; other pool classes report their type.
    """
    pool = engine.pool
    if not isinstance(pool, QueuePool):
        return {"pool_class": type(pool).__name__}
    return {
        "pool_size": pool.size(),  # Total connections in pool
        "checked_out": pool.checkedout(),  # Currently active connections
        "overflow": pool.overflow(),  # Connections beyond pool_size
        "checked_in": pool.checkedin(),  # Idle connections in pool
    }

def close_db_connections():
    """
    Gracefully close all database connections.
    Called during application shutdown.
    """
    logger.info("🔌 Closing database connections...")
    engine.dispose()
    logger.info("✅ All database connections closed")
