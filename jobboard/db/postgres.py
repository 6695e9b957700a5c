from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from contextlib import contextmanager
from jobboard.core.config import get_settings
from jobboard.utils.logger import get_logger

settings = get_settings()
logger = get_logger(__name__)

# Connection pool sizing only applies to server databases;
# SQLite (local runs, tests) keeps SQLAlchemy's default pool.
# pool_size=5: maintain 5 connections ready
# max_overflow=10: allow 10 extra connections under load
engine_options = {"echo": settings.debug}  # Log SQL queries in debug mode
if not settings.postgres_url.startswith("sqlite"):
    engine_options.update(pool_size=5, max_overflow=10, pool_pre_ping=True)

engine = create_engine(settings.postgres_url, **engine_options)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.
    Usage:
        with get_db_session() as db:
            db.execute(text("SELECT * FROM users"))
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def test_postgres_connection() -> bool:
    """
    Test if the database is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session() as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except SQLAlchemyError as e:
        logger.error("Database connection failed: %s", e)
        return False


def execute_raw_sql(sql: str, params: dict = None) -> list:
    """
    Execute raw SQL and return results as list of dicts.
    This is useful for joins that feed response schemas directly.
    """
    with get_db_session() as db:
        result = db.execute(text(sql), params or {})
        # Convert rows to dicts
        columns = result.keys()
        return [dict(zip(columns, row)) for row in result.fetchall()]
