"""
Database module - SQLAlchemy engine, sessions and schema.
"""
from jobboard.db.postgres import get_db_session, test_postgres_connection
from jobboard.db.schema import init_db

__all__ = [
    "get_db_session",
    "test_postgres_connection",
    "init_db"
]
