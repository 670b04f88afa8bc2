"""
Database module - SQLAlchemy engine, sessions and the record store.
"""
from jobboard.db.database import get_db_session, init_db, test_db_connection
from jobboard.db.store import JobBoardStore, get_store

__all__ = [
    "get_db_session",
    "init_db",
    "test_db_connection",
    "JobBoardStore",
    "get_store",
]
