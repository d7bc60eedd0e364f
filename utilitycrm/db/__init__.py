"""Database session helpers."""

from utilitycrm.db.session import (
    AsyncSessionLocal,
    create_tables,
    engine,
    get_db,
    get_db_context,
)

__all__ = ["AsyncSessionLocal", "create_tables", "engine", "get_db", "get_db_context"]
