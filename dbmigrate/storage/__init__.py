"""
Database adapter layer for the migration engine.

This module provides the abstract DatabaseAdapter interface and the
concrete bindings the engine can run against (SQLite, SQLAlchemy).
"""

from .adapter import DatabaseAdapter, Statement
from .sqlalchemy_adapter import SQLAlchemyAdapter
from .sqlite import SQLiteAdapter
from .statements import split_statements


def create_adapter(database: str, **kwargs) -> DatabaseAdapter:
    """
    Select an adapter for a database location.

    URLs (anything containing '://') get a SQLAlchemyAdapter; file paths
    and ':memory:' get a SQLiteAdapter.
    """
    if '://' in database:
        return SQLAlchemyAdapter(database, **kwargs)
    return SQLiteAdapter(database, **kwargs)


__all__ = [
    "DatabaseAdapter",
    "Statement",
    "SQLiteAdapter",
    "SQLAlchemyAdapter",
    "create_adapter",
    "split_statements",
]
