"""
SQLite database adapter implementation.

This module provides a concrete implementation of the DatabaseAdapter
interface on top of the standard library sqlite3 module.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from dbmigrate.dialect import Dialect
from dbmigrate.errors import AdapterError
from .adapter import DatabaseAdapter, Statement, TransactionBody
from .statements import split_statements


class SQLiteStatement(Statement):
    """Prepared statement bound to a SQLiteAdapter."""

    def __init__(self, adapter: 'SQLiteAdapter', sql: str):
        self.adapter = adapter
        self.sql = sql

    async def all(self, **params: Any) -> List[Dict[str, Any]]:
        cursor = self.adapter._execute_one(self.sql, params)
        return [dict(row) for row in cursor.fetchall()]

    async def run(self, **params: Any) -> None:
        self.adapter._execute_one(self.sql, params)


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite implementation of the DatabaseAdapter interface.

    The connection runs in autocommit mode and transactions are opened
    with an explicit BEGIN, so DDL inside a migration is rolled back
    together with the ledger write when anything fails.

    Attributes:
        db_path: Path to the SQLite database file (or ':memory:')
        conn: SQLite connection object

    Example:
        >>> adapter = SQLiteAdapter('app.db')
        >>> await adapter.connect()
        >>> await adapter.execute('CREATE TABLE t (x TEXT)')
        >>> await adapter.close()
    """

    def __init__(self, db_path: str = 'migrations.db',
                 logger: Optional[logging.Logger] = None):
        """
        Initialize SQLite adapter.

        Args:
            db_path: Path to SQLite database file
            logger: Optional logger instance
        """
        super().__init__(logger)
        self.db_path = db_path
        self.conn: Optional[sqlite3.Connection] = None
        self._in_transaction = False

    @property
    def dialect(self) -> Dialect:
        return Dialect.SQLITE

    async def connect(self) -> None:
        """
        Connect to SQLite database.

        Creates database file if it doesn't exist.

        Raises:
            AdapterError: If already connected or connection fails
        """
        if self._is_connected:
            raise AdapterError(f"Database already connected: {self.db_path}")

        try:
            self.conn = sqlite3.connect(
                self.db_path, isolation_level=None, check_same_thread=False
            )
        except sqlite3.Error as e:
            self.logger.error('Failed to connect to database: %s', e)
            raise AdapterError(f"Failed to connect to {self.db_path}: {e}") from e

        self.conn.row_factory = sqlite3.Row
        self._is_connected = True
        self.logger.info('Connected to SQLite database: %s', self.db_path)

    async def close(self) -> None:
        """Close database connection."""
        if not self._is_connected:
            self.logger.debug('Database already closed or never connected')
            return

        try:
            self.conn.close()
            self.logger.info('Closed database connection')
        finally:
            self.conn = None
            self._is_connected = False

    async def execute(self, sql: str) -> None:
        for statement in split_statements(sql):
            self._execute_one(statement)

    def prepare(self, sql: str) -> SQLiteStatement:
        return SQLiteStatement(self, sql)

    def transaction(self, body: TransactionBody) -> TransactionBody:
        async def run() -> None:
            self._require_connection()
            if self._in_transaction:
                raise AdapterError('Nested transactions are not supported')

            self.conn.execute('BEGIN')
            self._in_transaction = True
            try:
                await body()
            except BaseException:
                # SQLite may already have rolled back on its own
                if self.conn.in_transaction:
                    self.conn.execute('ROLLBACK')
                raise
            else:
                self.conn.execute('COMMIT')
            finally:
                self._in_transaction = False

        return run

    def _execute_one(self, sql: str, params: Optional[Dict[str, Any]] = None) -> sqlite3.Cursor:
        self._require_connection()
        self.logger.debug('SQL: %s', sql)
        return self.conn.execute(sql, params or {})
