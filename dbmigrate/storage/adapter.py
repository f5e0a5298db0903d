"""
Abstract database adapter for the migration engine.

This module defines the DatabaseAdapter and Statement abstract base
classes that every concrete binding (SQLite, SQLAlchemy, ...) must
inherit from. The engine talks to the database only through this
interface and never opens or closes connections itself.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional

from dbmigrate.dialect import Dialect
from dbmigrate.errors import AdapterError

TransactionBody = Callable[[], Awaitable[None]]


class Statement(ABC):
    """
    Prepared statement with named (``:name``) parameters.

    Example:
        >>> stmt = adapter.prepare("SELECT version FROM t WHERE name = :name")
        >>> rows = await stmt.all(name='create_users')
    """

    @abstractmethod
    async def all(self, **params: Any) -> List[Dict[str, Any]]:
        """
        Execute the statement and return every row.

        Returns:
            List of rows as dicts keyed by column name
        """
        pass

    @abstractmethod
    async def run(self, **params: Any) -> None:
        """Execute the statement, discarding any result."""
        pass


class DatabaseAdapter(ABC):
    """
    Abstract interface for the database the migrations run against.

    All calls are async; the engine awaits each one before issuing the
    next. Adapters are supplied (and owned) by the caller.

    Attributes:
        logger: Logger instance for adapter events
        is_connected: Connection status

    Example:
        >>> async with SQLiteAdapter('app.db') as adapter:
        ...     await adapter.execute('CREATE TABLE t (x TEXT)')
        ...     await adapter.transaction(body)()
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize adapter.

        Args:
            logger: Optional logger instance. If None, creates default logger.
        """
        self.logger = logger or logging.getLogger(type(self).__module__)
        self._is_connected = False

    @abstractmethod
    async def connect(self) -> None:
        """
        Open the database connection.

        Raises:
            AdapterError: If already connected
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """
        Close the database connection.

        Safe to call multiple times - subsequent calls are no-ops.
        """
        pass

    @property
    def is_connected(self) -> bool:
        """True if connected and ready for operations."""
        return self._is_connected

    @property
    def dialect(self) -> Optional[Dialect]:
        """Dialect of the connected database, if the adapter knows it."""
        return None

    @abstractmethod
    async def execute(self, sql: str) -> None:
        """
        Run raw SQL with no result expectation.

        The SQL may hold several statements. When called inside a
        transaction body it joins that transaction, otherwise it is
        committed on its own.
        """
        pass

    @abstractmethod
    def prepare(self, sql: str) -> Statement:
        """Prepare a parameterized statement."""
        pass

    @abstractmethod
    def transaction(self, body: TransactionBody) -> TransactionBody:
        """
        Wrap body so it runs atomically.

        Returns a zero-argument coroutine function. When awaited, body
        runs inside a transaction that commits if body returns and rolls
        back (re-raising the original error) if body raises.

        Args:
            body: Zero-argument coroutine function using this adapter
        """
        pass

    def _require_connection(self) -> None:
        if not self._is_connected:
            raise AdapterError(f"{self.__class__.__name__} is not connected")

    async def __aenter__(self) -> 'DatabaseAdapter':
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
