"""
Migration ledger: the table recording which versions are applied.

One row per applied migration (version, name, applied_at). Rows are
inserted when a migration is applied and deleted when it is reverted,
always inside the same transaction as the migration's own SQL.
"""

import logging
import re
from typing import List, Set, Union

from dbmigrate.dialect import Dialect
from dbmigrate.errors import ConfigError
from dbmigrate.storage.adapter import DatabaseAdapter
from .migration import LedgerEntry, Migration

logger = logging.getLogger(__name__)

DEFAULT_LEDGER_TABLE = '__migrations__'

# Column types per dialect: (version/name type, applied_at type)
COLUMN_TYPES = {
    Dialect.SQLITE: ('TEXT', 'DATETIME'),
    Dialect.POSTGRES: ('TEXT', 'TIMESTAMP'),
    Dialect.MYSQL: ('VARCHAR(255)', 'TIMESTAMP'),
}

IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


class MigrationLedger:
    """
    Reads and writes the ledger table through a DatabaseAdapter.

    The table name is interpolated into SQL, so it must be a plain
    identifier.

    Attributes:
        adapter: Adapter the ledger reads and writes through
        dialect: Dialect selecting the table's column types
        table_name: Ledger table name

    Example:
        >>> ledger = MigrationLedger(adapter, Dialect.SQLITE)
        >>> await ledger.ensure()
        >>> await ledger.applied_versions()
        {'20231207_120000'}
    """

    def __init__(self, adapter: DatabaseAdapter,
                 dialect: Union[Dialect, str] = Dialect.SQLITE,
                 table_name: str = DEFAULT_LEDGER_TABLE):
        if not IDENTIFIER_PATTERN.match(table_name or ''):
            raise ConfigError(f"Invalid ledger table name: {table_name!r}")

        self.adapter = adapter
        self.dialect = Dialect.from_value(dialect)
        self.table_name = table_name

    def create_table_sql(self) -> str:
        """CREATE TABLE IF NOT EXISTS statement for this dialect."""
        text_type, time_type = COLUMN_TYPES[self.dialect]
        return (
            f"CREATE TABLE IF NOT EXISTS {self.table_name} (\n"
            f"    version {text_type} PRIMARY KEY,\n"
            f"    name {text_type} NOT NULL,\n"
            f"    applied_at {time_type} NOT NULL DEFAULT CURRENT_TIMESTAMP\n"
            f")"
        )

    async def ensure(self) -> None:
        """
        Create the ledger table if it doesn't exist.

        Safe to call multiple times. Runs as its own statement, outside
        any migration transaction.
        """
        await self.adapter.execute(self.create_table_sql())
        logger.debug('Ensured ledger table %s exists (%s)',
                     self.table_name, self.dialect.value)

    async def applied_versions(self) -> Set[str]:
        """Versions of every applied migration."""
        rows = await self.adapter.prepare(
            f"SELECT version FROM {self.table_name}"
        ).all()
        return {row['version'] for row in rows}

    async def entries(self) -> List[LedgerEntry]:
        """All ledger rows, ordered by version ascending."""
        rows = await self.adapter.prepare(
            f"SELECT version, name, applied_at FROM {self.table_name} "
            f"ORDER BY version"
        ).all()
        return [self._to_entry(row) for row in rows]

    async def latest(self, steps: int) -> List[LedgerEntry]:
        """
        The most recently applied migrations.

        Ordered by version descending (newest first), not by applied_at.

        Args:
            steps: Maximum number of entries to return
        """
        rows = await self.adapter.prepare(
            f"SELECT version, name, applied_at FROM {self.table_name} "
            f"ORDER BY version DESC LIMIT :steps"
        ).all(steps=steps)
        return [self._to_entry(row) for row in rows]

    async def record(self, migration: Migration) -> None:
        """Insert a ledger row for migration. applied_at is server-assigned."""
        await self.adapter.prepare(
            f"INSERT INTO {self.table_name} (version, name) VALUES (:version, :name)"
        ).run(version=migration.version, name=migration.name)

    async def remove(self, migration: Migration) -> None:
        """Delete the ledger row for migration."""
        await self.adapter.prepare(
            f"DELETE FROM {self.table_name} WHERE version = :version"
        ).run(version=migration.version)

    @staticmethod
    def _to_entry(row: dict) -> LedgerEntry:
        return LedgerEntry(
            version=row['version'],
            name=row['name'],
            applied_at=row['applied_at'],
        )
