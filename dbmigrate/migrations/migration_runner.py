"""
Migration runner: apply, revert and report migrations.

Orchestrates load -> diff against ledger -> execute in order -> record.
Each migration's SQL and its ledger write share one transaction, so a
migration is marked applied exactly when its SQL committed.

Migrations run strictly one at a time. Nothing guards against another
process migrating the same database concurrently.
"""

import logging
import time
from typing import List, Optional, Union

from dbmigrate.dialect import Dialect
from dbmigrate.errors import MigrationExecutionError, MissingDownMigrationError
from dbmigrate.storage.adapter import DatabaseAdapter
from .ledger import DEFAULT_LEDGER_TABLE, MigrationLedger
from .migration import Migration, MigrationState, MigrationStatus
from .migration_loader import MigrationLoader

logger = logging.getLogger(__name__)


class MigrationRunner:
    """
    Applies and reverts migrations from a directory.

    Every entry point ensures the ledger table exists and reloads the
    migrations directory, so the runner holds no state between calls.

    Attributes:
        adapter: DatabaseAdapter migrations run through
        migrations_path: Directory containing migration files
        dialect: Dialect of the ledger table
        ledger: MigrationLedger for applied versions
        verbose: Log progress at INFO (otherwise DEBUG)

    Example:
        >>> runner = MigrationRunner(adapter, migrations_path='./migrations')
        >>> applied = await runner.up()
        >>> [m.version for m in applied]
        ['20231207_120000', '20231207_120001']
        >>> await runner.down(steps=1)
        [<Migration(20231207_120001, create_users)>]
    """

    def __init__(self, adapter: DatabaseAdapter,
                 migrations_path: str = './migrations',
                 dialect: Optional[Union[Dialect, str]] = None,
                 ledger_table: str = DEFAULT_LEDGER_TABLE,
                 verbose: bool = True,
                 loader: Optional[MigrationLoader] = None):
        """
        Initialize migration runner.

        Args:
            adapter: Connected DatabaseAdapter (owned by the caller)
            migrations_path: Directory containing migration files
            dialect: Ledger dialect; defaults to the adapter's dialect,
                then sqlite
            ledger_table: Name of the ledger table
            verbose: Log progress at INFO level
            loader: MigrationLoader to use (default: MigrationLoader())

        Raises:
            TypeError: If adapter is not a DatabaseAdapter
        """
        if not isinstance(adapter, DatabaseAdapter):
            raise TypeError(
                f"adapter must be a DatabaseAdapter, got {type(adapter).__name__}"
            )

        if dialect is None:
            dialect = adapter.dialect or Dialect.SQLITE

        self.adapter = adapter
        self.migrations_path = migrations_path
        self.dialect = Dialect.from_value(dialect)
        self.ledger = MigrationLedger(adapter, self.dialect, ledger_table)
        self.loader = loader or MigrationLoader()
        self.verbose = verbose

    def _progress(self, msg: str, *args) -> None:
        logger.log(logging.INFO if self.verbose else logging.DEBUG, msg, *args)

    async def up(self) -> List[Migration]:
        """
        Apply every pending migration in ascending version order.

        Stops at the first failure. Migrations committed earlier in the
        same run stay applied.

        Returns:
            Migrations applied by this call (empty if none pending)

        Raises:
            MigrationExecutionError: If a migration's transaction failed
            MigrationLoadError: If the migrations directory is invalid
        """
        await self.ledger.ensure()

        available = self.loader.load(self.migrations_path)
        applied_versions = await self.ledger.applied_versions()
        pending = [m for m in available if m.version not in applied_versions]

        if not pending:
            self._progress('No pending migrations')
            return []

        self._progress('Applying %d migration(s)...', len(pending))

        applied = []
        for migration in pending:
            await self._apply(migration)
            applied.append(migration)

        self._progress('Migrations applied successfully')
        return applied

    async def down(self, steps: int = 1) -> List[Migration]:
        """
        Revert the most recently applied migrations.

        Entries are taken newest first by version. Each must still exist
        on disk with a DOWN section; otherwise the run stops before that
        step's transaction.

        Args:
            steps: Number of migrations to revert (>= 1)

        Returns:
            Migrations reverted by this call, newest first

        Raises:
            ValueError: If steps < 1
            MissingDownMigrationError: If an entry cannot be reverted
            MigrationExecutionError: If a rollback transaction failed
        """
        if steps < 1:
            raise ValueError(f"steps must be >= 1, got {steps}")

        await self.ledger.ensure()

        available = {m.version: m for m in self.loader.load(self.migrations_path)}
        entries = await self.ledger.latest(steps)

        if not entries:
            self._progress('No migrations to rollback')
            return []

        self._progress('Rolling back %d migration(s)...', len(entries))

        reverted = []
        for entry in entries:
            migration = available.get(entry.version)
            if migration is None or not migration.has_down:
                logger.error('Cannot rollback %s - %s: down migration not defined',
                             entry.version, entry.name)
                raise MissingDownMigrationError(entry.version)

            await self._revert(migration)
            reverted.append(migration)

        self._progress('Rollback completed successfully')
        return reverted

    async def reset(self) -> List[Migration]:
        """
        Revert every applied migration.

        Returns:
            Migrations reverted, newest first
        """
        await self.ledger.ensure()
        count = len(await self.ledger.applied_versions())

        if count == 0:
            self._progress('No applied migrations to reset')
            return []

        self._progress('Resetting all %d applied migration(s)...', count)
        return await self.down(count)

    async def status(self) -> List[MigrationStatus]:
        """
        Report every available migration as applied or pending.

        Read-only apart from ensuring the ledger table exists. Order
        follows the migrations on disk (ascending version).
        """
        await self.ledger.ensure()

        available = self.loader.load(self.migrations_path)
        applied_at = {
            entry.version: entry.applied_at
            for entry in await self.ledger.entries()
        }

        return [
            MigrationStatus(
                version=m.version,
                name=m.name,
                applied_at=applied_at.get(m.version),
                status=(MigrationState.APPLIED if m.version in applied_at
                        else MigrationState.PENDING),
            )
            for m in available
        ]

    async def _apply(self, migration: Migration) -> None:
        async def body():
            await self.adapter.execute(migration.up)
            await self.ledger.record(migration)

        await self._run_transaction(migration, body, 'up')

    async def _revert(self, migration: Migration) -> None:
        async def body():
            await self.adapter.execute(migration.down)
            await self.ledger.remove(migration)

        await self._run_transaction(migration, body, 'down')

    async def _run_transaction(self, migration: Migration, body, direction: str) -> None:
        start_time = time.time()

        try:
            await self.adapter.transaction(body)()
        except Exception as e:
            logger.error('  ✗ %s - %s: %s', migration.version, migration.name, e)
            raise MigrationExecutionError(
                migration.version, migration.name, direction, e
            ) from e

        execution_time_ms = int((time.time() - start_time) * 1000)
        self._progress('  ✓ %s - %s (%dms)',
                       migration.version, migration.name, execution_time_ms)


async def up(adapter: DatabaseAdapter, **options) -> List[Migration]:
    """Apply pending migrations. Options are MigrationRunner arguments."""
    return await MigrationRunner(adapter, **options).up()


async def down(adapter: DatabaseAdapter, steps: int = 1, **options) -> List[Migration]:
    """Revert the last steps migrations. Options are MigrationRunner arguments."""
    return await MigrationRunner(adapter, **options).down(steps)


async def reset(adapter: DatabaseAdapter, **options) -> List[Migration]:
    """Revert every applied migration."""
    return await MigrationRunner(adapter, **options).reset()


async def status(adapter: DatabaseAdapter, **options) -> List[MigrationStatus]:
    """Status of every available migration."""
    return await MigrationRunner(adapter, **options).status()
