"""
dbmigrate - ordered, versioned SQL schema migrations.

Applies timestamp-versioned SQL files against any database reachable
through a DatabaseAdapter and records applied versions in a ledger
table, so re-running is safe.

Example:
    from dbmigrate import SQLiteAdapter, up, status

    async with SQLiteAdapter('app.db') as adapter:
        await up(adapter, migrations_path='./migrations')
        for s in await status(adapter, migrations_path='./migrations'):
            print(s.version, s.status.value)
"""

from .dialect import Dialect
from .errors import (
    AdapterError,
    ConfigError,
    DuplicateVersionError,
    MigrationError,
    MigrationExecutionError,
    MigrationLoadError,
    MissingDownMigrationError,
)
from .migrations import (
    LedgerEntry,
    Migration,
    MigrationLedger,
    MigrationLoader,
    MigrationRunner,
    MigrationState,
    MigrationStatus,
    down,
    load_migrations,
    reset,
    status,
    up,
    without_comments,
)
from .storage import (
    DatabaseAdapter,
    SQLAlchemyAdapter,
    SQLiteAdapter,
    Statement,
    create_adapter,
)

__version__ = '1.0.0'

__all__ = [
    # Engine
    'up',
    'down',
    'reset',
    'status',
    'MigrationRunner',
    'MigrationLoader',
    'MigrationLedger',
    'load_migrations',
    'without_comments',
    # Models
    'Migration',
    'LedgerEntry',
    'MigrationState',
    'MigrationStatus',
    'Dialect',
    # Adapters
    'DatabaseAdapter',
    'Statement',
    'SQLiteAdapter',
    'SQLAlchemyAdapter',
    'create_adapter',
    # Errors
    'MigrationError',
    'MigrationLoadError',
    'DuplicateVersionError',
    'MissingDownMigrationError',
    'MigrationExecutionError',
    'AdapterError',
    'ConfigError',
]
