"""
Versioned SQL migrations.

This package provides:
- Migration, LedgerEntry, MigrationStatus: Data models
- MigrationLoader: Discovery and parsing of migration files
- MigrationLedger: The table of applied versions
- MigrationRunner: Applying, reverting and reporting migrations
"""

from .comments import without_comments
from .ledger import DEFAULT_LEDGER_TABLE, MigrationLedger
from .migration import LedgerEntry, Migration, MigrationState, MigrationStatus
from .migration_loader import MigrationLoader, load_migrations
from .migration_runner import MigrationRunner, down, reset, status, up

__all__ = [
    'Migration',
    'LedgerEntry',
    'MigrationState',
    'MigrationStatus',
    'MigrationLoader',
    'MigrationLedger',
    'MigrationRunner',
    'DEFAULT_LEDGER_TABLE',
    'load_migrations',
    'without_comments',
    'up',
    'down',
    'reset',
    'status',
]
