"""
Migration data models for versioned schema changes.

This module defines the core data structures for managing migrations:
- Migration: A migration file loaded from the filesystem
- LedgerEntry: A row of the ledger table (an applied migration)
- MigrationStatus: Read-only projection of a migration's state

Migrations are immutable once loaded; the runner never mutates them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from dbmigrate.errors import MigrationLoadError


@dataclass(frozen=True, order=True)
class Migration:
    """
    Represents a single migration file.

    A migration file contains UP SQL, optionally followed by a
    ``-- migration: down`` marker line and DOWN SQL.

    Attributes:
        version: Sortable timestamp version (e.g., '20231207_120000')
        name: Descriptive name from filename (e.g., 'create_users')
        up: SQL statements for applying the migration
        down: SQL statements for reverting it ('' if no rollback defined)
        filename: Filename the migration was loaded from
        file_path: Absolute path to the migration file

    Example:
        >>> migration = Migration(
        ...     version='20231207_120000',
        ...     name='create_users',
        ...     up='CREATE TABLE users (id INTEGER PRIMARY KEY);',
        ...     down='DROP TABLE users;',
        ... )
        >>> migration
        <Migration(20231207_120000, create_users)>
    """

    version: str
    name: str = field(compare=False)
    up: str = field(compare=False, repr=False)
    down: str = field(default='', compare=False, repr=False)
    filename: str = field(default='', compare=False, repr=False)
    file_path: str = field(default='', compare=False, repr=False)

    def __post_init__(self):
        """Validate migration after initialization."""
        source = self.filename or self.version

        if not self.version:
            raise MigrationLoadError(f"Migration {source} has empty version")

        if not self.name:
            raise MigrationLoadError(f"Migration {source} has empty name")

        if not self.up.strip():
            raise MigrationLoadError(f"Migration {source} has empty UP section")

    @property
    def has_down(self) -> bool:
        """True if the migration defines rollback SQL."""
        return bool(self.down.strip())

    def __repr__(self) -> str:
        return f"<Migration({self.version}, {self.name})>"


@dataclass(frozen=True)
class LedgerEntry:
    """
    A migration recorded in the ledger table.

    Attributes:
        version: Migration version (ledger primary key)
        name: Migration name at the time it was applied
        applied_at: Server-assigned timestamp, as returned by the driver
    """

    version: str
    name: str
    applied_at: Any = None


class MigrationState(str, Enum):
    """Whether an available migration is in the ledger."""
    APPLIED = 'applied'
    PENDING = 'pending'


@dataclass(frozen=True)
class MigrationStatus:
    """
    Status of one available migration.

    Derived by joining the migrations on disk with the ledger.
    Never persisted.
    """

    version: str
    name: str
    applied_at: Optional[Any]
    status: MigrationState

    @property
    def is_applied(self) -> bool:
        return self.status is MigrationState.APPLIED

    def to_dict(self) -> dict:
        """
        Convert to dictionary for JSON serialization.

        Example:
            >>> status.to_dict()
            {
                'version': '20231207_120000',
                'name': 'create_users',
                'appliedAt': None,
                'status': 'pending'
            }
        """
        applied_at = self.applied_at
        if applied_at is not None and hasattr(applied_at, 'isoformat'):
            applied_at = applied_at.isoformat()

        return {
            'version': self.version,
            'name': self.name,
            'appliedAt': applied_at,
            'status': self.status.value,
        }
