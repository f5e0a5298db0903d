"""
Migration loader for versioned SQL schema changes.

This module provides the MigrationLoader class which handles:
- Discovery of migration files in a migrations directory
- Parsing of migration files (splitting UP/DOWN sections)
- Deterministic ordering by version

Migration files follow the naming convention: <date>_<time>_<name>.sql
Example: 20231207_120000_create_users.sql, 20231207_120001_create_posts.sql

File format:
    CREATE TABLE users (id INTEGER PRIMARY KEY);

    -- migration: down
    DROP TABLE users;

Lines may carry ``#`` comments, which are removed before execution.
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Tuple, Union

from dbmigrate.errors import DuplicateVersionError
from .comments import without_comments
from .migration import Migration

logger = logging.getLogger(__name__)


class MigrationLoader:
    """
    Discovers and parses migration files.

    Every call to load() reads the directory again; nothing is cached.

    Example:
        >>> loader = MigrationLoader()
        >>> loader.load('./migrations')
        [<Migration(20231207_120000, create_users)>]
    """

    # Marker between UP and DOWN sections; the rest of its line is dropped
    DOWN_MARKER = re.compile(
        r'--[ \t]*migration:[ \t]*down\b[^\n]*\n?',
        re.IGNORECASE
    )

    def __init__(self, extension: str = '.sql'):
        self.extension = extension
        # <digits>_<digits>_<name><extension>
        self.pattern = re.compile(
            r'^(\d+_\d+)_(.+)' + re.escape(extension) + '$'
        )

    def load(self, path: Union[str, Path]) -> List[Migration]:
        """
        Load all migrations from a directory.

        Filenames are sorted lexicographically, which orders migrations
        by version since versions are timestamp-prefixed. Files with a
        different extension are ignored and files whose name does not
        match the migration pattern are skipped.

        Args:
            path: Migrations directory

        Returns:
            List of Migration objects sorted by version ascending
            (empty if the directory does not exist)

        Raises:
            DuplicateVersionError: If two files share a version
            MigrationLoadError: If a migration has an empty UP section
            OSError: If a migration file cannot be read
        """
        migrations_dir = Path(path)

        if not migrations_dir.is_dir():
            logger.warning('Migrations directory not found: %s', migrations_dir)
            return []

        filenames = sorted(
            entry.name for entry in migrations_dir.iterdir()
            if entry.name.endswith(self.extension)
        )

        migrations = []
        seen: Dict[str, str] = {}

        for filename in filenames:
            if not self.pattern.match(filename):
                logger.warning('Skipping invalid migration filename: %s', filename)
                continue

            migration = self.parse_migration_file(migrations_dir / filename)

            if migration.version in seen:
                raise DuplicateVersionError(
                    migration.version, (seen[migration.version], filename)
                )
            seen[migration.version] = filename

            logger.debug('Discovered migration: %r', migration)
            migrations.append(migration)

        return migrations

    def parse_migration_file(self, file_path: Union[str, Path]) -> Migration:
        """
        Parse a single migration file.

        Args:
            file_path: Path to migration file

        Returns:
            Migration with UP/DOWN SQL extracted

        Raises:
            ValueError: If the filename does not match the migration pattern
            MigrationLoadError: If the UP section is empty
            OSError: If the file cannot be read
        """
        file_path = Path(file_path)

        match = self.pattern.match(file_path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {file_path.name}")

        version, name = match.groups()

        try:
            content = file_path.read_text(encoding='utf-8')
        except OSError as e:
            logger.error('Failed to read %s: %s', file_path, e)
            raise

        up_sql, down_sql = self.split_sections(content)

        return Migration(
            version=version,
            name=name,
            up=up_sql,
            down=down_sql,
            filename=file_path.name,
            file_path=str(file_path.absolute()),
        )

    def split_sections(self, content: str) -> Tuple[str, str]:
        """
        Split file content into (up_sql, down_sql).

        Only the first down marker splits the content. It may appear anywhere
        on a line; text before it stays in UP and the rest of its line is
        discarded. Each section is comment-filtered and trimmed
        independently; DOWN is '' when no marker is present.
        """
        parts = self.DOWN_MARKER.split(content, maxsplit=1)

        up_sql = without_comments(parts[0]).strip()
        down_sql = without_comments(parts[1]).strip() if len(parts) > 1 else ''

        return up_sql, down_sql


def load_migrations(path: Union[str, Path]) -> List[Migration]:
    """Load migrations from a directory with the default loader."""
    return MigrationLoader().load(path)
