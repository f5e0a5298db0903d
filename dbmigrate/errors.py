"""
Migration-specific exceptions.

This module defines the exception hierarchy for migration operations,
enabling precise error handling at different layers of the tool.
"""


class MigrationError(Exception):
    """
    Base exception for migration errors.

    All migration-related exceptions inherit from this base class,
    allowing catch-all error handling when needed.
    """
    pass


class MigrationLoadError(MigrationError):
    """
    Migration file could not be turned into a Migration.

    Raised when:
    - UP section is empty after comment stripping
    - Version or name cannot be derived from the filename
    """
    pass


class DuplicateVersionError(MigrationLoadError):
    """Two migration files in one directory map to the same version."""

    def __init__(self, version: str, filenames: tuple):
        self.version = version
        self.filenames = filenames
        super().__init__(
            f"Duplicate migration version {version}: {', '.join(filenames)}"
        )


class MissingDownMigrationError(MigrationError):
    """
    Applied migration cannot be rolled back.

    Raised when the migration file is gone from disk or has no DOWN
    section. Aborts before the rollback transaction is attempted.
    """

    def __init__(self, version: str):
        self.version = version
        super().__init__(
            f"Cannot rollback {version}: down migration not defined"
        )


class MigrationExecutionError(MigrationError):
    """
    Migration transaction failed and was rolled back.

    The driver error is available as ``__cause__``.
    """

    def __init__(self, version: str, name: str, direction: str, error: Exception):
        self.version = version
        self.name = name
        self.direction = direction
        super().__init__(
            f"Migration {version} - {name} failed ({direction}): {error}"
        )


class AdapterError(MigrationError):
    """
    Database adapter misuse.

    Raised when:
    - Adapter used before connect() or after close()
    - Adapter already connected
    """
    pass


class ConfigError(MigrationError):
    """Invalid configuration value or configuration file."""
    pass
