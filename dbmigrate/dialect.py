"""
SQL dialects understood by the migration ledger.

The dialect only selects the ledger table's column types. Migration
SQL itself is written by the caller for their database and is never
interpreted.
"""

from enum import Enum

from dbmigrate.errors import ConfigError


class Dialect(str, Enum):
    """Target database family."""
    SQLITE = 'sqlite'
    POSTGRES = 'postgres'
    MYSQL = 'mysql'

    @classmethod
    def from_value(cls, value) -> 'Dialect':
        """
        Resolve a dialect from a config value or SQLAlchemy backend name.

        Example:
            >>> Dialect.from_value('postgresql')
            <Dialect.POSTGRES: 'postgres'>

        Raises:
            ConfigError: If the value names no known dialect
        """
        if isinstance(value, cls):
            return value

        key = str(value).strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            valid = ', '.join(d.value for d in cls)
            raise ConfigError(
                f"Invalid dialect: {value!r} (expected one of: {valid})"
            ) from None


_ALIASES = {
    'postgresql': 'postgres',
    'pg': 'postgres',
    'sqlite3': 'sqlite',
    'mariadb': 'mysql',
}
