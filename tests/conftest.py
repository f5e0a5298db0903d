"""
Global pytest configuration and fixtures for dbmigrate tests

Provides:
- Temporary migrations directory and a migration file factory
- Connected SQLite and SQLAlchemy (aiosqlite) adapters
- Helpers for inspecting the database
"""

import pytest

from dbmigrate.storage import SQLAlchemyAdapter, SQLiteAdapter


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom settings"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


# ============================================================================
# Migration Files
# ============================================================================

@pytest.fixture
def migrations_dir(tmp_path):
    """Empty migrations directory."""
    path = tmp_path / "migrations"
    path.mkdir()
    return path


@pytest.fixture
def write_migration(migrations_dir):
    """Factory writing <version>_<name>.sql into migrations_dir.

    Example:
        write_migration("20231207_120000", "create_users",
                        "CREATE TABLE users (id INTEGER);",
                        "DROP TABLE users;")
    """

    def _write(version, name, up_sql, down_sql=None):
        content = up_sql
        if down_sql is not None:
            content = f"{up_sql}\n-- migration: down\n{down_sql}"
        path = migrations_dir / f"{version}_{name}.sql"
        path.write_text(content)
        return path

    return _write


# ============================================================================
# Adapters
# ============================================================================

@pytest.fixture
async def sqlite_adapter(tmp_path):
    """Connected SQLiteAdapter on a temporary database file."""
    adapter = SQLiteAdapter(str(tmp_path / "test.db"))
    await adapter.connect()
    yield adapter
    await adapter.close()


@pytest.fixture
async def sqlalchemy_adapter(tmp_path):
    """Connected SQLAlchemyAdapter (aiosqlite) on a temporary database file."""
    adapter = SQLAlchemyAdapter(f"sqlite+aiosqlite:///{tmp_path / 'test_sa.db'}")
    await adapter.connect()
    yield adapter
    await adapter.close()


@pytest.fixture(params=["sqlite", "sqlalchemy"])
async def adapter(request, tmp_path):
    """Connected adapter, once per concrete implementation."""
    if request.param == "sqlite":
        db = SQLiteAdapter(str(tmp_path / "param.db"))
    else:
        db = SQLAlchemyAdapter(f"sqlite+aiosqlite:///{tmp_path / 'param_sa.db'}")
    await db.connect()
    yield db
    await db.close()
