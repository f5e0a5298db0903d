"""
Statement splitting for drivers that execute one statement at a time.

SQLite (sqlite3, aiosqlite) and asyncpg prepared statements reject
multi-statement strings, so migration bodies are split before they
reach the driver.
"""

from typing import List

import sqlparse


def split_statements(sql: str) -> List[str]:
    """
    Split SQL into individual statements.

    Semicolons inside string literals and comments do not split.
    Fragments that are empty or contain only comments are dropped.
    """
    statements = []
    for statement in sqlparse.split(sql):
        if not sqlparse.format(statement, strip_comments=True).strip():
            continue
        statements.append(statement.strip())
    return statements
