"""
Test helpers for the SQL table gateway.

Provides a recording Driver double and helpers for reading generated SQL.
"""

import re
from typing import List

from .gateways import POSTS_SCHEMA, Post, PostGateway
from .recording_driver import RecordingDriver, RecordingStatement

_INSERT_COLUMNS = re.compile(r"\(([^)]*)\)\s+values", re.IGNORECASE)


def insert_columns(sql: str) -> List[str]:
    """Column list of a generated INSERT statement."""
    match = _INSERT_COLUMNS.search(sql)
    assert match, f"Not an insert statement: {sql}"
    return [column.strip() for column in match.group(1).split(",")]


__all__ = [
    'POSTS_SCHEMA',
    'Post',
    'PostGateway',
    'RecordingDriver',
    'RecordingStatement',
    'insert_columns',
]
