"""
Test configuration and fixtures for the SQL table gateway.

Provides a recording driver for statement-building tests and an in-memory
SQLite database for integration tests.
"""

import logging
import sqlite3
import sys
from pathlib import Path

# Add parent directory to path so we can import sql_table_gateway
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from sql_table_gateway import GatewayConfig
from tests.helpers import POSTS_SCHEMA, PostGateway, RecordingDriver


@pytest.fixture
def driver():
    """Recording driver with no canned rows."""
    return RecordingDriver()


@pytest.fixture
def config():
    """Gateway configuration with session actor 42."""
    return GatewayConfig(
        session_actor_id=42,
        dialect="sqlite",
        default_timezone="UTC",
        enable_debug_logging=False,
        autocommit=True
    )


@pytest.fixture
def posts_definition():
    """Minimal posts definition with audit columns."""
    return {
        "table": "posts",
        "modifiable_columns": ["title", "body"],
        "primary_key": "id",
        "audit_columns": True,
    }


@pytest.fixture
def test_logger():
    """Logger handed to gateways that should log statements."""
    return logging.getLogger("tests.sql_table_gateway")


@pytest.fixture
def sqlite_connection():
    """In-memory SQLite database with a posts table."""
    connection = sqlite3.connect(":memory:")
    connection.execute(POSTS_SCHEMA)
    connection.commit()
    yield connection
    connection.close()


@pytest.fixture
def post_gateway(sqlite_connection, config):
    """PostGateway bound to the in-memory database."""
    return PostGateway(sqlite_connection, config=config)
