"""Shared fixtures: settings isolation and mocked PyMySQL connections.

No test in this suite talks to a real server; connections are
``MagicMock(spec=pymysql.connections.Connection)`` objects whose single
cursor records the SQL it was given.
"""

from __future__ import annotations

import os
from typing import Generator
from unittest.mock import MagicMock

import pymysql
import pytest
from pymysql.converters import escape_string

from sql_plus.config import get_settings
from sql_plus.io.connectors.database import Database


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep cached settings and SQLPLUS_* variables from leaking between tests."""
    for key in list(os.environ):
        if key.startswith("SQLPLUS_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_cursor() -> MagicMock:
    cursor = MagicMock()
    cursor.rowcount = 0
    cursor.fetchone.return_value = None
    cursor.fetchall.return_value = []
    cursor.__enter__.return_value = cursor
    return cursor


@pytest.fixture
def mock_connection(mock_cursor: MagicMock) -> MagicMock:
    """PyMySQL connection mock with the driver's real string escaping."""
    conn = MagicMock(spec=pymysql.connections.Connection)
    conn.escape.side_effect = lambda value: "'" + escape_string(value) + "'"
    conn.cursor.return_value = mock_cursor
    conn.insert_id.return_value = 0
    return conn


@pytest.fixture
def database(mock_connection: MagicMock) -> Database:
    return Database(mock_connection)
