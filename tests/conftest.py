"""Shared doubles for the pooled connection and the page cache."""

from unittest.mock import MagicMock

import pytest


def _context(value):
    cm = MagicMock()
    cm.__enter__.return_value = value
    cm.__exit__.return_value = False  # never swallow exceptions
    return cm


@pytest.fixture
def cursor():
    cur = MagicMock()
    cur.rowcount = 1
    return cur


@pytest.fixture
def conn(cursor):
    connection = MagicMock()
    connection.cursor.return_value = _context(cursor)
    return connection


@pytest.fixture
def pool(conn):
    p = MagicMock()
    p.connection.return_value = _context(conn)
    return p


@pytest.fixture
def cache():
    return MagicMock()
