"""Pytest configuration and shared fixtures."""

import os
import uuid

import psycopg
import pytest

from rowmeta_uuid import ValueMetaUuid

SAMPLE = "123e4567-e89b-12d3-a456-426614174000"


@pytest.fixture
def sample_uuid() -> uuid.UUID:
    return uuid.UUID(SAMPLE)


@pytest.fixture
def meta() -> ValueMetaUuid:
    """UUID handler for an ascending 'id' column."""
    return ValueMetaUuid("id")


@pytest.fixture
def descending_meta() -> ValueMetaUuid:
    return ValueMetaUuid("id", sort_descending=True)


@pytest.fixture
def pg_conn():
    """
    Provide a PostgreSQL connection.

    Set ROWMETA_TEST_DATABASE_URL to run tests that need a server; they are
    skipped otherwise.
    """
    url = os.getenv("ROWMETA_TEST_DATABASE_URL")
    if not url:
        pytest.skip("ROWMETA_TEST_DATABASE_URL not set")

    try:
        conn = psycopg.connect(url, autocommit=False)
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not reachable: {e}")

    yield conn

    # Rollback any changes
    conn.rollback()
    conn.close()
