#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests run against in-memory SQLite through the same ORM models used
in production, with Redis mocked, so no external services are needed:

    # Run all tests
    python -m pytest tests/ -v

    # Skip the SQL-level tests
    python -m pytest tests/ -v -m "not db"

Set TEST_DATABASE_URL to run the SQL-level tests against a real database
(e.g. PostgreSQL) instead of SQLite.
"""

import os

# Database configuration
TEST_DB_URL = os.environ.get("TEST_DATABASE_URL", "sqlite://")


def get_test_db_url() -> str:
    """Get the test database URL."""
    return TEST_DB_URL
