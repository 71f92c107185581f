"""This module contains shared fixtures for all unit tests."""

import os

import pytest


@pytest.fixture(scope="session", autouse=True)
def unset_database_url() -> None:
    """Unsets database-related environment variables for the entire test session.

    Unit tests mock every engine, so no test may pick up a real database
    from the environment by accident.
    """
    os.environ.pop("DATABASE_URL", None)
    os.environ.pop("POSTGRES_DB_SCHEMA", None)
