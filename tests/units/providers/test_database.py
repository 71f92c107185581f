from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest
from pocket_ledger.providers.database import DatabaseManager


@pytest.fixture(autouse=True)
def reset_db_manager() -> Generator[None, None, None]:
    """Ensures the DatabaseManager is reset before each test.

    Yields:
        None.
    """
    DatabaseManager.release_engine()
    yield
    DatabaseManager.release_engine()


def test_singleton_behavior() -> None:
    """Tests that DatabaseManager is a singleton."""
    instance1 = DatabaseManager()
    instance2 = DatabaseManager()
    assert instance1 is instance2


@patch("pocket_ledger.providers.database.create_engine")
def test_get_engine_creates_once(mock_create_engine: MagicMock) -> None:
    """Tests that the engine is created only once.

    Args:
        mock_create_engine: Mock for sqlalchemy.create_engine.
    """
    engine1 = DatabaseManager.get_engine()
    engine2 = DatabaseManager.get_engine()

    assert engine1 is engine2
    mock_create_engine.assert_called_once()


@patch("pocket_ledger.providers.database.create_engine")
def test_get_engine_uses_a_sized_pool_for_postgres(mock_create_engine: MagicMock) -> None:
    """Tests that PostgreSQL engines get the configured pool size.

    Args:
        mock_create_engine: Mock for sqlalchemy.create_engine.
    """
    DatabaseManager.get_engine()

    _, kwargs = mock_create_engine.call_args
    assert kwargs["pool_size"] == 10
    assert kwargs["max_overflow"] == 20
    assert kwargs["pool_pre_ping"] is True


@patch("pocket_ledger.providers.database.create_engine")
def test_get_engine_with_schema(mock_create_engine: MagicMock, monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests that the engine is created with schema options if specified.

    Args:
        mock_create_engine: Mock for sqlalchemy.create_engine.
        monkeypatch: Pytest fixture for mocking.
    """
    monkeypatch.setenv("POSTGRES_DB_SCHEMA", "test_schema")
    DatabaseManager.get_engine()

    mock_create_engine.assert_called_once()
    _, kwargs = mock_create_engine.call_args
    assert "search_path=test_schema" in kwargs["connect_args"]["options"]


@patch("pocket_ledger.providers.database.create_engine")
def test_get_engine_for_sqlite(mock_create_engine: MagicMock, monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests that SQLite engines may be shared across connection threads.

    Args:
        mock_create_engine: Mock for sqlalchemy.create_engine.
        monkeypatch: Pytest fixture for mocking.
    """
    monkeypatch.setenv("DATABASE_URL", "sqlite:///ledger.db")
    DatabaseManager.get_engine()

    _, kwargs = mock_create_engine.call_args
    assert kwargs["connect_args"] == {"check_same_thread": False}
    assert "pool_size" not in kwargs


def test_release_engine(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Tests that the engine can be released.

    Args:
        monkeypatch: Pytest fixture for mocking.
        tmp_path: Pytest fixture for a temporary directory.
    """
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'ledger.db'}")
    engine1 = DatabaseManager.get_engine()
    DatabaseManager.release_engine()
    engine2 = DatabaseManager.get_engine()

    assert engine1 is not engine2
