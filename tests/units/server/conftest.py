from unittest.mock import MagicMock

import pytest
from pocket_ledger.server.handlers import LedgerHandlers


@pytest.fixture
def mock_store() -> MagicMock:
    """Fixture for a mocked ledger store whose records all exist."""
    store = MagicMock()
    store.record_exists.return_value = True
    return store


@pytest.fixture
def mock_conn(mock_store: MagicMock) -> MagicMock:
    """Fixture for the connection yielded by the mocked store's transactions."""
    return mock_store.transaction.return_value.__enter__.return_value


@pytest.fixture
def handlers(mock_store: MagicMock) -> LedgerHandlers:
    """Provides handlers bound to the mocked store with a silent logger."""
    ledger_handlers = LedgerHandlers(mock_store)
    ledger_handlers.logger = MagicMock()
    return ledger_handlers
