from unittest.mock import MagicMock

import pytest


@pytest.fixture
def mock_engine() -> MagicMock:
    """Fixture for a mocked database engine."""
    return MagicMock()


@pytest.fixture
def mock_conn() -> MagicMock:
    """Fixture for a mocked transactional connection."""
    return MagicMock()
