"""Tests for the serve command."""

from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner
from pocket_ledger.cli.serve import serve


@pytest.fixture
def mock_server() -> MagicMock:
    """Patches the listener so that no socket is bound."""
    with patch("pocket_ledger.cli.serve.LedgerServer") as mock_server_class:
        yield mock_server_class


@patch("pocket_ledger.cli.serve.LedgerHandlers")
@patch("pocket_ledger.cli.serve.LedgerStore")
@patch("pocket_ledger.cli.serve.DatabaseManager")
def test_serve_uses_options(
    mock_manager: MagicMock,
    mock_store: MagicMock,
    mock_handlers: MagicMock,
    mock_server: MagicMock,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Tests that explicit options override the configured address."""
    monkeypatch.delenv("LEDGER_RECV_BUFFER", raising=False)
    mock_server.return_value.serve_forever.side_effect = KeyboardInterrupt

    runner = CliRunner()
    result = runner.invoke(serve, ["--host", "127.0.0.1", "--port", "9090"])

    assert result.exit_code == 0
    assert "Serving ledger on 127.0.0.1:9090" in result.output
    assert "Server stopped." in result.output
    mock_store.assert_called_once_with(mock_manager.get_engine.return_value)
    mock_handlers.assert_called_once_with(mock_store.return_value)
    mock_server.assert_called_once_with(("127.0.0.1", 9090), mock_handlers.return_value, recv_size=4096)
    mock_server.return_value.server_close.assert_called_once()
    mock_manager.release_engine.assert_called_once()


@patch("pocket_ledger.cli.serve.LedgerHandlers")
@patch("pocket_ledger.cli.serve.LedgerStore")
@patch("pocket_ledger.cli.serve.DatabaseManager")
def test_serve_defaults_to_config(
    mock_manager: MagicMock,
    mock_store: MagicMock,
    mock_handlers: MagicMock,
    mock_server: MagicMock,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Tests that the address and read size come from the environment."""
    monkeypatch.setenv("LEDGER_HOST", "localhost")
    monkeypatch.setenv("LEDGER_PORT", "7000")
    monkeypatch.setenv("LEDGER_RECV_BUFFER", "1024")
    mock_server.return_value.serve_forever.side_effect = KeyboardInterrupt

    runner = CliRunner()
    result = runner.invoke(serve, [])

    assert result.exit_code == 0
    mock_server.assert_called_once_with(("localhost", 7000), mock_handlers.return_value, recv_size=1024)


@patch("pocket_ledger.cli.serve.LedgerHandlers")
@patch("pocket_ledger.cli.serve.LedgerStore")
@patch("pocket_ledger.cli.serve.DatabaseManager")
def test_serve_releases_resources_on_failure(
    mock_manager: MagicMock, mock_store: MagicMock, mock_handlers: MagicMock, mock_server: MagicMock
) -> None:
    """Tests that the listener and the engine are released when serving fails."""
    mock_server.return_value.serve_forever.side_effect = OSError("accept failed")

    runner = CliRunner()
    result = runner.invoke(serve, ["--port", "9090"])

    assert result.exit_code == 1
    assert isinstance(result.exception, OSError)
    mock_server.return_value.server_close.assert_called_once()
    mock_manager.release_engine.assert_called_once()
