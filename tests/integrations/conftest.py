"""This module contains shared fixtures for the integration tests.

The tests run against a throwaway SQLite database file, created with the
same DDL the ``db init`` command applies.
"""

import json
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from pocket_ledger.models.http import LedgerRequest, LedgerResponse
from pocket_ledger.repositories.ledger import LedgerStore
from pocket_ledger.repositories.schema import create_schema
from pocket_ledger.server.handlers import LedgerHandlers
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine


@pytest.fixture
def ledger_engine(tmp_path: Path) -> Generator[Engine, None, None]:
    """Creates an engine bound to a fresh ledger database."""
    engine = create_engine(f"sqlite:///{tmp_path / 'ledger.db'}", connect_args={"check_same_thread": False})
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(ledger_engine: Engine) -> LedgerStore:
    """Provides a ledger store on the fresh database."""
    return LedgerStore(ledger_engine)


@pytest.fixture
def handlers(store: LedgerStore) -> LedgerHandlers:
    """Provides the request handlers on the fresh database."""
    return LedgerHandlers(store)


class LedgerClient:
    """Sends requests straight to the handlers, bypassing the socket layer."""

    def __init__(self, handlers: LedgerHandlers) -> None:
        self.handlers = handlers

    def send(self, method: str, target: str, body: dict[str, Any] | None = None) -> LedgerResponse:
        payload = json.dumps(body).encode() if body is not None else b""
        return self.handlers.dispatch(LedgerRequest(method=method, target=target, body=payload))

    def read(self, target: str) -> Any:
        response = self.send("GET", target)
        assert response.status == 200, response.body
        return json.loads(response.body)


@pytest.fixture
def client(handlers: LedgerHandlers) -> LedgerClient:
    """Provides a client for the handlers on the fresh database."""
    return LedgerClient(handlers)


@pytest.fixture
def funded_ledger(client: LedgerClient) -> LedgerClient:
    """Seeds one account holding 100 and one category of each kind."""
    assert client.send("POST", "/accounts", {"name": "Wallet", "amount": 100}).status == 201
    assert client.send("POST", "/categories/expenses", {"name": "Food"}).status == 201
    assert client.send("POST", "/categories/income", {"name": "Salary"}).status == 201
    return client
