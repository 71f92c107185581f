"""This module defines the ledger store used by the request handlers.

The `LedgerStore` groups the table repositories behind one engine and
provides the two primitives every handler is built from: a transaction
scope and a fail-closed existence check.
"""

from collections.abc import Generator
from contextlib import contextmanager

from pocket_ledger.models.enums import RecordKind
from pocket_ledger.providers.logging import Logger, LoggingProvider
from pocket_ledger.repositories.accounts import AccountsRepository
from pocket_ledger.repositories.categories import CategoriesRepository
from pocket_ledger.repositories.entries import EntriesRepository
from sqlalchemy import Connection, Engine, text
from sqlalchemy.exc import SQLAlchemyError


class LedgerStore:
    """Transactional access to accounts, categories and entries.

    Attributes:
        logger: An instance of the application's logger.
        engine: The pooled SQLAlchemy engine.
        accounts: The accounts repository.
        categories: The categories repository.
        entries: The entries repository.
    """

    logger: Logger
    engine: Engine
    accounts: AccountsRepository
    categories: CategoriesRepository
    entries: EntriesRepository

    def __init__(self, engine: Engine) -> None:
        """Initializes the store and its repositories.

        Args:
            engine: The SQLAlchemy Engine shared by every repository.
        """
        self.logger = LoggingProvider().get_logger()
        self.engine = engine
        self.accounts = AccountsRepository(engine)
        self.categories = CategoriesRepository(engine)
        self.entries = EntriesRepository(engine)

    @contextmanager
    def transaction(self) -> Generator[Connection, None, None]:
        """Checks a connection out of the pool and wraps it in a transaction.

        The transaction commits when the block exits normally and rolls back
        when it raises; in both cases the connection goes back to the pool.

        Yields:
            The connection every statement of the operation must run on.
        """
        with self.engine.begin() as conn:
            yield conn

    def record_exists(self, kind: RecordKind, record_id: int) -> bool:
        """Checks whether exactly one record of a kind has the given identifier.

        A database failure during the lookup is logged and reported as
        "does not exist", so an unreachable store is never mistaken for a
        valid reference.

        Args:
            kind: The kind of record to look up.
            record_id: The identifier to look for.

        Returns:
            True if exactly one row matches, False otherwise.
        """
        sql = text(f"SELECT id FROM {kind.value} WHERE id = :id")  # nosec B608
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(sql, {"id": record_id}).fetchall()
        except SQLAlchemyError as e:
            self.logger.error(f"Existence check for {kind.value} {record_id} failed: {e}")
            return False
        return len(rows) == 1
