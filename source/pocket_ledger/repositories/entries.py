"""This module defines the repository for expense and income entries."""

from pocket_ledger.models.entries import Entry, EntryKind, NewEntry
from pocket_ledger.providers.date import DateProvider
from pocket_ledger.providers.logging import Logger, LoggingProvider
from sqlalchemy import Connection, Engine, text


class EntriesRepository:
    """Handles database operations for the `expenses` and `income` tables.

    Inserting an entry does not touch the account balance; pairing the two
    writes is the caller's job.

    Args:
        engine: An SQLAlchemy Engine instance for database communication.
    """

    logger: Logger
    engine: Engine

    def __init__(self, engine: Engine) -> None:
        """Initializes the repository.

        Args:
            engine: The engine of the ledger database.
        """
        self.logger = LoggingProvider().get_logger()
        self.engine = engine

    def add_entry(self, conn: Connection, kind: EntryKind, entry: NewEntry) -> int:
        """Inserts a new ledger entry.

        Args:
            conn: The transactional connection to use.
            kind: Whether the entry is an expense or an income.
            entry: The validated request body.

        Returns:
            The identifier assigned to the new entry.
        """
        self.logger.info(
            f"Recording {kind} of {entry.amount} on account {entry.id_account} "
            f"(category {entry.category_id})."
        )
        sql = text(
            f"""
            INSERT INTO {kind.value} (category_id, account_id, amount, date, time, comment)
            VALUES (:category_id, :account_id, :amount, :date, :time, :comment)
            RETURNING id
            """  # nosec B608
        )
        params = {
            "category_id": entry.category_id,
            "account_id": entry.id_account,
            "amount": entry.amount,
            "date": entry.date.strftime(DateProvider.DATE_FORMAT),
            "time": entry.time.strftime(DateProvider.TIME_FORMAT),
            "comment": entry.comment,
        }
        entry_id: int = conn.execute(sql, params).scalar_one()
        return entry_id

    def find_entry(self, conn: Connection, kind: EntryKind, entry_id: int) -> Entry | None:
        """Retrieves an entry by its identifier.

        Args:
            conn: The connection to use.
            kind: The entry kind.
            entry_id: The entry identifier.

        Returns:
            The entry, or None if it does not exist.
        """
        sql = text(
            f"SELECT id, category_id, account_id, amount, date, time, comment FROM {kind.value} WHERE id = :id"
        )  # nosec B608
        row = conn.execute(sql, {"id": entry_id}).mappings().one_or_none()
        return Entry.model_validate(dict(row)) if row else None

    def list_entries(self, conn: Connection, kind: EntryKind) -> list[Entry]:
        """Retrieves every entry of a kind.

        Args:
            conn: The connection to use.
            kind: The entry kind.

        Returns:
            The entries, ordered by identifier.
        """
        sql = text(
            f"SELECT id, category_id, account_id, amount, date, time, comment FROM {kind.value} ORDER BY id"
        )  # nosec B608
        rows = conn.execute(sql).mappings().fetchall()
        return [Entry.model_validate(dict(row)) for row in rows]

    def delete_entry(self, conn: Connection, kind: EntryKind, entry_id: int) -> None:
        """Deletes an entry. The account balance is not re-adjusted.

        Args:
            conn: The transactional connection to use.
            kind: The entry kind.
            entry_id: The entry identifier.
        """
        self.logger.info(f"Deleting {kind} entry {entry_id}.")
        conn.execute(text(f"DELETE FROM {kind.value} WHERE id = :id"), {"id": entry_id})  # nosec B608
