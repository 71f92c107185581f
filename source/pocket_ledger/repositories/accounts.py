"""This module defines the repository for bank accounts."""

from pocket_ledger.models.accounts import Account
from pocket_ledger.providers.logging import Logger, LoggingProvider
from sqlalchemy import Connection, Engine, text


class AccountsRepository:
    """Handles database operations for the `accounts` table.

    Every statement runs on a connection supplied by the caller, so that an
    entry insert and the balance adjustment it implies can share a single
    transaction.

    Args:
        engine: An SQLAlchemy Engine instance for database communication.
    """

    logger: Logger
    engine: Engine

    def __init__(self, engine: Engine) -> None:
        """Initializes the repository with a database engine.

        Args:
            engine: The SQLAlchemy Engine to be used for all database
                communications.
        """
        self.logger = LoggingProvider().get_logger()
        self.engine = engine

    def add_account(self, conn: Connection, name: str, amount: int = 0) -> int:
        """Inserts a new account.

        Args:
            conn: The transactional connection to use.
            name: The account name.
            amount: The opening balance.

        Returns:
            The identifier assigned to the new account.
        """
        self.logger.info(f"Creating account '{name}' with amount {amount}.")
        sql = text("INSERT INTO accounts (name, amount) VALUES (:name, :amount) RETURNING id")
        account_id: int = conn.execute(sql, {"name": name, "amount": amount}).scalar_one()
        return account_id

    def find_account(self, conn: Connection, account_id: int) -> Account | None:
        """Retrieves an account by its identifier.

        Args:
            conn: The connection to use.
            account_id: The account identifier.

        Returns:
            The account, or None if it does not exist.
        """
        sql = text("SELECT id, name, amount FROM accounts WHERE id = :id")
        row = conn.execute(sql, {"id": account_id}).mappings().one_or_none()
        return Account.model_validate(dict(row)) if row else None

    def list_accounts(self, conn: Connection) -> list[Account]:
        """Retrieves every account.

        Args:
            conn: The connection to use.

        Returns:
            All accounts, ordered by identifier.
        """
        sql = text("SELECT id, name, amount FROM accounts ORDER BY id")
        rows = conn.execute(sql).mappings().fetchall()
        return [Account.model_validate(dict(row)) for row in rows]

    def modify_account(self, conn: Connection, account_id: int, name: str, amount: int) -> None:
        """Overwrites the name and balance of an account.

        Args:
            conn: The transactional connection to use.
            account_id: The account identifier.
            name: The new name.
            amount: The new balance.
        """
        self.logger.info(f"Updating account {account_id}: name='{name}', amount={amount}.")
        sql = text("UPDATE accounts SET name = :name, amount = :amount WHERE id = :id")
        conn.execute(sql, {"id": account_id, "name": name, "amount": amount})

    def adjust_amount(self, conn: Connection, account_id: int, delta: int) -> None:
        """Moves an account's balance by a signed delta.

        The update is relative to the stored balance.

        Args:
            conn: The transactional connection to use.
            account_id: The account identifier.
            delta: The amount to add; negative to debit.
        """
        self.logger.debug(f"Adjusting account {account_id} by {delta}.")
        sql = text("UPDATE accounts SET amount = amount + :delta WHERE id = :id")
        conn.execute(sql, {"id": account_id, "delta": delta})

    def delete_account(self, conn: Connection, account_id: int) -> None:
        """Deletes an account. Entries referencing it are left untouched.

        Args:
            conn: The transactional connection to use.
            account_id: The account identifier.
        """
        self.logger.info(f"Deleting account {account_id}.")
        conn.execute(text("DELETE FROM accounts WHERE id = :id"), {"id": account_id})
