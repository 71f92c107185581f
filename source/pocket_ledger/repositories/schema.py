"""This module creates the ledger tables.

The tables are created once, idempotently, from plain DDL. Entry tables
carry no foreign-key constraints: the handlers check every referenced
account and category explicitly before inserting.
"""

from pocket_ledger.providers.logging import LoggingProvider
from sqlalchemy import Engine, text

TABLES = ("accounts", "expense_categories", "income_categories", "expenses", "income")


def _id_column(dialect_name: str) -> str:
    """Returns the auto-incrementing primary key definition for a dialect.

    Args:
        dialect_name: The SQLAlchemy dialect name, e.g. ``"postgresql"``.

    Returns:
        The column definition of the `id` column.
    """
    if dialect_name == "sqlite":
        return "id INTEGER PRIMARY KEY AUTOINCREMENT"
    return "id SERIAL PRIMARY KEY"


def schema_statements(dialect_name: str) -> list[str]:
    """Builds the DDL for every ledger table.

    Args:
        dialect_name: The SQLAlchemy dialect the statements are meant for.

    Returns:
        One ``CREATE TABLE IF NOT EXISTS`` statement per table.
    """
    id_column = _id_column(dialect_name)
    statements = [
        f"""
        CREATE TABLE IF NOT EXISTS accounts (
            {id_column},
            name TEXT NOT NULL,
            amount BIGINT NOT NULL DEFAULT 0
        )
        """,
    ]
    for table in ("expense_categories", "income_categories"):
        statements.append(
            f"""
            CREATE TABLE IF NOT EXISTS {table} (
                {id_column},
                name TEXT NOT NULL
            )
            """
        )
    for table in ("expenses", "income"):
        statements.append(
            f"""
            CREATE TABLE IF NOT EXISTS {table} (
                {id_column},
                category_id INTEGER NOT NULL,
                account_id INTEGER NOT NULL,
                amount BIGINT NOT NULL CHECK (amount >= 0),
                date DATE NOT NULL,
                time TIME NOT NULL,
                comment TEXT NOT NULL DEFAULT ''
            )
            """
        )
    return statements


def create_schema(engine: Engine) -> None:
    """Creates all ledger tables that do not exist yet, in a single transaction.

    Args:
        engine: The engine of the target database.
    """
    logger = LoggingProvider().get_logger()
    logger.info(f"Creating ledger schema on {engine.dialect.name}.")
    with engine.begin() as conn:
        for statement in schema_statements(engine.dialect.name):
            conn.execute(text(statement))
    logger.info("Ledger schema is up to date.")
