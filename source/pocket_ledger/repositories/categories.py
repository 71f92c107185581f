"""This module defines the repository for expense and income categories."""

from pocket_ledger.models.categories import Category, CategoryKind
from pocket_ledger.providers.logging import Logger, LoggingProvider
from sqlalchemy import Connection, Engine, text


class CategoriesRepository:
    """Handles database operations for both category tables.

    The two kinds share the same shape but live in separate tables with
    separate identifier spaces; every method takes the kind to operate on.

    Args:
        engine: An SQLAlchemy Engine instance for database communication.
    """

    logger: Logger
    engine: Engine

    def __init__(self, engine: Engine) -> None:
        """Binds the repository to the ledger engine."""
        self.logger = LoggingProvider().get_logger()
        self.engine = engine

    def add_category(self, conn: Connection, kind: CategoryKind, name: str) -> int:
        """Inserts a new category.

        Args:
            conn: The transactional connection to use.
            kind: The category family.
            name: The category name.

        Returns:
            The identifier assigned to the new category.
        """
        self.logger.info(f"Creating {kind} category '{name}'.")
        sql = text(f"INSERT INTO {kind.table} (name) VALUES (:name) RETURNING id")  # nosec B608
        category_id: int = conn.execute(sql, {"name": name}).scalar_one()
        return category_id

    def find_category(self, conn: Connection, kind: CategoryKind, category_id: int) -> Category | None:
        """Retrieves a category by its identifier.

        Args:
            conn: The connection to use.
            kind: The category family.
            category_id: The category identifier.

        Returns:
            The category, or None if it does not exist.
        """
        sql = text(f"SELECT id, name FROM {kind.table} WHERE id = :id")  # nosec B608
        row = conn.execute(sql, {"id": category_id}).mappings().one_or_none()
        return Category.model_validate(dict(row)) if row else None

    def list_categories(self, conn: Connection, kind: CategoryKind) -> list[Category]:
        """Retrieves every category of a kind.

        Args:
            conn: The connection to use.
            kind: The category family.

        Returns:
            The categories, ordered by identifier.
        """
        sql = text(f"SELECT id, name FROM {kind.table} ORDER BY id")  # nosec B608
        rows = conn.execute(sql).mappings().fetchall()
        return [Category.model_validate(dict(row)) for row in rows]

    def rename_category(self, conn: Connection, kind: CategoryKind, category_id: int, name: str) -> None:
        """Renames a category.

        Args:
            conn: The transactional connection to use.
            kind: The category family.
            category_id: The category identifier.
            name: The new name.
        """
        self.logger.info(f"Renaming {kind} category {category_id} to '{name}'.")
        sql = text(f"UPDATE {kind.table} SET name = :name WHERE id = :id")  # nosec B608
        conn.execute(sql, {"id": category_id, "name": name})

    def delete_category(self, conn: Connection, kind: CategoryKind, category_id: int) -> None:
        """Deletes a category. Entries referencing it are left untouched.

        Args:
            conn: The transactional connection to use.
            kind: The category family.
            category_id: The category identifier.
        """
        self.logger.info(f"Deleting {kind} category {category_id}.")
        conn.execute(text(f"DELETE FROM {kind.table} WHERE id = :id"), {"id": category_id})  # nosec B608
