"""Unit tests for the CategoriesRepository."""

from unittest.mock import MagicMock

import pytest
from pocket_ledger.models.categories import CategoryKind
from pocket_ledger.repositories.categories import CategoriesRepository


@pytest.mark.parametrize(
    "kind, table",
    [(CategoryKind.EXPENSES, "expense_categories"), (CategoryKind.INCOME, "income_categories")],
)
def test_add_category_targets_kind_table(
    mock_engine: MagicMock, mock_conn: MagicMock, kind: CategoryKind, table: str
) -> None:
    """Tests that each kind is written to its own table."""
    mock_conn.execute.return_value.scalar_one.return_value = 2
    repo = CategoriesRepository(engine=mock_engine)

    category_id = repo.add_category(mock_conn, kind, "Food")

    assert category_id == 2
    args, _ = mock_conn.execute.call_args
    assert f"INSERT INTO {table}" in str(args[0])
    assert args[1] == {"name": "Food"}


def test_rename_category(mock_engine: MagicMock, mock_conn: MagicMock) -> None:
    """Tests that rename_category updates the name by id."""
    repo = CategoriesRepository(engine=mock_engine)

    repo.rename_category(mock_conn, CategoryKind.INCOME, 5, "Salary")

    args, _ = mock_conn.execute.call_args
    assert "UPDATE income_categories SET name = :name" in str(args[0])
    assert args[1] == {"id": 5, "name": "Salary"}


def test_list_categories(mock_engine: MagicMock, mock_conn: MagicMock) -> None:
    """Tests that rows are mapped to categories."""
    mock_conn.execute.return_value.mappings.return_value.fetchall.return_value = [{"id": 1, "name": "Rent"}]
    repo = CategoriesRepository(engine=mock_engine)

    categories = repo.list_categories(mock_conn, CategoryKind.EXPENSES)

    assert categories[0].name == "Rent"
    args, _ = mock_conn.execute.call_args
    assert "FROM expense_categories" in str(args[0])


def test_delete_category(mock_engine: MagicMock, mock_conn: MagicMock) -> None:
    """Tests that delete_category deletes from the kind's table."""
    repo = CategoriesRepository(engine=mock_engine)

    repo.delete_category(mock_conn, CategoryKind.EXPENSES, 9)

    args, _ = mock_conn.execute.call_args
    assert "DELETE FROM expense_categories" in str(args[0])
    assert args[1] == {"id": 9}
