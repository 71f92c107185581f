"""Unit tests for the EntriesRepository."""

import datetime as dt
from unittest.mock import MagicMock

from pocket_ledger.models.entries import EntryKind, NewExpense, NewIncome
from pocket_ledger.repositories.entries import EntriesRepository


def test_add_expense_binds_all_columns(mock_engine: MagicMock, mock_conn: MagicMock) -> None:
    """Tests that an expense insert carries every column."""
    mock_conn.execute.return_value.scalar_one.return_value = 11
    repo = EntriesRepository(engine=mock_engine)
    expense = NewExpense(
        id_cat=2,
        id_account=3,
        amount=40,
        date=dt.date(2024, 5, 1),
        time=dt.time(9, 30),
        comment="groceries",
    )

    entry_id = repo.add_entry(mock_conn, EntryKind.EXPENSE, expense)

    assert entry_id == 11
    args, _ = mock_conn.execute.call_args
    assert "INSERT INTO expenses" in str(args[0])
    assert args[1] == {
        "category_id": 2,
        "account_id": 3,
        "amount": 40,
        "date": "2024-05-01",
        "time": "09:30:00",
        "comment": "groceries",
    }


def test_add_income_uses_income_category(mock_engine: MagicMock, mock_conn: MagicMock) -> None:
    """Tests that an income insert takes its category from id_income_cat."""
    mock_conn.execute.return_value.scalar_one.return_value = 1
    repo = EntriesRepository(engine=mock_engine)
    income = NewIncome(id_income_cat=8, id_account=3, amount=1000)

    repo.add_entry(mock_conn, EntryKind.INCOME, income)

    args, _ = mock_conn.execute.call_args
    assert "INSERT INTO income" in str(args[0])
    assert args[1]["category_id"] == 8
    assert args[1]["comment"] == ""


def test_find_entry_parses_text_columns(mock_engine: MagicMock, mock_conn: MagicMock) -> None:
    """Tests that date and time stored as text are parsed back."""
    mock_conn.execute.return_value.mappings.return_value.one_or_none.return_value = {
        "id": 4,
        "category_id": 2,
        "account_id": 3,
        "amount": 40,
        "date": "2024-05-01",
        "time": "09:30:00",
        "comment": "",
    }
    repo = EntriesRepository(engine=mock_engine)

    entry = repo.find_entry(mock_conn, EntryKind.EXPENSE, 4)

    assert entry is not None
    assert entry.date == dt.date(2024, 5, 1)
    assert entry.time == dt.time(9, 30)


def test_delete_entry(mock_engine: MagicMock, mock_conn: MagicMock) -> None:
    """Tests that delete_entry only deletes the row."""
    repo = EntriesRepository(engine=mock_engine)

    repo.delete_entry(mock_conn, EntryKind.INCOME, 6)

    mock_conn.execute.assert_called_once()
    args, _ = mock_conn.execute.call_args
    assert "DELETE FROM income" in str(args[0])
