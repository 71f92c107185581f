"""This module defines the Pydantic models for ledger entries.

A ledger entry is either an expense, which debits its account, or an
income, which credits it. Both share the same row shape; only the name of
the category field differs in the request body.
"""

import datetime as dt
from enum import StrEnum

from pocket_ledger.models.categories import CategoryKind
from pocket_ledger.models.fields import EntryAmount, RecordId
from pocket_ledger.providers.date import DateProvider
from pydantic import BaseModel, Field


class EntryKind(StrEnum):
    """The two kinds of ledger entries. The value is the table name."""

    EXPENSE = "expenses"
    INCOME = "income"

    @property
    def category_kind(self) -> CategoryKind:
        """Returns the category family entries of this kind must reference.

        Returns:
            The matching category kind.
        """
        return CategoryKind.EXPENSES if self is EntryKind.EXPENSE else CategoryKind.INCOME

    @property
    def balance_sign(self) -> int:
        """Returns how an entry of this kind moves its account's balance.

        Returns:
            -1 for expenses, 1 for income.
        """
        return -1 if self is EntryKind.EXPENSE else 1


class NewEntry(BaseModel):
    """Fields shared by both create-entry bodies.

    Each subclass names the body key that carries `category_id`.
    """

    category_id: RecordId
    id_account: RecordId
    amount: EntryAmount
    date: dt.date = Field(default_factory=DateProvider.today)
    time: dt.time = Field(default_factory=DateProvider.current_time)
    comment: str = ""


class NewExpense(NewEntry):
    """The body of a create-expense request; the category comes as `id_cat`."""

    category_id: RecordId = Field(validation_alias="id_cat")


class NewIncome(NewEntry):
    """The body of a create-income request; the category comes as `id_income_cat`."""

    category_id: RecordId = Field(validation_alias="id_income_cat")


class Entry(BaseModel):
    """A ledger entry row as returned to readers."""

    id: int
    category_id: int
    account_id: int
    amount: int
    date: dt.date
    time: dt.time
    comment: str
