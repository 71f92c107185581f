"""This module defines the enumerations shared by the ledger store and the handlers."""

from enum import StrEnum

from pocket_ledger.models.categories import CategoryKind
from pocket_ledger.models.entries import EntryKind


class RecordKind(StrEnum):
    """The record kinds an existence check can look up. The value is the table name."""

    ACCOUNT = "accounts"
    EXPENSE_CATEGORY = "expense_categories"
    INCOME_CATEGORY = "income_categories"
    EXPENSE = "expenses"
    INCOME = "income"

    @classmethod
    def for_category(cls, kind: CategoryKind) -> "RecordKind":
        """Maps a category family to its record kind.

        Args:
            kind: The category family.

        Returns:
            The record kind of categories in that family.
        """
        return cls(kind.table)

    @classmethod
    def for_entry(cls, kind: EntryKind) -> "RecordKind":
        """Maps an entry kind to its record kind.

        Args:
            kind: The entry kind.

        Returns:
            The record kind of entries of that kind.
        """
        return cls(kind.value)
