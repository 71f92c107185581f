"""This module defines the Pydantic models for expense and income categories."""

from enum import StrEnum

from pocket_ledger.models.fields import RecordId
from pydantic import BaseModel


class CategoryKind(StrEnum):
    """The two category families. The value is the path segment that selects it."""

    EXPENSES = "expenses"
    INCOME = "income"

    @property
    def table(self) -> str:
        """Returns the name of the table holding categories of this kind.

        Returns:
            The table name.
        """
        return f"{self.value.removesuffix('s')}_categories"


class NewCategory(BaseModel):
    """The body of a create-category request."""

    name: str


class CategoryUpsert(BaseModel):
    """The body of a modify-category request."""

    name: str
    id_cat: RecordId | None = None


class Category(BaseModel):
    """A category row as returned to readers."""

    id: int
    name: str
