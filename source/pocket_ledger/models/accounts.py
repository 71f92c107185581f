"""This module defines the Pydantic models for bank accounts."""

from pocket_ledger.models.fields import Amount, RecordId
from pydantic import BaseModel


class NewAccount(BaseModel):
    """The body of a create-account request."""

    name: str
    amount: Amount = 0


class AccountUpsert(BaseModel):
    """The body of a modify-account request.

    When `id_account` is omitted or unknown a new account is created. When
    `amount` is omitted on an existing account, its balance is preserved.
    """

    name: str
    id_account: RecordId | None = None
    amount: Amount | None = None


class Account(BaseModel):
    """An account row as returned to readers.

    Attributes:
        id: The store-assigned identifier.
        name: The account name.
        amount: The balance in minor currency units.
    """

    id: int
    name: str
    amount: int
