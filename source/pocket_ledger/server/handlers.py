"""This module implements the ledger operations a request can be routed to.

Every handler validates its input completely, including the existence of
any account or category it references, before it opens the transaction
that performs its writes. Creating an expense or an income inserts the
entry and adjusts the account balance inside one transaction, so either
both writes persist or neither does.
"""

import json
from collections.abc import Callable, Sequence

from pocket_ledger.exceptions.ledger import BadRequestError, NotImplementedOperationError
from pocket_ledger.models.accounts import AccountUpsert, NewAccount
from pocket_ledger.models.categories import CategoryKind, CategoryUpsert, NewCategory
from pocket_ledger.models.entries import EntryKind, NewEntry, NewExpense, NewIncome
from pocket_ledger.models.enums import RecordKind
from pocket_ledger.models.http import LedgerRequest, LedgerResponse
from pocket_ledger.providers.logging import Logger, LoggingProvider
from pocket_ledger.repositories.ledger import LedgerStore
from pocket_ledger.server.queries import (
    category_kind,
    category_path,
    optional_resource_id,
    resource_id,
)
from pocket_ledger.server.router import Operation, Router
from pydantic import BaseModel
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

ACCOUNTS_PATH = "/accounts"

ENTRY_PATHS = {EntryKind.EXPENSE: "/expenses", EntryKind.INCOME: "/income"}
ENTRY_LABELS = {EntryKind.EXPENSE: "Expense", EntryKind.INCOME: "Income"}
ENTRY_MODELS: dict[EntryKind, type[NewEntry]] = {EntryKind.EXPENSE: NewExpense, EntryKind.INCOME: NewIncome}


def _to_json(records: BaseModel | Sequence[BaseModel]) -> LedgerResponse:
    """Serializes one record or a list of records into a JSON response.

    Args:
        records: The rows to return.

    Returns:
        A 200 response with the JSON document as its body.
    """
    if isinstance(records, BaseModel):
        return LedgerResponse.json(records.model_dump_json())
    return LedgerResponse.json(json.dumps([record.model_dump(mode="json") for record in records]))


def _store_reason(error: SQLAlchemyError) -> str:
    """Extracts the database's own message from a rejected statement.

    Args:
        error: The error raised by SQLAlchemy.

    Returns:
        The driver's message when there is one, SQLAlchemy's otherwise.
    """
    if isinstance(error, DBAPIError) and error.orig is not None:
        return str(error.orig).strip()
    return str(error)


class LedgerHandlers:
    """Routes requests and runs the matching ledger operation.

    Attributes:
        logger: An instance of the application's logger.
        store: The transactional ledger store.
        router: The routing table used by `dispatch`.
    """

    logger: Logger
    store: LedgerStore
    router: Router

    def __init__(self, store: LedgerStore, router: Router | None = None) -> None:
        """Initializes the handlers.

        Args:
            store: The ledger store every operation runs against.
            router: The router to resolve requests with.
        """
        self.logger = LoggingProvider().get_logger()
        self.store = store
        self.router = router or Router()
        self._operations: dict[Operation, Callable[[LedgerRequest], LedgerResponse]] = {
            operation: getattr(self, operation.value) for operation in Operation
        }

    def dispatch(self, request: LedgerRequest) -> LedgerResponse:
        """Routes a request, runs its operation and turns the outcome into a response.

        Args:
            request: The decoded request.

        Returns:
            The response to send back; this method does not raise.
        """
        self.logger.info(f"{request.method} {request.target}")
        if request.body:
            self.logger.debug(f"Request body: {request.body.decode('utf-8', errors='replace')}")
        try:
            operation = self.router.resolve(request.method, request.target)
            return self._operations[operation](request)
        except BadRequestError as e:
            self.logger.warning(f"Rejected {request.method} {request.target}: {e.reason}")
            return LedgerResponse.bad_request(e.reason)
        except NotImplementedOperationError as e:
            self.logger.warning(f"Unsupported {request.method} {request.target}: {e.reason}")
            return LedgerResponse.not_implemented(e.reason)
        except SQLAlchemyError as e:
            reason = _store_reason(e)
            self.logger.error(f"Store rejected {request.method} {request.target}: {reason}")
            return LedgerResponse.bad_request(reason)
        except Exception as e:
            self.logger.critical(f"Unexpected error handling {request.method} {request.target}: {e}", exc_info=True)
            return LedgerResponse.server_error(str(e))

    def _require(self, kind: RecordKind, record_id: int, reason: str) -> None:
        """Rejects the request unless a referenced record exists.

        Args:
            kind: The kind of the referenced record.
            record_id: Its identifier.
            reason: The message to reject with.

        Raises:
            BadRequestError: If the record does not exist.
        """
        if not self.store.record_exists(kind, record_id):
            raise BadRequestError(reason)

    def add_account(self, request: LedgerRequest) -> LedgerResponse:
        """Creates an account.

        Args:
            request: A request whose body holds `name` and optionally `amount`.

        Returns:
            A 201 response.
        """
        body = request.parse_body(NewAccount)
        with self.store.transaction() as conn:
            self.store.accounts.add_account(conn, body.name, body.amount)
        return LedgerResponse.created()

    def _add_entry(self, request: LedgerRequest, kind: EntryKind) -> LedgerResponse:
        """Records an entry and moves its account's balance in one transaction.

        Args:
            request: The create request.
            kind: Whether an expense or an income is recorded.

        Returns:
            A 201 response.

        Raises:
            BadRequestError: If the account or the category does not exist.
        """
        entry = request.parse_body(ENTRY_MODELS[kind])
        self._require(RecordKind.ACCOUNT, entry.id_account, "Account doesn't exist")
        self._require(RecordKind.for_category(kind.category_kind), entry.category_id, "Category doesn't exist")

        with self.store.transaction() as conn:
            self.store.entries.add_entry(conn, kind, entry)
            self.store.accounts.adjust_amount(conn, entry.id_account, kind.balance_sign * entry.amount)
        return LedgerResponse.created()

    def add_expense(self, request: LedgerRequest) -> LedgerResponse:
        """Records an expense and debits its account.

        Args:
            request: A request with `id_cat`, `id_account`, `amount` and
                optionally `date`, `time` and `comment`.

        Returns:
            A 201 response.
        """
        return self._add_entry(request, EntryKind.EXPENSE)

    def add_income(self, request: LedgerRequest) -> LedgerResponse:
        """Records an income and credits its account.

        Args:
            request: A request with `id_income_cat`, `id_account`, `amount`
                and optionally `date`, `time` and `comment`.

        Returns:
            A 201 response.
        """
        return self._add_entry(request, EntryKind.INCOME)

    def add_category(self, request: LedgerRequest) -> LedgerResponse:
        """Creates a category of the kind selected by the path.

        Args:
            request: A request to ``/categories/<kind>`` with a `name`.

        Returns:
            A 201 response.
        """
        body = request.parse_body(NewCategory)
        kind = category_kind(request.target)
        with self.store.transaction() as conn:
            self.store.categories.add_category(conn, kind, body.name)
        return LedgerResponse.created()

    def modify_account(self, request: LedgerRequest) -> LedgerResponse:
        """Updates an account, or creates it when it does not exist.

        Args:
            request: A request with `name`, `id_account` and optionally
                `amount`; an omitted amount keeps the current balance.

        Returns:
            A 200 response.
        """
        body = request.parse_body(AccountUpsert)
        exists = body.id_account is not None and self.store.record_exists(RecordKind.ACCOUNT, body.id_account)

        with self.store.transaction() as conn:
            current = self.store.accounts.find_account(conn, body.id_account) if exists else None
            if current is None:
                self.store.accounts.add_account(conn, body.name, body.amount or 0)
            else:
                amount = current.amount if body.amount is None else body.amount
                self.store.accounts.modify_account(conn, current.id, body.name, amount)
        return LedgerResponse.ok()

    def modify_expense(self, request: LedgerRequest) -> LedgerResponse:
        """Rejects modification of expenses, which are immutable once recorded.

        Args:
            request: The modify request.

        Raises:
            NotImplementedOperationError: Always.
        """
        raise NotImplementedOperationError("Expenses can't be modified")

    def modify_income(self, request: LedgerRequest) -> LedgerResponse:
        """Rejects modification of income, which is immutable once recorded.

        Args:
            request: The modify request.

        Raises:
            NotImplementedOperationError: Always.
        """
        raise NotImplementedOperationError("Income can't be modified")

    def modify_category(self, request: LedgerRequest) -> LedgerResponse:
        """Renames a category, or creates it when it does not exist.

        Args:
            request: A request to ``/categories/<kind>`` with `name` and `id_cat`.

        Returns:
            A 200 response.
        """
        body = request.parse_body(CategoryUpsert)
        kind = category_kind(request.target)
        exists = body.id_cat is not None and self.store.record_exists(RecordKind.for_category(kind), body.id_cat)

        with self.store.transaction() as conn:
            if exists and body.id_cat is not None:
                self.store.categories.rename_category(conn, kind, body.id_cat, body.name)
            else:
                self.store.categories.add_category(conn, kind, body.name)
        return LedgerResponse.ok()

    def get_account(self, request: LedgerRequest) -> LedgerResponse:
        """Returns every account, or the one selected by ``?id=``.

        Args:
            request: The read request.

        Returns:
            A 200 response with a JSON body.

        Raises:
            BadRequestError: If the selected account does not exist.
        """
        account_id = optional_resource_id(request.target, ACCOUNTS_PATH)
        with self.store.transaction() as conn:
            if account_id is None:
                return _to_json(self.store.accounts.list_accounts(conn))
            account = self.store.accounts.find_account(conn, account_id)
        if account is None:
            raise BadRequestError("Account doesn't exist")
        return _to_json(account)

    def _get_entry(self, request: LedgerRequest, kind: EntryKind) -> LedgerResponse:
        """Returns every entry of a kind, or the one selected by ``?id=``.

        Args:
            request: The read request.
            kind: The entry kind.

        Returns:
            A 200 response with a JSON body.

        Raises:
            BadRequestError: If the selected entry does not exist.
        """
        entry_id = optional_resource_id(request.target, ENTRY_PATHS[kind])
        with self.store.transaction() as conn:
            if entry_id is None:
                return _to_json(self.store.entries.list_entries(conn, kind))
            entry = self.store.entries.find_entry(conn, kind, entry_id)
        if entry is None:
            raise BadRequestError(f"{ENTRY_LABELS[kind]} doesn't exist")
        return _to_json(entry)

    def get_expense(self, request: LedgerRequest) -> LedgerResponse:
        """Returns expenses."""
        return self._get_entry(request, EntryKind.EXPENSE)

    def get_income(self, request: LedgerRequest) -> LedgerResponse:
        """Returns income entries."""
        return self._get_entry(request, EntryKind.INCOME)

    def get_category(self, request: LedgerRequest) -> LedgerResponse:
        """Returns the categories of one kind, or the one selected by ``?id=``.

        Args:
            request: The read request.

        Returns:
            A 200 response with a JSON body.

        Raises:
            BadRequestError: If the selected category does not exist.
        """
        kind = category_kind(request.target)
        category_id = optional_resource_id(request.target, category_path(kind))
        with self.store.transaction() as conn:
            if category_id is None:
                return _to_json(self.store.categories.list_categories(conn, kind))
            category = self.store.categories.find_category(conn, kind, category_id)
        if category is None:
            raise BadRequestError("Category doesn't exist")
        return _to_json(category)

    def delete_account(self, request: LedgerRequest) -> LedgerResponse:
        """Deletes the account selected by ``?id=``.

        Args:
            request: The delete request.

        Returns:
            A 200 response.
        """
        account_id = resource_id(request.target, ACCOUNTS_PATH)
        self._require(RecordKind.ACCOUNT, account_id, "Account doesn't exist")
        with self.store.transaction() as conn:
            self.store.accounts.delete_account(conn, account_id)
        return LedgerResponse.ok()

    def _delete_entry(self, request: LedgerRequest, kind: EntryKind) -> LedgerResponse:
        """Deletes the entry selected by ``?id=``.

        Args:
            request: The delete request.
            kind: The entry kind.

        Returns:
            A 200 response.
        """
        entry_id = resource_id(request.target, ENTRY_PATHS[kind])
        self._require(RecordKind.for_entry(kind), entry_id, f"{ENTRY_LABELS[kind]} doesn't exist")
        with self.store.transaction() as conn:
            self.store.entries.delete_entry(conn, kind, entry_id)
        return LedgerResponse.ok()

    def delete_expense(self, request: LedgerRequest) -> LedgerResponse:
        """Deletes an expense without touching its account."""
        return self._delete_entry(request, EntryKind.EXPENSE)

    def delete_income(self, request: LedgerRequest) -> LedgerResponse:
        """Deletes an income entry."""
        return self._delete_entry(request, EntryKind.INCOME)

    def delete_category(self, request: LedgerRequest) -> LedgerResponse:
        """Deletes the category selected by the path kind and ``?id=``.

        Args:
            request: The delete request.

        Returns:
            A 200 response.
        """
        kind: CategoryKind = category_kind(request.target)
        category_id = resource_id(request.target, category_path(kind))
        self._require(RecordKind.for_category(kind), category_id, "Category doesn't exist")
        with self.store.transaction() as conn:
            self.store.categories.delete_category(conn, kind, category_id)
        return LedgerResponse.ok()
