"""This module extracts resource selectors from request targets."""

import re

from pocket_ledger.exceptions.ledger import BadRequestError
from pocket_ledger.models.categories import CategoryKind
from pocket_ledger.models.fields import MAX_RECORD_ID, MIN_RECORD_ID

ID_MARKER = "?id="
CATEGORIES_PATH = "/categories"

_INTEGER = re.compile(r"-?\d{1,20}")


def parse_id(target: str) -> int:
    """Extracts the identifier that follows the ``?id=`` marker.

    Args:
        target: The request target, e.g. ``"/accounts?id=5"``.

    Returns:
        The identifier.

    Raises:
        BadRequestError: With "Incorrect query" when the marker is missing or
            nothing follows it, or "ID must be an integer" when the value is
            not an integer or does not fit an identifier column.
    """
    position = target.find(ID_MARKER)
    if position == -1:
        raise BadRequestError("Incorrect query")
    raw_id = target[position + len(ID_MARKER) :]
    if not raw_id:
        raise BadRequestError("Incorrect query")
    if not _INTEGER.fullmatch(raw_id):
        raise BadRequestError("ID must be an integer")
    record_id = int(raw_id)
    if not MIN_RECORD_ID <= record_id <= MAX_RECORD_ID:
        raise BadRequestError("ID must be an integer")
    return record_id


def resource_id(target: str, path: str) -> int:
    """Extracts the identifier of a resource addressed as ``<path>?id=<n>``.

    Args:
        target: The request target.
        path: The collection path the target must start with.

    Returns:
        The identifier.

    Raises:
        BadRequestError: If the target does not have that exact form.
    """
    if not target.startswith(path + ID_MARKER):
        raise BadRequestError("Incorrect query")
    return parse_id(target)


def optional_resource_id(target: str, path: str) -> int | None:
    """Extracts an identifier when the target carries one.

    Args:
        target: The request target.
        path: The collection path.

    Returns:
        None when the target is the bare collection path, the identifier
        otherwise.

    Raises:
        BadRequestError: If the target is neither the bare path nor
            ``<path>?id=<n>``.
    """
    if target == path:
        return None
    return resource_id(target, path)


def category_kind(target: str) -> CategoryKind:
    """Resolves the category family a target addresses.

    Args:
        target: A target such as ``"/categories/income"`` or
            ``"/categories/expenses?id=3"``.

    Returns:
        The category family.

    Raises:
        BadRequestError: With "Unknown type of categories" for any other path.
    """
    path = target.split("?", 1)[0]
    for kind in CategoryKind:
        if path == category_path(kind):
            return kind
    raise BadRequestError("Unknown type of categories")


def category_path(kind: CategoryKind) -> str:
    """Returns the collection path of a category family.

    Args:
        kind: The category family.

    Returns:
        The path, e.g. ``"/categories/income"``.
    """
    return f"{CATEGORIES_PATH}/{kind.value}"
