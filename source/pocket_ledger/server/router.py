"""This module maps a request's method and target to a ledger operation.

The routing table is static. Create and modify requests match their path
exactly, except for categories whose kind is chosen by a path suffix; reads
and deletes match an anchored path prefix so that the query string can
carry an identifier.
"""

from enum import StrEnum
from typing import NamedTuple

from pocket_ledger.exceptions.ledger import BadRequestError


class Operation(StrEnum):
    """The sixteen operations a request can be routed to."""

    ADD_ACCOUNT = "add_account"
    ADD_EXPENSE = "add_expense"
    ADD_INCOME = "add_income"
    ADD_CATEGORY = "add_category"
    MODIFY_ACCOUNT = "modify_account"
    MODIFY_EXPENSE = "modify_expense"
    MODIFY_INCOME = "modify_income"
    MODIFY_CATEGORY = "modify_category"
    GET_ACCOUNT = "get_account"
    GET_EXPENSE = "get_expense"
    GET_INCOME = "get_income"
    GET_CATEGORY = "get_category"
    DELETE_ACCOUNT = "delete_account"
    DELETE_EXPENSE = "delete_expense"
    DELETE_INCOME = "delete_income"
    DELETE_CATEGORY = "delete_category"


class Route(NamedTuple):
    """One row of the routing table.

    Attributes:
        path: The path to compare the request target with.
        prefix: Whether `path` must only start the target instead of equal it.
        operation: The operation the route leads to.
    """

    path: str
    prefix: bool
    operation: Operation

    def matches(self, target: str) -> bool:
        """Tells whether a request target satisfies this route.

        Args:
            target: The request target, query string included.

        Returns:
            True if the route applies.
        """
        return target.startswith(self.path) if self.prefix else target == self.path


ROUTES: dict[str, tuple[Route, ...]] = {
    "POST": (
        Route("/accounts", False, Operation.ADD_ACCOUNT),
        Route("/expenses", False, Operation.ADD_EXPENSE),
        Route("/income", False, Operation.ADD_INCOME),
        Route("/categories", True, Operation.ADD_CATEGORY),
    ),
    "PUT": (
        Route("/accounts", False, Operation.MODIFY_ACCOUNT),
        Route("/expenses", False, Operation.MODIFY_EXPENSE),
        Route("/income", False, Operation.MODIFY_INCOME),
        Route("/categories", True, Operation.MODIFY_CATEGORY),
    ),
    "GET": (
        Route("/accounts", True, Operation.GET_ACCOUNT),
        Route("/expenses", True, Operation.GET_EXPENSE),
        Route("/income", True, Operation.GET_INCOME),
        Route("/categories", True, Operation.GET_CATEGORY),
    ),
    "DELETE": (
        Route("/accounts", True, Operation.DELETE_ACCOUNT),
        Route("/expenses", True, Operation.DELETE_EXPENSE),
        Route("/income", True, Operation.DELETE_INCOME),
        Route("/categories", True, Operation.DELETE_CATEGORY),
    ),
}


class Router:
    """Resolves requests against a routing table."""

    def __init__(self, routes: dict[str, tuple[Route, ...]] | None = None) -> None:
        """Initializes the router.

        Args:
            routes: The table to route with; defaults to `ROUTES`.
        """
        self.routes = routes if routes is not None else ROUTES

    def resolve(self, method: str, target: str) -> Operation:
        """Finds the operation for a method and target.

        Args:
            method: The HTTP verb of the request.
            target: The request target, query string included.

        Returns:
            The first matching operation.

        Raises:
            BadRequestError: With "Unknown HTTP-method" when the verb has no
                routes, or "Unknown path" when no route matches.
        """
        routes = self.routes.get(method.upper())
        if routes is None:
            raise BadRequestError("Unknown HTTP-method")
        for route in routes:
            if route.matches(target):
                return route.operation
        raise BadRequestError("Unknown path")
