"""This module defines custom exceptions raised while serving ledger requests."""


class LedgerError(Exception):
    """Base exception for errors that occur while handling a ledger operation."""

    pass


class BadRequestError(LedgerError):
    """Raised when a request is rejected because of the caller's input.

    The message is sent back verbatim as the body of a 400 response.
    """

    def __init__(self, reason: str) -> None:
        """Initializes the error with the reason reported to the caller.

        Args:
            reason: A human-readable explanation of why the request was rejected.
        """
        super().__init__(reason)
        self.reason = reason


class NotImplementedOperationError(LedgerError):
    """Raised by operations that are routed but deliberately not supported."""

    def __init__(self, reason: str) -> None:
        """Initializes the error with the reason reported to the caller.

        Args:
            reason: A human-readable explanation of what is not supported.
        """
        super().__init__(reason)
        self.reason = reason
