"""This module defines the TCP listener that accepts ledger connections.

Each accepted connection gets its own thread running a `Session`; the
threads share nothing but the handlers and, through them, the database
connection pool.
"""

import socketserver

from pocket_ledger.providers.logging import Logger, LoggingProvider
from pocket_ledger.server.handlers import LedgerHandlers
from pocket_ledger.server.session import Session


class _ConnectionHandler(socketserver.BaseRequestHandler):
    """Bridges `socketserver` to the session loop."""

    server: "LedgerServer"

    def handle(self) -> None:
        """Runs a session on the accepted socket."""
        Session(self.request, self.server.handlers, self.server.recv_size).run()


class LedgerServer(socketserver.ThreadingTCPServer):
    """A threaded TCP server running one session per connection.

    Attributes:
        logger: An instance of the application's logger.
        handlers: The handlers shared by every session.
        recv_size: The maximum number of bytes per socket read.
    """

    daemon_threads = True
    allow_reuse_address = True

    logger: Logger
    handlers: LedgerHandlers
    recv_size: int

    def __init__(self, address: tuple[str, int], handlers: LedgerHandlers, recv_size: int = 4096) -> None:
        """Binds the listening socket.

        Args:
            address: The ``(host, port)`` to listen on.
            handlers: The handlers every session dispatches to.
            recv_size: The maximum number of bytes per socket read.
        """
        self.logger = LoggingProvider().get_logger()
        self.handlers = handlers
        self.recv_size = recv_size
        super().__init__(address, _ConnectionHandler)

    def handle_error(self, request: object, client_address: object) -> None:
        """Logs an error that escaped a session instead of printing it.

        Args:
            request: The accepted socket.
            client_address: The peer address.
        """
        self.logger.critical(f"Unhandled error on connection from {client_address}.", exc_info=True)
