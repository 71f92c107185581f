"""This module defines the per-connection session loop.

A `Session` owns one connected socket. It reads one complete request,
hands it to the handlers, writes exactly one response and only then reads
the next request, until the peer closes the connection or a read fails.
HTTP framing is delegated to the `h11` state machine.
"""

import socket

import h11
from pocket_ledger.models.http import LedgerRequest, LedgerResponse
from pocket_ledger.providers.logging import Logger, LoggingProvider
from pocket_ledger.server.handlers import LedgerHandlers

SERVER_NAME = b"pocket-ledger"


class EndOfStream(Exception):
    """Raised when the peer closes the connection cleanly between requests."""

    pass


class Session:
    """Serves the requests of a single connection, strictly in arrival order.

    Attributes:
        logger: An instance of the application's logger.
        sock: The connected socket.
        handlers: The handlers every request is dispatched to.
        recv_size: The maximum number of bytes read from the socket at once.
        peer: A printable peer address used as the log correlation id.
    """

    logger: Logger
    sock: socket.socket
    handlers: LedgerHandlers
    recv_size: int
    peer: str

    def __init__(self, sock: socket.socket, handlers: LedgerHandlers, recv_size: int = 4096) -> None:
        """Initializes the session.

        Args:
            sock: The connected socket; the session takes ownership of it.
            handlers: The handlers to dispatch requests to.
            recv_size: The maximum number of bytes per socket read.
        """
        self.logger = LoggingProvider().get_logger()
        self.sock = sock
        self.handlers = handlers
        self.recv_size = recv_size
        self.peer = self._describe_peer(sock)
        self._conn = h11.Connection(h11.SERVER)

    @staticmethod
    def _describe_peer(sock: socket.socket) -> str:
        """Formats the remote address of a socket.

        Args:
            sock: The connected socket.

        Returns:
            ``"host:port"`` for TCP peers, a placeholder otherwise.
        """
        try:
            peer = sock.getpeername()
        except OSError:
            return "unknown-peer"
        if isinstance(peer, tuple) and len(peer) >= 2:
            return f"{peer[0]}:{peer[1]}"
        return str(peer) or "local-peer"

    def run(self) -> None:
        """Runs the read, dispatch and respond loop until the connection ends."""
        with LoggingProvider().set_correlation_id(self.peer):
            self.logger.info("Connection opened.")
            try:
                self._serve()
            finally:
                self._close()
                self.logger.info("Connection closed.")

    def _serve(self) -> None:
        """Processes requests one at a time until the peer is done."""
        while True:
            try:
                request = self._read_request()
            except EndOfStream:
                return
            except (OSError, h11.RemoteProtocolError) as e:
                self.logger.error(f"Fail on reading: {e}")
                return

            response = self.handlers.dispatch(request)

            try:
                self._send_response(response, include_body=request.method != "HEAD")
            except (OSError, h11.LocalProtocolError) as e:
                self.logger.error(f"Error on writing: {e}")
                return

            if self._conn.our_state is h11.MUST_CLOSE or self._conn.their_state is h11.MUST_CLOSE:
                return
            self._conn.start_next_cycle()

    def _read_request(self) -> LedgerRequest:
        """Blocks until one complete request has been received.

        The body buffer is fresh for every request, so nothing from a
        previous message can leak into this one.

        Returns:
            The decoded request.

        Raises:
            EndOfStream: If the peer closed the connection before sending
                another request.
            h11.RemoteProtocolError: If the peer sent a malformed message or
                closed the connection in the middle of one.
            OSError: If reading from the socket fails.
        """
        request: h11.Request | None = None
        body = bytearray()
        while True:
            event = self._conn.next_event()
            if event is h11.NEED_DATA:
                self._conn.receive_data(self.sock.recv(self.recv_size))
            elif isinstance(event, h11.Request):
                request = event
            elif isinstance(event, h11.Data):
                body.extend(event.data)
            elif isinstance(event, h11.EndOfMessage):
                break
            elif isinstance(event, h11.ConnectionClosed):
                raise EndOfStream()

        if request is None:
            raise h11.RemoteProtocolError("Message ended before its request line")
        return LedgerRequest(
            method=request.method.decode("ascii").upper(),
            target=request.target.decode("utf-8", errors="replace"),
            headers=[(name.decode("latin-1"), value.decode("latin-1")) for name, value in request.headers],
            body=bytes(body),
            http_version=request.http_version.decode("ascii"),
        )

    def _send_response(self, response: LedgerResponse, include_body: bool = True) -> None:
        """Serializes and writes one response.

        Args:
            response: The outcome produced by the handlers.
            include_body: False for replies to ``HEAD``, which carry the
                headers of the response but not its body.
        """
        payload = response.body.encode("utf-8")
        headers = [
            (b"Server", SERVER_NAME),
            (b"Content-Type", response.content_type.encode("ascii")),
            (b"Content-Length", str(len(payload)).encode("ascii")),
        ]
        events: list[h11.Event] = [h11.Response(status_code=int(response.status), headers=headers)]
        if payload and include_body:
            events.append(h11.Data(data=payload))
        events.append(h11.EndOfMessage())
        self.sock.sendall(b"".join(self._conn.send(event) or b"" for event in events))

    def _close(self) -> None:
        """Half-closes the send side and releases the socket."""
        try:
            self.sock.shutdown(socket.SHUT_WR)
        except OSError as e:
            self.logger.debug(f"Shutdown of the send side failed: {e}")
        finally:
            self.sock.close()
