"""This module defines the 'serve' command that runs the ledger server."""

import click
from pocket_ledger.providers.config import ConfigProvider
from pocket_ledger.providers.database import DatabaseManager
from pocket_ledger.providers.logging import LoggingProvider
from pocket_ledger.repositories.ledger import LedgerStore
from pocket_ledger.server.handlers import LedgerHandlers
from pocket_ledger.server.listener import LedgerServer


@click.command("serve")
@click.option("--host", default=None, help="Host to bind the server to. Defaults to LEDGER_HOST.")
@click.option("--port", default=None, type=int, help="Port to bind the server to. Defaults to LEDGER_PORT.")
def serve(host: str | None, port: int | None) -> None:
    """Accepts connections and serves ledger requests until interrupted.

    Args:
        host: The interface to listen on.
        port: The TCP port to listen on.
    """
    config = ConfigProvider.get_config()
    logger = LoggingProvider().get_logger()
    address = (host or config.LEDGER_HOST, port if port is not None else config.LEDGER_PORT)

    handlers = LedgerHandlers(LedgerStore(DatabaseManager.get_engine()))
    server = LedgerServer(address, handlers, recv_size=config.LEDGER_RECV_BUFFER)
    click.echo(f"Serving ledger on {address[0]}:{address[1]}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutdown requested.")
    finally:
        server.server_close()
        DatabaseManager.release_engine()
    click.secho("Server stopped.", fg="green")
