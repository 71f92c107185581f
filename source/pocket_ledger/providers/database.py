"""This module owns the process-wide SQLAlchemy engine of the ledger store."""

import threading
from typing import Any

from pocket_ledger.providers.config import Config, ConfigProvider
from pocket_ledger.providers.logging import Logger, LoggingProvider
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url


def _engine_options(url: URL, config: Config) -> tuple[dict[str, Any], dict[str, Any]]:
    """Chooses pool and driver options for a database URL.

    Args:
        url: The parsed database URL.
        config: The application configuration.

    Returns:
        The keyword arguments for `create_engine` and the driver's
        ``connect_args``.
    """
    engine_args: dict[str, Any] = {"pool_pre_ping": True}
    connect_args: dict[str, Any] = {}

    if url.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
        return engine_args, connect_args

    engine_args["pool_size"] = config.DATABASE_POOL_SIZE
    engine_args["max_overflow"] = config.DATABASE_MAX_OVERFLOW
    if config.POSTGRES_DB_SCHEMA:
        connect_args["options"] = f"-csearch_path={config.POSTGRES_DB_SCHEMA}"
    return engine_args, connect_args


class DatabaseManager:
    """Creates the pooled engine once and shares it between connection threads.

    Handlers check a connection out of the pool for one operation and give
    it back when the operation ends, so the pool size bounds the number of
    operations running at once rather than the number of open client
    connections.
    """

    _engine: Engine | None = None
    _engine_creation_lock = threading.Lock()

    def __new__(cls) -> "DatabaseManager":
        """Ensures that only one instance of this class can be created.

        Returns:
            The singleton instance of the DatabaseManager.
        """
        if not hasattr(cls, "instance"):
            cls.instance = super().__new__(cls)
        return cls.instance

    @classmethod
    def get_engine(cls) -> Engine:
        """Returns the shared engine, creating it on first use.

        Returns:
            The singleton instance of the SQLAlchemy engine.
        """
        if cls._engine is None:
            with cls._engine_creation_lock:
                if cls._engine is None:
                    cls._engine = cls._create_engine()
        return cls._engine

    @staticmethod
    def _create_engine() -> Engine:
        logger: Logger = LoggingProvider().get_logger()
        config = ConfigProvider.get_config()
        url = make_url(config.database_url)
        engine_args, connect_args = _engine_options(url, config)

        logger.info(f"Initializing database engine for {url.get_backend_name()}...")
        if "options" in connect_args:
            logger.info(f"Using isolated schema: {config.POSTGRES_DB_SCHEMA}")
        engine = create_engine(url, connect_args=connect_args, **engine_args)
        logger.info("SQLAlchemy engine created successfully.")
        return engine

    @classmethod
    def release_engine(cls) -> None:
        """Disposes of the connection pool so that the next call starts afresh."""
        if cls._engine:
            LoggingProvider().get_logger().info("Disposing of the database engine.")
            cls._engine.dispose()
            cls._engine = None
