"""This module defines the configuration management for the ledger server.

It uses Pydantic's BaseSettings to create a strongly-typed configuration
class that reads from environment variables and .env files. This ensures
all required configuration is present and valid at startup.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """A Pydantic model for managing application settings.

    It automatically loads configuration from environment variables and .env files.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    POSTGRES_DRIVER: str = "postgresql+psycopg2"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: str = "5432"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "pocket_ledger"
    POSTGRES_DB_SCHEMA: str | None = None

    DATABASE_URL: str | None = None
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20

    LEDGER_HOST: str = "0.0.0.0"  # nosec B104
    LEDGER_PORT: int = 8080
    LEDGER_RECV_BUFFER: int = 4096

    LOG_LEVEL: str = "INFO"

    @property
    def database_url(self) -> str:
        """Builds the SQLAlchemy URL for the ledger store.

        Returns:
            `DATABASE_URL` when it is set, otherwise a URL assembled from the
            `POSTGRES_*` settings.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{self.POSTGRES_DB}"
        )


class ConfigProvider:
    """A provider class that acts as a factory for the application's configuration.

    It does not hold state but provides a method to create fresh config instances.
    """

    @staticmethod
    def get_config() -> Config:
        """Factory method that instantiates and returns a new Config object.

        Calling this function will always create a new instance of the Config model,
        which forces Pydantic to reload and re-validate all settings from the
        current environment variables. This ensures the configuration is always fresh.

        Returns:
            A new, validated Config object.
        """
        return Config()
