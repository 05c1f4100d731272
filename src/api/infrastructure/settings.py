"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        APPTEMPLATE_DB_HOST: Database host (default: localhost)
        APPTEMPLATE_DB_PORT: Database port (default: 5432)
        APPTEMPLATE_DB_DATABASE: Database name (default: apptemplate)
        APPTEMPLATE_DB_USERNAME: Database user (default: apptemplate)
        APPTEMPLATE_DB_PASSWORD: Database password (required in production)
        APPTEMPLATE_DB_POOL_SIZE: Connections kept in the pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="APPTEMPLATE_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="apptemplate", description="Database name")
    username: str = Field(default="apptemplate", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_size: int = Field(
        default=10,
        description="Connections kept in the pool",
        ge=1,
        le=100,
    )

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class OutboxSettings(BaseSettings):
    """Outbox relay settings.

    Environment variables:
        APPTEMPLATE_OUTBOX_INTERVAL_SECONDS: Seconds between relay ticks (default: 10)
        APPTEMPLATE_OUTBOX_BATCH_SIZE: Entries processed per tick (default: 20)
        APPTEMPLATE_OUTBOX_ENABLED: Run the relay inside the API process (default: true)
    """

    model_config = SettingsConfigDict(
        env_prefix="APPTEMPLATE_OUTBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    interval_seconds: int = Field(
        default=10,
        description="Seconds between relay ticks",
        ge=1,
    )
    batch_size: int = Field(
        default=20,
        description="Maximum outbox entries processed per tick",
        ge=1,
    )
    enabled: bool = Field(
        default=True,
        description="Run the outbox relay inside the API process",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="APPTEMPLATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="AppTemplate API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def outbox(self) -> OutboxSettings:
        """Get outbox relay settings."""
        return get_outbox_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_outbox_settings() -> OutboxSettings:
    """Get cached outbox relay settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return OutboxSettings()
