"""Configuration management using pydantic-settings."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database settings
    db_server: str = "localhost"
    db_name: str = "notevault"
    db_user: str = "notevault"
    db_password: str = ""
    db_port: int = 5432
    db_pool_size: int = 10
    db_max_overflow: int = 20
    sql_echo: bool = False

    # Full SQLAlchemy URL, e.g. "sqlite+aiosqlite:///./notevault.db" for local runs
    database_url_override: Optional[str] = None

    # Create tables at startup instead of running Alembic (local/dev only)
    create_tables_on_startup: bool = False

    # JWT settings
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expiration_minutes: int = 60 * 24 * 30  # 30 days

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    api_prefix: str = "/api"
    cors_origins: str = "*"  # comma-separated

    # Notes
    share_token_bytes: int = 16  # 128 bits, rendered as 32 hex chars
    note_preview_length: int = 120

    @property
    def database_url(self) -> str:
        """Build the async connection string (PostgreSQL unless overridden)."""
        if self.database_url_override:
            return self.database_url_override
        from urllib.parse import quote_plus
        return (
            f"postgresql+asyncpg://{self.db_user}:{quote_plus(self.db_password)}"
            f"@{self.db_server}:{self.db_port}/{self.db_name}"
        )

    @property
    def sync_database_url(self) -> str:
        """Build the sync connection string for Alembic."""
        if self.database_url_override:
            return self.database_url_override.replace("+aiosqlite", "").replace(
                "+asyncpg", "+psycopg2"
            )
        from urllib.parse import quote_plus
        return (
            f"postgresql+psycopg2://{self.db_user}:{quote_plus(self.db_password)}"
            f"@{self.db_server}:{self.db_port}/{self.db_name}"
        )

    @property
    def cors_origin_list(self) -> list[str]:
        """CORS origins as a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Global settings instance
settings = Settings()
