"""Application settings and configuration.

This module defines all configuration options for the Ballot Box backend.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_SALT_ROUNDS = 8
MIN_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Ballot Box", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # HTTP listener
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=31001, alias="PORT")

    # Database configuration
    database_url: str = Field(default="sqlite:///./ballot_box.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # JWT authentication settings
    jwt_secret: str = Field(alias="JWT_SECRET", min_length=MIN_SECRET_LENGTH)
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_duration_hours: int = Field(
        default=72,
        ge=1,
        alias="ACCESS_TOKEN_DURATION_HOURS",
    )

    # Fixed administrator account
    admin_username: str = Field(alias="ADMIN_USERNAME", min_length=1)
    admin_password: str = Field(alias="ADMIN_PASSWORD", min_length=1)

    # bcrypt cost factor for user passwords
    salt_rounds: int = Field(default=10, ge=MIN_SALT_ROUNDS, alias="SALT_ROUNDS")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling such as Alembic."""
        url = self.database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()  # type: ignore[call-arg]
