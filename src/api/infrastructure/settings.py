"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        SHIFTDESK_DB_HOST: Database host (default: localhost)
        SHIFTDESK_DB_PORT: Database port (default: 5432)
        SHIFTDESK_DB_DATABASE: Database name (default: shiftdesk)
        SHIFTDESK_DB_USERNAME: Database user (default: shiftdesk)
        SHIFTDESK_DB_PASSWORD: Database password (required in production)
        SHIFTDESK_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        SHIFTDESK_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="SHIFTDESK_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="shiftdesk", description="Database name")
    username: str = Field(default="shiftdesk", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class IdentitySettings(BaseSettings):
    """Identity provider (Supabase Auth admin API) settings.

    Environment variables:
        SHIFTDESK_IDENTITY_URL: Project URL, e.g. https://xyz.supabase.co
        SHIFTDESK_IDENTITY_SERVICE_ROLE_KEY: Service role key for admin calls
        SHIFTDESK_IDENTITY_TIMEOUT_SECONDS: Per-request timeout (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="SHIFTDESK_IDENTITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(default="http://localhost:54321", description="Project URL")
    service_role_key: SecretStr = Field(
        default=SecretStr(""),
        description="Service role key used for admin operations",
    )
    timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for each identity provider request",
        gt=0,
    )


class LifecycleSettings(BaseSettings):
    """Tenant and employee lifecycle settings.

    Environment variables:
        SHIFTDESK_LIFECYCLE_PRINCIPAL_DELETION_CONCURRENCY: Maximum principal
            deletions in flight during tenant teardown (default: 4)
    """

    model_config = SettingsConfigDict(
        env_prefix="SHIFTDESK_LIFECYCLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    principal_deletion_concurrency: int = Field(
        default=4,
        description="Concurrent principal deletions during tenant teardown",
        ge=1,
        le=64,
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="SHIFTDESK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="ShiftDesk API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    admin_api_key: SecretStr | None = Field(
        default=None,
        description="Key required by privileged admin routes (disabled when unset)",
    )

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def identity(self) -> IdentitySettings:
        """Get identity provider settings."""
        return get_identity_settings()

    @property
    def lifecycle(self) -> LifecycleSettings:
        """Get lifecycle settings."""
        return get_lifecycle_settings()


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
def get_identity_settings() -> IdentitySettings:
    """Get cached identity provider settings."""
    return IdentitySettings()


@lru_cache
def get_lifecycle_settings() -> LifecycleSettings:
    """Get cached lifecycle settings."""
    return LifecycleSettings()
