"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlatformSettings(BaseSettings):
    """Connection settings for the package platform REST API.

    Environment variables:
        PKMS_PLATFORM_BASE_URL: Platform base URL (default: http://localhost:8080)
        PKMS_PLATFORM_API_PREFIX: Path prefix of the REST API (default: /api/v1)
        PKMS_PLATFORM_TIMEOUT_SECONDS: Per-request timeout (default: 10)
        PKMS_PLATFORM_ACCESS_TOKEN: Bearer token sent with every request
        PKMS_PLATFORM_VERIFY_TLS: Verify TLS certificates (default: true)
    """

    model_config = SettingsConfigDict(
        env_prefix="PKMS_PLATFORM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:8080",
        description="Platform base URL",
    )
    api_prefix: str = Field(default="/api/v1", description="REST API path prefix")
    timeout_seconds: float = Field(
        default=10.0,
        description="Per-request timeout in seconds",
        gt=0,
        le=120,
    )
    access_token: SecretStr = Field(
        default=SecretStr(""),
        description="Bearer token for the platform API",
    )
    verify_tls: bool = Field(default=True, description="Verify TLS certificates")

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, value: str) -> str:
        """Ensure the prefix has a leading slash and no trailing slash."""
        value = value.strip().strip("/")
        return f"/{value}" if value else ""

    @property
    def api_base_url(self) -> str:
        """Base URL including the API prefix."""
        return f"{self.base_url.rstrip('/')}{self.api_prefix}"


class ConsoleSettings(BaseSettings):
    """Behavioural settings of the administration console.

    Environment variables:
        PKMS_CONSOLE_DEFAULT_TENANT_ID: Tenant preselected in new dialogs
    """

    model_config = SettingsConfigDict(
        env_prefix="PKMS_CONSOLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_tenant_id: str = Field(
        default="",
        description="Tenant preselected when a dialog is opened",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="PKMS Console", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def platform(self) -> PlatformSettings:
        """Get platform settings."""
        return get_platform_settings()

    @property
    def console(self) -> ConsoleSettings:
        """Get console settings."""
        return get_console_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_platform_settings() -> PlatformSettings:
    """Get cached platform settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return PlatformSettings()


@lru_cache
def get_console_settings() -> ConsoleSettings:
    """Get cached console settings."""
    return ConsoleSettings()
