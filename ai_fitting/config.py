"""Configuration management for the AI fitting app."""

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import MissingCredentialError
from .messages import get_message


class ServerConfig(BaseModel):
    """Web server bind settings."""
    host: str = "127.0.0.1"
    port: int = 8000
    max_sessions: int = 100
    session_idle_timeout: float = 3600.0  # seconds

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


class FittingConfig(BaseSettings):
    """Main application configuration."""

    # Gemini credential, read from API_KEY (or GEMINI_API_KEY)
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("api_key", "API_KEY", "GEMINI_API_KEY"),
    )
    model: str = "gemini-2.5-flash-image"
    locale: str = "ko"  # "ko" or "en"

    # Sub-configs
    server: ServerConfig = Field(default_factory=ServerConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FITTING_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    def require_api_key(self) -> str:
        """Return the credential or fail before any generation is attempted."""
        if not self.has_api_key:
            raise MissingCredentialError(get_message("missing_api_key", self.locale))
        return self.api_key.strip()


def load_config() -> FittingConfig:
    """Load configuration from environment and defaults."""
    return FittingConfig()
