from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys
    gemini_api_key: str = Field(default="", validation_alias="GEMINI_API_KEY")

    # LLM
    llm_model: str = Field(default="gemini-2.5-flash", validation_alias="LLM_MODEL")
    llm_max_tokens: int = Field(default=1024, validation_alias="LLM_MAX_TOKENS")
    llm_temperature: float = Field(default=0.3, validation_alias="LLM_TEMPERATURE")
    max_tool_rounds: int = Field(default=1, ge=1, validation_alias="MAX_TOOL_ROUNDS")

    # MCP Servers
    tool_list_timeout_seconds: float = Field(
        default=30.0, validation_alias="TOOL_LIST_TIMEOUT_SECONDS"
    )
    handshake_timeout_seconds: float = Field(
        default=10.0, validation_alias="HANDSHAKE_TIMEOUT_SECONDS"
    )
    handshake_attempts: int = Field(default=3, ge=1, validation_alias="HANDSHAKE_ATTEMPTS")
    handshake_backoff_seconds: float = Field(
        default=0.5, validation_alias="HANDSHAKE_BACKOFF_SECONDS"
    )
    shutdown_timeout_seconds: float = Field(
        default=5.0, validation_alias="SHUTDOWN_TIMEOUT_SECONDS"
    )

    # Server
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8000, validation_alias="PORT")
    debug: bool = Field(default=False, validation_alias="DEBUG")
    cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

    # UI
    relay_url: str = Field(default="http://localhost:8000", validation_alias="RELAY_URL")
    default_server_path: str = Field(
        default="node ./server/index.js", validation_alias="DEFAULT_SERVER_PATH"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        if not self.cors_origins or self.cors_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
