"""
MoodLog Application Settings

Production-grade configuration management using Pydantic Settings.
All sensitive values are loaded from environment variables.

SECURITY: Never log or expose settings containing secrets.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database configuration (PostgreSQL in production)."""

    model_config = SettingsConfigDict(env_prefix="MOODLOG_DB_")

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    name: str = Field(default="moodlog_db", description="Database name")
    user: str = Field(default="moodlog_user", description="Database user")
    password: SecretStr = Field(default=SecretStr("dev_password"), description="Database password")
    pool_size: int = Field(default=10, ge=1, le=100, description="Connection pool size")
    max_overflow: int = Field(default=20, ge=0, le=100, description="Max overflow connections")
    url: Optional[str] = Field(
        default=None,
        description="Full async URL override, e.g. sqlite+aiosqlite:///./moodlog.db",
    )
    create_tables: bool = Field(
        default=False,
        description="Create missing tables on startup (development only)",
    )

    @property
    def async_url(self) -> str:
        """Generate async database URL for SQLAlchemy."""
        if self.url:
            return self.url
        password = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{password}@{self.host}:{self.port}/{self.name}"

    @property
    def sync_url(self) -> str:
        """Generate sync database URL for Alembic migrations."""
        password = self.password.get_secret_value()
        return f"postgresql://{self.user}:{password}@{self.host}:{self.port}/{self.name}"


class GeminiSettings(BaseSettings):
    """Google Gemini API configuration."""

    model_config = SettingsConfigDict(env_prefix="MOODLOG_GEMINI_")

    api_key: SecretStr = Field(default=SecretStr(""), description="Gemini API key")
    model: str = Field(default="gemini-2.0-flash", description="Model identifier")
    max_output_tokens: int = Field(default=1024, ge=100, le=8192)
    temperature: float = Field(default=0.4, ge=0.0, le=2.0)


class OpenAISettings(BaseSettings):
    """OpenAI API configuration."""

    model_config = SettingsConfigDict(env_prefix="MOODLOG_OPENAI_")

    api_key: SecretStr = Field(default=SecretStr(""), description="OpenAI API key")
    model: str = Field(default="gpt-4o-mini", description="Model identifier")
    max_tokens: int = Field(default=1024, ge=100, le=4096)
    temperature: float = Field(default=0.4, ge=0.0, le=2.0)


class AnalysisSettings(BaseSettings):
    """Session query and analytics defaults."""

    model_config = SettingsConfigDict(env_prefix="MOODLOG_ANALYSIS_")

    default_analytics_days: int = Field(default=30, ge=1, le=3650)
    default_page_size: int = Field(default=10, ge=1, le=100)
    max_page_size: int = Field(default=100, ge=1, le=1000)


class SentrySettings(BaseSettings):
    """Sentry error tracking configuration."""

    model_config = SettingsConfigDict(env_prefix="MOODLOG_SENTRY_")

    dsn: str = Field(default="", description="Sentry DSN (empty disables Sentry)")
    sample_rate: float = Field(default=1.0, ge=0.0, le=1.0)
    traces_sample_rate: float = Field(default=0.1, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with MOODLOG_ prefix.
    Sensitive values use SecretStr to prevent accidental logging.

    Usage:
        settings = get_settings()
        db_url = settings.database.async_url
    """

    model_config = SettingsConfigDict(
        env_prefix="MOODLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode - NEVER enable in production")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    api_version: str = Field(default="v1", description="API version prefix")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # LLM Provider selection
    llm_provider: Literal["gemini", "openai"] = Field(
        default="gemini",
        description="LLM provider used for conversation analysis"
    )

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)
    sentry: SentrySettings = Field(default_factory=SentrySettings)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    def expose_error_details(self) -> bool:
        """Internal error details are only returned in non-production debug mode."""
        return self.debug and not self.is_production()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.
    For testing, use dependency injection to override.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
