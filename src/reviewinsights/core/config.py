"""Configuration management for Review Insights."""

from pydantic_settings import BaseSettings
from pydantic import Field

from .constants import FileConstants


class Settings(BaseSettings):
    """Application settings."""

    # OpenAI API
    openai_api_key: str = Field("", description="OpenAI API key")
    OPENAI_API_KEY: str = Field("", description="OpenAI API key (alternative naming)")
    openai_model: str = Field("gpt-4o-mini", description="Chat model used for review analysis")

    @property
    def effective_openai_key(self) -> str:
        """Get the effective OpenAI API key from either field."""
        return self.openai_api_key or self.OPENAI_API_KEY

    # Logging
    log_level: str = Field("INFO", description="Logging level")

    # Analysis settings
    default_category: str = Field("content_quality", description="Category preset used when none is chosen")
    max_file_mb: float = Field(5.0, description="Largest accepted upload in megabytes")
    max_retries: int = Field(3, description="Maximum retry attempts")
    retry_delay: float = Field(1.0, description="Base retry delay in seconds")
    retry_backoff: float = Field(2.0, description="Retry backoff multiplier")
    cache_dir: str = Field(FileConstants.CACHE_DIR, description="Directory for cached LLM responses")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()
