"""
Configuration settings for the completion layer.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "Completion Layer"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    
    # === Provider ===
    LLM_API_KEY: Optional[str] = None  # Required, checked when the client is built
    LLM_BASE_URL: str = "https://api.together.xyz/v1"
    AI_MODELS: str = ""  # Comma-separated default fallback chain, e.g. "model-a,model-b"
    LLM_TIMEOUT: float = 300.0  # seconds, per call
    
    # === Retry & Fallback ===
    MAX_RETRIES: int = 3  # Shared by every model in the fallback chain
    RETRY_INITIAL_DELAY: float = 1.0  # seconds
    RETRY_BACKOFF_BASE: float = 2.0  # Exponential backoff multiplier
    RETRY_MAX_DELAY: float = 30.0  # seconds
    


# Global settings instance
settings = Settings()
