import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Gemini
    gemini_api_key: str | None = os.getenv("GEMINI_API_KEY")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

    # Cache (0 disables the bound / expiry)
    cache_max_entries: int = int(os.getenv("CACHE_MAX_ENTRIES", "0"))
    cache_ttl: int = int(os.getenv("CACHE_TTL", "0"))

    # Rate limiting, applied per client IP (0 disables)
    rate_limit_max_requests: int = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "100"))
    rate_limit_window_seconds: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900"))  # 15 minutes

    # HTTP
    frontend_url: str = os.getenv("FRONTEND_URL", "*")
    app_env: str = os.getenv("APP_ENV", "production")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "3000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    @property
    def is_development(self) -> bool:
        """Check if error details may be exposed to clients.

        Returns:
            True when APP_ENV is "development", False otherwise
        """
        return self.app_env.lower() == "development"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_max_entries < 0:
            raise ValueError("CACHE_MAX_ENTRIES must be >= 0 (0 = unbounded)")

        if self.cache_ttl < 0:
            raise ValueError("CACHE_TTL must be >= 0 (0 = never expire)")

        if self.rate_limit_max_requests < 0:
            raise ValueError("RATE_LIMIT_MAX_REQUESTS must be >= 0 (0 = disabled)")

        if self.rate_limit_window_seconds <= 0:
            raise ValueError(
                f"RATE_LIMIT_WINDOW_SECONDS must be positive, got {self.rate_limit_window_seconds}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
