"""Application configuration using Pydantic settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OpenWeatherMap API Configuration
    openweathermap_api_key: str = ""  # Required for weather and city search
    weather_api_base_url: str = "https://api.openweathermap.org/data/2.5"
    geocode_api_base_url: str = "https://api.openweathermap.org/geo/1.0"
    weather_api_units: str = "metric"  # Celsius and m/s
    weather_api_timeout: int = 30  # seconds per request

    # City autocomplete
    suggestion_debounce_ms: int = 300
    suggestion_min_query_length: int = 2
    suggestion_limit: int = 10

    # Logging
    log_level: str = "INFO"

    @property
    def suggestion_debounce_seconds(self) -> float:
        """Debounce delay in seconds for asyncio.sleep."""
        return self.suggestion_debounce_ms / 1000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
