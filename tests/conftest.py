"""Pytest configuration and fixtures."""

import os
from typing import Generator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# Set test environment variables before importing the package
os.environ.setdefault("OPENWEATHERMAP_API_KEY", "test-api-key")

from weather_lookup.models.outcome import Success  # noqa: E402
from weather_lookup.models.weather import WeatherSnapshot  # noqa: E402
from weather_lookup.services.coordinator import WeatherLookupCoordinator  # noqa: E402
from weather_lookup.services.geocode_service import GeocodeService  # noqa: E402
from weather_lookup.services.weather_service import WeatherService  # noqa: E402

# Short enough to keep tests fast, long enough to observe the pending state
TEST_DEBOUNCE_SECONDS = 0.02


def _make_settings() -> MagicMock:
    settings = MagicMock()
    settings.openweathermap_api_key = "test-api-key"
    settings.weather_api_base_url = "https://api.openweathermap.org/data/2.5"
    settings.geocode_api_base_url = "https://api.openweathermap.org/geo/1.0"
    settings.weather_api_units = "metric"
    settings.weather_api_timeout = 5
    settings.suggestion_debounce_ms = 300
    settings.suggestion_debounce_seconds = 0.3
    settings.suggestion_min_query_length = 2
    settings.suggestion_limit = 10
    settings.log_level = "INFO"
    return settings


@pytest.fixture
def mock_settings() -> Generator[MagicMock, None, None]:
    """Mock settings for both service clients."""
    settings = _make_settings()
    with patch("weather_lookup.services.weather_service.get_settings", return_value=settings):
        with patch("weather_lookup.services.geocode_service.get_settings", return_value=settings):
            yield settings


@pytest.fixture
def mock_http_client() -> AsyncMock:
    """Stand-in for httpx.AsyncClient, installed as a service's ``_client``."""
    client = AsyncMock()
    client.is_closed = False
    return client


@pytest.fixture
def make_response():
    """Factory for fake httpx responses."""

    def _make(status_code: int = 200, payload=None) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = payload
        return response

    return _make


@pytest.fixture
def weather_api_payload() -> dict:
    """OpenWeatherMap current weather response (metric units)."""
    return {
        "name": "London",
        "sys": {"country": "GB"},
        "main": {"temp": 20.7, "feels_like": 19.2, "humidity": 56},
        "weather": [{"main": "Clear", "description": "clear sky", "icon": "01d"}],
        "wind": {"speed": 3.6},
        "dt": 1706800000,
    }


@pytest.fixture
def sample_snapshot() -> WeatherSnapshot:
    return WeatherSnapshot(
        display_name="London, GB",
        city_name="London",
        temperature=20,
        feels_like=19,
        condition="Clear",
        description="Clear sky",
        humidity=56,
        wind_speed=3.6,
        icon_code="01d",
    )


@pytest.fixture
def weather_service(sample_snapshot) -> MagicMock:
    """Weather client double that succeeds by default."""
    service = MagicMock(spec=WeatherService)
    service.fetch_by_name = AsyncMock(return_value=Success(value=sample_snapshot))
    service.fetch_by_coordinates = AsyncMock(return_value=Success(value=sample_snapshot))
    service.close = AsyncMock()
    return service


@pytest.fixture
def geocode_service() -> MagicMock:
    """Geocode client double that finds nothing by default."""
    service = MagicMock(spec=GeocodeService)
    service.search = AsyncMock(return_value=[])
    service.close = AsyncMock()
    return service


@pytest.fixture
def coordinator(weather_service, geocode_service) -> WeatherLookupCoordinator:
    return WeatherLookupCoordinator(
        weather_service=weather_service,
        geocode_service=geocode_service,
        debounce_seconds=TEST_DEBOUNCE_SECONDS,
        min_query_length=2,
        suggestion_limit=10,
    )
