"""Wiring for one weather screen session."""

import structlog

from weather_lookup.config import get_settings
from weather_lookup.services.coordinator import WeatherLookupCoordinator
from weather_lookup.services.geocode_service import GeocodeService
from weather_lookup.services.logging_service import configure_logging
from weather_lookup.services.weather_service import WeatherService

logger = structlog.get_logger(__name__)


def build_coordinator(configure_logs: bool = True) -> WeatherLookupCoordinator:
    """Create a coordinator with real OpenWeatherMap clients.

    Call once per screen session and ``await coordinator.aclose()`` when the
    session ends.
    """
    settings = get_settings()
    if configure_logs:
        configure_logging(settings.log_level)

    if not settings.openweathermap_api_key:
        logger.warning("weather_api_key_not_configured")

    return WeatherLookupCoordinator(
        weather_service=WeatherService(),
        geocode_service=GeocodeService(),
    )
