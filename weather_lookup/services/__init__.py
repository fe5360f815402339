"""Services package exports."""

from weather_lookup.services.coordinator import WeatherLookupCoordinator, message_for
from weather_lookup.services.geocode_service import GeocodeService
from weather_lookup.services.logging_service import configure_logging, get_logger
from weather_lookup.services.state_store import StateStore
from weather_lookup.services.weather_service import WeatherService

__all__ = [
    "GeocodeService",
    "StateStore",
    "WeatherLookupCoordinator",
    "WeatherService",
    "configure_logging",
    "get_logger",
    "message_for",
]
