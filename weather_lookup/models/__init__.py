"""Models package exports."""

from weather_lookup.models.outcome import Error, ErrorKind, Loading, Outcome, Success
from weather_lookup.models.state import CoordinatorState
from weather_lookup.models.weather import CityMatch, WeatherSnapshot

__all__ = [
    "CityMatch",
    "CoordinatorState",
    "Error",
    "ErrorKind",
    "Loading",
    "Outcome",
    "Success",
    "WeatherSnapshot",
]
