"""Text formatting for the weather screen."""

from weather_lookup.models.state import CoordinatorState
from weather_lookup.models.weather import WeatherSnapshot

SEARCHING_CITIES = "Searching cities..."
NO_CITIES_FOUND = "No cities found"
LOADING = "Loading..."

# OpenWeatherMap icon prefix -> icon category
_ICON_CATEGORIES = {
    "01": "sunny",
    "02": "partly_cloudy",
    "03": "cloudy",
    "04": "cloudy",
    "09": "rainy",
    "10": "rainy",
    "11": "thunderstorm",
    "13": "snowy",
    "50": "misty",
}


def icon_category(icon_code: str) -> str:
    """Map an icon code such as '10d' to an icon category name."""
    return _ICON_CATEGORIES.get(icon_code[:2], "default")


def format_temperature(temp: int) -> str:
    return f"{temp}°C"


def format_feels_like(temp: int) -> str:
    return f"Feels like {temp}°C"


def format_humidity(humidity: int) -> str:
    return f"Humidity: {humidity}%"


def format_wind_speed(speed: float) -> str:
    return f"Wind: {speed:.1f} m/s"


def format_weather(weather: WeatherSnapshot) -> str:
    """Format a weather snapshot as readable text."""
    lines = [
        weather.display_name,
        f"  {format_temperature(weather.temperature)}, {weather.description}",
        f"  {format_feels_like(weather.feels_like)}",
        f"  {format_humidity(weather.humidity)}",
        f"  {format_wind_speed(weather.wind_speed)}",
    ]
    return "\n".join(lines)


def suggestion_status(state: CoordinatorState) -> str | None:
    """Status line under the city input, if any."""
    if state.is_searching_suggestions:
        return SEARCHING_CITIES
    if state.has_completed_suggestion_search and not state.suggestions:
        return NO_CITIES_FOUND
    return None


def render_state(state: CoordinatorState) -> str:
    """Render the whole screen as text.

    Only reads flags already present in the state.
    """
    parts = [f"City: {state.city_input}"]

    status = suggestion_status(state)
    if status:
        parts.append(status)
    for suggestion in state.suggestions:
        parts.append(f"  - {suggestion}")

    if state.is_fetching_weather:
        parts.append(LOADING)
    elif state.error_message:
        parts.append(f"Error: {state.error_message}")
    elif state.weather:
        parts.append(format_weather(state.weather))

    return "\n".join(parts)
