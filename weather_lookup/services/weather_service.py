"""Weather service for OpenWeatherMap current conditions."""

import re
from typing import Optional

import httpx
import structlog
from pydantic import ValidationError

from weather_lookup.config import get_settings
from weather_lookup.models.outcome import Error, ErrorKind, Outcome, Success
from weather_lookup.models.weather import WeatherSnapshot

logger = structlog.get_logger(__name__)

# Coordinate pattern: "lat, lon" or "lat,lon"
COORDINATE_PATTERN = re.compile(r"^(-?\d+\.?\d*)\s*,\s*(-?\d+\.?\d*)$")

# US state abbreviations for location normalization
US_STATE_CODES = {
    'AL', 'AK', 'AZ', 'AR', 'CA', 'CO', 'CT', 'DE', 'FL', 'GA',
    'HI', 'ID', 'IL', 'IN', 'IA', 'KS', 'KY', 'LA', 'ME', 'MD',
    'MA', 'MI', 'MN', 'MS', 'MO', 'MT', 'NE', 'NV', 'NH', 'NJ',
    'NM', 'NY', 'NC', 'ND', 'OH', 'OK', 'OR', 'PA', 'RI', 'SC',
    'SD', 'TN', 'TX', 'UT', 'VT', 'VA', 'WA', 'WV', 'WI', 'WY',
    'DC',  # District of Columbia
}


def _is_country_code(part: str) -> bool:
    return len(part) == 2 and part.isalpha()


def normalize_location_for_api(location: str) -> str:
    """Normalize a city name for the OpenWeatherMap ``q`` parameter.

    Geocoding suggestions come back as "City, Country" or
    "City, State, Country", where the last part is an ISO 3166 country code.
    The weather endpoint only understands a state for US cities:
    - "London, GB" → "London,GB"
    - "Buenos Aires, AR" → "Buenos Aires,AR"
    - "London, England, GB" → "London,GB"
    - "Austin, TX, US" → "Austin,TX,US"
    - "Austin, Texas, US" → "Austin,US"
    - "Toronto, Ontario" → "Toronto"
    """
    location = location.strip()

    parts = [p.strip() for p in location.split(',')]

    if len(parts) == 1:
        return parts[0]

    city, country = parts[0], parts[-1]
    if not _is_country_code(country):
        # Full region names are not accepted by the API
        return city

    country_upper = country.upper()
    if len(parts) == 3:
        state_upper = parts[1].upper()
        if country_upper == 'US' and state_upper in US_STATE_CODES:
            return f"{city},{state_upper},US"

    if len(parts) > 3:
        return city

    return f"{city},{country_upper}"


def parse_coordinates(location: str) -> tuple[float, float] | None:
    """Parse coordinates from location string.

    Returns (lat, lon) tuple if location is in coordinate format, None otherwise.
    """
    match = COORDINATE_PATTERN.match(location.strip())
    if match:
        return float(match.group(1)), float(match.group(2))
    return None


def classify_status(status_code: int, location: str = "") -> Error:
    """Map a non-2xx HTTP status to an Error outcome."""
    if status_code == 404:
        return Error(
            kind=ErrorKind.CITY_NOT_FOUND,
            message=f"City '{location}' not found",
            status_code=status_code,
        )
    if status_code == 401:
        return Error(
            kind=ErrorKind.INVALID_CREDENTIALS,
            message="Invalid API key",
            status_code=status_code,
        )
    return Error(
        kind=ErrorKind.SERVER_ERROR,
        message=f"API error: {status_code}",
        status_code=status_code,
    )


def classify_exception(exc: Exception) -> Error:
    """Map a transport or parsing exception to an Error outcome."""
    # TimeoutException is a TransportError subclass, so it is checked first
    if isinstance(exc, httpx.TimeoutException):
        return Error(kind=ErrorKind.TIMEOUT, message="Request timed out")
    if isinstance(exc, httpx.TransportError):
        return Error(kind=ErrorKind.NETWORK, message=f"Network error: {exc}")
    return Error(kind=ErrorKind.UNKNOWN, message=f"Unexpected error: {exc}")


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def _section(value) -> dict:
    return value if isinstance(value, dict) else {}


def parse_weather_payload(data: dict, display_name: Optional[str] = None) -> WeatherSnapshot:
    """Build a WeatherSnapshot from an OpenWeatherMap ``weather`` response.

    Expects metric units. Optional sections (``weather``, ``wind``, ``sys``)
    fall back to defaults when missing or of the wrong shape. Raises KeyError,
    TypeError or ValidationError when ``main`` or ``name`` is unusable.
    """
    main = data["main"]
    conditions = data.get("weather")
    weather = _section(conditions[0] if isinstance(conditions, list) and conditions else None)
    wind = _section(data.get("wind"))
    name = data["name"]
    country = _section(data.get("sys")).get("country") or ""

    description = weather.get("description")

    return WeatherSnapshot(
        display_name=display_name or (f"{name}, {country}" if country else name),
        city_name=name,
        temperature=int(main["temp"]),
        feels_like=int(main.get("feels_like", main["temp"])),
        condition=weather.get("main") or "Unknown",
        description=_capitalize_first(description) if description else "No description available",
        humidity=main.get("humidity", 0),
        wind_speed=wind.get("speed", 0.0),
        icon_code=weather.get("icon") or "01d",
    )


class WeatherService:
    """Service for fetching current weather from OpenWeatherMap.

    Every public method performs at most one HTTP request and returns an
    Outcome; transport failures never escape as exceptions.
    """

    def __init__(self):
        self.settings = get_settings()
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.weather_api_timeout)
            )
        return self._client

    async def close(self):
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _fetch(
        self,
        params: dict,
        location: str,
        display_name: Optional[str] = None,
    ) -> Outcome:
        """Call the current weather endpoint once and map the result.

        Args:
            params: Location query parameters (``q`` or ``lat``/``lon``)
            location: Human-readable location used in error messages
            display_name: Optional override for the snapshot display name

        Returns:
            Success with a WeatherSnapshot, or Error
        """
        if not self.settings.openweathermap_api_key:
            logger.error("weather_api_key_missing")
            return Error(kind=ErrorKind.INVALID_CREDENTIALS, message="Missing API key")

        url = f"{self.settings.weather_api_base_url}/weather"
        query = {
            **params,
            "units": self.settings.weather_api_units,
            "appid": self.settings.openweathermap_api_key,
        }

        try:
            client = await self._get_client()
            response = await client.get(url, params=query)
        except Exception as e:
            error = classify_exception(e)
            logger.warning(
                "weather_api_request_failed",
                location=location,
                kind=error.kind.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            return error

        if response.status_code == 404:
            logger.debug("weather_location_not_found", location=location)
            return classify_status(404, location)
        if response.status_code == 401:
            logger.error("weather_api_auth_error")
            return classify_status(401, location)
        if not 200 <= response.status_code < 300:
            logger.warning(
                "weather_api_server_error",
                location=location,
                status_code=response.status_code,
            )
            return classify_status(response.status_code, location)

        try:
            snapshot = parse_weather_payload(response.json(), display_name)
        except (ValueError, KeyError, TypeError, IndexError, AttributeError, ValidationError) as e:
            logger.error(
                "weather_parse_error",
                location=location,
                error=str(e),
                error_type=type(e).__name__,
            )
            return Error(kind=ErrorKind.UNKNOWN, message="Malformed weather response")

        logger.info(
            "weather_request_success",
            location=location,
            condition=snapshot.condition,
        )
        return Success(value=snapshot)

    async def fetch_by_name(
        self, name: str, display_name: Optional[str] = None
    ) -> Outcome:
        """Get current weather for a city name.

        Args:
            name: City name, optionally "City, State, Country"
            display_name: Full name to show instead of "<name>, <country>"

        Returns:
            Outcome wrapping a WeatherSnapshot
        """
        name = name.strip()
        return await self._fetch(
            {"q": normalize_location_for_api(name)}, name, display_name
        )

    async def fetch_by_coordinates(self, lat: float, lon: float) -> Outcome:
        """Get current weather for a coordinate pair."""
        location = f"Location at ({lat}, {lon})"
        return await self._fetch({"lat": lat, "lon": lon}, location)
