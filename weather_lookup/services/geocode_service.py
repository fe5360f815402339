"""City search for autocomplete using the OpenWeatherMap Geocoding API."""

import httpx
import structlog
from pydantic import ValidationError

from weather_lookup.config import get_settings
from weather_lookup.models.outcome import Error, ErrorKind, Outcome, Success
from weather_lookup.models.weather import CityMatch
from weather_lookup.services.weather_service import classify_exception, classify_status

logger = structlog.get_logger(__name__)


class GeocodeService:
    """Service for searching city names."""

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

    async def search_places(self, query: str, limit: int = 5) -> Outcome:
        """Search for cities matching a query.

        Args:
            query: Partial or full city name
            limit: Maximum number of matches the API should return

        Returns:
            Success with a list of CityMatch (possibly empty), or Error
        """
        if not query or not query.strip():
            return Success(value=[])

        if not self.settings.openweathermap_api_key:
            logger.error("geocode_api_key_missing")
            return Error(kind=ErrorKind.INVALID_CREDENTIALS, message="Missing API key")

        url = f"{self.settings.geocode_api_base_url}/direct"
        params = {
            "q": query,
            "limit": limit,
            "appid": self.settings.openweathermap_api_key,
        }

        try:
            client = await self._get_client()
            response = await client.get(url, params=params)
        except Exception as e:
            error = classify_exception(e)
            logger.warning(
                "geocode_request_failed",
                query=query,
                kind=error.kind.value,
                error_type=type(e).__name__,
            )
            return error

        if response.status_code == 429:
            logger.warning("geocode_rate_limited", query=query)
            return Error(
                kind=ErrorKind.SERVER_ERROR,
                message="Rate limit exceeded",
                status_code=429,
            )
        if not 200 <= response.status_code < 300:
            logger.warning(
                "geocode_api_error",
                query=query,
                status_code=response.status_code,
            )
            return classify_status(response.status_code, query)

        try:
            matches = [CityMatch(**item) for item in response.json() or []]
        except (ValueError, TypeError, ValidationError) as e:
            logger.error(
                "geocode_parse_error",
                query=query,
                error=str(e),
                error_type=type(e).__name__,
            )
            return Error(kind=ErrorKind.UNKNOWN, message="Malformed geocoding response")

        logger.debug("geocode_search_success", query=query, count=len(matches))
        return Success(value=matches)

    async def search(self, query: str, limit: int = 10) -> list[str]:
        """Search for city display names, degrading to an empty list.

        Any error, including an unexpected exception, yields ``[]`` so that
        autocomplete never surfaces a failure.
        """
        if not query or not query.strip():
            return []

        try:
            result = await self.search_places(query, limit=limit)
        except Exception as e:
            logger.error(
                "city_search_failed",
                query=query,
                error=str(e),
                error_type=type(e).__name__,
            )
            return []

        if isinstance(result, Success):
            return [match.display_name for match in result.value]
        return []
