"""Weather lookup coordinator: debounced city autocomplete and weather fetch.

Owns the CoordinatorState shown by the weather screen. Every mutation goes
through one of the public event methods below; the view only subscribes to
``store``.
"""

import asyncio
from typing import Optional

import structlog

from weather_lookup.config import get_settings
from weather_lookup.models.outcome import Error, ErrorKind, Success
from weather_lookup.models.state import CoordinatorState
from weather_lookup.services.geocode_service import GeocodeService
from weather_lookup.services.state_store import StateStore
from weather_lookup.services.weather_service import WeatherService, parse_coordinates

logger = structlog.get_logger(__name__)

EMPTY_CITY_MESSAGE = "Please enter a city name"
GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."

ERROR_MESSAGES = {
    ErrorKind.CITY_NOT_FOUND: "City not found. Please check the city name and try again.",
    ErrorKind.NETWORK: "Network error. Please check your internet connection.",
    ErrorKind.INVALID_CREDENTIALS: "API configuration error. Please contact support.",
    ErrorKind.TIMEOUT: "Request timed out. Please try again.",
    ErrorKind.SERVER_ERROR: GENERIC_ERROR_MESSAGE,
    ErrorKind.UNKNOWN: GENERIC_ERROR_MESSAGE,
}


def message_for(kind: ErrorKind) -> str:
    """User-facing message for an error kind."""
    return ERROR_MESSAGES[kind]


class WeatherLookupCoordinator:
    """View-model for the weather screen.

    Suggestion searches are debounced and the previous one is cancelled on
    every keystroke. Weather fetches are never cancelled by a newer fetch,
    but only the most recently started one may write its result.
    """

    def __init__(
        self,
        weather_service: WeatherService,
        geocode_service: GeocodeService,
        debounce_seconds: Optional[float] = None,
        min_query_length: Optional[int] = None,
        suggestion_limit: Optional[int] = None,
    ):
        settings = get_settings()
        self.weather_service = weather_service
        self.geocode_service = geocode_service
        self.debounce_seconds = (
            settings.suggestion_debounce_seconds
            if debounce_seconds is None
            else debounce_seconds
        )
        self.min_query_length = (
            settings.suggestion_min_query_length
            if min_query_length is None
            else min_query_length
        )
        self.suggestion_limit = (
            settings.suggestion_limit if suggestion_limit is None else suggestion_limit
        )

        self.store = StateStore()
        self._search_task: Optional[asyncio.Task] = None
        self._fetch_task: Optional[asyncio.Task] = None
        self._search_generation = 0
        self._fetch_generation = 0

    @property
    def state(self) -> CoordinatorState:
        return self.store.value

    # City input and suggestions

    def update_city_input(self, text: str) -> Optional[asyncio.Task]:
        """Record typed text and schedule a debounced city search.

        Returns the scheduled search task, or None when the input is too
        short to search.
        """
        selected = self.state.selected_display_name
        self.store.update(
            city_input=text,
            # A picked suggestion's name only applies while its text is unedited
            selected_display_name=selected if text == selected else None,
        )
        self._cancel_search()

        if text.strip() and len(text) >= self.min_query_length:
            self.store.update(is_searching_suggestions=True)
            generation = self._search_generation
            self._search_task = asyncio.get_running_loop().create_task(
                self._debounced_search(text, generation)
            )
            return self._search_task

        self.store.update(
            suggestions=[],
            has_completed_suggestion_search=False,
            is_searching_suggestions=False,
        )
        return None

    async def _debounced_search(self, query: str, generation: int) -> None:
        await asyncio.sleep(self.debounce_seconds)

        try:
            suggestions = await self.geocode_service.search(query, self.suggestion_limit)
        except Exception as e:
            logger.warning(
                "city_search_failed",
                query=query,
                error=str(e),
                error_type=type(e).__name__,
            )
            suggestions = []

        if generation != self._search_generation:
            logger.debug("city_search_discarded", query=query)
            return

        self.store.update(
            suggestions=list(suggestions),
            is_searching_suggestions=False,
            has_completed_suggestion_search=True,
        )
        logger.debug("city_search_completed", query=query, count=len(suggestions))

    def _cancel_search(self) -> None:
        self._search_generation += 1
        if self._search_task and not self._search_task.done():
            self._search_task.cancel()
        self._search_task = None

    def select_suggestion(self, display_name: str) -> asyncio.Task:
        """Pick a suggestion and fetch its weather right away."""
        self._cancel_search()
        self.store.update(
            city_input=display_name,
            selected_display_name=display_name,
            suggestions=[],
            error_message=None,
            has_completed_suggestion_search=False,
            is_searching_suggestions=False,
        )
        return self._start_fetch(display_name, display_name)

    def clear_suggestions(self) -> None:
        self.store.update(suggestions=[])

    # Weather

    def submit_search(self) -> Optional[asyncio.Task]:
        """Fetch weather for the current input.

        Returns the fetch task, or None when the input is blank and only a
        validation message was set.
        """
        city_name = self.state.city_input.strip()
        if not city_name:
            self.store.update(error_message=EMPTY_CITY_MESSAGE)
            return None

        return self._start_fetch(city_name, self.state.selected_display_name)

    def _start_fetch(self, city_name: str, display_name: Optional[str]) -> asyncio.Task:
        self._fetch_generation += 1
        generation = self._fetch_generation
        self.store.update(is_fetching_weather=True, error_message=None, weather=None)
        logger.info("weather_fetch_started", city=city_name, generation=generation)

        self._fetch_task = asyncio.get_running_loop().create_task(
            self._fetch_weather(city_name, display_name, generation)
        )
        return self._fetch_task

    async def _fetch_weather(
        self, city_name: str, display_name: Optional[str], generation: int
    ) -> None:
        try:
            coords = parse_coordinates(city_name)
            if coords:
                result = await self.weather_service.fetch_by_coordinates(*coords)
            else:
                result = await self.weather_service.fetch_by_name(city_name, display_name)
        except Exception as e:
            logger.error(
                "weather_fetch_unexpected_error",
                city=city_name,
                error=str(e),
                error_type=type(e).__name__,
            )
            result = Error(kind=ErrorKind.UNKNOWN, message=str(e))

        if generation != self._fetch_generation:
            logger.debug("weather_fetch_discarded", city=city_name, generation=generation)
            return

        if isinstance(result, Success):
            self.store.update(
                is_fetching_weather=False, weather=result.value, error_message=None
            )
            logger.info("weather_fetch_succeeded", city=city_name)
        elif isinstance(result, Error):
            self.store.update(
                is_fetching_weather=False,
                weather=None,
                error_message=message_for(result.kind),
            )
            logger.info("weather_fetch_failed", city=city_name, kind=result.kind.value)
        else:
            logger.error("weather_fetch_unexpected_result", city=city_name, result=repr(result))
            self.store.update(
                is_fetching_weather=False,
                weather=None,
                error_message=GENERIC_ERROR_MESSAGE,
            )

    def clear_error(self) -> None:
        self.store.update(error_message=None)

    # Lifecycle

    def reset_all(self) -> None:
        """Cancel pending work and return to the initial state."""
        self._cancel_search()
        self._fetch_generation += 1
        if self._fetch_task and not self._fetch_task.done():
            self._fetch_task.cancel()
        self._fetch_task = None
        self.store.set(CoordinatorState())

    async def aclose(self) -> None:
        """Cancel pending work and close both HTTP clients."""
        self.reset_all()
        await self.weather_service.close()
        await self.geocode_service.close()
