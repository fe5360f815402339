"""UI state exposed by the weather lookup coordinator."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from weather_lookup.models.weather import WeatherSnapshot


class CoordinatorState(BaseModel):
    """Immutable snapshot of the weather screen.

    A new fetch clears ``weather`` and ``error_message`` in the same update
    that sets ``is_fetching_weather``.
    """

    model_config = ConfigDict(frozen=True)

    city_input: str = ""
    selected_display_name: Optional[str] = Field(
        None, description="Full name of the picked suggestion, shown after a fetch"
    )
    suggestions: list[str] = Field(default_factory=list)
    is_searching_suggestions: bool = False
    has_completed_suggestion_search: bool = False
    is_fetching_weather: bool = False
    weather: Optional[WeatherSnapshot] = None
    error_message: Optional[str] = None

    @property
    def has_error(self) -> bool:
        return self.error_message is not None

    @property
    def has_weather_data(self) -> bool:
        return self.weather is not None

    @property
    def is_idle(self) -> bool:
        """No fetch running, no weather shown and no error shown."""
        return (
            not self.is_fetching_weather
            and self.weather is None
            and self.error_message is None
        )
