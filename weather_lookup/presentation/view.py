"""Text view that re-renders on every coordinator state change."""

from typing import Callable, Optional

from weather_lookup.models.state import CoordinatorState
from weather_lookup.presentation.formatters import render_state
from weather_lookup.services.coordinator import WeatherLookupCoordinator


class TextWeatherView:
    """Projects coordinator state to text and forwards user events."""

    def __init__(
        self,
        coordinator: WeatherLookupCoordinator,
        output: Optional[Callable[[str], None]] = None,
    ):
        self.coordinator = coordinator
        self._output = output
        self.rendered = ""
        self._unsubscribe = coordinator.store.subscribe(self._on_state)

    def _on_state(self, state: CoordinatorState) -> None:
        text = render_state(state)
        if text == self.rendered:
            return
        self.rendered = text
        if self._output:
            self._output(text)

    # User events

    def on_text_changed(self, text: str):
        return self.coordinator.update_city_input(text)

    def on_submit(self):
        return self.coordinator.submit_search()

    def on_suggestion_picked(self, display_name: str):
        return self.coordinator.select_suggestion(display_name)

    def on_error_dismissed(self) -> None:
        self.coordinator.clear_error()

    def close(self) -> None:
        self._unsubscribe()
