"""Text presentation of the weather screen."""

from weather_lookup.presentation.formatters import render_state
from weather_lookup.presentation.view import TextWeatherView

__all__ = ["TextWeatherView", "render_state"]
