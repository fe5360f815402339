"""Unit tests for weather, outcome and state models."""

import pytest
from pydantic import ValidationError

from weather_lookup.models.outcome import (
    Error,
    ErrorKind,
    Loading,
    Success,
    get_error_or_none,
    get_or_none,
    is_error,
    is_loading,
    is_success,
)
from weather_lookup.models.state import CoordinatorState
from weather_lookup.models.weather import CityMatch, WeatherSnapshot


def _snapshot(**overrides) -> WeatherSnapshot:
    fields = {
        "display_name": "Boston, US",
        "city_name": "Boston",
        "temperature": 22,
        "feels_like": 24,
        "condition": "Clouds",
        "description": "Broken clouds",
        "humidity": 65,
        "wind_speed": 4.5,
        "icon_code": "04d",
    }
    fields.update(overrides)
    return WeatherSnapshot(**fields)


class TestWeatherSnapshot:
    """Tests for WeatherSnapshot model."""

    def test_valid_snapshot(self):
        snapshot = _snapshot()
        assert snapshot.city_name == "Boston"
        assert snapshot.temperature == 22

    def test_humidity_must_be_valid_percentage(self):
        with pytest.raises(ValueError):
            _snapshot(humidity=150)

    def test_wind_speed_must_be_non_negative(self):
        with pytest.raises(ValueError):
            _snapshot(wind_speed=-1.0)

    def test_snapshot_is_immutable(self):
        snapshot = _snapshot()
        with pytest.raises(ValidationError):
            snapshot.temperature = 30


class TestCityMatch:
    """Tests for CityMatch display names."""

    def test_display_name_with_state(self):
        match = CityMatch(name="Springfield", lat=39.8, lon=-89.6, country="US", state="Illinois")
        assert match.display_name == "Springfield, Illinois, US"

    def test_display_name_without_state(self):
        match = CityMatch(name="London", lat=51.5, lon=-0.1, country="GB")
        assert match.display_name == "London, GB"

    def test_extra_fields_ignored(self):
        match = CityMatch(
            name="Paris", lat=48.8, lon=2.3, country="FR", local_names={"fr": "Paris"}
        )
        assert match.display_name == "Paris, FR"


class TestOutcome:
    """Tests for the outcome variants and helpers."""

    def test_success_helpers(self):
        outcome = Success(value=42)
        assert is_success(outcome)
        assert not is_error(outcome)
        assert get_or_none(outcome) == 42
        assert get_error_or_none(outcome) is None

    def test_error_helpers(self):
        outcome = Error(kind=ErrorKind.SERVER_ERROR, message="API error: 500", status_code=500)
        assert is_error(outcome)
        assert get_or_none(outcome) is None
        assert get_error_or_none(outcome).status_code == 500

    def test_loading_helpers(self):
        outcome = Loading()
        assert is_loading(outcome)
        assert get_or_none(outcome) is None
        assert get_error_or_none(outcome) is None

    def test_status_tags_are_distinct(self):
        assert {Loading().status, Success(value=1).status, Error(kind=ErrorKind.UNKNOWN).status} == {
            "loading",
            "success",
            "error",
        }


class TestCoordinatorState:
    """Tests for CoordinatorState derived flags."""

    def test_default_state_is_idle(self):
        state = CoordinatorState()
        assert state.is_idle is True
        assert state.has_error is False
        assert state.has_weather_data is False

    def test_fetching_is_not_idle(self):
        assert CoordinatorState(is_fetching_weather=True).is_idle is False

    def test_error_state(self):
        state = CoordinatorState(error_message="Request timed out. Please try again.")
        assert state.has_error is True
        assert state.is_idle is False

    def test_weather_state(self):
        state = CoordinatorState(weather=_snapshot())
        assert state.has_weather_data is True
        assert state.is_idle is False
