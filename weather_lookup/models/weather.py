"""Weather and city data models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class WeatherSnapshot(BaseModel):
    """Current conditions for one city, as shown on the weather card."""

    model_config = ConfigDict(frozen=True)

    display_name: str = Field(..., description="City name with country (e.g., 'London, GB')")
    city_name: str = Field(..., description="Short city name from the provider")
    temperature: int = Field(..., description="Temperature in whole degrees Celsius")
    feels_like: int = Field(..., description="Feels like temperature in Celsius")
    condition: str = Field(..., description="Condition category (e.g., 'Clear', 'Rain')")
    description: str = Field(..., description="Sentence-cased condition description")
    humidity: int = Field(..., ge=0, le=100, description="Humidity percentage")
    wind_speed: float = Field(..., ge=0, description="Wind speed in m/s")
    icon_code: str = Field(..., description="Weather icon code from provider")


class CityMatch(BaseModel):
    """One hit from the geocoding API."""

    model_config = ConfigDict(frozen=True)

    name: str
    lat: float
    lon: float
    country: str
    state: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Format as 'City, State, Country' or 'City, Country'."""
        if self.state:
            return f"{self.name}, {self.state}, {self.country}"
        return f"{self.name}, {self.country}"
