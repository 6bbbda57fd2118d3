"""Data models for the weather pipeline."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """Device position for a single pipeline run."""
    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")


class WeatherReading(BaseModel):
    """Current conditions parsed from the provider."""
    temperature_celsius: int = Field(..., description="Temperature in Celsius, rounded")
    condition_code: int = Field(..., description="Provider weather code")


class DeviceMessage(BaseModel):
    """App message pushed to the watchface."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    temperature: int = Field(..., alias="TEMPERATURE", description="Temperature in Celsius")
    conditions: str = Field(..., alias="CONDITIONS", description="Condition token")

    def to_dict(self) -> Dict[str, Any]:
        """Return the message as the flat key-value dictionary the device expects."""
        return self.model_dump(by_alias=True)


class OpenMeteoCurrent(BaseModel):
    """The ``current`` block of an Open-Meteo forecast response."""
    temperature_2m: float = Field(..., description="Air temperature at 2 m in Celsius")
    weather_code: float = Field(..., description="WMO weather interpretation code")


class OpenMeteoCurrentResponse(BaseModel):
    """Raw response from the Open-Meteo forecast API."""
    current: OpenMeteoCurrent = Field(..., description="Current conditions")
