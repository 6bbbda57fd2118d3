"""HTTP client for the Open-Meteo forecast API."""

import logging
import math
from typing import Optional

import httpx
from pydantic import ValidationError

from watchface_bridge.config import OPEN_METEO_URL, CURRENT_FIELDS, HTTP_TIMEOUT_SECONDS
from watchface_bridge.errors import FetchFailed
from watchface_bridge.weather.models import Coordinates, OpenMeteoCurrentResponse, WeatherReading

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going towards positive infinity.

    20.5 -> 21, -0.5 -> 0, -1.5 -> -1.
    """
    # value + 0.5 is inexact near the half point and above 2**52
    whole = math.floor(value)
    return int(whole) + (1 if value - whole >= 0.5 else 0)


class OpenMeteoClient:
    """Async client for fetching current conditions from Open-Meteo."""

    def __init__(
        self,
        base_url: str = OPEN_METEO_URL,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize the weather client.

        Args:
            base_url: Forecast endpoint URL
            timeout: Transport timeout in seconds
            client: Optional preconfigured httpx client (e.g. with a mock transport)
        """
        self.base_url = base_url
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def fetch_weather(self, coords: Coordinates) -> WeatherReading:
        """Fetch current temperature and weather code for a position.

        The response status is not inspected; any body that carries the
        expected fields is accepted.

        Args:
            coords: Position to fetch weather for

        Returns:
            WeatherReading with rounded temperature and integer weather code

        Raises:
            FetchFailed: On transport errors, non-JSON bodies or missing fields
        """
        params = {
            "latitude": coords.latitude,
            "longitude": coords.longitude,
            "current": CURRENT_FIELDS,
        }

        logger.info(f"Fetching weather for latitude={coords.latitude}, longitude={coords.longitude}")

        try:
            response = await self.client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Request error to Open-Meteo API: {e}")
            raise FetchFailed(f"Request to weather provider failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Non-JSON body from Open-Meteo API (status {response.status_code})")
            raise FetchFailed("Weather provider returned a non-JSON body") from e

        try:
            parsed = OpenMeteoCurrentResponse.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid API response format: {e}")
            raise FetchFailed(f"Invalid weather response format: {e}") from e

        try:
            reading = WeatherReading(
                temperature_celsius=round_half_up(parsed.current.temperature_2m),
                condition_code=int(parsed.current.weather_code)
            )
        except (ValueError, OverflowError) as e:
            logger.error(f"Unusable values in weather response: {e}")
            raise FetchFailed(f"Unusable values in weather response: {e}") from e

        logger.info(
            f"Fetched weather: {reading.temperature_celsius}C, code {reading.condition_code}"
        )
        return reading

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
