"""Weather pipeline: location, fetch, map and deliver."""

import logging
from typing import Optional

from watchface_bridge.config import LOCATION_TIMEOUT_MS, LOCATION_MAX_AGE_MS
from watchface_bridge.device.dispatcher import DeviceMessageDispatcher
from watchface_bridge.errors import BridgeError
from watchface_bridge.location import LocationProvider
from watchface_bridge.weather.client import OpenMeteoClient
from watchface_bridge.weather.conditions import map_code
from watchface_bridge.weather.models import DeviceMessage

logger = logging.getLogger(__name__)


class WeatherPipeline:
    """Runs one weather update from device position to device message."""

    def __init__(
        self,
        location_provider: LocationProvider,
        dispatcher: DeviceMessageDispatcher,
        client: Optional[OpenMeteoClient] = None,
        timeout_ms: int = LOCATION_TIMEOUT_MS,
        max_age_ms: int = LOCATION_MAX_AGE_MS
    ):
        """Initialize the pipeline.

        Args:
            location_provider: Source of the device position
            dispatcher: Delivers the result to the device
            client: Weather client instance (creates default if None)
            timeout_ms: Location fix timeout
            max_age_ms: Maximum age of a reused location fix
        """
        self.location_provider = location_provider
        self.dispatcher = dispatcher
        self.client = client or OpenMeteoClient()
        self.timeout_ms = timeout_ms
        self.max_age_ms = max_age_ms

    async def run(self) -> Optional[DeviceMessage]:
        """Run the pipeline once.

        Stage failures end the run and are logged; nothing is raised to the
        caller and no partial message is sent.

        Returns:
            The delivered DeviceMessage, or None if any stage failed
        """
        logger.info("Getting location for weather")

        try:
            coords = await self.location_provider.get_current_location(
                self.timeout_ms, self.max_age_ms
            )
            reading = await self.client.fetch_weather(coords)
            token = map_code(reading.condition_code)
            return await self.dispatcher.send(reading, token)

        except BridgeError as e:
            logger.error(f"Weather update aborted ({type(e).__name__}): {e}")
            return None

    async def aclose(self):
        """Close the weather client."""
        if self.client:
            try:
                await self.client.aclose()
            except Exception as e:
                logger.error(f"Error closing weather client: {e}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
