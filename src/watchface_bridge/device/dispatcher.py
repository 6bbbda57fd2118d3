"""Delivery of weather readings to the watchface."""

import logging

from watchface_bridge.device.channel import DeviceChannel
from watchface_bridge.errors import DeliveryFailed
from watchface_bridge.weather.models import DeviceMessage, WeatherReading

logger = logging.getLogger(__name__)


class DeviceMessageDispatcher:
    """Builds the device message and hands it to the channel exactly once."""

    def __init__(self, channel: DeviceChannel):
        self.channel = channel

    async def send(self, reading: WeatherReading, token: str) -> DeviceMessage:
        """Send a reading and its condition token to the device.

        Args:
            reading: Parsed weather reading
            token: Condition token for the reading's weather code

        Returns:
            The delivered DeviceMessage

        Raises:
            DeliveryFailed: If the channel reports a failed delivery
        """
        message = DeviceMessage(TEMPERATURE=reading.temperature_celsius, CONDITIONS=token)

        try:
            await self.channel.send_app_message(message.to_dict())
        except DeliveryFailed as e:
            logger.error(f"Error sending weather to device: {e}")
            raise

        logger.info(f"Weather sent to device: {message.to_dict()}")
        return message
