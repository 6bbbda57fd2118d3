"""Outbound app-message channels to the watchface."""

import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx

from watchface_bridge.config import DEVICE_GATEWAY_URL, HTTP_TIMEOUT_SECONDS
from watchface_bridge.errors import DeliveryFailed

logger = logging.getLogger(__name__)


class DeviceChannel(Protocol):
    """Transport that delivers a flat key-value dictionary to the device."""

    async def send_app_message(self, message: Dict[str, Any]) -> None:
        ...


class HttpDeviceChannel:
    """Channel that posts app messages as JSON to a device gateway."""

    def __init__(
        self,
        gateway_url: str = DEVICE_GATEWAY_URL,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.gateway_url = gateway_url
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def send_app_message(self, message: Dict[str, Any]) -> None:
        """Deliver one app message.

        Raises:
            DeliveryFailed: If the gateway is unreachable or rejects the message
        """
        try:
            response = await self.client.post(self.gateway_url, json=message)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DeliveryFailed(f"Gateway rejected message: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise DeliveryFailed(f"Gateway unreachable: {e}") from e

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()


class InMemoryDeviceChannel:
    """Channel that records messages instead of sending them."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: List[Dict[str, Any]] = []

    async def send_app_message(self, message: Dict[str, Any]) -> None:
        if self.fail:
            raise DeliveryFailed("Device did not acknowledge message")
        self.sent.append(dict(message))
