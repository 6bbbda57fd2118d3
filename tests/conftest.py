"""Shared fakes for the weather pipeline tests."""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from watchface_bridge.device.channel import InMemoryDeviceChannel
from watchface_bridge.device.dispatcher import DeviceMessageDispatcher
from watchface_bridge.errors import LocationUnavailable
from watchface_bridge.weather.client import OpenMeteoClient
from watchface_bridge.weather.models import Coordinates
from watchface_bridge.weather.service import WeatherPipeline


class FakeLocationProvider:
    """Location provider that answers with fixed coordinates or fails."""

    def __init__(self, coords: Optional[Coordinates] = None, fail: bool = False):
        self.coords = coords or Coordinates(latitude=37.77, longitude=-122.42)
        self.fail = fail
        self.calls: List[Tuple[int, int]] = []

    async def get_current_location(self, timeout_ms: int, max_age_ms: int) -> Coordinates:
        self.calls.append((timeout_ms, max_age_ms))
        if self.fail:
            raise LocationUnavailable("permission denied")
        return self.coords


def open_meteo_body(temperature: Any, code: Any) -> Dict[str, Any]:
    return {
        "latitude": 37.77,
        "longitude": -122.42,
        "current_units": {"temperature_2m": "°C", "weather_code": "wmo code"},
        "current": {"time": "2026-10-19T12:00", "interval": 900, "temperature_2m": temperature, "weather_code": code},
    }


def make_client(handler: Callable[[httpx.Request], httpx.Response]) -> OpenMeteoClient:
    return OpenMeteoClient(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class RecordingHandler:
    """MockTransport handler that returns a canned response and keeps requests."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # httpx binds a response to its request; build one per call
        return httpx.Response(
            self.response.status_code,
            headers=self.response.headers,
            content=self.response.content,
        )


@pytest.fixture
def channel() -> InMemoryDeviceChannel:
    return InMemoryDeviceChannel()


@pytest.fixture
def build_pipeline(channel):
    """Factory for a pipeline backed by fakes and a canned provider body."""

    def _build(
        body: Any = None,
        location: Optional[FakeLocationProvider] = None,
        **kwargs
    ) -> WeatherPipeline:
        if isinstance(body, httpx.Response):
            response = body
        else:
            response = httpx.Response(200, json=body if body is not None else open_meteo_body(18.4, 3))
        return WeatherPipeline(
            location or FakeLocationProvider(),
            DeviceMessageDispatcher(channel),
            client=make_client(RecordingHandler(response)),
            **kwargs
        )

    return _build


def decoded_json(request: httpx.Request) -> Any:
    return json.loads(request.content)
