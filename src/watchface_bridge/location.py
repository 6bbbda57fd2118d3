"""Location provider adapter for the weather pipeline."""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional, Protocol, Tuple

from geopy.exc import GeocoderServiceError, GeocoderTimedOut, GeocoderUnavailable
from geopy.geocoders import Nominatim

from watchface_bridge.config import (
    GEOCODING_USER_AGENT, LOCATION_LAT, LOCATION_LON, LOCATION_PLACE
)
from watchface_bridge.errors import LocationUnavailable
from watchface_bridge.weather.models import Coordinates

logger = logging.getLogger(__name__)

PositionSource = Callable[[], Awaitable[Coordinates]]


class LocationProvider(Protocol):
    """Anything that can resolve the current device position."""

    async def get_current_location(self, timeout_ms: int, max_age_ms: int) -> Coordinates:
        ...


class StaticPositionSource:
    """Position source that always reports the same coordinates."""

    def __init__(self, latitude: float, longitude: float):
        self.coordinates = Coordinates(latitude=latitude, longitude=longitude)

    async def __call__(self) -> Coordinates:
        return self.coordinates


class GeocodedPositionSource:
    """Position source that resolves a place name with Nominatim."""

    def __init__(self, place: str, geolocator: Optional[Nominatim] = None):
        """Initialize the geocoded source.

        Args:
            place: Place name to resolve, e.g. "San Francisco"
            geolocator: Geocoder instance (creates a Nominatim client if None)
        """
        self.place = place
        self.geolocator = geolocator or Nominatim(user_agent=GEOCODING_USER_AGENT)

    async def __call__(self) -> Coordinates:
        # geopy is blocking; keep the event loop free
        lat, lon = await asyncio.to_thread(self._geocode)
        return Coordinates(latitude=lat, longitude=lon)

    def _geocode(self) -> Tuple[float, float]:
        try:
            logger.info(f"Geocoding place: {self.place}")
            location = self.geolocator.geocode(self.place)
        except (GeocoderUnavailable, GeocoderTimedOut, GeocoderServiceError) as e:
            logger.error(f"Geocoding service unavailable for '{self.place}': {e}")
            raise LocationUnavailable("Geocoding service temporarily unavailable") from e

        if not location:
            raise LocationUnavailable(f"Place '{self.place}' not found")

        logger.info(f"Geocoded '{self.place}' to ({location.latitude}, {location.longitude})")
        return location.latitude, location.longitude


class CachedLocationProvider:
    """Location provider with a bounded-age fix cache.

    A fix younger than ``max_age_ms`` is reused; otherwise the position
    source is asked for a new one within ``timeout_ms``.
    """

    def __init__(self, source: PositionSource, clock: Callable[[], float] = time.monotonic):
        self.source = source
        self.clock = clock
        self._last_fix: Optional[Tuple[Coordinates, float]] = None

    async def get_current_location(self, timeout_ms: int, max_age_ms: int) -> Coordinates:
        """Return the current position.

        Args:
            timeout_ms: Maximum time to wait for a new fix
            max_age_ms: Maximum age of a cached fix that may be returned

        Returns:
            Coordinates of the device

        Raises:
            LocationUnavailable: If the source fails or does not answer in time
        """
        if self._last_fix is not None:
            coords, fixed_at = self._last_fix
            age_ms = (self.clock() - fixed_at) * 1000
            if age_ms <= max_age_ms:
                logger.debug(f"Reusing cached location fix ({age_ms:.0f} ms old)")
                return coords

        try:
            coords = await asyncio.wait_for(self.source(), timeout=timeout_ms / 1000)
        except asyncio.TimeoutError as e:
            logger.error(f"Location fix timed out after {timeout_ms} ms")
            raise LocationUnavailable(f"Location fix timed out after {timeout_ms} ms") from e
        except LocationUnavailable:
            raise
        except Exception as e:
            logger.error(f"Error requesting location: {e}")
            raise LocationUnavailable(f"Error requesting location: {e}") from e

        self._last_fix = (coords, self.clock())
        logger.info("Got location")
        return coords


def build_location_provider() -> CachedLocationProvider:
    """Build the location provider described by configuration.

    Raises:
        ValueError: If neither a place nor coordinates are configured
    """
    if LOCATION_PLACE:
        return CachedLocationProvider(GeocodedPositionSource(LOCATION_PLACE))
    if LOCATION_LAT is not None and LOCATION_LON is not None:
        return CachedLocationProvider(StaticPositionSource(LOCATION_LAT, LOCATION_LON))
    raise ValueError("Set LOCATION_PLACE or both LOCATION_LAT and LOCATION_LON")
