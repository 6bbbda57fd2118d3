"""Configuration settings for the watchface weather bridge."""

import os
from typing import Final, Optional
from dotenv import load_dotenv

load_dotenv()

# Weather provider
OPEN_METEO_URL: Final[str] = "https://api.open-meteo.com/v1/forecast"
CURRENT_FIELDS: Final[str] = "temperature_2m,weather_code"
HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

# Location fix bounds
LOCATION_TIMEOUT_MS: Final[int] = 15000
LOCATION_MAX_AGE_MS: Final[int] = 60000

# Position source. A place name wins over fixed coordinates when both are set.
LOCATION_LAT: Optional[float] = float(os.environ["LOCATION_LAT"]) if os.getenv("LOCATION_LAT") else None
LOCATION_LON: Optional[float] = float(os.environ["LOCATION_LON"]) if os.getenv("LOCATION_LON") else None
LOCATION_PLACE: Optional[str] = os.getenv("LOCATION_PLACE") or None
GEOCODING_USER_AGENT: str = os.getenv("GEOCODING_USER_AGENT", "watchface-bridge/0.1")

# Device gateway the app messages are pushed to
DEVICE_GATEWAY_URL: str = os.getenv("DEVICE_GATEWAY_URL", "http://localhost:9000/appmessage")

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()
