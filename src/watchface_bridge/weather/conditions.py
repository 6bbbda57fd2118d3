"""Translation of provider weather codes into watchface condition tokens."""

from typing import Dict, Final

# Tokens are matched by the watchface icon set; keep the table verbatim.
CONDITION_TOKENS: Final[Dict[int, str]] = {
    0: "CLEAR",
    1: "CLEAR-",
    2: "PRT_CLOUDY",
    3: "OVERCAST",
    45: "FOG",
    48: "FOG",
    51: "DRIZZLE-",
    53: "DRIZZLE",
    55: "DRIZZLE+",
    56: "FRZ_DRIZ-",
    57: "FRZ_DRIZ+",
    61: "RAIN-",
    63: "RAIN",
    65: "RAIN+",
    66: "FRZ_RAIN-",
    67: "FRZ_RAIN+",
    71: "SNOW-",
    73: "SNOW",
    75: "SNOW+",
    77: "SNOW_GRAIN",
    80: "SHOWERS-",
    81: "SHOWERS",
    82: "SHOWERS+",
    85: "SNW_SHOWER-",
    86: "SNW_SHOWER+",
    95: "THNDRSTRM",
    96: "STORM_HAIL-",
    99: "STORM_HAIL+",
}


def map_code(code: int) -> str:
    """Map a weather code to its condition token.

    Codes missing from the table yield ``"UNKNOWN: <code>"``.
    """
    token = CONDITION_TOKENS.get(code)
    if token is None:
        return f"UNKNOWN: {code}"
    return token
