import pytest

from watchface_bridge.weather.conditions import CONDITION_TOKENS, map_code

EXPECTED_TABLE = {
    0: "CLEAR", 1: "CLEAR-", 2: "PRT_CLOUDY", 3: "OVERCAST",
    45: "FOG", 48: "FOG",
    51: "DRIZZLE-", 53: "DRIZZLE", 55: "DRIZZLE+",
    56: "FRZ_DRIZ-", 57: "FRZ_DRIZ+",
    61: "RAIN-", 63: "RAIN", 65: "RAIN+",
    66: "FRZ_RAIN-", 67: "FRZ_RAIN+",
    71: "SNOW-", 73: "SNOW", 75: "SNOW+", 77: "SNOW_GRAIN",
    80: "SHOWERS-", 81: "SHOWERS", 82: "SHOWERS+",
    85: "SNW_SHOWER-", 86: "SNW_SHOWER+",
    95: "THNDRSTRM", 96: "STORM_HAIL-", 99: "STORM_HAIL+",
}


def test_table_matches_device_icon_set():
    assert CONDITION_TOKENS == EXPECTED_TABLE


@pytest.mark.parametrize("code,token", sorted(EXPECTED_TABLE.items()))
def test_known_codes(code, token):
    assert map_code(code) == token


@pytest.mark.parametrize("code", [4, 44, 46, 50, 60, 100, 142])
def test_unknown_code_fallback(code):
    assert map_code(code) == f"UNKNOWN: {code}"


def test_mapping_is_total_over_wide_range():
    codes = list(range(-2000, 2000)) + [-(2 ** 63), 2 ** 63, 10 ** 30]
    for code in codes:
        token = map_code(code)
        if code in EXPECTED_TABLE:
            assert token == EXPECTED_TABLE[code]
        else:
            assert token == "UNKNOWN: " + str(code)


def test_negative_codes_are_not_padded():
    assert map_code(-7) == "UNKNOWN: -7"
