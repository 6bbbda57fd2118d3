"""Watchface settings form definition and preference handling."""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CUSTOM_TEXT = "PBL_%m%U%j"
CUSTOM_TEXT_LIMIT = 16

TOP_TEXT_SELECT_ID = "top-text-select"
TOP_TEXT_INPUT_ID = "top-text-input"

PREFERENCE_KEYS = (
    "PREF_SHOW_STEPS",
    "PREF_SHOW_WEATHER",
    "PREF_WEATHER_METRIC",
    "PREF_HOUR_VIBE",
    "PREF_DISCONNECT_ALERT",
    "PREF_CUSTOM_TEXT",
)

STRFTIME_HELP = (
    "Text can be formatted with the current time by following the "
    "<a href=\"https://man7.org/linux/man-pages/man3/strftime.3.html\">strftime(3) manpage</a>. "
    "Some common examples:<ul><li>%b - abbreviated month name</li><li>%B - full month name</li>"
    "<li>%j - day of the year</li><li>%m - month</li><li>%u - day of the week as a number</li>"
    "<li>%U - week number</li><li>%y - two digit year</li><li>%Y - full year</li></ul>"
)


class _FormModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Heading(_FormModel):
    type: Literal["heading"] = "heading"
    default_value: str = Field(..., alias="defaultValue")


class Text(_FormModel):
    type: Literal["text"] = "text"
    default_value: str = Field(..., alias="defaultValue")


class Toggle(_FormModel):
    type: Literal["toggle"] = "toggle"
    message_key: str = Field(..., alias="messageKey")
    label: str
    default_value: bool = Field(..., alias="defaultValue")


class SelectOption(_FormModel):
    value: str
    label: str


class Select(_FormModel):
    type: Literal["select"] = "select"
    id: str
    label: str
    default_value: str = Field("", alias="defaultValue")
    options: List[SelectOption]


class Input(_FormModel):
    type: Literal["input"] = "input"
    id: Optional[str] = None
    message_key: str = Field(..., alias="messageKey")
    label: str
    default_value: str = Field("", alias="defaultValue")
    attributes: Dict[str, Any] = Field(default_factory=dict)


class Submit(_FormModel):
    type: Literal["submit"] = "submit"
    default_value: str = Field(..., alias="defaultValue")


class Section(_FormModel):
    type: Literal["section"] = "section"
    capabilities: Optional[List[str]] = None
    items: List[Union[Heading, Text, Toggle, Select, Input]]


FormItem = Union[Heading, Section, Submit]

TOP_TEXT_PRESETS: List[SelectOption] = [
    SelectOption(value="", label="None"),
    SelectOption(value=DEFAULT_CUSTOM_TEXT, label="Default: Month, week number, and day of year"),
    SelectOption(value="%Y_%b", label="Year and short month"),
    SelectOption(value="%B", label="Full month"),
    SelectOption(value="%G_%V", label="ISO 8601 year and week number"),
]


def build_config_form() -> List[FormItem]:
    """Build the watchface configuration form."""
    return [
        Heading(default_value="2077"),
        Section(
            capabilities=["HEALTH"],
            items=[
                Heading(default_value="Health"),
                Toggle(message_key="PREF_SHOW_STEPS", label="Show step count", default_value=True),
            ],
        ),
        Section(items=[
            Heading(default_value="Weather"),
            Text(default_value="Weather data is sourced from Open-Meteo. "
                               "Location is determined automatically using your device location."),
            Toggle(message_key="PREF_SHOW_WEATHER", label="Show current weather", default_value=True),
            Toggle(message_key="PREF_WEATHER_METRIC", label="Use metric units (Celsius)", default_value=True),
        ]),
        Section(items=[
            Heading(default_value="Alerts"),
            Toggle(message_key="PREF_HOUR_VIBE", label="Hourly vibration", default_value=False),
            Toggle(message_key="PREF_DISCONNECT_ALERT", label="Disconnect alert", default_value=True),
        ]),
        Section(items=[
            Heading(default_value="Top Text Customization"),
            Select(id=TOP_TEXT_SELECT_ID, label="Presets", default_value="", options=TOP_TEXT_PRESETS),
            Input(
                id=TOP_TEXT_INPUT_ID,
                message_key="PREF_CUSTOM_TEXT",
                label="Text",
                default_value=DEFAULT_CUSTOM_TEXT,
                attributes={"limit": CUSTOM_TEXT_LIMIT},
            ),
            Text(default_value=STRFTIME_HELP),
        ]),
        Submit(default_value="Save"),
    ]


def form_as_json() -> List[Dict[str, Any]]:
    """Serialize the form with the field names the settings page expects."""
    return [item.model_dump(by_alias=True, exclude_none=True) for item in build_config_form()]


def apply_preset_link(values: Dict[str, Any], selected: str) -> Dict[str, Any]:
    """Apply a preset selection to the form values.

    Selecting a preset overwrites the text field. The link is one-way:
    edits to the text field never touch the selector.

    Args:
        values: Current form values keyed by item id
        selected: Newly selected preset value

    Returns:
        Updated copy of the form values
    """
    updated = dict(values)
    updated[TOP_TEXT_SELECT_ID] = selected
    updated[TOP_TEXT_INPUT_ID] = selected
    return updated


class Preferences(_FormModel):
    """User preferences as delivered to the watchface."""
    show_steps: bool = Field(True, alias="PREF_SHOW_STEPS")
    show_weather: bool = Field(True, alias="PREF_SHOW_WEATHER")
    # Unit conversion is done on the watch; the bridge always sends Celsius
    weather_metric: bool = Field(True, alias="PREF_WEATHER_METRIC")
    hour_vibe: bool = Field(False, alias="PREF_HOUR_VIBE")
    disconnect_alert: bool = Field(True, alias="PREF_DISCONNECT_ALERT")
    custom_text: str = Field(DEFAULT_CUSTOM_TEXT, alias="PREF_CUSTOM_TEXT", max_length=CUSTOM_TEXT_LIMIT)

    def to_message(self) -> Dict[str, Any]:
        """Return preferences as an app message, booleans encoded as 0/1."""
        message = self.model_dump(by_alias=True)
        return {key: int(value) if isinstance(value, bool) else value for key, value in message.items()}
