"""API endpoints for the watchface bridge."""

import json
import logging
from typing import Any

from fastapi import APIRouter, Request

from watchface_bridge.settings.form import Preferences, form_as_json
from watchface_bridge.triggers import AppMessageEvent, EventBus, ReadyEvent

logger = logging.getLogger(__name__)

router = APIRouter()


def get_event_bus(request: Request) -> EventBus:
    """Return the event bus attached to the running application."""
    return request.app.state.event_bus


def decode_payload(body: bytes) -> Any:
    """Decode a message body as JSON, falling back to its text."""
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return body.decode("utf-8", errors="replace")


@router.post("/events/ready", status_code=202, tags=["events"])
async def device_ready(request: Request) -> dict:
    """Signal that the device link is established.

    Returns:
        Acknowledgement; the weather update runs in the background
    """
    get_event_bus(request).emit(ReadyEvent())
    return {"status": "accepted"}


@router.post("/events/appmessage", status_code=202, tags=["events"])
async def device_app_message(request: Request) -> dict:
    """Forward an app message from the device.

    Any body is accepted, JSON or not; every message requests a refresh.

    Returns:
        Acknowledgement; the weather update runs in the background
    """
    payload = decode_payload(await request.body())
    get_event_bus(request).emit(AppMessageEvent(payload=payload))
    return {"status": "accepted"}


@router.get("/config", tags=["settings"])
async def get_config_form() -> list:
    """Watchface settings form definition."""
    return form_as_json()


@router.get("/config/preferences/defaults", tags=["settings"])
async def get_default_preferences() -> dict:
    """Default preferences as they are sent to the watch."""
    return Preferences().to_message()


@router.get("/health", tags=["health"])
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status response
    """
    return {"status": "healthy", "service": "watchface-bridge"}
