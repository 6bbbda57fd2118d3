"""Event subscription and the triggers that start weather updates."""

import asyncio
import logging
from collections import defaultdict
from typing import Any, Awaitable, Callable, DefaultDict, List, Set, Type

from pydantic import BaseModel, Field

from watchface_bridge.weather.service import WeatherPipeline

logger = logging.getLogger(__name__)


class DeviceEvent(BaseModel):
    """Base class for events coming from the device link."""
    pass


class ReadyEvent(DeviceEvent):
    """The device/companion link is established."""
    pass


class AppMessageEvent(DeviceEvent):
    """The device sent an app message."""
    payload: Any = Field(None, description="Message contents, as sent by the device")


Handler = Callable[[DeviceEvent], Awaitable[Any]]


class EventBus:
    """Dispatches events to subscribed async handlers.

    Each handler runs in its own task; emitting never waits for handlers,
    and handlers of one event do not block those of another.
    """

    def __init__(self):
        self._handlers: DefaultDict[Type[DeviceEvent], List[Handler]] = defaultdict(list)
        self._tasks: Set[asyncio.Task] = set()

    def subscribe(self, event_type: Type[DeviceEvent], handler: Handler) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: Type[DeviceEvent], handler: Handler) -> None:
        if handler in self._handlers[event_type]:
            self._handlers[event_type].remove(handler)

    def emit(self, event: DeviceEvent) -> List[asyncio.Task]:
        """Schedule every handler for the event. Must be called from a running loop.

        Returns:
            The scheduled handler tasks
        """
        handlers = list(self._handlers[type(event)])
        logger.debug(f"Emitting {type(event).__name__} to {len(handlers)} handler(s)")

        tasks = []
        for handler in handlers:
            task = asyncio.create_task(handler(event))
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)
            tasks.append(task)
        return tasks

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Event handler failed: {task.exception()!r}")

    async def drain(self) -> None:
        """Wait for all in-flight handler tasks."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


class TriggerController:
    """Starts a pipeline run on every ready or app-message event."""

    def __init__(self, bus: EventBus, pipeline: WeatherPipeline):
        self.bus = bus
        self.pipeline = pipeline

    def start(self) -> None:
        self.bus.subscribe(ReadyEvent, self._on_event)
        self.bus.subscribe(AppMessageEvent, self._on_event)
        logger.info("Weather triggers registered")

    def stop(self) -> None:
        """Stop reacting to events. Runs already in flight finish normally."""
        self.bus.unsubscribe(ReadyEvent, self._on_event)
        self.bus.unsubscribe(AppMessageEvent, self._on_event)

    async def _on_event(self, event: DeviceEvent) -> None:
        # Any app message requests a refresh; the payload is not inspected
        logger.info(f"{type(event).__name__} received, updating weather")
        await self.pipeline.run()
