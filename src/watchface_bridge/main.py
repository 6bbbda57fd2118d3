"""FastAPI application for the watchface weather bridge."""

import logging
import traceback
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI

from watchface_bridge.api.endpoints import router
from watchface_bridge.config import HOST, PORT, DEBUG, DEVICE_GATEWAY_URL
from watchface_bridge.device.channel import HttpDeviceChannel
from watchface_bridge.device.dispatcher import DeviceMessageDispatcher
from watchface_bridge.location import build_location_provider
from watchface_bridge.logging_config import configure_logging
from watchface_bridge.triggers import EventBus, TriggerController
from watchface_bridge.weather.service import WeatherPipeline

logger = logging.getLogger(__name__)


def build_pipeline() -> WeatherPipeline:
    """Build a pipeline wired to the configured location source and device gateway."""
    logger.info(f"Delivering weather to device gateway at {DEVICE_GATEWAY_URL}")
    dispatcher = DeviceMessageDispatcher(HttpDeviceChannel())
    return WeatherPipeline(build_location_provider(), dispatcher)


def create_app(pipeline: Optional[WeatherPipeline] = None, bus: Optional[EventBus] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        pipeline: Pipeline to trigger (built from configuration if None)
        bus: Event bus to publish device events on (creates one if None)

    Returns:
        Configured FastAPI application instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        try:
            app.state.event_bus = bus or EventBus()
            app.state.pipeline = pipeline or build_pipeline()
            controller = TriggerController(app.state.event_bus, app.state.pipeline)
            controller.start()
            logger.info("Starting watchface weather bridge")
        except Exception as e:
            logger.error(f"Startup error: {e}")
            logger.error(traceback.format_exc())
            raise

        try:
            yield
        finally:
            logger.info("Shutting down watchface weather bridge")
            controller.stop()
            await app.state.event_bus.drain()
            if pipeline is None:
                await app.state.pipeline.aclose()
                channel = app.state.pipeline.dispatcher.channel
                if isinstance(channel, HttpDeviceChannel):
                    await channel.aclose()

    app = FastAPI(
        title="Watchface Weather Bridge",
        description="Pushes current Open-Meteo weather to a watchface",
        version="0.1.0",
        lifespan=lifespan
    )
    app.include_router(router)
    return app


# Create app instance for uvicorn
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    configure_logging()
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        app,
        host=HOST,
        port=PORT,
        log_level="info" if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()
