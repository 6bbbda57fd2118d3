import asyncio

from conftest import FakeLocationProvider, open_meteo_body
from watchface_bridge.location import CachedLocationProvider, StaticPositionSource
from watchface_bridge.triggers import AppMessageEvent, EventBus, ReadyEvent, TriggerController


class CountingPipeline:
    def __init__(self):
        self.runs = 0

    async def run(self):
        self.runs += 1


def test_ready_and_app_message_both_trigger_runs():
    bus = EventBus()
    pipeline = CountingPipeline()
    TriggerController(bus, pipeline).start()

    async def _run():
        bus.emit(ReadyEvent())
        bus.emit(AppMessageEvent(payload={"REQUEST": 1}))
        bus.emit(AppMessageEvent())
        await bus.drain()

    asyncio.run(_run())

    assert pipeline.runs == 3


def test_emit_returns_without_waiting_for_handlers():
    bus = EventBus()

    async def _run():
        release = asyncio.Event()

        async def slow_handler(event):
            await release.wait()

        bus.subscribe(ReadyEvent, slow_handler)
        tasks = bus.emit(ReadyEvent())
        assert len(tasks) == 1
        assert not tasks[0].done()
        release.set()
        await bus.drain()
        return tasks[0]

    task = asyncio.run(_run())
    assert task.done()


def test_stopped_controller_ignores_events():
    bus = EventBus()
    pipeline = CountingPipeline()
    controller = TriggerController(bus, pipeline)
    controller.start()
    controller.stop()

    async def _run():
        assert bus.emit(ReadyEvent()) == []

    asyncio.run(_run())

    assert pipeline.runs == 0


def test_failing_handler_does_not_affect_others(caplog):
    bus = EventBus()
    pipeline = CountingPipeline()

    async def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(ReadyEvent, broken)
    TriggerController(bus, pipeline).start()

    async def _run():
        bus.emit(ReadyEvent())
        await bus.drain()

    asyncio.run(_run())

    assert pipeline.runs == 1
    assert "Event handler failed" in caplog.text


def test_events_in_same_tick_deliver_two_messages(build_pipeline, channel):
    async def slow_fix():
        await asyncio.sleep(0.01)
        return await StaticPositionSource(37.77, -122.42)()

    pipeline = build_pipeline(open_meteo_body(18.4, 3), location=CachedLocationProvider(slow_fix))
    bus = EventBus()
    TriggerController(bus, pipeline).start()

    async def _run():
        bus.emit(ReadyEvent())
        bus.emit(AppMessageEvent(payload={"anything": "ignored"}))
        await bus.drain()

    asyncio.run(_run())

    assert channel.sent == [
        {"TEMPERATURE": 18, "CONDITIONS": "OVERCAST"},
        {"TEMPERATURE": 18, "CONDITIONS": "OVERCAST"},
    ]


def test_failed_run_leaves_later_runs_unaffected(build_pipeline, channel):
    location = FakeLocationProvider(fail=True)
    pipeline = build_pipeline(open_meteo_body(3.0, 45), location=location)
    bus = EventBus()
    TriggerController(bus, pipeline).start()

    async def _run():
        bus.emit(ReadyEvent())
        await bus.drain()
        location.fail = False
        bus.emit(AppMessageEvent())
        await bus.drain()

    asyncio.run(_run())

    assert channel.sent == [{"TEMPERATURE": 3, "CONDITIONS": "FOG"}]
