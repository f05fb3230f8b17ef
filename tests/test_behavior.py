import asyncio
import time
from types import SimpleNamespace

from backend.collector.probes_behavior import (
    ListenerProbe, ListenerState, TimeBoxedListener, pointer_sample, touch, has_touch,
)
from backend.collector.signals import Absent, unwrap

from fake_browser import EventTarget, FakeEnvironment, make_window


def move(x, y):
    return SimpleNamespace(clientX=x, clientY=y)


def test_listener_stops_at_window_regardless_of_events():
    env = FakeEnvironment()
    target = EventTarget()
    listener = TimeBoxedListener(target, "mousemove", lambda e: {"x": e.clientX, "y": e.clientY},
                                 window=0.2, max_samples=1000)

    async def scenario():
        task = asyncio.ensure_future(listener.run(env))
        await asyncio.sleep(0)
        assert listener.state is ListenerState.ARMED
        target.dispatch("mousemove", move(1, 1))
        assert listener.state is ListenerState.COLLECTING
        await asyncio.sleep(0.05)
        target.dispatch("mousemove", move(2, 2))
        started = time.monotonic()
        samples = await task
        return samples, time.monotonic() - started

    samples, waited = asyncio.run(scenario())
    assert [(s["x"], s["y"]) for s in samples] == [(1, 1), (2, 2)]
    assert samples[0]["t"] <= samples[1]["t"]
    assert waited < 0.5
    assert listener.state is ListenerState.RETIRED
    assert target.listener_count("mousemove") == 0

    # late events after retirement are ignored
    listener._on_event(move(3, 3))
    assert len(listener.samples) == 2


def test_listener_retires_early_at_sample_ceiling():
    env = FakeEnvironment()
    target = EventTarget()
    listener = TimeBoxedListener(target, "mousemove", lambda e: {"x": e.clientX, "y": e.clientY},
                                 window=5.0, max_samples=50)

    async def scenario():
        task = asyncio.ensure_future(listener.run(env))
        await asyncio.sleep(0)
        for i in range(60):
            target.dispatch("mousemove", move(i, i))
        started = time.monotonic()
        samples = await task
        return samples, time.monotonic() - started

    samples, waited = asyncio.run(scenario())
    assert len(samples) == 50
    assert samples[-1]["x"] == 49
    assert waited < 1.0
    assert target.listener_count("mousemove") == 0


def test_listener_with_no_events_returns_empty_list():
    env = FakeEnvironment()
    listener = TimeBoxedListener(EventTarget(), "keydown", lambda e: {"key": e.key}, window=0.05)
    assert asyncio.run(listener.run(env)) == []
    assert listener.state is ListenerState.RETIRED


def test_bad_event_sample_is_dropped_not_raised():
    env = FakeEnvironment()
    target = EventTarget()
    listener = TimeBoxedListener(target, "touchstart", lambda e: {"x": e.touches.item(0).clientX}, window=0.05)

    async def scenario():
        task = asyncio.ensure_future(listener.run(env))
        await asyncio.sleep(0)
        target.dispatch("touchstart", SimpleNamespace())
        return await task

    assert asyncio.run(scenario()) == []


def test_listener_probe_uses_document_events():
    env = FakeEnvironment()
    probe = ListenerProbe("mouse", "mousemove", pointer_sample, window=0.1)

    async def scenario():
        task = asyncio.ensure_future(probe.attempt(env))
        await asyncio.sleep(0)
        env.document.dispatch("mousemove", move(10, 20))
        return await task

    result = asyncio.run(scenario())
    assert unwrap(result)[0]["x"] == 10
    assert env.document.listener_count("mousemove") == 0


def test_touch_probe_absent_without_touch_support():
    env = FakeEnvironment()
    assert not has_touch(env)
    assert isinstance(asyncio.run(touch.attempt(env)), Absent)


def test_touch_support_detected_from_touch_points():
    window = make_window()
    window.navigator.maxTouchPoints = 5
    assert has_touch(FakeEnvironment(window=window))
