"""Behavioral probes: short-lived event listeners that sample visitor input.

Every listener moves through ``ARMED -> COLLECTING -> RETIRED``. It retires on
whichever bound is hit first, the wall-clock window or the sample ceiling, and
retiring always removes the event subscription. Events arriving after
retirement are ignored even if the host delivers them late.
"""

import asyncio
import enum
import functools
import logging
from typing import Any, Callable, List, Optional

from .environment import lookup
from .signals import Probe

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 1.0
MAX_SAMPLES = 50


class ListenerState(enum.Enum):
    ARMED = "armed"
    COLLECTING = "collecting"
    RETIRED = "retired"


class TimeBoxedListener:
    def __init__(
        self,
        target,
        event_type: str,
        extract: Callable[[Any], dict],
        window: float = WINDOW_SECONDS,
        max_samples: int = MAX_SAMPLES,
    ):
        self.target = target
        self.event_type = event_type
        self.extract = extract
        self.window = window
        self.max_samples = max_samples
        self.samples: List[dict] = []
        self.state: Optional[ListenerState] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._retired: Optional[asyncio.Future] = None
        self._started = 0.0

    def _elapsed_ms(self) -> float:
        return round((asyncio.get_running_loop().time() - self._started) * 1000, 1)

    def _on_event(self, event) -> None:
        if self.state is ListenerState.RETIRED:
            return
        self.state = ListenerState.COLLECTING
        try:
            sample = self.extract(event)
        except Exception as exc:
            logger.debug("Dropped %s sample: %r", self.event_type, exc)
            return
        sample["t"] = self._elapsed_ms()
        self.samples.append(sample)
        if len(self.samples) >= self.max_samples:
            self.retire()

    def retire(self) -> None:
        if self.state is ListenerState.RETIRED:
            return
        self.state = ListenerState.RETIRED
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._retired is not None and not self._retired.done():
            self._retired.set_result(None)

    async def run(self, env) -> List[dict]:
        """Collect samples until the window closes or the ceiling is reached."""
        loop = asyncio.get_running_loop()
        self._retired = loop.create_future()
        self._started = loop.time()
        self.state = ListenerState.ARMED
        self._unsubscribe = env.listen(self.target, self.event_type, self._on_event)
        try:
            await asyncio.wait([self._retired], timeout=self.window)
        finally:
            self.retire()
        return self.samples


def pointer_sample(env, event) -> dict:
    return {"x": event.clientX, "y": event.clientY}


def key_sample(env, event) -> dict:
    return {"key": event.key, "code": event.code}


def scroll_sample(env, event) -> dict:
    return {"y": lookup(env.window, "scrollY")}


def touch_sample(env, event) -> dict:
    touch = event.touches.item(0)
    return {"x": touch.clientX, "y": touch.clientY}


class ListenerProbe(Probe):
    """Probe whose reading is the sample list of one TimeBoxedListener."""

    def __init__(self, name, event_type, extract, target="document", available=None,
                 window=WINDOW_SECONDS, max_samples=MAX_SAMPLES):
        self.event_type = event_type
        self.extract = extract
        self.target = target
        self.window = window
        self.max_samples = max_samples
        super().__init__(name, self.listen, available)

    def listen(self, env):
        target = env.document if self.target == "document" else env.window
        extract = functools.partial(self.extract, env)
        listener = TimeBoxedListener(target, self.event_type, extract, self.window, self.max_samples)
        return listener.run(env)


def has_touch(env) -> bool:
    return hasattr(env.window, "ontouchstart") or (lookup(env.navigator, "maxTouchPoints") or 0) > 0


mouse = ListenerProbe("mouse", "mousemove", pointer_sample)
scroll = ListenerProbe("scroll", "scroll", scroll_sample, target="window")
keyboard = ListenerProbe("keyboard", "keydown", key_sample)
touch = ListenerProbe("touch", "touchstart", touch_sample, available=has_touch)

PROBES = (mouse, scroll, keyboard, touch)
