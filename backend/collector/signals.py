"""Tagged probe results and the probe wrapper that guarantees them.

A probe never raises: a missing API, a denied permission or an exception in
the read itself all come back as ``Absent`` with a short reason, so one bad
signal cannot take down the group it belongs to.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Present:
    name: str
    value: Any


@dataclass(frozen=True)
class Absent:
    name: str
    reason: str = "unavailable"


SignalResult = Union[Present, Absent]
Reader = Callable[[Any], Union[Any, Awaitable[Any]]]
Capability = Callable[[Any], bool]


def unwrap(result: SignalResult) -> Any:
    """Payload value for a result: the reading, or None when absent."""
    return result.value if isinstance(result, Present) else None


class Probe:
    def __init__(self, name: str, read: Reader, available: Optional[Capability] = None):
        self.name = name
        self.read = read
        self.available = available

    def __repr__(self):
        return f"Probe({self.name!r})"

    async def attempt(self, env) -> SignalResult:
        try:
            if self.available is not None and not self.available(env):
                return Absent(self.name)
            value = self.read(env)
            if inspect.isawaitable(value):
                value = await value
        except Exception as exc:
            logger.debug("Probe %s failed: %r", self.name, exc)
            return Absent(self.name, reason=type(exc).__name__)
        if value is None:
            return Absent(self.name, reason="empty")
        return Present(self.name, value)


def probe(name: str, available: Optional[Capability] = None) -> Callable[[Reader], Probe]:
    """Decorator turning a reader function into a Probe."""
    def wrap(read: Reader) -> Probe:
        return Probe(name, read, available)
    return wrap
