"""The host objects probes read from, and the few side effects the boot script needs.

``Environment`` works on plain Python objects: handlers are registered as-is
and constructors are called directly. ``browser.BrowserEnvironment`` overrides
the parts that need Pyodide's foreign-function layer.
"""

import logging
import math
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


def lookup(obj: Any, path: str) -> Any:
    """Follow a dotted attribute path, returning None at the first missing link."""
    for part in path.split("."):
        if obj is None:
            return None
        try:
            obj = getattr(obj, part, None)
        except Exception:
            return None
    return obj


def to_py(value: Any) -> Any:
    """Convert a foreign (JS) value to Python containers; plain values pass through."""
    convert = getattr(value, "to_py", None)
    if callable(convert):
        return convert()
    return value


def as_list(value: Any) -> Optional[list]:
    """Typed arrays arrive as memoryviews after to_py; plain lists pass through."""
    value = to_py(value)
    if value is None:
        return None
    if hasattr(value, "tolist"):
        return value.tolist()
    return list(value)


def json_safe(value: Any, path: str = "$") -> Any:
    """Reduce a reading to JSON the way JSON.stringify would.

    Non-finite floats become None, buffers become lists, and anything else
    that is not plain JSON is logged and dropped.
    """
    value = to_py(value)
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {str(k): json_safe(v, f"{path}.{k}") for k, v in value.items()}
    if isinstance(value, (memoryview, bytes, bytearray)):
        return json_safe(memoryview(value).tolist(), path)
    if isinstance(value, (list, tuple)):
        return [json_safe(v, f"{path}[{i}]") for i, v in enumerate(value)]
    logger.warning("Dropped non-JSON value %s of type %s", path, type(value).__name__)
    return None


class Environment:
    def __init__(self, window, document=None):
        self.window = window
        self.document = document if document is not None else lookup(window, "document")

    @property
    def navigator(self):
        return lookup(self.window, "navigator")

    @property
    def screen(self):
        return lookup(self.window, "screen")

    def has(self, path: str) -> bool:
        return lookup(self.window, path) is not None

    def listen(self, target, event_type: str, handler: Callable[[Any], None]) -> Callable[[], None]:
        """Subscribe handler to event_type on target; returns the unsubscribe callable."""
        target.addEventListener(event_type, handler)

        def unsubscribe():
            target.removeEventListener(event_type, handler)
        return unsubscribe

    def construct(self, name: str, *args):
        """Instantiate a class exposed on the window, e.g. ``Accelerometer``."""
        return getattr(self.window, name)(*args)

    def send_beacon(self, url: str, body: str) -> bool:
        send = lookup(self.navigator, "sendBeacon")
        if send is None:
            return False
        return bool(send(url, body))

    def post_json(self, url: str, body: str):
        """Start a POST and return an awaitable response (must expose ``ok``/``status``)."""
        return self.window.fetch(url, {
            "method": "POST",
            "headers": {"Content-Type": "application/json"},
            "body": body,
            "keepalive": True,
        })

    def navigate(self, url: str) -> None:
        self.window.location.href = url

    def tracking_context(self) -> "tuple[Optional[Any], Optional[str]]":
        return lookup(self.window, "TRACKING_ID"), lookup(self.window, "TARGET_URL")
