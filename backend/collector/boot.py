"""Collect, hand the payload off to the server, and always forward the visitor.

Navigation is registered before collection starts and runs on every exit
path. Delivery is fire-and-forget: a beacon when the browser offers one,
otherwise a keepalive fetch. The fetch is started before navigation; only
waiting on its response and logging the outcome happen in the background.
"""

import asyncio
import json
import logging
from contextlib import contextmanager

from .collect import FingerprintCollector, split_payload
from .environment import json_safe

logger = logging.getLogger(__name__)

TRACK_ENDPOINT = "/api/track"

# keeps background deliveries referenced until they finish
_pending = set()


class DeliveryError(Exception):
    pass


@contextmanager
def navigation_guard(env, target_url: str):
    """Navigate to target_url when the block exits, however it exits.

    Failures inside the block are logged, never shown to the visitor.
    """
    try:
        yield
    except Exception:
        logger.exception("Tracking error")
    finally:
        env.navigate(target_url)


def build_body(tracking_id, payload: dict) -> str:
    """Strict JSON: NaN and Infinity become null, unknown host objects are dropped."""
    return json.dumps(json_safe({"id": tracking_id, **split_payload(payload)}), allow_nan=False)


async def _await_response(pending) -> None:
    try:
        response = await pending
        if not getattr(response, "ok", False):
            raise DeliveryError(f"HTTP {getattr(response, 'status', '?')}")
    except Exception as exc:
        logger.error("Tracking delivery failed: %s", exc)


def deliver(env, tracking_id, payload: dict, url: str = TRACK_ENDPOINT) -> str:
    """Start the request without waiting on its response. Returns the transport used."""
    body = build_body(tracking_id, payload)
    try:
        if env.send_beacon(url, body):
            return "beacon"
    except Exception as exc:
        logger.debug("sendBeacon unavailable: %r", exc)
    try:
        pending = env.post_json(url, body)
    except Exception as exc:
        logger.error("Tracking delivery failed: %s", exc)
        return "none"
    task = asyncio.ensure_future(_await_response(pending))
    _pending.add(task)
    task.add_done_callback(_pending.discard)
    return "fetch"


async def run(env, tracking_id=None, target_url=None, collector=None) -> None:
    if tracking_id is None or target_url is None:
        page_id, page_target = env.tracking_context()
        tracking_id = page_id if tracking_id is None else tracking_id
        target_url = page_target if target_url is None else target_url
    if not target_url:
        logger.error("No target URL on the page; nothing to redirect to")
        return

    with navigation_guard(env, target_url):
        payload = await (collector or FingerprintCollector(env)).collect()
        if tracking_id is None:
            logger.warning("No tracking id on the page; skipping delivery")
        elif deliver(env, tracking_id, payload) == "fetch":
            # one turn of the loop so a scheduled fetch reaches the browser before unload
            await asyncio.sleep(0)
