"""Run every probe group concurrently and assemble the fingerprint payload."""

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional, Sequence

from . import probes_basic, probes_behavior, probes_graphics, probes_hardware
from .signals import Probe, unwrap

logger = logging.getLogger(__name__)

GROUP_TIMEOUT = 3.0
CLIENT_GROUPS = ("basic", "hardware", "graphics")


@dataclass(frozen=True)
class ProbeGroup:
    name: str
    probes: Sequence[Probe]

    async def run(self, env) -> Dict[str, object]:
        results = await asyncio.gather(*(p.attempt(env) for p in self.probes))
        return {r.name: unwrap(r) for r in results}


DEFAULT_GROUPS = (
    ProbeGroup("basic", probes_basic.PROBES),
    ProbeGroup("hardware", probes_hardware.PROBES),
    ProbeGroup("graphics", probes_graphics.PROBES),
    ProbeGroup("behavior", probes_behavior.PROBES),
)


class FingerprintCollector:
    def __init__(self, env, groups: Sequence[ProbeGroup] = DEFAULT_GROUPS,
                 group_timeout: Optional[float] = GROUP_TIMEOUT):
        self.env = env
        self.groups = groups
        self.group_timeout = group_timeout

    async def _run_group(self, group: ProbeGroup):
        try:
            if self.group_timeout is None:
                return await group.run(self.env)
            return await asyncio.wait_for(group.run(self.env), self.group_timeout)
        except asyncio.TimeoutError:
            logger.warning("Probe group %s timed out after %ss", group.name, self.group_timeout)
        except Exception:
            logger.exception("Probe group %s failed", group.name)
        return None

    async def collect(self) -> dict:
        """Gather every group; failed groups are null. Never raises."""
        started = time.perf_counter()
        # _run_group contains its own failures, so gather itself cannot raise
        results = await asyncio.gather(*(self._run_group(g) for g in self.groups))
        payload = {group.name: result for group, result in zip(self.groups, results)}
        failed = [group.name for group, result in zip(self.groups, results) if result is None]
        payload["timestamp"] = datetime.now(timezone.utc).isoformat()
        payload["meta"] = {
            "collectionDurationMs": max(0.0, (time.perf_counter() - started) * 1000),
            "failedGroups": failed,
        }
        return payload


def split_payload(payload: dict) -> dict:
    """The client/behavior halves posted to the server, plus the whole payload."""
    return {
        "clientData": {name: payload.get(name) for name in CLIENT_GROUPS},
        "behavior": payload.get("behavior"),
        "combined": payload,
    }
