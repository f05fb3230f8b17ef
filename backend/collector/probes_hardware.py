"""Hardware probes: GPU, CPU, power, storage, media devices and motion sensors.

Each async probe checks for its API first and then performs a single read.
Motion sensors wait for their first ``reading`` event, bounded by
``SENSOR_TIMEOUT`` so a device that never reports cannot stall the group.
"""

import asyncio
import logging
import sys
from typing import Optional

from .environment import as_list, lookup, to_py
from .probes_graphics import webgl_context
from .signals import probe

logger = logging.getLogger(__name__)

SENSOR_TIMEOUT = 0.5
MOTION_SENSORS = ("Accelerometer", "Gyroscope")


@probe("gpu")
def read_gpu(env):
    gl = webgl_context(env, "webgl", "experimental-webgl")
    if gl is None:
        return None
    debug = gl.getExtension("WEBGL_debug_renderer_info")
    if debug:
        vendor = gl.getParameter(debug.UNMASKED_VENDOR_WEBGL)
        renderer = gl.getParameter(debug.UNMASKED_RENDERER_WEBGL)
    else:
        vendor = gl.getParameter(gl.VENDOR)
        renderer = gl.getParameter(gl.RENDERER)
    return {
        "vendor": vendor,
        "renderer": renderer,
        "shadingLanguage": gl.getParameter(gl.SHADING_LANGUAGE_VERSION),
        "aliasedLineWidthRange": as_list(gl.getParameter(gl.ALIASED_LINE_WIDTH_RANGE)),
        "extensions": as_list(gl.getSupportedExtensions()),
    }


@probe("cpu")
def read_cpu(env):
    return {
        "cores": lookup(env.navigator, "hardwareConcurrency"),
        "webAssembly": env.has("WebAssembly.Memory"),
        "endianness": "LE" if sys.byteorder == "little" else "BE",
    }


@probe("battery", available=lambda env: env.has("navigator.getBattery"))
async def read_battery(env):
    battery = await env.navigator.getBattery()
    return {
        "charging": battery.charging,
        "level": battery.level,
        "chargingTime": battery.chargingTime,
        "dischargingTime": battery.dischargingTime,
    }


@probe("storage", available=lambda env: env.has("navigator.storage.estimate"))
async def read_storage(env):
    estimate = to_py(await env.navigator.storage.estimate())
    if isinstance(estimate, dict):
        return {"quota": estimate.get("quota"), "usage": estimate.get("usage")}
    return {"quota": lookup(estimate, "quota"), "usage": lookup(estimate, "usage")}


@probe("mediaDevices", available=lambda env: env.has("navigator.mediaDevices.enumerateDevices"))
async def read_media_devices(env):
    devices = await env.navigator.mediaDevices.enumerateDevices()
    return [
        {"kind": d.kind, "groupId": d.groupId, "label": d.label}
        for d in devices
    ]


async def first_reading(env, name: str, timeout: Optional[float] = None):
    """Start a motion sensor and return its first x/y/z reading, or None on timeout."""
    timeout = SENSOR_TIMEOUT if timeout is None else timeout
    loop = asyncio.get_running_loop()
    reading = loop.create_future()
    sensor = env.construct(name)

    def on_reading(_event):
        if not reading.done():
            reading.set_result({"x": sensor.x, "y": sensor.y, "z": sensor.z})

    unsubscribe = env.listen(sensor, "reading", on_reading)
    try:
        sensor.start()
        return await asyncio.wait_for(reading, timeout)
    except asyncio.TimeoutError:
        logger.debug("%s produced no reading within %ss", name, timeout)
        return None
    finally:
        unsubscribe()
        try:
            sensor.stop()
        except Exception:
            logger.debug("Could not stop %s", name)


@probe("sensors", available=lambda env: any(env.has(name) for name in MOTION_SENSORS))
async def read_sensors(env):
    names = [name for name in MOTION_SENSORS if env.has(name)]
    readings = await asyncio.gather(
        *(first_reading(env, name) for name in names), return_exceptions=True
    )
    results = {
        name[0].lower() + name[1:]: value
        for name, value in zip(names, readings)
        if value is not None and not isinstance(value, BaseException)
    }
    return results or None


PROBES = (read_gpu, read_cpu, read_battery, read_storage, read_media_devices, read_sensors)
