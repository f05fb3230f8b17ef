import asyncio
import json
from array import array
from types import SimpleNamespace

from backend.collector import probes_basic, probes_graphics, probes_hardware
from backend.collector.signals import Absent, Present, Probe, probe, unwrap

from fake_browser import (
    EventTarget, FakeCanvas, FakeDocument, FakeEnvironment, FakeGL, make_window, resolved,
)


def attempt(p, env):
    return asyncio.run(p.attempt(env))


def test_probe_wraps_exceptions_as_absent():
    @probe("boom")
    def read(env):
        raise RuntimeError("no such API")

    result = attempt(read, FakeEnvironment())
    assert result == Absent("boom", reason="RuntimeError")
    assert unwrap(result) is None


def test_async_probe_exception_is_absent():
    async def read(env):
        await asyncio.sleep(0)
        raise PermissionError("denied")

    assert isinstance(attempt(Probe("denied", read), FakeEnvironment()), Absent)


def test_capability_check_short_circuits_the_read():
    calls = []
    p = Probe("gated", lambda env: calls.append(env), available=lambda env: False)
    assert attempt(p, FakeEnvironment()) == Absent("gated")
    assert calls == []


def test_none_reading_is_absent():
    assert attempt(Probe("nothing", lambda env: None), FakeEnvironment()).reason == "empty"


def test_basic_probes_read_descriptors():
    env = FakeEnvironment()
    nav = unwrap(attempt(probes_basic.read_navigator, env))
    assert nav["userAgent"].startswith("Mozilla/5.0")
    assert nav["languages"] == ["en-US", "en"]

    screen = unwrap(attempt(probes_basic.read_screen, env))
    assert screen["width"] == 1920
    assert screen["orientation"] == "landscape-primary"

    locale = unwrap(attempt(probes_basic.read_locale, env))
    assert isinstance(locale["timezoneOffset"], int)


def test_basic_probe_without_navigator_is_absent():
    env = FakeEnvironment(window=make_window(navigator=None))
    assert isinstance(attempt(probes_basic.read_navigator, env), Absent)


def test_hardware_probes():
    env = FakeEnvironment()
    assert unwrap(attempt(probes_hardware.read_battery, env)) == {
        "charging": True, "level": 0.5, "chargingTime": 0, "dischargingTime": None}
    assert unwrap(attempt(probes_hardware.read_storage, env)) == {"quota": 1000, "usage": 10}
    assert unwrap(attempt(probes_hardware.read_media_devices, env)) == [
        {"kind": "audioinput", "groupId": "g1", "label": ""}]
    gpu = unwrap(attempt(probes_hardware.read_gpu, env))
    assert gpu["vendor"] == "FakeVendor"
    assert unwrap(attempt(probes_hardware.read_cpu, env))["endianness"] in ("LE", "BE")


def test_missing_battery_api_is_absent():
    window = make_window()
    del window.navigator.getBattery
    assert isinstance(attempt(probes_hardware.read_battery, FakeEnvironment(window=window)), Absent)


class FakeSensor(EventTarget):
    def __init__(self, fires=True):
        super().__init__(x=0.1, y=0.2, z=9.8, stopped=False)
        self.fires = fires

    def start(self):
        if self.fires:
            asyncio.get_running_loop().call_soon(self.dispatch, "reading")

    def stop(self):
        self.stopped = True


def test_sensor_probe_reads_first_event():
    sensor = FakeSensor()
    env = FakeEnvironment(window=make_window(Accelerometer=lambda: sensor))
    result = unwrap(attempt(probes_hardware.read_sensors, env))
    assert result == {"accelerometer": {"x": 0.1, "y": 0.2, "z": 9.8}}
    assert sensor.stopped
    assert sensor.listener_count("reading") == 0


def test_silent_sensor_times_out_instead_of_hanging(monkeypatch):
    monkeypatch.setattr(probes_hardware, "SENSOR_TIMEOUT", 0.05)
    silent = FakeSensor(fires=False)
    env = FakeEnvironment(window=make_window(Gyroscope=lambda: silent))

    async def go():
        return await asyncio.wait_for(
            probes_hardware.first_reading(env, "Gyroscope", timeout=0.05), timeout=1)

    assert asyncio.run(go()) is None
    assert silent.stopped
    # no reading from any sensor means the whole probe is absent
    assert isinstance(attempt(probes_hardware.read_sensors, env), Absent)


def test_graphics_probes():
    env = FakeEnvironment(document=FakeDocument(installed_fonts=("Arial", "Fira Code")))
    assert unwrap(attempt(probes_graphics.read_canvas, env)).startswith("data:image/png")
    assert unwrap(attempt(probes_graphics.read_webgl2, env))["parameters"]["MAX_3D_TEXTURE_SIZE"] == 2048
    assert unwrap(attempt(probes_graphics.read_video, env))["webm"] == "probably"
    css = unwrap(attempt(probes_graphics.read_css, env))
    assert css["grid"] is True and css["containerQueries"] is False


def test_font_detection_finds_installed_and_cleans_up():
    document = FakeDocument(installed_fonts=("Arial", "Fira Code"))
    env = FakeEnvironment(document=document)
    fonts = unwrap(attempt(probes_graphics.read_fonts, env))
    assert fonts == ["Arial", "Fira Code"]
    assert document.body.children == []


def test_graphics_without_document_is_absent():
    env = FakeEnvironment(document=SimpleNamespace())
    assert isinstance(attempt(probes_graphics.read_canvas, env), Absent)
    assert isinstance(attempt(probes_graphics.read_fonts, env), Absent)


class TypedArrayGL(FakeGL):
    """getParameter hands back a Float32Array, which to_py turns into a memoryview."""

    def getParameter(self, param):
        if param == self.ALIASED_LINE_WIDTH_RANGE:
            return memoryview(array("f", [1.0, 1.0]))
        return super().getParameter(param)


class TypedArrayDocument(FakeDocument):
    def createElement(self, tag):
        if tag == "canvas":
            canvas = FakeCanvas()
            canvas.getContext = lambda kind: TypedArrayGL() if kind.endswith("webgl") else None
            return canvas
        return super().createElement(tag)


def test_gpu_line_width_range_from_typed_array_is_a_list():
    env = FakeEnvironment(document=TypedArrayDocument())
    gpu = unwrap(attempt(probes_hardware.read_gpu, env))
    assert gpu["aliasedLineWidthRange"] == [1.0, 1.0]
    assert gpu["extensions"] == ["OES_texture_float"]
    json.dumps(gpu, allow_nan=False)


def test_battery_infinity_reads_through():
    window = make_window()
    window.navigator.getBattery = lambda: resolved(SimpleNamespace(
        charging=False, level=0.8, chargingTime=float("inf"), dischargingTime=float("inf")))
    battery = unwrap(attempt(probes_hardware.read_battery, FakeEnvironment(window=window)))
    assert battery["dischargingTime"] == float("inf")
