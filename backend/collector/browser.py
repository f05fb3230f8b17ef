"""Pyodide bindings for Environment. Only importable inside the browser runtime."""

import asyncio

from js import Blob, Object
from pyodide.ffi import create_proxy, to_js
from pyodide.http import pyfetch

from .environment import Environment


class BrowserEnvironment(Environment):
    def listen(self, target, event_type, handler):
        proxy = create_proxy(handler)
        target.addEventListener(event_type, proxy)

        def unsubscribe():
            target.removeEventListener(event_type, proxy)
            proxy.destroy()
        return unsubscribe

    def construct(self, name, *args):
        return getattr(self.window, name).new(*args)

    def send_beacon(self, url, body):
        send = getattr(self.navigator, "sendBeacon", None)
        if send is None:
            return False
        options = to_js({"type": "application/json"}, dict_converter=Object.fromEntries)
        blob = Blob.new(to_js([body]), options)
        return bool(self.navigator.sendBeacon(url, blob))

    def post_json(self, url, body):
        # scheduled now so the caller can yield once and have fetch() issued
        return asyncio.ensure_future(pyfetch(
            url,
            method="POST",
            headers={"Content-Type": "application/json"},
            body=body,
            keepalive=True,
        ))
