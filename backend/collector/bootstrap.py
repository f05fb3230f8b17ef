# PyScript entry script for the redirect page. The collector package is
# fetched into the runtime's filesystem as ./collector by the page config.
import asyncio
import logging

from pyscript import document, window

from collector.boot import run
from collector.browser import BrowserEnvironment

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

asyncio.ensure_future(run(BrowserEnvironment(window, document)))
