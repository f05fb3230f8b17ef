"""Synchronous system descriptors: navigator, locale, screen and window geometry."""

from datetime import datetime

from .environment import lookup, to_py
from .signals import probe


@probe("navigator", available=lambda env: env.navigator is not None)
def read_navigator(env):
    nav = env.navigator
    return {
        "userAgent": lookup(nav, "userAgent"),
        "platform": lookup(nav, "platform"),
        "vendor": lookup(nav, "vendor"),
        "appVersion": lookup(nav, "appVersion"),
        "language": lookup(nav, "language"),
        "languages": to_py(lookup(nav, "languages")),
        "cookieEnabled": lookup(nav, "cookieEnabled"),
        "doNotTrack": lookup(nav, "doNotTrack"),
        "hardwareConcurrency": lookup(nav, "hardwareConcurrency"),
        "deviceMemory": lookup(nav, "deviceMemory"),
        "maxTouchPoints": lookup(nav, "maxTouchPoints"),
    }


@probe("locale")
def read_locale(env):
    timezone = None
    fmt = lookup(env.window, "Intl.DateTimeFormat")
    if fmt is not None:
        timezone = lookup(fmt().resolvedOptions(), "timeZone")
    if env.has("Date"):
        offset_minutes = env.construct("Date").getTimezoneOffset()
    else:
        # same sign convention as getTimezoneOffset: minutes behind UTC
        offset = datetime.now().astimezone().utcoffset()
        offset_minutes = int(-offset.total_seconds() // 60)
    return {"timezone": timezone, "timezoneOffset": offset_minutes}


@probe("screen", available=lambda env: env.screen is not None)
def read_screen(env):
    screen = env.screen
    return {
        "width": lookup(screen, "width"),
        "height": lookup(screen, "height"),
        "availWidth": lookup(screen, "availWidth"),
        "availHeight": lookup(screen, "availHeight"),
        "colorDepth": lookup(screen, "colorDepth"),
        "pixelRatio": lookup(env.window, "devicePixelRatio"),
        "orientation": lookup(screen, "orientation.type"),
    }


@probe("window")
def read_window(env):
    win = env.window
    return {
        "innerWidth": lookup(win, "innerWidth"),
        "innerHeight": lookup(win, "innerHeight"),
        "outerWidth": lookup(win, "outerWidth"),
        "outerHeight": lookup(win, "outerHeight"),
    }


PROBES = (read_navigator, read_locale, read_screen, read_window)
