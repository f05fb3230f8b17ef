"""Rendering probes: canvas, WebGL, video codecs, installed fonts and CSS support."""

from .environment import lookup, to_py
from .fonts import BASELINE_FAMILIES, CANDIDATE_FONTS, TEST_SIZE, TEST_STRING
from .signals import probe


def has_document(env) -> bool:
    return lookup(env.document, "createElement") is not None


def webgl_context(env, *kinds):
    canvas = env.document.createElement("canvas")
    for kind in kinds:
        gl = canvas.getContext(kind)
        if gl:
            return gl
    return None


@probe("canvas", available=has_document)
def read_canvas(env):
    canvas = env.document.createElement("canvas")
    ctx = canvas.getContext("2d")
    if not ctx:
        return None
    ctx.textBaseline = "top"
    ctx.font = "14px Arial"
    ctx.fillStyle = "#f60"
    ctx.fillRect(0, 0, canvas.width, canvas.height)
    ctx.fillStyle = "#069"
    ctx.fillText("CANVAS-FP", 2, 15)
    return canvas.toDataURL()


@probe("webgl", available=has_document)
def read_webgl(env):
    gl = webgl_context(env, "webgl")
    if gl is None:
        return None
    return {
        "parameters": {
            "VENDOR": gl.getParameter(gl.VENDOR),
            "RENDERER": gl.getParameter(gl.RENDERER),
            "MAX_TEXTURE_SIZE": gl.getParameter(gl.MAX_TEXTURE_SIZE),
        },
        "extensions": to_py(gl.getSupportedExtensions()),
    }


@probe("webgl2", available=has_document)
def read_webgl2(env):
    gl = webgl_context(env, "webgl2")
    if gl is None:
        return None
    return {
        "parameters": {
            "MAX_3D_TEXTURE_SIZE": gl.getParameter(gl.MAX_3D_TEXTURE_SIZE),
            "MAX_ARRAY_TEXTURE_LAYERS": gl.getParameter(gl.MAX_ARRAY_TEXTURE_LAYERS),
        },
        "extensions": to_py(gl.getSupportedExtensions()),
    }


@probe("video", available=has_document)
def read_video(env):
    video = env.document.createElement("video")
    return {
        "webm": video.canPlayType("video/webm") or None,
        "codecs": {
            "h264": video.canPlayType('video/mp4; codecs="avc1.42E01E"'),
            "vp9": video.canPlayType('video/webm; codecs="vp9"'),
            "av1": video.canPlayType('video/mp4; codecs="av01.0.05M.08"'),
        },
    }


def detect_fonts(env, candidates=CANDIDATE_FONTS):
    """Installed fonts, detected by text width differing from every generic fallback.

    The span lives offscreen and is removed before returning.
    """
    body = env.document.body
    span = env.document.createElement("span")
    span.style.position = "absolute"
    span.style.left = "-9999px"
    span.style.fontSize = TEST_SIZE
    span.textContent = TEST_STRING
    body.appendChild(span)
    try:
        baseline = {}
        for family in BASELINE_FAMILIES:
            span.style.fontFamily = family
            baseline[family] = (span.offsetWidth, span.offsetHeight)

        found = []
        for font in dict.fromkeys(candidates):
            for family in BASELINE_FAMILIES:
                span.style.fontFamily = f"'{font}', {family}"
                if (span.offsetWidth, span.offsetHeight) != baseline[family]:
                    found.append(font)
                    break
        return found
    finally:
        body.removeChild(span)


@probe("fonts", available=lambda env: lookup(env.document, "body") is not None)
def read_fonts(env):
    return detect_fonts(env)


@probe("css", available=lambda env: lookup(env.document, "documentElement.style") is not None)
def read_css(env):
    style = env.document.documentElement.style
    supports = lookup(env.window, "CSS.supports")

    def check(prop, value):
        if supports is not None:
            return bool(supports(prop, value))
        return lookup(style, prop) is not None

    return {
        "flexbox": check("display", "flex"),
        "grid": check("display", "grid"),
        "transforms": check("transform", "none"),
        "backdropFilter": check("backdrop-filter", "none"),
        "containerQueries": check("container-type", "inline-size"),
    }


PROBES = (read_canvas, read_webgl, read_webgl2, read_video, read_fonts, read_css)
