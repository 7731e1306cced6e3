#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Tag validators
==============
Validators receive the captured text of a tag and return the value to
substitute into its template, or raise ``TagRejected`` to leave the tag
unexpanded.

``unparsed_equals_content`` tags receive and return a ``(content, param)``
pair; every other kind receives and returns a single string.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html
import re


# -----------------------------------------------------------------------------

class TagRejected(ValueError):
    """Raised by a validator to leave the tag as literal text."""


# -----------------------------------------------------------------------------
# URLs
# -----------------------------------------------------------------------------

_URL_SCHEMES = ("http://", "https://", "ftp://", "ftps://", "mailto:")
_BREAK_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)


def validate_url(url: str) -> str:
    """Clean a URL and make sure it carries a scheme."""
    url = _BREAK_RE.sub("", url)
    url = re.sub(r"\s+", "", url)
    if not url:
        raise TagRejected("empty url")
    if not url.lower().startswith(_URL_SCHEMES):
        url = "http://" + url
    return url


# -----------------------------------------------------------------------------

_YOUTUBE_RES = (
    re.compile(r"youtube\.com/watch\?v=([^&?/]+)"),
    re.compile(r"youtube\.com/embed/([^&?/]+)"),
    re.compile(r"youtube\.com/v/([^&?/]+)"),
    re.compile(r"youtu\.be/([^&?/]+)"),
)
_YOUTUBE_ID_RE = re.compile(r"^[\w-]+$")


def extract_youtube_id(url: str) -> str:
    """Return the video id from any of the usual YouTube URL shapes."""
    url = url.strip()
    for pattern in _YOUTUBE_RES:
        m = pattern.search(url)
        if m:
            return m.group(1)
    if _YOUTUBE_ID_RE.match(url):
        return url
    raise TagRejected(f"not a youtube url: {url!r}")


# -----------------------------------------------------------------------------
# CSS values
# -----------------------------------------------------------------------------

_SIZE_RE = re.compile(r"^\d+(?:\.\d+)?(?:px|pt|em|rem|%)$", re.IGNORECASE)
_COLOR_RE = re.compile(r"^(?:#[0-9a-f]{3}|#[0-9a-f]{6}|[a-z]+)$", re.IGNORECASE)


def validate_size(size: str) -> str:
    size = size.strip()
    if size.isdigit():
        return size + "px"
    if _SIZE_RE.match(size):
        return size
    raise TagRejected(f"invalid size {size!r}")


def validate_color(color: str) -> str:
    color = color.strip()
    if _COLOR_RE.match(color):
        return color
    raise TagRejected(f"invalid color {color!r}")


# -----------------------------------------------------------------------------

_EMAIL_RE = re.compile(r"^[\w.+-]+@[\w-]+(?:\.[\w-]+)+$")


def validate_email(address: str) -> str:
    address = address.strip()
    if not _EMAIL_RE.match(address):
        raise TagRejected(f"invalid e-mail address {address!r}")
    return address


# -----------------------------------------------------------------------------
# Code blocks
# -----------------------------------------------------------------------------

def highlight_code(captured: tuple[str, str]) -> tuple[str, str]:
    """Highlight *content* using Pygments.  Unknown languages are highlighted as plain text.

    The input arrives entity-escaped, so it is unescaped before Pygments
    escapes it again.
    """
    from pygments import highlight
    from pygments.formatters import HtmlFormatter
    from pygments.lexers import TextLexer, get_lexer_by_name
    from pygments.util import ClassNotFound

    content, lang = captured
    lang = lang.strip()
    if not re.match(r"^[\w+#.-]*$", lang):
        raise TagRejected(f"invalid language {lang!r}")
    code = html.unescape(_BREAK_RE.sub("\n", content)).strip("\n")
    try:
        lexer = get_lexer_by_name(lang, stripall=True) if lang else TextLexer()
    except ClassNotFound:
        lexer = TextLexer()
    formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
    return highlight(code, lexer, formatter).rstrip("\n"), lang


# -----------------------------------------------------------------------------
# Registry (used by JSON catalogs)
# -----------------------------------------------------------------------------

VALIDATORS = {
    "url":     validate_url,
    "youtube": extract_youtube_id,
    "size":    validate_size,
    "color":   validate_color,
    "email":   validate_email,
    "code":    highlight_code,
}


# -----------------------------------------------------------------------------
