#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Autolink pass
=============
Rewrites bare URLs in literal text into explicit link tags:

    http://example.com/x   →  [url]http://example.com/x[/url]
    www.example.com        →  [url=http://www.example.com]www.example.com[/url]

The engine takes the pieces from ``link_segments`` and scans only the
generated tags; the text around them stays literal.

Input is entity-escaped, so ``&quot;`` / ``&lt;`` etc. would otherwise look
like URL characters.  They are swapped for sentinels that end a URL (and
``&amp;`` for one that may sit inside it) while the patterns run, then
swapped back.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from typing import Iterable


# Sentinels use control characters that never reach this pass.  \x01 ends a
# URL, \x02 is allowed inside one.
_ENTITY_SENTINELS = {
    "&quot;": "\x01q\x01",
    "&lt;":   "\x01l\x01",
    "&gt;":   "\x01g\x01",
    "&#039;": "\x01a\x01",
    "&#x27;": "\x01x\x01",
    "&nbsp;": "\x01n\x01",
    "&amp;":  "\x02",
}
_RESTORE = {v: k for k, v in _ENTITY_SENTINELS.items()}

_PROTECT_RE = re.compile("|".join(re.escape(k) for k in _ENTITY_SENTINELS), re.IGNORECASE)
_RESTORE_RE = re.compile("|".join(re.escape(k) for k in _RESTORE))

_URL_CHAR = r"[^\s<>\"'\[\]\x00\x01]"
_URL_END = r"[^\s<>\"'\[\]\x00\x01.,;:!?()]"

_LINK_RE = re.compile(
    rf"(?<![\w/=.@-])(?P<scheme>(?:https?|ftps?)://{_URL_CHAR}*{_URL_END})"
    rf"|(?<![\w/=.@:-])(?P<www>www\.{_URL_CHAR}*{_URL_END})",
    re.IGNORECASE,
)


# -----------------------------------------------------------------------------

def _protect(text: str) -> str:
    return _PROTECT_RE.sub(lambda m: _ENTITY_SENTINELS[m.group(0).lower()], text)


def _restore(text: str) -> str:
    return _RESTORE_RE.sub(lambda m: _RESTORE[m.group(0)], text)


def has_link_candidate(text: str) -> bool:
    return "://" in text or "www" in text.lower()


# -----------------------------------------------------------------------------

def link_segments(text: str, link_tags: Iterable[str] = ("url",)) -> list[tuple[str, bool]]:
    """Split *text* into ``(chunk, generated)`` pieces.

    Generated chunks are the ``[url]`` tags made for bare URLs; everything
    else is the surrounding text.  Text that already holds an opening link
    tag comes back as a single literal chunk.
    """
    if not has_link_candidate(text):
        return [(text, False)]
    lowered = text.lower()
    if any(f"[{tag}" in lowered for tag in link_tags):
        return [(text, False)]

    protected = _protect(text)
    segments: list[tuple[str, bool]] = []
    last = 0
    for m in _LINK_RE.finditer(protected):
        if m.start() > last:
            segments.append((_restore(protected[last:m.start()]), False))
        if m.group("scheme"):
            link = f"[url]{m.group('scheme')}[/url]"
        else:
            link = f"[url=http://{m.group('www')}]{m.group('www')}[/url]"
        segments.append((_restore(link), True))
        last = m.end()
    if not segments:
        return [(text, False)]
    if last < len(protected):
        segments.append((_restore(protected[last:]), False))
    return segments


def autolink(text: str, link_tags: Iterable[str] = ("url",)) -> str:
    """Return *text* with bare URLs wrapped in ``[url]`` tags."""
    return "".join(chunk for chunk, _ in link_segments(text, link_tags))


# -----------------------------------------------------------------------------
