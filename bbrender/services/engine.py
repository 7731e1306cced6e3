#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Scan engine
===========
Single left-to-right pass over BBCode text producing an HTML fragment.

The source string is never modified.  A cursor walks from one ``[`` to the
next; literal text between resolved tags is copied to an output list
(after the autolink pass) and every resolved tag appends its expansion.
Each expansion is wrapped in ``MARKER`` so generated HTML can be told apart
from literal text until the final whitespace pass strips the markers.

A ``[`` is classified as one of:

  closing tag       ``[/name]``, closes the nearest open frame of that name
                    (and everything opened after it); with no such frame it
                    stays literal and the stack is left untouched
  catalog tag       first definition (in catalog order) whose header rule
                    holds for the text after the name
  itemcode          ``[*]`` etc. inside a list
  false alarm       anything else; stays literal

Nothing in here raises for bad input: unresolvable tags, rejected
validator values and unmatched closers all stay literal text.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from bbrender.models import OpenTagFrame, TagDefinition, TagKind
from bbrender.services.autolink import link_segments
from bbrender.services.catalog import DEFAULT_ITEMCODES, DEFAULT_TAGS
from bbrender.services.itemcodes import expand_itemcode
from bbrender.services.tags import CompiledTag, TagTable, fill_template

log = logging.getLogger(__name__)


BREAK_TAG = "<br />"
MARKER = "\x00"

# Control characters reserved for MARKER and the autolink sentinels.
_RESERVED_RE = re.compile(r"[\x00-\x02\r]")

_TRIM_RE = re.compile(r"(?:<br\s*/?>|&nbsp;|\s)*", re.IGNORECASE)

# Applied in one pass, longest key first, so replacements are never rescanned.
_CLEANUP = {
    "\n ":            BREAK_TAG + "&nbsp;",
    BREAK_TAG + " ":  BREAK_TAG + "&nbsp;",
    "&#13;":          "\n",
    "  ":             " &nbsp;",
    "\n":             BREAK_TAG,
}
_CLEANUP_RE = re.compile("|".join(re.escape(k) for k in _CLEANUP))


# -----------------------------------------------------------------------------
# Whitespace handling
# -----------------------------------------------------------------------------

def prepare(text: str) -> str:
    """Drop carriage returns and the control characters the engine reserves."""
    return _RESERVED_RE.sub("", text)


def finalize(text: str) -> str:
    """Strip markers and turn line breaks / runs of spaces into HTML.

    Only literal text is touched; generated HTML (between markers) such as
    highlighted ``<pre>`` blocks keeps its newlines and spaces.
    """
    parts = text.split(MARKER)
    if parts[0].startswith(" "):
        parts[0] = "&nbsp;" + parts[0][1:]
    # Even indexes are literal text, odd ones generated HTML.
    parts[::2] = [_CLEANUP_RE.sub(lambda m: _CLEANUP[m.group(0)], p) for p in parts[::2]]
    return "".join(parts)


def normalize_whitespace(text: str) -> str:
    """Whitespace treatment of ``convert()`` without any tag processing."""
    return finalize(prepare(text))


def _skip_space(src: str, pos: int) -> int:
    return _TRIM_RE.match(src, pos).end()


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class _Match:
    end:         int                          # cursor position after the tag
    html:        str = ""
    close:       int = 0                      # frames to pop first
    frame:       Optional[OpenTagFrame] = None
    trim_inside: bool = False


# -----------------------------------------------------------------------------
# Engine
# -----------------------------------------------------------------------------

class BBCodeEngine:
    """Immutable BBCode → HTML converter for one tag catalog.

    Build it once and share it; every ``convert()`` call keeps its own
    buffer and tag stack, so concurrent calls need no locking.

    ``max_depth`` bounds how deeply ``parsed_equals`` parameters are
    converted recursively; a tag that would exceed it stays literal.
    """

    def __init__(
        self,
        tags: Iterable[TagDefinition] | None = None,
        itemcodes: Mapping[str, str] | None = None,
        *,
        autolink: bool = True,
        link_tags: Iterable[str] = ("url",),
        max_depth: int = 8,
    ) -> None:
        self.table = TagTable(
            DEFAULT_TAGS if tags is None else tags,
            DEFAULT_ITEMCODES if itemcodes is None else itemcodes,
        )
        self.link_tags = frozenset(tag.lower() for tag in link_tags)
        # Autolinking emits [url] tags, which are pointless without one.
        self.autolink = autolink and any(c.tag == "url" for c in self.table.lookup("u"))
        self.max_depth = max_depth

    def convert(self, text: str) -> str:
        """Convert BBCode *text* to HTML.  Never raises for any input string."""
        return self._convert(text, 0)

    def _convert(self, text: str, depth: int) -> str:
        scan = _Scan(self, depth)
        scan.run(prepare(text))
        return finalize(scan.result())


# -----------------------------------------------------------------------------
# One conversion
# -----------------------------------------------------------------------------

class _Scan:

    def __init__(self, engine: BBCodeEngine, depth: int) -> None:
        self.engine = engine
        self.table = engine.table
        self.depth = depth
        self.out: list[str] = []
        self.stack: list[OpenTagFrame] = []

    def result(self) -> str:
        return "".join(self.out)

    def run(self, src: str) -> None:
        self.scan(src, self.engine.autolink)
        # Close whatever is still open, innermost first, without trimming.
        while self.stack:
            self.emit(self.stack.pop().after)

    # ── main loop ─────────────────────────────────────────────────────────

    def scan(self, src: str, autolink: bool) -> None:
        pos = literal = 0
        while True:
            pos = src.find("[", pos)
            if pos < 0:
                break
            match = self.resolve(src, pos)
            if match is None:
                pos += 1
                continue
            self.flush(src[literal:pos], autolink)
            pos = literal = self.apply(src, match)
        self.flush(src[literal:], autolink)

    def emit(self, html: str) -> None:
        if html:
            self.out.extend((MARKER, html, MARKER))

    def flush(self, text: str, autolink: bool) -> None:
        """Copy a literal span to the output, autolinking it when allowed."""
        if not text:
            return
        if not autolink or self.link_open():
            self.out.append(text)
            return
        for chunk, generated in link_segments(text, self.engine.link_tags):
            if generated:
                # Only the inserted [url] tag is scanned; it is not linked again.
                self.scan(chunk, autolink=False)
            else:
                self.out.append(chunk)

    def link_open(self) -> bool:
        return any(frame.tag in self.engine.link_tags for frame in self.stack)

    def apply(self, src: str, match: _Match) -> int:
        end = match.end
        for _ in range(match.close):
            frame = self.stack.pop()
            self.emit(frame.after)
            if frame.trim.outside:
                end = _skip_space(src, end)
        self.emit(match.html)
        if match.frame is not None:
            self.stack.append(match.frame)
        if match.trim_inside:
            end = _skip_space(src, end)
        return end

    # ── classification ────────────────────────────────────────────────────

    def resolve(self, src: str, pos: int) -> Optional[_Match]:
        if pos + 1 >= len(src):
            return None
        char = src[pos + 1]

        if char == "/" and self.stack:
            return self.resolve_closer(src, pos)

        if not self.table.knows(char):
            return None

        for compiled in self.table.lookup(char):
            header = self.match_header(compiled, src, pos)
            if header is not None:
                # First definition whose header rule holds wins, even if
                # its content capture then fails.
                return self.capture(compiled, src, pos, *header)

        if src[pos + 2:pos + 3] == "]":
            item = expand_itemcode(self.table, self.stack, char)
            if item is not None:
                return _Match(
                    end=pos + 3,
                    html=item.html,
                    close=item.close,
                    frame=item.frame,
                    trim_inside=item.frame.trim.inside,
                )
        return None

    def resolve_closer(self, src: str, pos: int) -> Optional[_Match]:
        end = src.find("]", pos + 2)
        if end <= pos + 2:          # no "]" at all, or "[/]"
            return None
        name = src[pos + 2:end].lower()
        for depth, frame in enumerate(reversed(self.stack), 1):
            if frame.tag == name:
                return _Match(end=end + 1, close=depth)
        return None

    def match_header(
        self, compiled: CompiledTag, src: str, pos: int,
    ) -> Optional[tuple[dict[str, str], int]]:
        """Check the kind's header rule.

        Returns ``(attribute bindings, index after the header)``; for the
        parameter kinds the index is the start of the parameter.
        """
        tag = compiled.tag
        after = pos + 1 + len(tag)
        if src[pos + 1:after].lower() != tag:
            return None
        nxt = src[after:after + 1]

        if compiled.matcher is not None:
            if not nxt.isspace():
                return None
            return compiled.matcher.match(src, after)

        kind = compiled.kind
        if kind in (TagKind.SIMPLE, TagKind.UNPARSED_CONTENT):
            return ({}, after + 1) if nxt == "]" else None
        if kind.takes_parameter:
            return ({}, after + 1) if nxt == "=" else None
        for tail in ("]", "/]", " /]"):
            if src.startswith(tail, after):
                return {}, after + len(tail)
        return None

    # ── content capture ───────────────────────────────────────────────────

    def capture(
        self,
        compiled: CompiledTag,
        src: str,
        pos: int,
        bindings: dict[str, str],
        start: int,
    ) -> Optional[_Match]:
        d = compiled.definition
        kind = d.kind
        trim_inside = d.trim.inside

        try:
            if kind is TagKind.SIMPLE:
                frame = OpenTagFrame(d.tag, fill_template(d.after, bindings=bindings), d.trim)
                return _Match(
                    end=start,
                    html=fill_template(d.before, bindings=bindings),
                    frame=frame,
                    trim_inside=trim_inside,
                )

            if kind is TagKind.CLOSED:
                return _Match(
                    end=start,
                    html=fill_template(d.content, bindings=bindings),
                    trim_inside=trim_inside,
                )

            if kind is TagKind.UNPARSED_CONTENT:
                closer = compiled.closer.search(src, start)
                if closer is None:
                    log.debug("No closer for [%s] at %d", d.tag, pos)
                    return None
                value = self.validate(d, src[start:closer.start()])
                return _Match(
                    end=closer.end(),
                    html=fill_template(d.content, value, bindings=bindings),
                    trim_inside=trim_inside,
                )

            param_end = src.find("]", start)
            if param_end < 0:
                return None
            param = src[start:param_end]

            if kind is TagKind.UNPARSED_EQUALS_CONTENT:
                closer = compiled.closer.search(src, param_end + 1)
                if closer is None:
                    log.debug("No closer for [%s=...] at %d", d.tag, pos)
                    return None
                value, param = self.validate(d, (src[param_end + 1:closer.start()], param))
                return _Match(
                    end=closer.end(),
                    html=fill_template(d.content, value, param),
                    trim_inside=trim_inside,
                )

            param = self.validate(d, param)
            if kind is TagKind.PARSED_EQUALS:
                if self.depth >= self.engine.max_depth:
                    log.warning("Nesting deeper than %d; leaving [%s] literal", self.engine.max_depth, d.tag)
                    return None
                param = self.engine._convert(param, self.depth + 1)

            frame = OpenTagFrame(d.tag, fill_template(d.after, param), d.trim)
            return _Match(
                end=param_end + 1,
                html=fill_template(d.before, param),
                frame=frame,
                trim_inside=trim_inside,
            )
        except ValueError as exc:
            # TagRejected, or a host validator signalling the same way.
            log.debug("Validator rejected [%s] at %d: %s", d.tag, pos, exc)
            return None

    @staticmethod
    def validate(d: TagDefinition, value):
        if d.validator is None:
            return value
        return d.validator(value)


# -----------------------------------------------------------------------------
