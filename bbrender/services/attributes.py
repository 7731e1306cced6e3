#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Attribute matcher
=================
Matches the header of a tag such as ``[quote author=Bob date=1700000000]``
against the tag's attribute schema.  Attributes may be written in any order,
so one regex is compiled per ordering of the schema and the first one that
matches the whole header (through the closing ``]``) wins.

Scaling limit: a schema of *n* attributes compiles *n!* patterns.  Real
schemas have three attributes or fewer; do not grow a schema past four.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import itertools
import re
from typing import Optional, Sequence

from bbrender.models import AttributeRule


# Unquoted values stop at whitespace; quoted ones may hold spaces.  No
# unescaped "]" either way.
_BARE_VALUE = r"(?:\\.|[^\s\]\\])+?"
_QUOTED_VALUE = r"(?:\\.|[^\]\\\n])*?"
_QUOTES = ("&quot;", '"')

# Characters that mean something to template substitution.
_VALUE_ESCAPES = str.maketrans({"$": "&#36;", "{": "&#123;", "}": "&#125;"})


# -----------------------------------------------------------------------------

def _fragment(index: int, rule: AttributeRule) -> str:
    pattern = f"(?:{rule.pattern})" if rule.pattern else None
    quoted = pattern or _QUOTED_VALUE
    value = "|".join([f"&quot;{quoted}&quot;", f'"{quoted}"', pattern or _BARE_VALUE])
    fragment = rf"(?:\s+{re.escape(rule.name)}=(?P<a{index}>{value}))"
    return fragment + "?" if rule.optional else fragment


def _unquote(value: str) -> str:
    for quote in _QUOTES:
        n = len(quote)
        if len(value) >= 2 * n and value[:n].lower() == quote and value[-n:].lower() == quote:
            return value[n:-n]
    return value


def escape_value(value: str) -> str:
    """Unescape ``\\]`` and neutralise template syntax in a captured value."""
    return value.replace("\\]", "]").translate(_VALUE_ESCAPES)


# -----------------------------------------------------------------------------

class AttributeMatcher:
    """Order-independent matcher for one tag's attribute schema."""

    def __init__(self, rules: Sequence[AttributeRule], closed: bool = False) -> None:
        if not rules:
            raise ValueError("AttributeMatcher needs at least one attribute")
        self.names = tuple(rule.name for rule in rules)
        terminator = r"\s*/?\]" if closed else r"\s*\]"
        self._patterns = tuple(
            re.compile(
                "".join(_fragment(i, rules[i]) for i in order) + terminator,
                re.IGNORECASE,
            )
            for order in itertools.permutations(range(len(rules)))
        )

    def __len__(self) -> int:
        return len(self._patterns)

    def match(self, text: str, pos: int) -> Optional[tuple[dict[str, str], int]]:
        """Match the header starting at *pos* (just after the tag name).

        Returns ``(bindings, end)`` where *end* is the index after the closing
        ``]``, or None when no ordering matches.  Omitted optional attributes
        bind to an empty string.
        """
        for pattern in self._patterns:
            m = pattern.match(text, pos)
            if m is None:
                continue
            bindings = {
                name: escape_value(_unquote(m.group(f"a{i}") or ""))
                for i, name in enumerate(self.names)
            }
            return bindings, m.end()
        return None


# -----------------------------------------------------------------------------
