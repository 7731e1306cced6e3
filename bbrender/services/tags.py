#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Tag table
=========
Compiled, read-only view of a tag catalog.

Tags are dispatched on the lower-cased first character of their name; tags
sharing a first character are tried in catalog order, so a more specific
definition listed first shadows a more generic one.  Every itemcode
character is also a dispatch key (with no tags) so the scanner has a single
"is this bracket worth looking at" test.

Build one table per catalog and share it: nothing in here changes after
construction.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from bbrender.models import TagDefinition, TagKind
from bbrender.services.attributes import AttributeMatcher


_PLACEHOLDER_RE = re.compile(r"\$([12])|\{(\w+)\}")


# -----------------------------------------------------------------------------
# Template substitution
# -----------------------------------------------------------------------------

def fill_template(
    template: str,
    value: str = "",
    param: str = "",
    bindings: Mapping[str, str] | None = None,
) -> str:
    """Substitute ``$1``, ``$2`` and ``{name}`` in a single pass.

    Substituted text is never scanned again, so a value containing ``$1``
    or ``{name}`` comes out verbatim.  Unknown ``{names}`` are left alone.
    """
    if "$" not in template and "{" not in template:
        return template

    def _replace(m: re.Match) -> str:
        if m.group(1) == "1":
            return value
        if m.group(1) == "2":
            return param
        if bindings is not None and m.group(2) in bindings:
            return bindings[m.group(2)]
        return m.group(0)

    return _PLACEHOLDER_RE.sub(_replace, template)


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CompiledTag:
    definition: TagDefinition
    closer:     re.Pattern                    # [/tag], case-insensitive
    matcher:    Optional[AttributeMatcher] = None

    @property
    def tag(self) -> str:
        return self.definition.tag

    @property
    def kind(self) -> TagKind:
        return self.definition.kind


def compile_tag(definition: TagDefinition) -> CompiledTag:
    matcher = None
    if definition.attributes:
        matcher = AttributeMatcher(
            definition.attributes,
            closed=definition.kind is TagKind.CLOSED,
        )
    closer = re.compile(r"\[/" + re.escape(definition.tag) + r"\]", re.IGNORECASE)
    return CompiledTag(definition=definition, closer=closer, matcher=matcher)


# -----------------------------------------------------------------------------

class TagTable:
    """CodeDictionary + ItemcodeTable for one catalog."""

    def __init__(
        self,
        definitions: Iterable[TagDefinition],
        itemcodes: Mapping[str, str] | None = None,
    ) -> None:
        codes: dict[str, list[CompiledTag]] = {}
        for definition in definitions:
            codes.setdefault(definition.first_char, []).append(compile_tag(definition))

        items = dict(itemcodes or {})
        for char in items:
            if len(char) != 1:
                raise ValueError(f"Itemcode {char!r} must be a single character")
            codes.setdefault(char, [])

        self._codes = MappingProxyType({k: tuple(v) for k, v in codes.items()})
        self._itemcodes = MappingProxyType(items)

    # ── lookups ───────────────────────────────────────────────────────────

    def lookup(self, char: str) -> tuple[CompiledTag, ...]:
        return self._codes.get(char.lower(), ())

    def knows(self, char: str) -> bool:
        return char in self._codes or char.lower() in self._codes

    def itemcode(self, char: str) -> Optional[str]:
        return self._itemcodes.get(char)

    @property
    def itemcodes(self) -> Mapping[str, str]:
        return self._itemcodes

    @property
    def tags(self) -> tuple[TagDefinition, ...]:
        return tuple(c.definition for group in self._codes.values() for c in group)

    def __len__(self) -> int:
        return sum(len(group) for group in self._codes.values())


# -----------------------------------------------------------------------------
