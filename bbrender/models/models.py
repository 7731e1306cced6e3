#!/usr/bin/env python
#
#
# ----------------------------------------------------------------------------
"""
Tag model for bbrender
======================

Types
-----
TagKind         — how a tag captures its content / parameter
TrimPolicy      — which side of a tag swallows adjacent whitespace
AttributeRule   — one named attribute of a tag header
TagDefinition   — one catalog entry (immutable, shared by every parse)
OpenTagFrame    — one still-open tag on the scan stack

Template placeholders
---------------------
$1      content (or the parameter of the ``*_equals`` opening kinds)
$2      parameter of ``unparsed_equals_content``
{name}  value of attribute ``name``
"""
# ----------------------------------------------------------------------------

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional


# Validators return the (possibly rewritten) captured value or raise
# bbrender.services.validators.TagRejected.
Validator = Callable[[Any], Any]

_TAG_NAME_RE = re.compile(r"^[^\s\[\]=/]+$")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Enums
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TagKind(str, enum.Enum):
    SIMPLE                  = "simple"                   # [tag]parsed[/tag]
    UNPARSED_CONTENT        = "unparsed_content"         # [tag]unparsed[/tag]
    UNPARSED_EQUALS         = "unparsed_equals"          # [tag=unparsed]parsed[/tag]
    UNPARSED_EQUALS_CONTENT = "unparsed_equals_content"  # [tag=unparsed]unparsed[/tag]
    PARSED_EQUALS           = "parsed_equals"            # [tag=parsed]parsed[/tag]
    CLOSED                  = "closed"                   # [tag] / [tag/] / [tag /]

    @property
    def opens_frame(self) -> bool:
        """True for the kinds whose closer is found later by the scan."""
        return self in (TagKind.SIMPLE, TagKind.UNPARSED_EQUALS, TagKind.PARSED_EQUALS)

    @property
    def takes_parameter(self) -> bool:
        return self in (
            TagKind.UNPARSED_EQUALS,
            TagKind.UNPARSED_EQUALS_CONTENT,
            TagKind.PARSED_EQUALS,
        )


class TrimPolicy(str, enum.Enum):
    NONE    = "none"
    INSIDE  = "inside"    # whitespace right after the opening tag
    OUTSIDE = "outside"   # whitespace right after the closing tag
    BOTH    = "both"

    @property
    def inside(self) -> bool:
        return self in (TrimPolicy.INSIDE, TrimPolicy.BOTH)

    @property
    def outside(self) -> bool:
        return self in (TrimPolicy.OUTSIDE, TrimPolicy.BOTH)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Catalog entries
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class AttributeRule:
    name:     str
    pattern:  Optional[str] = None   # regex for the value; permissive when None
    optional: bool = False


# ----------------------------------------------------------------------------

@dataclass(frozen=True)
class TagDefinition:
    tag:        str
    kind:       TagKind = TagKind.SIMPLE
    before:     str = ""
    after:      str = ""
    content:    str = ""
    validator:  Optional[Validator] = field(default=None, compare=False)
    trim:       TrimPolicy = TrimPolicy.NONE
    attributes: tuple[AttributeRule, ...] = ()

    def __post_init__(self) -> None:
        if not self.tag or not _TAG_NAME_RE.match(self.tag):
            raise ValueError(f"Invalid tag name {self.tag!r}")
        object.__setattr__(self, "tag", self.tag.lower())
        object.__setattr__(self, "kind", TagKind(self.kind))
        object.__setattr__(self, "trim", TrimPolicy(self.trim))
        object.__setattr__(self, "attributes", tuple(self.attributes))

        if self.kind in (TagKind.UNPARSED_CONTENT, TagKind.UNPARSED_EQUALS_CONTENT, TagKind.CLOSED):
            if not self.content:
                raise ValueError(f"Tag '{self.tag}' of kind {self.kind.value} needs a content template")
        if self.attributes and self.kind.takes_parameter:
            raise ValueError(f"Tag '{self.tag}' of kind {self.kind.value} cannot declare attributes")

        names = [rule.name.lower() for rule in self.attributes]
        if len(set(names)) != len(names):
            raise ValueError(f"Tag '{self.tag}' declares an attribute twice")

    @property
    def first_char(self) -> str:
        return self.tag[0]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Scan state
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class OpenTagFrame:
    tag:   str
    after: str                # already resolved, no placeholders left
    trim:  TrimPolicy = TrimPolicy.NONE
