#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pydantic v2 schemas for JSON tag catalogs.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from bbrender.models import AttributeRule, TagDefinition, TagKind, TrimPolicy
from bbrender.services.validators import VALIDATORS


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Tags
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class AttributeSchema(BaseModel):
    model_config = {"extra": "forbid"}

    pattern: Optional[str] = None
    optional: bool = False

    @field_validator("pattern")
    @classmethod
    def pattern_compiles(cls, v: str | None) -> str | None:
        if v is not None:
            try:
                re.compile(v)
            except re.error as exc:
                raise ValueError(f"Invalid attribute pattern: {exc}") from exc
        return v


# -----------------------------------------------------------------------------

class TagSchema(BaseModel):
    model_config = {"extra": "forbid"}

    tag: str = Field(..., min_length=1, max_length=32, pattern=r"^[^\s\[\]=/]+$")
    kind: TagKind = TagKind.SIMPLE
    before: str = ""
    after: str = ""
    content: str = ""
    validator: Optional[str] = None
    trim: TrimPolicy = TrimPolicy.NONE
    # Insertion order is kept: it is the order attributes are documented in.
    attributes: dict[str, AttributeSchema] = Field(default_factory=dict, max_length=4)

    @field_validator("validator")
    @classmethod
    def validator_registered(cls, v: str | None) -> str | None:
        if v is not None and v not in VALIDATORS:
            raise ValueError(f"validator must be one of: {', '.join(sorted(VALIDATORS))}")
        return v

    @model_validator(mode="after")
    def definition_consistent(self) -> "TagSchema":
        # TagDefinition raises ValueError for inconsistent entries.
        self.to_definition()
        return self

    def to_definition(self) -> TagDefinition:
        return TagDefinition(
            tag=self.tag,
            kind=self.kind,
            before=self.before,
            after=self.after,
            content=self.content,
            validator=VALIDATORS[self.validator] if self.validator else None,
            trim=self.trim,
            attributes=tuple(
                AttributeRule(name, pattern=spec.pattern, optional=spec.optional)
                for name, spec in self.attributes.items()
            ),
        )

    @classmethod
    def from_definition(cls, d: TagDefinition, validator: str | None = None) -> "TagSchema":
        return cls(
            tag=d.tag,
            kind=d.kind,
            before=d.before,
            after=d.after,
            content=d.content,
            validator=validator,
            trim=d.trim,
            attributes={
                rule.name: AttributeSchema(pattern=rule.pattern, optional=rule.optional)
                for rule in d.attributes
            },
        )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Catalog
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class CatalogSchema(BaseModel):
    model_config = {"extra": "forbid"}

    tags: list[TagSchema] = Field(..., min_length=1)
    itemcodes: Optional[dict[str, str]] = None

    @field_validator("itemcodes")
    @classmethod
    def itemcodes_single_char(cls, v: dict[str, str] | None) -> dict[str, str] | None:
        if v is not None:
            bad = [k for k in v if len(k) != 1 or k in "[]/="]
            if bad:
                raise ValueError(f"itemcodes must be single characters, got: {', '.join(map(repr, bad))}")
        return v


# -----------------------------------------------------------------------------
