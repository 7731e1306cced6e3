#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Tag catalogs
============
The built-in catalog plus loading / dumping of JSON catalogs.

A JSON catalog looks like::

    {
      "tags": [
        {"tag": "b", "before": "<strong>", "after": "</strong>"},
        {"tag": "url", "kind": "unparsed_content",
         "content": "<a href=\\"$1\\">$1</a>", "validator": "url"},
        {"tag": "list", "before": "<ul style=\\"list-style-type: {type}\\">",
         "after": "</ul>", "trim": "inside",
         "attributes": {"type": {"pattern": "disc|circle|square"}}}
      ],
      "itemcodes": {"*": "disc"}
    }

Validators are referenced by name (see ``VALIDATORS``).  When ``itemcodes``
is omitted the default itemcodes are used.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping

from bbrender.models import AttributeRule, TagDefinition, TagKind, TrimPolicy
from bbrender.services.validators import (
    VALIDATORS,
    extract_youtube_id,
    highlight_code,
    validate_color,
    validate_email,
    validate_size,
    validate_url,
)

log = logging.getLogger(__name__)


_QUOTE_BEFORE = '<div class="quote-left"><div class="quote-right">'
_QUOTE_AFTER  = '</div></div></div>'
_SPOILER_AFTER = '</div></div>'
_LIST_STYLES = (
    "disc|circle|square|decimal|lower-alpha|upper-alpha"
    "|lower-roman|upper-roman|none"
)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Built-in catalog
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

DEFAULT_TAGS: tuple[TagDefinition, ...] = (
    TagDefinition(tag="b", before="<strong>", after="</strong>"),
    TagDefinition(
        tag="code",
        kind=TagKind.UNPARSED_CONTENT,
        content='<pre class="code">$1</pre>',
        trim=TrimPolicy.INSIDE,
    ),
    TagDefinition(
        tag="code",
        kind=TagKind.UNPARSED_EQUALS_CONTENT,
        content='<div class="code" data-lang="$2">$1</div>',
        validator=highlight_code,
        trim=TrimPolicy.INSIDE,
    ),
    TagDefinition(
        tag="color",
        kind=TagKind.UNPARSED_EQUALS,
        before='<span style="color: $1;">',
        after="</span>",
        validator=validate_color,
    ),
    TagDefinition(
        tag="email",
        kind=TagKind.UNPARSED_CONTENT,
        content='<a href="mailto:$1">$1</a>',
        validator=validate_email,
    ),
    TagDefinition(
        tag="hr",
        kind=TagKind.CLOSED,
        content="<hr />",
        trim=TrimPolicy.INSIDE,
    ),
    TagDefinition(tag="i", before="<em>", after="</em>"),
    TagDefinition(
        tag="img",
        kind=TagKind.UNPARSED_CONTENT,
        content='<img src="$1" alt="" />',
        validator=validate_url,
    ),
    TagDefinition(tag="li", before="<li>", after="</li>", trim=TrimPolicy.BOTH),
    TagDefinition(
        tag="list",
        before='<ul class="normal" style="list-style-type: {type}">',
        after="</ul>",
        trim=TrimPolicy.INSIDE,
        attributes=(AttributeRule("type", pattern=_LIST_STYLES),),
    ),
    TagDefinition(
        tag="list",
        before='<ul class="normal">',
        after="</ul>",
        trim=TrimPolicy.INSIDE,
    ),
    TagDefinition(
        tag="quote",
        before=_QUOTE_BEFORE + '<div class="quote-from" data-date="{date}">{author}</div><div class="quote-content">',
        after=_QUOTE_AFTER,
        attributes=(
            AttributeRule("author"),
            AttributeRule("date", pattern=r"\d+", optional=True),
        ),
    ),
    TagDefinition(
        tag="quote",
        before=_QUOTE_BEFORE + '<div class="quote-content">',
        after=_QUOTE_AFTER,
    ),
    TagDefinition(
        tag="quote",
        kind=TagKind.UNPARSED_EQUALS,
        before=_QUOTE_BEFORE + '<div class="quote-from">$1</div><div class="quote-content">',
        after=_QUOTE_AFTER,
    ),
    TagDefinition(tag="s", before="<del>", after="</del>"),
    TagDefinition(
        tag="size",
        kind=TagKind.UNPARSED_EQUALS,
        before='<span style="font-size: $1;">',
        after="</span>",
        validator=validate_size,
    ),
    TagDefinition(
        tag="spoiler",
        before='<div class="spoilerContainer"><div class="spoilerHeader">+ Show Spoiler +</div>'
               '<div class="spoilerContent" style="display:none">',
        after=_SPOILER_AFTER,
    ),
    TagDefinition(
        tag="spoiler",
        kind=TagKind.PARSED_EQUALS,
        before='<div class="spoilerContainer"><div class="spoilerHeader">$1</div>'
               '<div class="spoilerContent" style="display:none">',
        after=_SPOILER_AFTER,
    ),
    TagDefinition(tag="u", before="<u>", after="</u>"),
    TagDefinition(
        tag="url",
        kind=TagKind.UNPARSED_CONTENT,
        content='<a href="$1" target="_blank">$1</a>',
        validator=validate_url,
    ),
    TagDefinition(
        tag="url",
        kind=TagKind.UNPARSED_EQUALS,
        before='<a href="$1" target="_blank">',
        after="</a>",
        validator=validate_url,
    ),
    TagDefinition(
        tag="youtube",
        kind=TagKind.UNPARSED_CONTENT,
        content='<iframe width="560" height="315" src="//www.youtube.com/embed/$1" '
                'frameborder="0" allowfullscreen></iframe>',
        validator=extract_youtube_id,
    ),
)

DEFAULT_ITEMCODES: dict[str, str] = {
    "*": "disc",
    "@": "disc",
    "+": "square",
    "x": "square",
    "#": "square",
    "o": "circle",
    "O": "circle",
    "0": "circle",
    "1": "decimal",
    ";": "",
}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# JSON catalogs
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def load_catalog(path: str | Path) -> tuple[list[TagDefinition], dict[str, str]]:
    """Read and validate a JSON catalog.

    Raises ``OSError`` if the file cannot be read and
    ``pydantic.ValidationError`` if its content is not a valid catalog.
    """
    from bbrender.schemas import CatalogSchema

    path = Path(path)
    catalog = CatalogSchema.model_validate_json(path.read_text(encoding="utf-8"))
    tags = [entry.to_definition() for entry in catalog.tags]
    itemcodes = dict(DEFAULT_ITEMCODES) if catalog.itemcodes is None else dict(catalog.itemcodes)
    log.info("Loaded %d tags and %d itemcodes from %s", len(tags), len(itemcodes), path)
    return tags, itemcodes


# -----------------------------------------------------------------------------

def dump_catalog(
    tags: Iterable[TagDefinition] = DEFAULT_TAGS,
    itemcodes: Mapping[str, str] | None = None,
) -> str:
    """Serialise a catalog to JSON (the inverse of ``load_catalog``).

    Only validators registered in ``VALIDATORS`` can be written out.
    """
    from bbrender.schemas import CatalogSchema, TagSchema

    names = {func: name for name, func in VALIDATORS.items()}
    entries = []
    for d in tags:
        if d.validator is not None and d.validator not in names:
            raise ValueError(f"Validator of tag '{d.tag}' is not registered")
        entries.append(TagSchema.from_definition(d, names.get(d.validator)))
    catalog = CatalogSchema(
        tags=entries,
        itemcodes=dict(DEFAULT_ITEMCODES if itemcodes is None else itemcodes),
    )
    return catalog.model_dump_json(indent=2)


# -----------------------------------------------------------------------------
