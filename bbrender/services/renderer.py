#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Markup renderer
===============
Renders BBCode content to HTML with the engine configured from settings.

The default engine is built once (catalog, dispatch tables, attribute
patterns) and reused by every call; it holds no per-call state.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html as _html
import logging
from functools import lru_cache

from bbrender.core.config import get_settings
from bbrender.services.catalog import DEFAULT_ITEMCODES, DEFAULT_TAGS, load_catalog
from bbrender.services.engine import BBCodeEngine, normalize_whitespace

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

@lru_cache
def get_engine() -> BBCodeEngine:
    """Return the engine described by the current settings."""
    settings = get_settings()
    if settings.catalog_path is not None:
        tags, itemcodes = load_catalog(settings.catalog_path)
    else:
        tags, itemcodes = DEFAULT_TAGS, DEFAULT_ITEMCODES
    return BBCodeEngine(
        tags,
        itemcodes,
        autolink=settings.autolink,
        link_tags=settings.link_tags,
        max_depth=settings.max_depth,
    )


# -----------------------------------------------------------------------------
# Public render function
# -----------------------------------------------------------------------------

def render(
    content: str,
    *,
    escape: bool = False,
    engine: BBCodeEngine | None = None,
) -> str:
    """
    Render BBCode *content* to an HTML fragment.

    Parameters
    ----------
    content : raw source text; expected to be HTML-escaped already
    escape  : HTML-escape *content* first (for raw user input)
    engine  : engine to use instead of the one built from settings

    Content longer than ``max_input_chars`` is not scanned for tags; it only
    gets line-break / space normalisation.
    """
    if escape:
        content = _html.escape(content)

    settings = get_settings()
    if len(content) > settings.max_input_chars:
        log.warning(
            "Input of %d chars exceeds max_input_chars=%d; rendering as plain text",
            len(content), settings.max_input_chars,
        )
        return normalize_whitespace(content)

    return (engine or get_engine()).convert(content)


# -----------------------------------------------------------------------------
