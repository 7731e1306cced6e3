#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Itemcodes — ``[*]``-style shorthand for list items.

Inside ``[list]`` (or an item of one) a bracketed single character such as
``[*]`` or ``[o]`` starts a new ``li``, closing the previous one.  Anywhere
else the bracket stays literal text.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from bbrender.models import OpenTagFrame, TrimPolicy
from bbrender.services.tags import TagTable


LIST_CONTEXTS = ("li", "list")

ITEM_FRAME = OpenTagFrame(tag="li", after="</li>", trim=TrimPolicy.BOTH)


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ItemcodeExpansion:
    close: int            # frames to pop before opening the item (0 or 1)
    html:  str
    frame: OpenTagFrame = ITEM_FRAME


def item_open_tag(style: str) -> str:
    return f'<li type="{style}">' if style else "<li>"


def expand_itemcode(
    table: TagTable,
    stack: Sequence[OpenTagFrame],
    char: str,
) -> Optional[ItemcodeExpansion]:
    """Work out what ``[char]`` expands to at the current stack, if anything."""
    style = table.itemcode(char)
    if style is None or not stack:
        return None
    inside = stack[-1].tag
    if inside not in LIST_CONTEXTS:
        return None
    return ItemcodeExpansion(
        close=1 if inside == "li" else 0,
        html=item_open_tag(style),
    )


# -----------------------------------------------------------------------------
