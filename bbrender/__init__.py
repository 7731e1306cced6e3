"""
bbrender — BBCode to HTML.

    >>> from bbrender import render
    >>> render("[b]bold[/b]")
    '<strong>bold</strong>'
"""

from bbrender._version import __version__
from bbrender.models import AttributeRule, OpenTagFrame, TagDefinition, TagKind, TrimPolicy
from bbrender.services.catalog import DEFAULT_ITEMCODES, DEFAULT_TAGS, dump_catalog, load_catalog
from bbrender.services.engine import BBCodeEngine, normalize_whitespace
from bbrender.services.renderer import get_engine, render
from bbrender.services.validators import VALIDATORS, TagRejected

__all__ = [
    "__version__",
    "AttributeRule",
    "OpenTagFrame",
    "TagDefinition",
    "TagKind",
    "TrimPolicy",
    "DEFAULT_ITEMCODES",
    "DEFAULT_TAGS",
    "dump_catalog",
    "load_catalog",
    "BBCodeEngine",
    "normalize_whitespace",
    "get_engine",
    "render",
    "VALIDATORS",
    "TagRejected",
]
