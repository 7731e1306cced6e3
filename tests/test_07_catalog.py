#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for JSON tag catalogs."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from bbrender.models import TagDefinition, TagKind, TrimPolicy
from bbrender.schemas import CatalogSchema, TagSchema
from bbrender.services.catalog import DEFAULT_ITEMCODES, DEFAULT_TAGS, dump_catalog, load_catalog
from bbrender.services.engine import BBCodeEngine
from bbrender.services.validators import validate_url


def _write(tmp_path, data) -> str:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


# =============================================================================
# Loading
# =============================================================================

def test_load_minimal_catalog(tmp_path):
    path = _write(tmp_path, {"tags": [{"tag": "b", "before": "<b>", "after": "</b>"}]})
    tags, itemcodes = load_catalog(path)
    assert tags == [TagDefinition(tag="b", before="<b>", after="</b>")]
    assert itemcodes == DEFAULT_ITEMCODES


def test_load_resolves_validators_and_attributes(tmp_path):
    path = _write(tmp_path, {
        "tags": [
            {"tag": "link", "kind": "unparsed_content", "content": "<a href=\"$1\">$1</a>", "validator": "url"},
            {"tag": "list", "before": "<ol type=\"{t}\">", "after": "</ol>", "trim": "inside",
             "attributes": {"t": {"pattern": "a|i", "optional": True}}},
        ],
        "itemcodes": {"-": ""},
    })
    tags, itemcodes = load_catalog(path)
    assert tags[0].kind is TagKind.UNPARSED_CONTENT
    assert tags[0].validator is validate_url
    assert tags[1].trim is TrimPolicy.INSIDE
    assert tags[1].attributes[0].name == "t"
    assert tags[1].attributes[0].optional
    assert itemcodes == {"-": ""}


def test_loaded_catalog_drives_engine(tmp_path):
    path = _write(tmp_path, {
        "tags": [
            {"tag": "list", "before": "<ol>", "after": "</ol>", "trim": "inside"},
            {"tag": "link", "kind": "unparsed_content", "content": "<a href=\"$1\">$1</a>", "validator": "url"},
        ],
        "itemcodes": {"-": ""},
    })
    tags, itemcodes = load_catalog(path)
    eng = BBCodeEngine(tags, itemcodes)
    assert eng.convert("[list]\n[-]a[-]b[/list]") == "<ol><li>a</li><li>b</li></ol>"
    assert eng.convert("[link]a.com[/link]") == '<a href="http://a.com">http://a.com</a>'


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_catalog(tmp_path / "nope.json")


@pytest.mark.parametrize("data", [
    {},
    {"tags": []},
    {"tags": [{"tag": "a b"}]},
    {"tags": [{"tag": "b", "kind": "weird"}]},
    {"tags": [{"tag": "b", "validator": "nope"}]},
    {"tags": [{"tag": "b", "colour": "red"}]},
    {"tags": [{"tag": "code", "kind": "unparsed_content"}]},
    {"tags": [{"tag": "q", "kind": "unparsed_equals", "attributes": {"a": {}}}]},
    {"tags": [{"tag": "q", "attributes": {"a": {"pattern": "("}}}]},
    {"tags": [{"tag": "q", "attributes": {k: {} for k in "abcde"}}]},
    {"tags": [{"tag": "b"}], "itemcodes": {"**": "disc"}},
    {"tags": [{"tag": "b"}], "itemcodes": {"]": "disc"}},
])
def test_invalid_catalogs_rejected(tmp_path, data):
    with pytest.raises(ValidationError):
        load_catalog(_write(tmp_path, data))


def test_invalid_json_rejected(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_catalog(path)


# =============================================================================
# Dumping
# =============================================================================

def test_dump_and_reload_builtin_catalog(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(dump_catalog(), encoding="utf-8")
    tags, itemcodes = load_catalog(path)
    assert tuple(tags) == DEFAULT_TAGS
    assert itemcodes == DEFAULT_ITEMCODES


def test_dump_names_validators():
    data = json.loads(dump_catalog())
    url = [t for t in data["tags"] if t["tag"] == "url"]
    assert {t["validator"] for t in url} == {"url"}


def test_reloaded_catalog_renders_the_same(tmp_path, convert):
    path = tmp_path / "catalog.json"
    path.write_text(dump_catalog(), encoding="utf-8")
    eng = BBCodeEngine(*load_catalog(path))
    source = "[quote date=1 author=Bob][list type=circle][*]www.a.com[/list][/quote]"
    assert eng.convert(source) == convert(source)


def test_dump_rejects_unregistered_validator():
    tag = TagDefinition(tag="t", kind="unparsed_content", content="$1", validator=str.upper)
    with pytest.raises(ValueError, match="not registered"):
        dump_catalog([tag])


def test_tag_schema_round_trip():
    d = DEFAULT_TAGS[9]
    assert TagSchema.from_definition(d).to_definition() == d


def test_catalog_schema_itemcodes_optional():
    catalog = CatalogSchema.model_validate({"tags": [{"tag": "b"}]})
    assert catalog.itemcodes is None


# -----------------------------------------------------------------------------
