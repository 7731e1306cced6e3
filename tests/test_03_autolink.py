#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for bare URL autolinking."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest

from bbrender.models import TagDefinition
from bbrender.services.autolink import autolink, link_segments
from bbrender.services.engine import BBCodeEngine


def _a(href: str, label: str | None = None) -> str:
    return f'<a href="{href}" target="_blank">{label or href}</a>'


# =============================================================================
# autolink()
# =============================================================================

def test_text_without_urls_is_untouched():
    assert autolink("nothing to see here") == "nothing to see here"


def test_scheme_url_becomes_url_tag():
    assert autolink("go http://a.com now") == "go [url]http://a.com[/url] now"


def test_www_host_gets_http_scheme():
    assert autolink("www.a.com") == "[url=http://www.a.com]www.a.com[/url]"


def test_www_inside_scheme_url_not_wrapped_twice():
    assert autolink("http://www.a.com") == "[url]http://www.a.com[/url]"


def test_existing_link_tag_disables_pass():
    text = "x [url]http://a.com[/url] http://b.com"
    assert autolink(text) == text


def test_existing_link_tag_check_is_case_insensitive():
    text = "[URL=http://a.com]http://b.com"
    assert autolink(text) == text


@pytest.mark.parametrize("text, expected", [
    ("http://a.com.", "[url]http://a.com[/url]."),
    ("http://a.com, b", "[url]http://a.com[/url], b"),
    ("(see http://a.com/x)", "(see [url]http://a.com/x[/url])"),
    ("http://a.com?", "[url]http://a.com[/url]?"),
])
def test_trailing_punctuation_not_part_of_url(text, expected):
    assert autolink(text) == expected


def test_url_must_not_start_mid_word():
    assert autolink("xhttp://a.com") == "xhttp://a.com"


def test_link_segments_mark_generated_tags():
    assert link_segments("[b x http://a.com y") == [
        ("[b x ", False),
        ("[url]http://a.com[/url]", True),
        (" y", False),
    ]


def test_link_segments_without_urls():
    assert link_segments("plain [b") == [("plain [b", False)]


def test_www_after_scheme_url_not_linked_inside_it():
    assert autolink("http://a.com/x,www.b.com") == "[url]http://a.com/x,www.b.com[/url]"


def test_https_and_ftp_schemes():
    assert autolink("https://a.com") == "[url]https://a.com[/url]"
    assert autolink("ftp://a.com/f") == "[url]ftp://a.com/f[/url]"


def test_encoded_quotes_end_url():
    text = "&quot;http://a.com&quot;"
    assert autolink(text) == "&quot;[url]http://a.com[/url]&quot;"


def test_encoded_angle_brackets_end_url():
    text = "&lt;http://a.com&gt;"
    assert autolink(text) == "&lt;[url]http://a.com[/url]&gt;"


def test_encoded_ampersand_stays_inside_url():
    text = "http://a.com/?x=1&amp;y=2"
    assert autolink(text) == "[url]http://a.com/?x=1&amp;y=2[/url]"


# =============================================================================
# Through the engine
# =============================================================================

def test_bare_url_is_linked(convert):
    assert convert("see http://a.com now") == "see " + _a("http://a.com") + " now"


def test_www_url_is_linked(convert):
    assert convert("go to www.a.com.") == "go to " + _a("http://www.a.com", "www.a.com") + "."


def test_url_tag_content_not_wrapped_twice(convert):
    assert convert("[url]http://a.com[/url]") == _a("http://a.com")


def test_autolink_suppressed_inside_link_tag(convert):
    html = convert("[url=http://a.com]http://b.com[/url]")
    assert html == _a("http://a.com", "http://b.com")


def test_autolink_between_tags(convert):
    html = convert("[b]http://a.com[/b] and www.b.com")
    assert html == (
        "<strong>" + _a("http://a.com") + "</strong> and "
        + _a("http://www.b.com", "www.b.com")
    )


def test_several_urls_in_one_span(convert):
    html = convert("http://a.com http://b.com")
    assert html == _a("http://a.com") + " " + _a("http://b.com")


def test_url_with_encoded_ampersand(convert):
    html = convert("http://a.com/?x=1&amp;y=2")
    assert html == _a("http://a.com/?x=1&amp;y=2")


def test_unclosed_url_tag_left_alone(convert):
    assert convert("[url]http://a.com") == "[url]http://a.com"


def test_autolink_can_be_disabled():
    assert BBCodeEngine(autolink=False).convert("http://a.com") == "http://a.com"


def test_autolink_off_without_url_tag():
    eng = BBCodeEngine([TagDefinition(tag="b", before="<b>", after="</b>")])
    assert not eng.autolink
    assert eng.convert("http://a.com") == "http://a.com"


def test_stray_brackets_survive_linked_span(convert):
    html = convert("[x] http://a.com [/y]")
    assert html == "[x] " + _a("http://a.com") + " [/y]"


@pytest.mark.parametrize("source, prefix", [
    ("[quote=x http://a.com", "[quote=x "),
    ("[spoiler=see http://a.com", "[spoiler=see "),
])
def test_unterminated_parameter_stays_literal_around_link(convert, source, prefix):
    assert convert(source) == prefix + _a("http://a.com")


def test_rejected_parameter_tag_stays_literal_around_link(convert):
    html = convert("[size=12 http://a.com ] x")
    assert html == "[size=12 " + _a("http://a.com") + " ] x"


# -----------------------------------------------------------------------------
