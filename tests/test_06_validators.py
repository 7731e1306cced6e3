#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for the built-in tag validators."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest

from bbrender.services.validators import (
    VALIDATORS,
    TagRejected,
    extract_youtube_id,
    highlight_code,
    validate_color,
    validate_email,
    validate_size,
    validate_url,
)


# =============================================================================
# URLs
# =============================================================================

@pytest.mark.parametrize("url, expected", [
    ("http://a.com", "http://a.com"),
    ("HTTPS://a.com", "HTTPS://a.com"),
    ("ftp://a.com/f", "ftp://a.com/f"),
    ("mailto:x@a.com", "mailto:x@a.com"),
    ("a.com", "http://a.com"),
    (" a.com/x \n", "http://a.com/x"),
    ("a.com<br />/x", "http://a.com/x"),
])
def test_validate_url(url, expected):
    assert validate_url(url) == expected


@pytest.mark.parametrize("url", ["", "   ", "<br />"])
def test_empty_url_rejected(url):
    with pytest.raises(TagRejected):
        validate_url(url)


@pytest.mark.parametrize("url", [
    "https://www.youtube.com/watch?v=abc123",
    "https://www.youtube.com/watch?v=abc123&t=10",
    "http://youtube.com/embed/abc123",
    "http://www.youtube.com/v/abc123?x=1",
    "https://youtu.be/abc123",
    "abc123",
])
def test_youtube_id(url):
    assert extract_youtube_id(url) == "abc123"


def test_youtube_rejects_other_sites():
    with pytest.raises(TagRejected):
        extract_youtube_id("http://vimeo.com/123")


# =============================================================================
# CSS values
# =============================================================================

@pytest.mark.parametrize("size, expected", [
    ("12", "12px"),
    ("12px", "12px"),
    ("1.5em", "1.5em"),
    ("120%", "120%"),
    (" 9pt ", "9pt"),
])
def test_validate_size(size, expected):
    assert validate_size(size) == expected


@pytest.mark.parametrize("size", ["huge", "12;color:red", "", "-1px"])
def test_invalid_size_rejected(size):
    with pytest.raises(TagRejected):
        validate_size(size)


@pytest.mark.parametrize("color", ["red", "#fff", "#A0b1C2"])
def test_validate_color(color):
    assert validate_color(color) == color


@pytest.mark.parametrize("color", ["#ff", "red;x", "url(x)", ""])
def test_invalid_color_rejected(color):
    with pytest.raises(TagRejected):
        validate_color(color)


# =============================================================================
# E-mail
# =============================================================================

def test_validate_email():
    assert validate_email(" a.b+c@x-y.co.uk ") == "a.b+c@x-y.co.uk"


@pytest.mark.parametrize("address", ["nope", "a@b", "@b.com", "a b@c.com"])
def test_invalid_email_rejected(address):
    with pytest.raises(TagRejected):
        validate_email(address)


# =============================================================================
# Code highlighting
# =============================================================================

def test_highlight_known_language():
    html, lang = highlight_code(("print(1)", "python"))
    assert lang == "python"
    assert html.startswith('<div class="highlight">')
    assert not html.endswith("\n")
    assert "print" in html


def test_highlight_unescapes_entities_once():
    html, _ = highlight_code(("a &lt; b", "text"))
    assert "a &lt; b" in html
    assert "&amp;lt;" not in html


def test_highlight_unknown_language_uses_plain_text():
    html, lang = highlight_code(("x", "nosuchlanguage"))
    assert lang == "nosuchlanguage"
    assert '<div class="highlight">' in html


def test_highlight_rejects_odd_language_names():
    with pytest.raises(TagRejected):
        highlight_code(("x", '"><script>'))


# =============================================================================
# Registry
# =============================================================================

def test_registry_names():
    assert set(VALIDATORS) == {"url", "youtube", "size", "color", "email", "code"}
    assert VALIDATORS["url"] is validate_url


# -----------------------------------------------------------------------------
