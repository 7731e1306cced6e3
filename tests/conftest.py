#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for bbrender tests.
Every test starts from default settings: BBRENDER_* variables are removed
and the cached settings / engine are rebuilt.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import os

import pytest

from bbrender.core.config import get_settings
from bbrender.services.engine import BBCodeEngine
from bbrender.services.renderer import get_engine


# -----------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for key in list(os.environ):
        if key.upper().startswith("BBRENDER_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    get_engine.cache_clear()
    yield
    get_settings.cache_clear()
    get_engine.cache_clear()


@pytest.fixture(scope="session")
def engine() -> BBCodeEngine:
    """Engine with the built-in catalog, shared like a real host would."""
    return BBCodeEngine()


@pytest.fixture
def convert(engine):
    return engine.convert


# -----------------------------------------------------------------------------
