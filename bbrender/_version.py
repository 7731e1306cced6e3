"""Package version: installed distribution metadata, else the pyproject.toml next to the package."""
from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def _source_version() -> str:
    # Running from a checkout without `pip install -e .`
    try:
        text = _PYPROJECT.read_text(encoding="utf-8")
    except OSError:
        return "0.0.0"
    m = re.search(r'^version\s*=\s*"([^"]+)"', text, re.MULTILINE)
    return m.group(1) if m else "0.0.0"


try:
    __version__: str = version("bbrender")
except PackageNotFoundError:
    __version__ = _source_version()
