#!/usr/bin/env python
"""
Write the Pygments stylesheet used by highlighted [code=lang] blocks.

Usage:
    .venv/bin/python scripts/gen_pygments_css.py [--style friendly] [-o pygments.css]
"""

from __future__ import annotations

import argparse
from pathlib import Path

from pygments.formatters import HtmlFormatter


def main(argv: list[str] | None = None) -> None:
    p = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    p.add_argument("--style", default="friendly", help="Pygments style name")
    p.add_argument("-o", "--output", type=Path, default=Path("pygments.css"))
    args = p.parse_args(argv)

    css = HtmlFormatter(style=args.style).get_style_defs(".highlight")
    args.output.write_text(css, encoding="utf-8")
    print(f"Written {args.output}")


if __name__ == "__main__":
    main()
