#!/usr/bin/env python
"""
Render a BBCode file to HTML.

Usage:
    .venv/bin/python scripts/render_bbcode.py [FILE] [options]

Options:
    -o, --output PATH    Write the HTML here (default: stdout)
    --escape             HTML-escape the input first (raw user text)
    --no-autolink        Do not turn bare URLs into links
    --catalog PATH       JSON tag catalog to use instead of the built-in one
    --max-depth N        Recursion limit for parsed parameters
    --dump-catalog       Print the built-in catalog as JSON and exit
    --log-level LEVEL    DEBUG, INFO, WARNING (default from BBRENDER_LOG_LEVEL)

Reads stdin when FILE is omitted or "-".

Example:
    echo "[b]hi[/b] www.example.com" | .venv/bin/python scripts/render_bbcode.py
    .venv/bin/python scripts/render_bbcode.py post.txt --escape -o post.html
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure bbrender package is importable when run from project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from bbrender.core.config import get_settings
from bbrender.services.catalog import DEFAULT_ITEMCODES, DEFAULT_TAGS, dump_catalog, load_catalog
from bbrender.services.engine import BBCodeEngine
from bbrender.services.renderer import render

log = logging.getLogger("render_bbcode")


# ── CLI ───────────────────────────────────────────────────────────────────────

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    p = argparse.ArgumentParser(
        description="Render BBCode to HTML.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("file", nargs="?", default="-", help="BBCode source (default: stdin)")
    p.add_argument("-o", "--output", type=Path, default=None, help="output file (default: stdout)")
    p.add_argument("--escape", action="store_true", help="HTML-escape the input first")
    p.add_argument("--no-autolink", action="store_true", help="leave bare URLs alone")
    p.add_argument("--catalog", type=Path, default=settings.catalog_path, help="JSON tag catalog")
    p.add_argument("--max-depth", type=int, default=settings.max_depth, help="recursion limit")
    p.add_argument("--dump-catalog", action="store_true", help="print the built-in catalog and exit")
    p.add_argument("--log-level", default=settings.log_level, help="logging level")
    return p.parse_args(argv)


def build_engine(args: argparse.Namespace) -> BBCodeEngine:
    settings = get_settings()
    if args.catalog is not None:
        tags, itemcodes = load_catalog(args.catalog)
    else:
        tags, itemcodes = DEFAULT_TAGS, DEFAULT_ITEMCODES
    return BBCodeEngine(
        tags,
        itemcodes,
        autolink=settings.autolink and not args.no_autolink,
        link_tags=settings.link_tags,
        max_depth=args.max_depth,
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.dump_catalog:
        print(dump_catalog())
        return 0

    try:
        engine = build_engine(args)
    except (OSError, ValueError) as exc:
        # pydantic.ValidationError is a ValueError
        log.error("Cannot load catalog %s: %s", args.catalog, exc)
        return 2

    if args.file == "-":
        source = sys.stdin.read()
    else:
        try:
            source = Path(args.file).read_text(encoding="utf-8")
        except OSError as exc:
            log.error("Cannot read %s: %s", args.file, exc)
            return 2

    html = render(source, escape=args.escape, engine=engine)

    if args.output is None:
        sys.stdout.write(html + "\n")
    else:
        args.output.write_text(html, encoding="utf-8")
        log.info("Written %s (%d chars)", args.output, len(html))
    return 0


if __name__ == "__main__":
    sys.exit(main())
