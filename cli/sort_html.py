"""Command line entrypoint: sort the children of an HTML container by rule text."""

from __future__ import annotations
import argparse
import json
import logging
import sys

from bs4 import BeautifulSoup

from config import settings
from services import html_sort
from sorting.errors import ContainerNotFoundError, RuleSyntaxError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Sort HTML elements by attribute/property rules")
    p.add_argument("file", nargs="?", help="HTML file to read (stdin when omitted)")
    p.add_argument("--container", required=True, help="CSS selector of the element whose children are sorted")
    p.add_argument("--by", default=None, help='Rule text, e.g. "{td.name}, >data-rank"')
    p.add_argument("--reverse", action="store_true", help="Flip the direction of every rule")
    p.add_argument("--random", action="store_true", help="Shuffle instead of sorting")
    p.add_argument("--seed", type=int, default=None, help="Seed for --random")
    p.add_argument("--all", action="store_true", help="Sort every matching container, not only the first")
    p.add_argument("--strict", action="store_true", help="Reject malformed rule text")
    p.add_argument("--json", action="store_true", help="Output JSON summary instead of HTML")
    p.add_argument("--log-level", default=settings.LOG_LEVEL, help="Logging level (default from SORTER_LOG_LEVEL)")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    if args.file:
        with open(args.file, encoding="utf-8") as fh:
            html = fh.read()
    else:
        html = sys.stdin.read()
    try:
        sorter = html_sort.make_sorter(
            args.by, reverse=args.reverse, random=args.random, seed=args.seed, strict=args.strict
        )
        soup = BeautifulSoup(html, settings.HTML_PARSER)
        results = html_sort.sort_document(soup, args.container, sorter, all_containers=args.all)
    except (RuleSyntaxError, ContainerNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    if args.json:
        summary = {
            "rules": sorter.by,
            "containers": len(results),
            "moved": sum(r.moved for r in results),
            "warnings": [w for r in results for w in r.warnings],
        }
        print(json.dumps(summary, indent=2))
    else:
        print(str(soup))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
