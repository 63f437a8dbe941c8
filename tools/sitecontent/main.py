#!/usr/bin/env python3
"""
Query the site's content collections from the command line.

- list KIND          -> published entries, newest first (--all keeps subposts)
- tags               -> blog tags by use
- years KIND         -> entry ids grouped by year
- adjacent KIND ID   -> newer/older/parent navigation for one entry
- toc KIND ID        -> table of contents for an entry's page
- reading-time KIND ID
- authors ID...      -> byline data

Output is YAML on stdout.
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

import yaml

from .aggregation import (
    combined_reading_time,
    entry_reading_time,
    group_by_year,
    group_projects_by_year,
    sorted_tags,
)
from .authors import parse_authors
from .config import COLLECTIONS, CONTENT_DIR, PROJECTS
from .errors import ContentError
from .listing import list_all, list_projects, list_top_level, paginate
from .models import Entry
from .relations import get_adjacent
from .store import FileSystemStore
from .toc import get_toc_sections


def summarize(entry: Optional[Entry]) -> Optional[Dict[str, Any]]:
    if entry is None:
        return None
    when = entry.date or entry.start_date
    return {
        "id": entry.id,
        "title": entry.title,
        "date": when.date().isoformat() if when else None,
    }


def _list(store, args) -> Any:
    if args.kind == PROJECTS:
        entries = list_projects(store)
    elif args.all:
        entries = list_all(store, args.kind)
    else:
        entries = list_top_level(store, args.kind)
    if args.page:
        entries = paginate(entries, args.page, args.per_page)
    return [summarize(e) for e in entries]


def _years(store, args) -> Any:
    if args.kind == PROJECTS:
        groups = group_projects_by_year(list_projects(store))
    else:
        groups = group_by_year(list_top_level(store, args.kind))
    return {year: [e.id for e in entries] for year, entries in groups.items()}


def _adjacent(store, args) -> Any:
    adj = get_adjacent(store, args.kind, args.id)
    return {
        "newer": summarize(adj.newer),
        "older": summarize(adj.older),
        "parent": summarize(adj.parent),
    }


def _toc(store, args) -> Any:
    return [
        asdict(s)
        for s in get_toc_sections(store, args.kind, args.id, max_depth=args.max_depth)
    ]


def _reading_time(store, args) -> Any:
    if args.combined:
        return combined_reading_time(store, args.kind, args.id)
    return entry_reading_time(store, args.kind, args.id)


def _tags(store, args) -> Any:
    return [{"tag": tag, "count": count} for tag, count in sorted_tags(store)]


def _authors(store, args) -> Any:
    return [asdict(a) for a in parse_authors(store, args.ids)]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sitecontent", description=__doc__.splitlines()[1])
    parser.add_argument("--root", type=pathlib.Path, default=CONTENT_DIR,
                        help="content directory (default: %(default)s)")
    parser.add_argument("--no-git-dates", action="store_true",
                        help="do not fall back to git commit dates")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list")
    p.add_argument("kind", choices=COLLECTIONS)
    p.add_argument("--all", action="store_true", help="include subposts")
    p.add_argument("--page", type=int)
    p.add_argument("--per-page", type=int)
    p.set_defaults(func=_list)

    p = sub.add_parser("tags")
    p.set_defaults(func=_tags)

    p = sub.add_parser("years")
    p.add_argument("kind", choices=COLLECTIONS)
    p.set_defaults(func=_years)

    p = sub.add_parser("adjacent")
    p.add_argument("kind", choices=COLLECTIONS)
    p.add_argument("id")
    p.set_defaults(func=_adjacent)

    p = sub.add_parser("toc")
    p.add_argument("kind", choices=COLLECTIONS)
    p.add_argument("id")
    p.add_argument("--max-depth", type=int)
    p.set_defaults(func=_toc)

    p = sub.add_parser("reading-time")
    p.add_argument("kind", choices=COLLECTIONS)
    p.add_argument("id")
    p.add_argument("--combined", action="store_true",
                   help="include subposts of a parent entry")
    p.set_defaults(func=_reading_time)

    p = sub.add_parser("authors")
    p.add_argument("ids", nargs="*")
    p.set_defaults(func=_authors)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    store = FileSystemStore(args.root, use_git_dates=not args.no_git_dates)
    try:
        result = args.func(store, args)
    except ContentError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(yaml.safe_dump(result, sort_keys=False, allow_unicode=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
