"""Where entries come from.

Every query in this package takes a store as its first argument. A store
hands out the raw entries of one collection and renders an entry to its
heading outline; it keeps no state between calls, so results always reflect
what is on disk (or in memory) right now.
"""

from __future__ import annotations

import logging
import pathlib
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

import yaml

from .config import (
    COLLECTIONS,
    CONTENT_DIR,
    DATA_SUFFIXES,
    DATED_COLLECTIONS,
    ENTRY_SUFFIXES,
    INDEX_STEM,
    LIST_FIELDS,
)
from .errors import ContentStoreError, UnknownCollectionError
from .git import git_last_commit_date
from .markdown_processing import collect_headings
from .models import Entry, Heading, Rendered
from .notebooks import load_notebook
from .utils import _norm_text, natural_key, normalize_frontmatter_dates, parse_frontmatter

logger = logging.getLogger(__name__)


class ContentStore(Protocol):
    def fetch_entries(self, kind: str) -> List[Entry]:
        ...

    def render(self, entry: Entry) -> Rendered:
        ...


class MemoryStore:
    """Store over entries already in memory.

    Headings come from ``headings`` when given for an entry, otherwise they
    are collected from the entry's markdown body.
    """

    def __init__(
        self,
        entries: Iterable[Entry] = (),
        headings: Optional[Dict[Tuple[str, str], Sequence[Heading]]] = None,
    ):
        self._entries = list(entries)
        self._headings = dict(headings or {})

    def fetch_entries(self, kind: str) -> List[Entry]:
        return [e for e in self._entries if e.kind == kind]

    def render(self, entry: Entry) -> Rendered:
        key = (entry.kind, entry.id)
        if key in self._headings:
            return Rendered(headings=list(self._headings[key]), body=entry.body)
        return Rendered(headings=collect_headings(entry.body), body=entry.body)


def entry_id_for(kind_dir: pathlib.Path, path: pathlib.Path) -> str:
    """``post/index.md`` -> ``post``, ``post/part-1.md`` -> ``post/part-1``."""
    rel = path.relative_to(kind_dir).with_suffix("")
    if rel.name == INDEX_STEM and rel.parent != pathlib.Path("."):
        rel = rel.parent
    return rel.as_posix()


def check_field_shapes(fm: Dict, p: pathlib.Path) -> Dict:
    """Coerce list fields given as a single string; reject other bad shapes."""
    for key in LIST_FIELDS:
        value = fm.get(key)
        if value is None:
            continue
        if isinstance(value, str):
            fm[key] = [value]
        elif not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ContentStoreError(f"'{key}' must be a string or a list of strings", p)
    if "draft" in fm and not isinstance(fm["draft"], bool):
        raise ContentStoreError("'draft' must be true or false", p)
    if fm.get("order") is not None and (
        isinstance(fm["order"], bool) or not isinstance(fm["order"], int)
    ):
        raise ContentStoreError("'order' must be an integer", p)
    return fm


class FileSystemStore:
    """Store over an Astro-style content directory.

    ``<root>/<kind>/**`` holds markdown (with YAML frontmatter), notebooks
    and, for data collections such as authors, plain YAML files.
    """

    def __init__(self, root: pathlib.Path = CONTENT_DIR, use_git_dates: bool = True):
        self.root = pathlib.Path(root)
        self.use_git_dates = use_git_dates

    def _files(self, kind_dir: pathlib.Path) -> List[pathlib.Path]:
        suffixes = ENTRY_SUFFIXES + DATA_SUFFIXES
        files = [
            p for p in kind_dir.rglob("*")
            if p.is_file() and p.suffix.lower() in suffixes
            and not any(part.startswith((".", "_")) for part in p.relative_to(kind_dir).parts)
        ]
        files.sort(key=lambda p: natural_key(p.relative_to(kind_dir).as_posix()))
        return files

    def fetch_entries(self, kind: str) -> List[Entry]:
        if kind not in COLLECTIONS:
            raise UnknownCollectionError(kind)
        kind_dir = self.root / kind
        if not kind_dir.is_dir():
            logger.debug("no %s directory under %s", kind, self.root)
            return []

        entries: List[Entry] = []
        seen: Dict[str, pathlib.Path] = {}
        for p in self._files(kind_dir):
            entry = self._load(kind, kind_dir, p)
            if entry.id in seen:
                raise ContentStoreError(
                    f"duplicate id {entry.id!r} (also {seen[entry.id]})", p
                )
            seen[entry.id] = p
            entries.append(entry)
        return entries

    def _read(self, p: pathlib.Path):
        suffix = p.suffix.lower()
        if suffix == ".ipynb":
            return load_notebook(p)
        try:
            text = _norm_text(p.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise ContentStoreError(f"unreadable file: {e}", p) from e
        try:
            if suffix in DATA_SUFFIXES:
                return yaml.safe_load(text) or {}, ""
            fm, body = parse_frontmatter(text)
        except yaml.YAMLError as e:
            raise ContentStoreError(f"invalid YAML: {e}", p) from e
        return (fm if fm is not None else {}), body

    def _load(self, kind: str, kind_dir: pathlib.Path, p: pathlib.Path) -> Entry:
        fm, body = self._read(p)
        if not isinstance(fm, dict):
            raise ContentStoreError("frontmatter must be a mapping", p)
        fm = normalize_frontmatter_dates(check_field_shapes(dict(fm), p))

        if kind in DATED_COLLECTIONS and fm.get("date") is None:
            fallback = git_last_commit_date(p) if self.use_git_dates else None
            if fallback is None:
                raise ContentStoreError("missing or invalid 'date'", p)
            logger.info("%s: no date in frontmatter, using last commit %s", p, fallback)
            fm["date"] = fallback

        entry = Entry(
            id=entry_id_for(kind_dir, p), kind=kind, data=fm, body=body, path=p
        )
        logger.debug("loaded %s %s", kind, entry.id)
        return entry

    def render(self, entry: Entry) -> Rendered:
        return Rendered(headings=collect_headings(entry.body), body=entry.body)
