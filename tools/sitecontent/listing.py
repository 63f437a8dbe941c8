"""Canonical listings of a collection: drafts out, newest first."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence

from .config import AUTHORS, BLOG, PROJECTS, SITE
from .identifiers import is_subpost
from .models import Entry
from .store import ContentStore

EPOCH = datetime(1970, 1, 1)


def newest_first(entries: Sequence[Entry]) -> List[Entry]:
    # sorted() is stable under reverse=True too: equal dates keep store order
    return sorted(entries, key=lambda e: e.date or EPOCH, reverse=True)


def list_all(store: ContentStore, kind: str) -> List[Entry]:
    """Every non-draft entry of ``kind``, subposts included."""
    return newest_first([e for e in store.fetch_entries(kind) if not e.draft])


def list_top_level(store: ContentStore, kind: str) -> List[Entry]:
    return [e for e in list_all(store, kind) if not is_subpost(e.id)]


def list_recent(store: ContentStore, kind: str, count: int) -> List[Entry]:
    return list_top_level(store, kind)[:max(count, 0)]


def list_projects(store: ContentStore) -> List[Entry]:
    """Projects by start date, newest first; undated projects go last."""
    return sorted(
        store.fetch_entries(PROJECTS),
        key=lambda e: e.start_date or EPOCH,
        reverse=True,
    )


def list_authors(store: ContentStore) -> List[Entry]:
    return store.fetch_entries(AUTHORS)


def posts_by_tag(store: ContentStore, tag: str) -> List[Entry]:
    return [e for e in list_top_level(store, BLOG) if tag in e.tags]


def posts_by_author(store: ContentStore, author_id: str) -> List[Entry]:
    return [e for e in list_top_level(store, BLOG) if author_id in e.authors]


def paginate(
    entries: Sequence[Entry], page: int, per_page: Optional[int] = None
) -> List[Entry]:
    """1-based page of ``entries``; pages past the end are empty."""
    per_page = per_page or SITE["posts_per_page"]
    if page < 1:
        return []
    start = (page - 1) * per_page
    return list(entries[start : start + per_page])


def page_count(entries: Sequence[Entry], per_page: Optional[int] = None) -> int:
    per_page = per_page or SITE["posts_per_page"]
    return max(1, -(-len(entries) // per_page))
