"""Grouping, tag counts and reading time."""

from __future__ import annotations

import math
from collections import Counter
from typing import Dict, List, Sequence, Tuple

from .config import BLOG, UNDATED_KEY, WORDS_PER_MINUTE
from .identifiers import Root
from .listing import list_top_level
from .markdown_processing import strip_markup
from .models import Entry
from .relations import resolve_by_id, sibling_group
from .store import ContentStore
from .utils import coerce_datetime


def group_by_year(
    entries: Sequence[Entry], date_field: str = "date"
) -> Dict[str, List[Entry]]:
    """``{"2024": [...], ...}`` keeping the input order inside each year.

    Entries without a value for ``date_field`` land under ``UNDATED_KEY``.
    """
    groups: Dict[str, List[Entry]] = {}
    for entry in entries:
        when = coerce_datetime(entry.data.get(date_field))
        key = f"{when.year:04d}" if when else UNDATED_KEY
        groups.setdefault(key, []).append(entry)
    return groups


def group_projects_by_year(projects: Sequence[Entry]) -> Dict[str, List[Entry]]:
    return group_by_year(projects, date_field="startDate")


def tag_frequency(store: ContentStore, kind: str = BLOG) -> Dict[str, int]:
    counts: Counter = Counter()
    for entry in list_top_level(store, kind):
        counts.update(entry.tags)
    return dict(counts)


def sorted_tags(store: ContentStore, kind: str = BLOG) -> List[Tuple[str, int]]:
    """Tags by count, most used first; ties in alphabetical order."""
    return sorted(tag_frequency(store, kind).items(), key=lambda kv: (-kv[1], kv[0]))


def count_words(text: str) -> int:
    if not text:
        return 0
    return len(strip_markup(text).split())


def reading_time(word_count: int) -> str:
    minutes = max(1, math.floor(word_count / WORDS_PER_MINUTE + 0.5))
    return f"{minutes} min read"


def entry_reading_time(store: ContentStore, kind: str, entry_id: str) -> str:
    entry = resolve_by_id(store, kind, entry_id)
    if entry is None:
        return reading_time(0)
    return reading_time(count_words(entry.body))


def combined_reading_time(store: ContentStore, kind: str, entry_id: str) -> str:
    """Reading time of a parent together with all of its subposts.

    For a subpost only its own words count.
    """
    entry = resolve_by_id(store, kind, entry_id)
    if entry is None:
        return reading_time(0)

    words = count_words(entry.body)
    if isinstance(entry.ident, Root):
        for subpost in sibling_group(store, kind, entry_id):
            words += count_words(subpost.body)
    return reading_time(words)
