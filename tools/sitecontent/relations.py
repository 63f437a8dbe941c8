"""Parent/subpost relationships and prev/next navigation."""

from __future__ import annotations

from typing import List, Optional

from .identifiers import Child, parse_id
from .listing import EPOCH, list_all, list_top_level
from .models import Adjacency, Entry
from .store import ContentStore


def _is_child_of(entry: Entry, parent_id: str) -> bool:
    ident = entry.ident
    return isinstance(ident, Child) and ident.parent_id == parent_id


def sibling_group(store: ContentStore, kind: str, parent_id: str) -> List[Entry]:
    """Non-draft subposts of ``parent_id``, oldest first, then by ``order``."""
    subposts = [
        e for e in store.fetch_entries(kind)
        if not e.draft and _is_child_of(e, parent_id)
    ]
    return sorted(subposts, key=lambda e: (e.date or EPOCH, e.order))


def subpost_count(store: ContentStore, kind: str, parent_id: str) -> int:
    return len(sibling_group(store, kind, parent_id))


def has_subposts(store: ContentStore, kind: str, parent_id: str) -> bool:
    return subpost_count(store, kind, parent_id) > 0


def resolve_by_id(store: ContentStore, kind: str, entry_id: str) -> Optional[Entry]:
    """The visible entry with this id, or None.

    Drafts are invisible here exactly as in the listings, whether they are
    top-level entries or subposts.
    """
    for entry in list_all(store, kind):
        if entry.id == entry_id:
            return entry
    return None


def get_parent(store: ContentStore, kind: str, entry_id: str) -> Optional[Entry]:
    ident = parse_id(entry_id)
    if not isinstance(ident, Child):
        return None
    return resolve_by_id(store, kind, ident.parent_id)


def _index_of(entries: List[Entry], entry_id: str) -> int:
    for i, entry in enumerate(entries):
        if entry.id == entry_id:
            return i
    return -1


def get_adjacent(store: ContentStore, kind: str, current_id: str) -> Adjacency:
    """Newer/older neighbours of ``current_id`` within its own scope.

    Subposts move through their sibling group (oldest first, so ``newer`` is
    the next one); top-level entries move through the newest-first listing
    (so ``newer`` is the previous one). Unknown ids and drafts get an empty
    result.
    """
    ident = parse_id(current_id)

    if isinstance(ident, Child):
        parent = next(
            (e for e in list_top_level(store, kind) if e.id == ident.parent_id),
            None,
        )
        siblings = sibling_group(store, kind, ident.parent_id)
        i = _index_of(siblings, current_id)
        if i == -1:
            return Adjacency(parent=parent)
        return Adjacency(
            newer=siblings[i + 1] if i < len(siblings) - 1 else None,
            older=siblings[i - 1] if i > 0 else None,
            parent=parent,
        )

    entries = list_top_level(store, kind)
    i = _index_of(entries, current_id)
    if i == -1:
        return Adjacency()
    return Adjacency(
        newer=entries[i - 1] if i > 0 else None,
        older=entries[i + 1] if i < len(entries) - 1 else None,
    )
