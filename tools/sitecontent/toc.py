"""Table of contents across a parent entry and its subposts."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .config import OVERVIEW_TITLE
from .identifiers import get_parent_id
from .models import Heading, TOCHeading, TOCSection
from .relations import resolve_by_id, sibling_group
from .store import ContentStore


def _within(headings: Sequence[Heading], max_depth: Optional[int]) -> List[Heading]:
    if max_depth is None:
        return list(headings)
    return [h for h in headings if h.depth <= max_depth]


def get_toc_sections(
    store: ContentStore,
    kind: str,
    entry_id: str,
    max_depth: Optional[int] = None,
) -> List[TOCSection]:
    """Outline for the page of ``entry_id``.

    A subpost page shows the same outline as its parent: an "Overview"
    section with the parent's headings, then one section per subpost in
    sibling order. Sections without headings are left out, and the first
    heading of a subpost section is flagged as that subpost's title.
    """
    entry = resolve_by_id(store, kind, entry_id)
    if entry is None:
        return []

    parent_id = get_parent_id(entry_id)
    parent = entry if parent_id == entry_id else resolve_by_id(store, kind, parent_id)
    if parent is None:
        return []

    sections: List[TOCSection] = []

    parent_headings = _within(store.render(parent).headings, max_depth)
    if parent_headings:
        sections.append(
            TOCSection(
                type="parent",
                title=OVERVIEW_TITLE,
                headings=[TOCHeading(h.slug, h.text, h.depth) for h in parent_headings],
            )
        )

    for subpost in sibling_group(store, kind, parent_id):
        headings = _within(store.render(subpost).headings, max_depth)
        if not headings:
            continue
        sections.append(
            TOCSection(
                type="subpost",
                title=subpost.title,
                headings=[
                    TOCHeading(h.slug, h.text, h.depth, is_subpost_title=(i == 0))
                    for i, h in enumerate(headings)
                ],
                subpost_id=subpost.id,
            )
        )

    return sections
