from __future__ import annotations

from typing import Iterable, List

from .config import DEFAULT_AVATAR
from .listing import list_authors
from .models import AuthorRef
from .store import ContentStore


def parse_authors(store: ContentStore, author_ids: Iterable[str] = ()) -> List[AuthorRef]:
    """Byline data for ``author_ids``; unknown ids still get a plain entry."""
    author_ids = list(author_ids)
    if not author_ids:
        return []

    registered = {a.id: a for a in list_authors(store)}
    refs: List[AuthorRef] = []
    for author_id in author_ids:
        author = registered.get(author_id)
        data = author.data if author else {}
        refs.append(
            AuthorRef(
                id=author_id,
                name=data.get("name") or author_id,
                avatar=data.get("avatar") or DEFAULT_AVATAR,
                is_registered=author is not None,
            )
        )
    return refs
