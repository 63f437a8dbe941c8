"""Content identifiers.

An id is either ``"parent"`` or ``"parent/child"``; the separator folds the
subpost relationship into the id itself. ``parse_id`` is the single place
that splits it, everything else matches on ``Root`` / ``Child``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .config import SUBPOST_SEPARATOR


@dataclass(frozen=True)
class Root:
    id: str


@dataclass(frozen=True)
class Child:
    parent_id: str
    child_id: str

    @property
    def id(self) -> str:
        return f"{self.parent_id}{SUBPOST_SEPARATOR}{self.child_id}"


Identifier = Union[Root, Child]


def parse_id(entry_id: str) -> Identifier:
    parent, sep, child = entry_id.partition(SUBPOST_SEPARATOR)
    if not sep:
        return Root(entry_id)
    return Child(parent, child)


def is_subpost(entry_id: str) -> bool:
    return isinstance(parse_id(entry_id), Child)


def get_parent_id(entry_id: str) -> str:
    """Parent part of a subpost id; a top-level id comes back unchanged."""
    ident = parse_id(entry_id)
    if isinstance(ident, Child):
        return ident.parent_id
    return ident.id
