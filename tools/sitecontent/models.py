from __future__ import annotations

import pathlib
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .identifiers import Identifier, parse_id
from .utils import coerce_datetime


@dataclass(frozen=True)
class Entry:
    """One content item as handed out by a store.

    ``data`` is the frontmatter mapping; the properties below read the
    fields the query layer cares about with the defaults the site expects.
    """

    id: str
    kind: str
    data: Dict[str, Any] = field(default_factory=dict)
    body: str = ""
    path: Optional[pathlib.Path] = None

    @property
    def ident(self) -> Identifier:
        return parse_id(self.id)

    @property
    def title(self) -> str:
        return str(self.data.get("title") or self.id)

    @property
    def date(self) -> Optional[datetime]:
        return coerce_datetime(self.data.get("date"))

    @property
    def start_date(self) -> Optional[datetime]:
        return coerce_datetime(self.data.get("startDate"))

    @property
    def draft(self) -> bool:
        return bool(self.data.get("draft", False))

    @property
    def order(self) -> int:
        return int(self.data.get("order") or 0)

    @property
    def tags(self) -> List[str]:
        return list(self.data.get("tags") or [])

    @property
    def authors(self) -> List[str]:
        return list(self.data.get("authors") or [])


@dataclass(frozen=True)
class Heading:
    slug: str
    text: str
    depth: int


@dataclass(frozen=True)
class Rendered:
    headings: List[Heading] = field(default_factory=list)
    body: str = ""


@dataclass(frozen=True)
class TOCHeading:
    slug: str
    text: str
    depth: int
    is_subpost_title: bool = False


@dataclass(frozen=True)
class TOCSection:
    type: str  # "parent" | "subpost"
    title: str
    headings: List[TOCHeading]
    subpost_id: Optional[str] = None


@dataclass(frozen=True)
class Adjacency:
    """Navigation neighbours. ``newer``/``older`` are directions in time."""

    newer: Optional[Entry] = None
    older: Optional[Entry] = None
    parent: Optional[Entry] = None


@dataclass(frozen=True)
class AuthorRef:
    id: str
    name: str
    avatar: str
    is_registered: bool
