"""Exceptions raised while loading content collections.

Lookups that can simply miss (unknown id, missing parent, no headings) never
raise; they return ``None`` or an empty sequence. Only failures of the store
itself end up here.
"""

from __future__ import annotations

import pathlib
from typing import Optional


class ContentError(Exception):
    """Base class for everything sitecontent raises."""


class ContentStoreError(ContentError):
    """An entry on disk could not be turned into an Entry."""

    def __init__(self, message: str, path: Optional[pathlib.Path] = None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class UnknownCollectionError(ContentError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"unknown collection {kind!r}")
