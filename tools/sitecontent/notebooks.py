"""Jupyter notebooks as content entries.

Hidden and empty cells are dropped first (same tags JupyterBook and
nbconvert's TagRemovePreprocessor use), then the notebook is exported to
markdown so it can be treated like any other markdown entry.
"""

from __future__ import annotations

import copy
import pathlib
import re
from typing import Any, Dict, Optional, Tuple

import nbformat
from nbconvert import MarkdownExporter
from nbformat import NotebookNode
from nbformat.reader import NotJSONError

from .errors import ContentStoreError
from .utils import _norm_text

_HIDDEN_INPUT_TAGS = {"hide-input", "remove-input", "hide_input", "remove_input"}
_HIDDEN_OUTPUT_TAGS = {"hide-output", "remove-output", "hide_output", "remove_output"}
_REMOVE_CELL_TAGS = {"remove-cell", "hide-cell", "remove_cell", "hide_cell"}

# Notebook metadata keys copied into the entry's frontmatter
FRONTMATTER_KEYS = (
    "title", "description", "date", "draft", "order", "tags", "authors",
    "startDate", "endDate",
)

_H1 = re.compile(r'^\s*#\s+(.+?)\s*(?:\{\s*#[-\w]+\s*\})?\s*$', re.MULTILINE)


def _tags(cell: NotebookNode) -> set:
    md = cell.get("metadata") or {}
    return set(md.get("tags") or [])


def _flag(cell: NotebookNode, key: str, tags: set) -> bool:
    md = cell.get("metadata") or {}
    jup = md.get("jupyter") if isinstance(md.get("jupyter"), dict) else {}
    return bool(jup.get(key)) or bool(md.get(key)) or bool(tags)


def visible_cell(cell: NotebookNode) -> Optional[NotebookNode]:
    """Copy of ``cell`` with hidden parts removed, or None to drop it."""
    tags = _tags(cell)
    if tags & _REMOVE_CELL_TAGS:
        return None

    c = copy.deepcopy(cell)
    kind = c.get("cell_type")

    if _flag(c, "source_hidden", tags & _HIDDEN_INPUT_TAGS):
        if kind == "markdown":
            return None
        if kind == "code":
            c["source"] = ""

    if kind == "code" and _flag(c, "outputs_hidden", tags & _HIDDEN_OUTPUT_TAGS):
        c["outputs"] = []
        c["execution_count"] = None

    src = _norm_text(c.get("source", "")).strip()
    if kind == "markdown" and not src and not c.get("attachments"):
        return None
    if kind == "code" and not src and not c.get("outputs"):
        return None
    return c


def apply_visibility(nb: NotebookNode) -> NotebookNode:
    nb.cells = [c for c in (visible_cell(cell) for cell in nb.cells) if c is not None]
    return nb


def first_h1(nb: NotebookNode) -> Optional[str]:
    for cell in nb.cells:
        if cell.get("cell_type") != "markdown":
            continue
        m = _H1.search(_norm_text(cell.get("source", "")))
        if m:
            return m.group(1).strip()
    return None


def load_notebook(path: pathlib.Path) -> Tuple[Dict[str, Any], str]:
    """Frontmatter and markdown body of a notebook on disk."""
    try:
        nb = nbformat.read(str(path), as_version=4)
        nbformat.validate(nb)
    except (OSError, UnicodeDecodeError, NotJSONError, nbformat.ValidationError) as e:
        raise ContentStoreError(f"invalid notebook: {e}", path) from e

    apply_visibility(nb)

    meta = nb.metadata or {}
    fm: Dict[str, Any] = {k: meta[k] for k in FRONTMATTER_KEYS if k in meta}
    fm.setdefault("title", first_h1(nb) or path.stem.replace("-", " ").title())

    body, _ = MarkdownExporter().from_notebook_node(nb)
    return fm, _norm_text(body)
