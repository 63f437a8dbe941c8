"""Tests for notebook entries."""

from __future__ import annotations

from datetime import datetime

import nbformat
import pytest
from nbformat.v4 import new_code_cell, new_markdown_cell, new_notebook, new_output

from sitecontent.errors import ContentStoreError
from sitecontent.notebooks import apply_visibility, first_h1, load_notebook, visible_cell
from sitecontent.store import FileSystemStore


def _notebook(**metadata):
    return new_notebook(
        cells=[
            new_markdown_cell("# Gradient Descent\n\nSome intro words."),
            new_code_cell("x = 1\nprint(x)"),
            new_markdown_cell("internal notes", metadata={"tags": ["remove-cell"]}),
            new_markdown_cell("## Results {#results}"),
        ],
        metadata=metadata,
    )


class TestVisibility:
    def test_remove_cell_tag(self):
        cell = new_code_cell("x", metadata={"tags": ["remove-cell"]})
        assert visible_cell(cell) is None

    def test_hidden_input_blanks_code(self):
        cell = new_code_cell(
            "secret()",
            metadata={"tags": ["hide-input"]},
            outputs=[new_output("stream", name="stdout", text="42\n")],
        )
        shown = visible_cell(cell)
        assert shown["source"] == ""
        assert shown["outputs"]
        assert cell["source"] == "secret()"

    def test_hidden_markdown_is_dropped(self):
        cell = new_markdown_cell("hidden", metadata={"jupyter": {"source_hidden": True}})
        assert visible_cell(cell) is None

    def test_hidden_outputs(self):
        cell = new_code_cell(
            "run()",
            metadata={"tags": ["remove-output"]},
            outputs=[new_output("stream", name="stdout", text="noise\n")],
            execution_count=3,
        )
        shown = visible_cell(cell)
        assert shown["outputs"] == []
        assert shown["execution_count"] is None

    def test_empty_cells_dropped(self):
        nb = new_notebook(cells=[new_markdown_cell("   "), new_code_cell(""), new_code_cell("1")])
        apply_visibility(nb)
        assert [c["source"] for c in nb.cells] == ["1"]

    def test_first_h1(self):
        assert first_h1(_notebook()) == "Gradient Descent"
        assert first_h1(new_notebook(cells=[new_markdown_cell("## only h2")])) is None


class TestLoadNotebook:
    def test_frontmatter_and_body(self, tmp_path):
        path = tmp_path / "gd.ipynb"
        nbformat.write(_notebook(date="2024-03-01", tags=["ml"]), str(path))
        fm, body = load_notebook(path)
        assert fm == {"date": "2024-03-01", "tags": ["ml"], "title": "Gradient Descent"}
        assert "Some intro words." in body
        assert "print(x)" in body
        assert "internal notes" not in body

    def test_title_from_metadata_wins(self, tmp_path):
        path = tmp_path / "gd.ipynb"
        nbformat.write(_notebook(title="Custom"), str(path))
        fm, _ = load_notebook(path)
        assert fm["title"] == "Custom"

    def test_title_from_filename(self, tmp_path):
        path = tmp_path / "linear-models.ipynb"
        nbformat.write(new_notebook(cells=[new_code_cell("1")]), str(path))
        fm, _ = load_notebook(path)
        assert fm["title"] == "Linear Models"

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "binary.ipynb"
        path.write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(ContentStoreError):
            load_notebook(path)

    def test_not_json(self, tmp_path):
        path = tmp_path / "broken.ipynb"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ContentStoreError):
            load_notebook(path)


class TestNotebookEntries:
    def test_store_loads_notebooks(self, tmp_path):
        nb_dir = tmp_path / "blog" / "ml"
        nb_dir.mkdir(parents=True)
        nbformat.write(_notebook(date="2024-03-01"), str(nb_dir / "index.ipynb"))

        store = FileSystemStore(tmp_path, use_git_dates=False)
        (entry,) = store.fetch_entries("blog")
        assert entry.id == "ml"
        assert entry.title == "Gradient Descent"
        assert entry.date == datetime(2024, 3, 1)
        assert [(h.slug, h.depth) for h in store.render(entry).headings] == [
            ("gradient-descent", 1),
            ("results", 2),
        ]
