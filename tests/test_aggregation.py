"""Tests for year grouping, tag counts and reading time."""

from __future__ import annotations

from datetime import date

import pytest

from sitecontent.aggregation import (
    combined_reading_time,
    count_words,
    entry_reading_time,
    group_by_year,
    group_projects_by_year,
    reading_time,
    sorted_tags,
    tag_frequency,
)
from sitecontent.models import Entry
from sitecontent.store import MemoryStore


def _make_entry(entry_id, when=None, kind="blog", body="", **data) -> Entry:
    if when is not None:
        data["date"] = when
    return Entry(id=entry_id, kind=kind, data=data, body=body)


def _words(n: int) -> str:
    return " ".join(["word"] * n)


class TestGroupByYear:
    def test_year_boundary(self):
        entries = [_make_entry("a", date(2023, 12, 31)), _make_entry("b", date(2024, 1, 1))]
        groups = group_by_year(entries)
        assert list(groups) == ["2023", "2024"]
        assert [e.id for e in groups["2023"]] == ["a"]
        assert [e.id for e in groups["2024"]] == ["b"]

    def test_keeps_input_order_within_year(self):
        entries = [
            _make_entry("late", date(2024, 9, 1)),
            _make_entry("early", date(2024, 1, 1)),
            _make_entry("older", date(2022, 1, 1)),
            _make_entry("mid", date(2024, 5, 1)),
        ]
        groups = group_by_year(entries)
        assert [e.id for e in groups["2024"]] == ["late", "early", "mid"]

    def test_projects_use_start_date(self):
        projects = [
            Entry(id="p1", kind="projects", data={"startDate": date(2021, 4, 1)}),
            Entry(id="p2", kind="projects", data={}),
            Entry(id="p3", kind="projects", data={"startDate": "2021-10-10"}),
        ]
        groups = group_projects_by_year(projects)
        assert {k: [e.id for e in v] for k, v in groups.items()} == {
            "2021": ["p1", "p3"],
            "undated": ["p2"],
        }

    def test_empty(self):
        assert group_by_year([]) == {}


class TestTags:
    @pytest.fixture
    def store(self):
        return MemoryStore([
            _make_entry("p1", date(2024, 1, 1), tags=["rust", "go"]),
            _make_entry("p2", date(2024, 1, 2), tags=["go", "rust", "c"]),
            _make_entry("p3", date(2024, 1, 3), tags=["go"], draft=True),
            _make_entry("p2/sub", date(2024, 1, 4), tags=["c"]),
            _make_entry("p4", date(2024, 1, 5)),
            _make_entry("w1", date(2024, 1, 5), kind="writeups", tags=["pwn"]),
        ])

    def test_frequency_skips_drafts_and_subposts(self, store):
        assert tag_frequency(store) == {"rust": 2, "go": 2, "c": 1}

    def test_sorted_ties_alphabetical(self, store):
        assert sorted_tags(store) == [("go", 2), ("rust", 2), ("c", 1)]

    def test_other_kind(self, store):
        assert sorted_tags(store, "writeups") == [("pwn", 1)]

    def test_no_posts(self):
        assert sorted_tags(MemoryStore()) == []


class TestCountWords:
    def test_strips_html(self):
        assert count_words("<p>Hello <b>world</b></p>") == 2

    def test_strips_markdown(self):
        assert count_words("**one** two [three](http://example.com) ![four](x.png)") == 4

    def test_empty(self):
        assert count_words("") == 0
        assert count_words("   \n\t ") == 0


class TestReadingTime:
    @pytest.mark.parametrize(
        "words, expected",
        [(0, "1 min read"), (99, "1 min read"), (299, "1 min read"),
         (300, "2 min read"), (1000, "5 min read")],
    )
    def test_rounding(self, words, expected):
        assert reading_time(words) == expected


class TestEntryReadingTime:
    @pytest.fixture
    def store(self):
        return MemoryStore([
            _make_entry("long", date(2024, 1, 1), body=_words(400)),
            _make_entry("long/a", date(2024, 1, 2), body=_words(300)),
            _make_entry("long/b", date(2024, 1, 3), body=_words(300)),
            _make_entry("long/c", date(2024, 1, 3), body=_words(5000), draft=True),
        ])

    def test_single(self, store):
        assert entry_reading_time(store, "blog", "long") == "2 min read"

    def test_combined_parent_sums_subposts(self, store):
        assert combined_reading_time(store, "blog", "long") == "5 min read"

    def test_combined_subpost_counts_itself(self, store):
        assert combined_reading_time(store, "blog", "long/a") == "2 min read"

    def test_unknown(self, store):
        assert entry_reading_time(store, "blog", "nope") == "1 min read"
        assert combined_reading_time(store, "blog", "nope") == "1 min read"
