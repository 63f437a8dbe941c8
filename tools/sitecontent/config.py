#!/usr/bin/env python3
from __future__ import annotations

import os
import pathlib
import re

# ---------- Paths

# This assumes config.py sits in tools/sitecontent/ at the repo root.
ROOT = pathlib.Path(__file__).resolve().parents[2]
CONTENT_DIR = pathlib.Path(
    os.environ.get("SITECONTENT_ROOT") or ROOT / "src" / "content"
)

# ---------- Collections

BLOG = "blog"
WRITEUPS = "writeups"
PROJECTS = "projects"
AUTHORS = "authors"

COLLECTIONS = (BLOG, WRITEUPS, PROJECTS, AUTHORS)
# Kinds whose entries must carry a publish date
DATED_COLLECTIONS = (BLOG, WRITEUPS)

ENTRY_SUFFIXES = (".md", ".mdx", ".ipynb")
DATA_SUFFIXES = (".yml", ".yaml")
INDEX_STEM = "index"
# Frontmatter fields that always hold a list of strings
LIST_FIELDS = ("tags", "authors")

# ---------- Config

SUBPOST_SEPARATOR = "/"
WORDS_PER_MINUTE = 200
OVERVIEW_TITLE = "Overview"
UNDATED_KEY = "undated"
DEFAULT_AVATAR = "/static/logo.jpeg"

SITE = {
    "title": "Karev's Blog",
    "href": "https://karevvv.github.io",
    "author": "Karev",
    "locale": "id-ID",
    "featured_post_count": 2,
    "posts_per_page": 3,
}

# Some shared regexes

MD_HEADING = re.compile(r'^ {0,3}(?P<hash>#{1,6})\s+(?P<text>.+?)(?:\s+#+)?\s*$')
SETEXT_UNDERLINE = re.compile(r'^ {0,3}(?P<underline>=+|-+)\s*$')
LIST_ITEM = re.compile(r'^ {0,3}([-+*]|\d{1,9}[.)])(\s|$)')
EXPLICIT_ID = re.compile(r'\s*\{\s*#(?P<id>[-\w]+)\s*\}\s*$')
FENCE_OPEN = re.compile(r'^ {0,3}(?P<fence>`{3,}|~{3,})')
HTML_TAG = re.compile(r'<[^>]+>')
MD_IMAGE = re.compile(r'!\[(?P<alt>[^\]]*)\]\([^)]*\)')
MD_LINK = re.compile(r'\[(?P<text>[^\]]*)\]\([^)]*\)')
MD_EMPHASIS = re.compile(r'\*{1,3}|~~|`+|(?<!\w)_{1,3}|_{1,3}(?!\w)')
SLUG_STRIP = re.compile(r'[^\w\- ]+')
