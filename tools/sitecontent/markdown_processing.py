from __future__ import annotations

from typing import Callable, Dict, List, Optional

from .config import (
    EXPLICIT_ID,
    FENCE_OPEN,
    HTML_TAG,
    LIST_ITEM,
    MD_EMPHASIS,
    MD_HEADING,
    MD_IMAGE,
    MD_LINK,
    SETEXT_UNDERLINE,
    SLUG_STRIP,
)
from .models import Heading


def map_noncode(md: str, fn: Callable[[List[str]], List[str]]) -> str:
    """Apply ``fn`` to each run of lines outside fenced code blocks."""
    out: List[str] = []
    run: List[str] = []
    fence: Optional[str] = None
    for line in md.split("\n"):
        m = FENCE_OPEN.match(line)
        if fence is None and m:
            out.extend(fn(run))
            run = []
            fence = m.group("fence")
            out.append(line)
        elif fence is not None:
            out.append(line)
            if line.strip().startswith(fence[0] * len(fence)) and not line.strip().strip(fence[0]):
                fence = None
        else:
            run.append(line)
    out.extend(fn(run))
    return "\n".join(out)


def inline_text(s: str) -> str:
    s = HTML_TAG.sub("", s)
    s = MD_IMAGE.sub(lambda m: m.group("alt"), s)
    s = MD_LINK.sub(lambda m: m.group("text"), s)
    s = MD_EMPHASIS.sub("", s)
    return s.strip()


def slugify_heading(text: str, used_ids: Dict[str, int]) -> str:
    base = SLUG_STRIP.sub("", text.strip().lower()).replace(" ", "-")
    n = used_ids.get(base, 0)
    used_ids[base] = n + 1
    return base if n == 0 else f"{base}-{n}"


def _heading_from(raw: str, depth: int, used_ids: Dict[str, int]) -> Heading:
    m = EXPLICIT_ID.search(raw)
    if m:
        text = inline_text(raw[: m.start()])
        slug = m.group("id")
        used_ids[slug] = used_ids.get(slug, 0) + 1
    else:
        text = inline_text(raw)
        slug = slugify_heading(text, used_ids)
    return Heading(slug=slug, text=text, depth=depth)


def collect_headings(md: str, max_depth: int = 6) -> List[Heading]:
    """ATX and Setext headings outside code fences, in document order.

    Slugs are unique within the document (``intro``, ``intro-1``, ...);
    an inline ``{#id}`` wins over the generated slug.
    """
    headings: List[Heading] = []
    used_ids: Dict[str, int] = {}

    def _scan(lines: List[str]) -> List[str]:
        prev = ""
        for line in lines:
            atx = MD_HEADING.match(line)
            setext = SETEXT_UNDERLINE.match(line)
            if atx:
                depth = len(atx.group("hash"))
                if depth <= max_depth:
                    headings.append(_heading_from(atx.group("text"), depth, used_ids))
                prev = ""
                continue
            if (
                setext
                and prev.strip()
                and not prev.startswith((" " * 4, "\t"))
                and not LIST_ITEM.match(prev)
            ):
                depth = 1 if setext.group("underline").startswith("=") else 2
                if depth <= max_depth:
                    headings.append(_heading_from(prev, depth, used_ids))
                prev = ""
                continue
            prev = line
        return lines

    map_noncode(md, _scan)
    return headings


def strip_markup(md: str) -> str:
    """Plain text of a markdown/HTML body, code blocks included."""
    text = HTML_TAG.sub(" ", md)
    text = MD_IMAGE.sub(lambda m: m.group("alt"), text)
    text = MD_LINK.sub(lambda m: m.group("text"), text)
    text = MD_EMPHASIS.sub("", text)
    return text
