from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional, Tuple

import yaml


def natural_key(s: str):
    return [int(t) if t.isdigit() else t for t in re.split(r'(\d+)', s.lower())]


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def coerce_datetime(v) -> Optional[datetime]:
    """Turn a frontmatter date-ish value into a naive UTC datetime.

    Unparseable strings give ``None`` so callers can decide whether a
    missing date is an error.
    """
    if v is None:
        return None
    if isinstance(v, datetime):
        if v.tzinfo is not None:
            v = v.astimezone(timezone.utc).replace(tzinfo=None)
        return v
    if isinstance(v, date):
        return datetime(v.year, v.month, v.day)
    if isinstance(v, str):
        s = v.strip().strip('"').strip("'")
        if not s:
            return None
        try:
            return coerce_datetime(datetime.fromisoformat(s.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


def normalize_frontmatter_dates(
    fm: Dict[str, Any],
    keys=("date", "startDate", "endDate", "updated"),
) -> Dict[str, Any]:
    if not isinstance(fm, dict):
        return fm
    for k in keys:
        if k in fm and fm[k] is not None:
            fm[k] = coerce_datetime(fm[k])
    return fm


def parse_frontmatter(text: str) -> Tuple[Optional[Dict[str, Any]], str]:
    s = text.lstrip()
    if not s.startswith("---\n") and not s.startswith("---\r\n"):
        return None, text

    lines = s.splitlines(keepends=True)
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            fm_text = "".join(lines[1:i])
            body = "".join(lines[i + 1 :])
            fm = yaml.safe_load(fm_text) or {}
            return fm, body
    return None, text
