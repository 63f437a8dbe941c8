from __future__ import annotations

import logging
import subprocess
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .utils import coerce_datetime

logger = logging.getLogger(__name__)


def _run_git_dates(cwd: Path, args: List[str]) -> List[datetime]:
    try:
        proc = subprocess.run(
            ["git"] + args,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        logger.debug("git not available, no commit dates for %s", cwd)
        return []
    if proc.returncode != 0 or not proc.stdout.strip():
        return []
    dates: List[datetime] = []
    for line in proc.stdout.splitlines():
        line = line.strip()
        if not line:
            continue
        # ISO 8601, e.g. 2025-03-01T10:23:45+00:00
        dt = coerce_datetime(line)
        if dt is not None:
            dates.append(dt)
    return dates


def git_last_commit_date(path: Path) -> Optional[datetime]:
    """Author date of the last commit touching ``path``, if it is tracked."""
    dates = _run_git_dates(
        path.parent,
        ["log", "--follow", "-1", "--format=%aI", "--", path.name],
    )
    return dates[0] if dates else None
