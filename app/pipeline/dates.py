"""
Receipt date extraction.
"""
from __future__ import annotations

import re
from datetime import date

from app.schemas.base import Evidence, line_evidence

_DATE = re.compile(r"(\d{4})[-./](\d{1,2})[-./](\d{1,2})")


def extract_date(text: str, lines: list[str]) -> tuple[date | None, Evidence | None]:
    """Return the first date-shaped substring that is a real calendar date.

    ``2024.13.01`` or ``2024-02-30`` are skipped in favour of a later match.
    """
    for m in _DATE.finditer(text):
        year, month, day = (int(g) for g in m.groups())
        try:
            found = date(year, month, day)
        except ValueError:
            continue
        return found, _evidence_for(m.group(0), lines)
    return None, None


def _evidence_for(fragment: str, lines: list[str]) -> Evidence:
    for idx, line in enumerate(lines):
        if fragment in line:
            return line_evidence(line, idx)
    return Evidence(quote=fragment, location="text")
