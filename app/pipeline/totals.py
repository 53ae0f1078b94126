"""
Receipt total extraction.
"""
from __future__ import annotations

import re

from app.pipeline.lines import AMOUNT, parse_amount
from app.schemas.base import Evidence, line_evidence
from app.schemas.receipt import CandidateItem

# The keyword and its amount may sit on separate OCR lines.
_TOTAL = re.compile(r"(?:합계|총액|total)[:\s]*" + AMOUNT, re.IGNORECASE)


def extract_total(
    text: str, lines: list[str], items: list[CandidateItem]
) -> tuple[int, str, Evidence | None]:
    """Return ``(total, source, evidence)``; source is ``keyword`` or ``items``."""
    m = _TOTAL.search(text)
    if m:
        head = m.group(0).split("\n")[0].strip()
        evidence = None
        for idx, line in enumerate(lines):
            if head in line:
                evidence = line_evidence(line, idx)
                break
        return parse_amount(m.group(1)), "keyword", evidence
    return sum(it.quantity * it.price_per_unit for it in items), "items", None
