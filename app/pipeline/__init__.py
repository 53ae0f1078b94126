"""
Receipt text parser.

Orchestrates: split lines → date → place → items → total → candidate.
Every stage has its own fallback, so parsing never fails; a weak parse
only means the user edits more before saving.
"""
import logging
from datetime import date
from typing import Optional

from app.pipeline.dates import extract_date
from app.pipeline.items import extract_items
from app.pipeline.lines import split_lines
from app.pipeline.places import extract_place
from app.pipeline.totals import extract_total
from app.schemas import CandidateItem, CandidateTransaction

logger = logging.getLogger(__name__)


def parse_receipt(
    raw_text: str,
    strategy: str = "lookahead",
    today: Optional[date] = None,
) -> CandidateTransaction:
    """Turn newline-delimited OCR text into a :class:`CandidateTransaction`."""
    raw_text = raw_text or ""
    lines = split_lines(raw_text)
    logger.info("Parse start — %d lines, strategy=%s", len(lines), strategy)

    evidence = {}

    found_date, date_ev = extract_date(raw_text, lines)
    if date_ev is not None:
        evidence["date"] = date_ev

    place, place_ev = extract_place(raw_text, lines)
    if place_ev is not None:
        evidence["place"] = place_ev

    items = extract_items(lines, strategy)
    logger.info("Extracted %d items", len(items))

    total, total_source, total_ev = extract_total(raw_text, lines, items)
    if total_ev is not None:
        evidence["total"] = total_ev

    return CandidateTransaction(
        place=place,
        date=found_date or today or date.today(),
        items=items or [CandidateItem(product_name="", quantity=1, price_per_unit=0)],
        total_amount=total,
        total_source=total_source,
        evidence=evidence,
    )
