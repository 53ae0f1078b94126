"""
Line-item extraction.

Two strategies exist because receipt layouts disagree on where the price
sits relative to the product name:

* ``lookahead`` — a ``NNN name`` line is followed (within 3 lines) by a
  ``[barcode] unit qty total`` line.
* ``lookback`` — either everything is on one line, or a barcode price line
  follows the product name on the line just before it.
"""
from __future__ import annotations

import logging
import re
from typing import Callable

from app.pipeline.lines import AMOUNT, LETTER, is_boilerplate, parse_amount
from app.schemas.base import line_evidence
from app.schemas.receipt import CandidateItem

logger = logging.getLogger(__name__)

LOOKAHEAD_LINES = 3

_PRODUCT = re.compile(r"^(\d{3})\s+(.+)$")
_CODE_PREFIX = re.compile(r"^\d{3}\s+")
# e.g. "8809074396277.    1,300 2    2,600" or "1,300 2 2,600"
_PRICE = re.compile(r"(?:\d{8,}\s*\.?\s*)?(?<![\d,])" + AMOUNT + r"\s+(\d+)\s+" + AMOUNT)
_PRICE_ONLY = re.compile(r"^\d{8,}\s*\.?\s*" + AMOUNT + r"\s+(\d+)\s+" + AMOUNT)
_SINGLE_LINE = re.compile(
    r"^(\d{3})\s+(.+?)\s+" + AMOUNT + r"\s+(\d+)\s+" + AMOUNT + r"$"
)


def _price_from(match: re.Match[str], unit_group: int) -> tuple[int, int] | None:
    unit = parse_amount(match.group(unit_group))
    qty = int(match.group(unit_group + 1))
    if unit <= 0 or qty <= 0:
        return None
    return unit, qty


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def extract_items_lookahead(lines: list[str]) -> list[CandidateItem]:
    products: list[tuple[int, str]] = []
    for idx, line in enumerate(lines):
        if is_boilerplate(line):
            continue
        m = _PRODUCT.match(line)
        if m and LETTER.search(m.group(2)):
            products.append((idx, m.group(2).strip()))

    items: list[CandidateItem] = []
    for idx, name in products:
        for offset in range(1, LOOKAHEAD_LINES + 1):
            pos = idx + offset
            if pos >= len(lines):
                break
            price_line = lines[pos]
            if is_boilerplate(price_line):
                continue
            m = _PRICE.search(price_line)
            if not m:
                continue
            price = _price_from(m, 1)
            if price is None:
                continue
            unit, qty = price
            items.append(
                CandidateItem(
                    product_name=name,
                    quantity=qty,
                    price_per_unit=unit,
                    evidence=[line_evidence(lines[idx], idx), line_evidence(price_line, pos)],
                )
            )
            break
    return items


def extract_items_lookback(lines: list[str]) -> list[CandidateItem]:
    items: list[CandidateItem] = []
    seen: set[str] = set()

    for idx, line in enumerate(lines):
        if is_boilerplate(line):
            continue

        m = _SINGLE_LINE.match(line)
        if m and LETTER.search(m.group(2)):
            price = _price_from(m, 3)
            if price is not None:
                name = m.group(2).strip()
                items.append(
                    CandidateItem(
                        product_name=name,
                        quantity=price[1],
                        price_per_unit=price[0],
                        evidence=[line_evidence(line, idx)],
                    )
                )
                seen.add(name)
                continue

        m = _PRICE_ONLY.match(line)
        if not m or idx == 0:
            continue
        prev = lines[idx - 1]
        if is_boilerplate(prev):
            continue
        name = _CODE_PREFIX.sub("", prev).strip()
        if not LETTER.search(name) or name in seen:
            continue
        price = _price_from(m, 1)
        if price is None:
            continue
        items.append(
            CandidateItem(
                product_name=name,
                quantity=price[1],
                price_per_unit=price[0],
                evidence=[line_evidence(prev, idx - 1), line_evidence(line, idx)],
            )
        )
        seen.add(name)
    return items


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

DEFAULT_STRATEGY = "lookahead"

ITEM_STRATEGIES: dict[str, Callable[[list[str]], list[CandidateItem]]] = {
    "lookahead": extract_items_lookahead,
    "lookback": extract_items_lookback,
}


def extract_items(lines: list[str], strategy: str = DEFAULT_STRATEGY) -> list[CandidateItem]:
    fn = ITEM_STRATEGIES.get(strategy)
    if fn is None:
        logger.warning("Unknown item strategy %r, using %s", strategy, DEFAULT_STRATEGY)
        fn = ITEM_STRATEGIES[DEFAULT_STRATEGY]
    return fn(lines)
