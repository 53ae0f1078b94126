"""
Store / place name extraction.

Strategies are tried in order; the first hit wins.
"""
from __future__ import annotations

import re

from app.pipeline.lines import DATE_SHAPE, HANGUL
from app.schemas.base import Evidence, line_evidence

PLACE_DEFAULT = "영수증 업로드"

# Known retail chains. Hypermarkets may carry a branch suffix ("이마트 성수점").
CHAIN_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"이마트\s*([^\n]*점)?", re.IGNORECASE),
    re.compile(r"롯데마트\s*([^\n]*점)?", re.IGNORECASE),
    re.compile(r"홈플러스\s*([^\n]*점)?", re.IGNORECASE),
    re.compile(r"GS25", re.IGNORECASE),
    re.compile(r"(?<![A-Za-z])CU(?![A-Za-z])", re.IGNORECASE),
    re.compile(r"세븐일레븐", re.IGNORECASE),
    re.compile(r"올리브영", re.IGNORECASE),
    re.compile(r"다이소", re.IGNORECASE),
    re.compile(r"스타벅스", re.IGNORECASE),
    re.compile(r"맥도날드", re.IGNORECASE),
]

STORE_MARKER = "점"
SHORT_LINE_MIN = 3
SHORT_LINE_MAX = 29
SHORT_LINE_EXCLUDE = ["주소", "전화", "영수증"]


def _from_chain(text: str, lines: list[str]) -> tuple[str, Evidence] | None:
    for pat in CHAIN_PATTERNS:
        m = pat.search(text)
        if not m:
            continue
        # the branch suffix may sit on the next OCR line
        place = " ".join(m.group(0).split())
        for idx, line in enumerate(lines):
            if pat.search(line):
                return place, line_evidence(line, idx)
        return place, Evidence(quote=place, location="text")
    return None


def _from_store_marker(text: str, lines: list[str]) -> tuple[str, Evidence] | None:
    for idx, line in enumerate(lines):
        if line.endswith(STORE_MARKER) and HANGUL.search(line):
            return line, line_evidence(line, idx)
    return None


def _from_short_line(text: str, lines: list[str]) -> tuple[str, Evidence] | None:
    for idx, line in enumerate(lines):
        if not SHORT_LINE_MIN <= len(line) <= SHORT_LINE_MAX:
            continue
        if not HANGUL.search(line) or DATE_SHAPE.search(line):
            continue
        if any(kw in line for kw in SHORT_LINE_EXCLUDE):
            continue
        return line, line_evidence(line, idx)
    return None


PLACE_STRATEGIES = [
    _from_chain,
    _from_store_marker,
    _from_short_line,
]


def extract_place(text: str, lines: list[str]) -> tuple[str, Evidence | None]:
    for strategy in PLACE_STRATEGIES:
        hit = strategy(text, lines)
        if hit is not None:
            return hit
    return PLACE_DEFAULT, None
