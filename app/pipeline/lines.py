"""
Line splitting, boilerplate detection and amount tokens shared by every stage.
"""
from __future__ import annotations

import re

HANGUL = re.compile(r"[가-힣]")
LETTER = re.compile(r"[가-힣a-zA-Z]")
DATE_SHAPE = re.compile(r"\d{4}[-./]\d{1,2}[-./]\d{1,2}")
PHONE = re.compile(r"\d{2,3}-\d{3,4}-\d{4}")

# Grouped-thousands ("1,300") or a plain digit run ("1300").
AMOUNT = r"(\d{1,3}(?:,\d{3})+|\d+)"

# URLs, address, phone, business registration, return policy, receipt header
BOILERPLATE_KEYWORDS: list[str] = [
    "http",
    "www",
    "주소",
    "전화",
    "사업자",
    "대표",
    "교환",
    "환불",
    "영수증",
]


def split_lines(text: str) -> list[str]:
    """Non-blank, stripped lines in OCR order."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def is_boilerplate(line: str) -> bool:
    if any(kw in line for kw in BOILERPLATE_KEYWORDS):
        return True
    return PHONE.search(line) is not None


def parse_amount(token: str) -> int:
    return int(token.replace(",", ""))
