"""
Shared primitives.
"""
from __future__ import annotations

from pydantic import BaseModel, Field


class Evidence(BaseModel):
    """A verbatim quote from the OCR text that supports an extracted value."""
    quote: str = Field(..., description="Exact OCR line")
    location: str = Field(..., description="e.g. 'line 5' or 'lines 5-7'")


def line_evidence(line: str, index: int) -> Evidence:
    """Evidence for a 0-based line index."""
    return Evidence(quote=line.strip(), location=f"line {index + 1}")
