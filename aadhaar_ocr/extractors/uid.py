"""
UID (Aadhaar number) extraction.

The number is printed at the bottom of the card, sometimes under a
"Your Aadhaar No." label. Output is always "DDDD DDDD DDDD".
"""

from __future__ import annotations

import re
from typing import List, Sequence, Tuple

from ..text.patterns import UID_CONFLICT_KEYWORDS, UID_LABELS, UID_RE, contains_any
from .base import FieldExtractor, Strategy

_WHITESPACE_RE = re.compile(r"\s")


def format_uid(raw: str) -> str:
    """Normalize 12 digits to 4-4-4 spaced groups; anything else is returned unchanged."""
    digits = _WHITESPACE_RE.sub("", raw)
    if len(digits) != 12 or not digits.isdigit():
        return raw
    return f"{digits[:4]} {digits[4:8]} {digits[8:]}"


class UIDExtractor(FieldExtractor):
    """Extract the 12-digit identifier."""

    field_name = "uid"

    # Lines after a label searched for the number
    label_lookahead = 2
    # Bottom lines searched when there is no label
    bottom_window = 3

    def strategies(self) -> List[Tuple[str, Strategy]]:
        return [
            ("label", self.after_label),
            ("bottom lines", self.bottom_lines),
            ("anywhere", self.anywhere),
        ]

    def after_label(self, lines: Sequence[str]) -> str:
        for i, line in enumerate(lines):
            if not contains_any(line, UID_LABELS):
                continue
            for candidate in lines[i:i + 1 + self.label_lookahead]:
                match = UID_RE.search(candidate)
                if match:
                    return format_uid(match.group(0))
        return ""

    def bottom_lines(self, lines: Sequence[str]) -> str:
        for line in reversed(lines[-self.bottom_window:]):
            match = UID_RE.search(line)
            if match and not contains_any(line, UID_CONFLICT_KEYWORDS):
                return format_uid(match.group(0))
        return ""

    def anywhere(self, lines: Sequence[str]) -> str:
        match = UID_RE.search("\n".join(lines))
        return format_uid(match.group(0)) if match else ""
