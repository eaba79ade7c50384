"""Gender extraction: returns "M", "F" or ""."""

from __future__ import annotations

import re
from typing import List, Sequence, Tuple

from ..text.patterns import DATE_RE
from .base import FieldExtractor, Strategy

# Tried in this order on each line
GENDER_LABEL_PATTERNS = [
    re.compile(r"Gender[:\s]*([MF])", re.IGNORECASE),
    re.compile(r"Sex[:\s]*([MF])", re.IGNORECASE),
    re.compile(r"लिंग[:\s]*([MF])", re.IGNORECASE),
    re.compile(r"\b(M)ale\b", re.IGNORECASE),
    re.compile(r"\b(F)emale\b", re.IGNORECASE),
]

_STANDALONE_RE = re.compile(r"^\s*[mf]\s*$", re.IGNORECASE)


class GenderExtractor(FieldExtractor):
    """Extract the single-letter gender code."""

    field_name = "gender"

    def strategies(self) -> List[Tuple[str, Strategy]]:
        return [
            ("label", self.from_label),
            ("standalone letter", self.standalone_letter),
            ("keyword", self.from_keyword),
        ]

    def from_label(self, lines: Sequence[str]) -> str:
        for line in lines:
            for pattern in GENDER_LABEL_PATTERNS:
                match = pattern.search(line)
                if match:
                    return match.group(1).upper()
        return ""

    def standalone_letter(self, lines: Sequence[str]) -> str:
        """A lone M/F line next to the date line."""
        for i, line in enumerate(lines):
            if not _STANDALONE_RE.match(line):
                continue
            before = i > 0 and DATE_RE.search(lines[i - 1])
            after = i < len(lines) - 1 and DATE_RE.search(lines[i + 1])
            if before or after:
                return line.strip().upper()
        return ""

    def from_keyword(self, lines: Sequence[str]) -> str:
        # "male" is a substring of "female"
        text = "\n".join(lines).lower()
        if "female" in text:
            return "F"
        if "male" in text:
            return "M"
        return ""
