"""
Birth-date extraction.

Full dates are normalized from DD/MM/YYYY or DD-MM-YYYY to YYYY-MM-DD. Cards
issued with only a year of birth yield YYYY-01-01.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import List, Sequence, Tuple

from ..text.patterns import DATE_RE, DOB_LABELS, UID_RE, YOB_LABELS, contains_any
from .base import FieldExtractor, Strategy

LABELLED_YEAR_RANGE = (1930, 2010)

_LABELLED_YEAR_RE = re.compile(r"\b(19\d{2}|20\d{2})\b")
# Standalone candidate years, 1950-2015
_STANDALONE_YEAR_RE = re.compile(r"\b(19[5-9]\d|200\d|201[0-5])\b")


class BirthDateExtractor(FieldExtractor):
    """Extract the date of birth as YYYY-MM-DD."""

    field_name = "birth_date"

    def strategies(self) -> List[Tuple[str, Strategy]]:
        return [
            ("labelled date", self.labelled_date),
            ("first date", self.first_date),
            ("year of birth", self.year_of_birth),
        ]

    def normalize(self, raw: str) -> str:
        """DD-MM-YYYY (either separator) to YYYY-MM-DD, or "" if not a calendar date."""
        try:
            parsed = datetime.strptime(raw.replace("/", "-"), "%d-%m-%Y")
        except ValueError as e:
            self.logger.warning(f"Unparseable date '{raw}': {e}")
            return ""
        return parsed.strftime("%Y-%m-%d")

    def labelled_date(self, lines: Sequence[str]) -> str:
        for line in lines:
            if not contains_any(line, DOB_LABELS):
                continue
            match = DATE_RE.search(line)
            if match:
                normalized = self.normalize(match.group(0))
                if normalized:
                    return normalized
        return ""

    def first_date(self, lines: Sequence[str]) -> str:
        match = DATE_RE.search("\n".join(lines))
        if match:
            return self.normalize(match.group(0))
        return ""

    def year_of_birth(self, lines: Sequence[str]) -> str:
        low, high = LABELLED_YEAR_RANGE
        for line in lines:
            if not contains_any(line, YOB_LABELS):
                continue
            for match in _LABELLED_YEAR_RE.finditer(line):
                if low <= int(match.group(1)) <= high:
                    return f"{match.group(1)}-01-01"

        # Only an unambiguous single year outside labelled lines counts;
        # UID digit groups are not years
        unlabelled = [line for line in lines if not contains_any(line, DOB_LABELS + YOB_LABELS)]
        text = UID_RE.sub(" ", "\n".join(unlabelled))
        years = _STANDALONE_YEAR_RE.findall(text)
        if len(years) == 1:
            return f"{years[0]}-01-01"
        return ""
