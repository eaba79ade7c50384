"""
Holder-name extraction.

The name is printed directly below the issuing-authority heading, so the
lines following the heading are scored first. Explicit "Name:" labels and a
plain first-plausible-line scan are fallbacks.
"""

from __future__ import annotations

import re
from typing import List, Sequence, Tuple

from ..text.patterns import (
    AUTHORITY_HEADINGS,
    DATE_RE,
    GENDER_ONLY_RE,
    HEADER_KEYWORDS,
    NAME_LABEL_RE,
    NAME_LABELS,
    NAME_STOP_WORDS,
    UID_RE,
    contains_any,
    find_region,
)
from .base import FieldExtractor, Strategy
from .name_scorer import NAME_ACCEPT_THRESHOLD, score_name_candidate

# Lines scanned after an authority heading
HEADING_WINDOW = 6

_SIX_DIGITS_RE = re.compile(r"\b\d{6}\b")
_NON_LETTER_RE = re.compile(r"[^A-Za-z\s]")
_NON_LETTER_SPACE_RE = re.compile(r"[^A-Za-z ]")
_WHITESPACE_RE = re.compile(r"\s+")


def is_not_name(line: str) -> bool:
    """True for lines that cannot hold the holder name (numbers, gender, region, noise)."""
    if UID_RE.search(line) or DATE_RE.search(line) or _SIX_DIGITS_RE.search(line):
        return True
    if GENDER_ONLY_RE.match(line.strip()):
        return True
    if find_region(line):
        return True
    return len(line.strip()) < 3


def is_valid_name(name: str) -> bool:
    """Two or more words of 2+ chars, 4-50 chars overall, no institutional words."""
    words = name.split()
    if len(words) < 2:
        return False
    if not 4 <= len(name) <= 50:
        return False
    if contains_any(name, NAME_STOP_WORDS):
        return False
    return all(len(word) >= 2 for word in words)


def _letters_only(line: str, pattern: re.Pattern = _NON_LETTER_RE) -> str:
    return _WHITESPACE_RE.sub(" ", pattern.sub(" ", line)).strip()


class NameExtractor(FieldExtractor):
    """Extract the card holder's name."""

    field_name = "name"

    def strategies(self) -> List[Tuple[str, Strategy]]:
        return [
            ("authority heading", self.after_authority_heading),
            ("name label", self.from_label),
            ("first plausible line", self.first_plausible_line),
        ]

    def after_authority_heading(self, lines: Sequence[str]) -> str:
        for i, line in enumerate(lines):
            if not contains_any(line, AUTHORITY_HEADINGS):
                continue

            candidates = []
            for candidate_line in lines[i + 1:i + 1 + HEADING_WINDOW]:
                if is_not_name(candidate_line):
                    continue
                cleaned = _letters_only(candidate_line)
                if len(cleaned) >= 4:
                    candidates.append(cleaned)

            best = self.select_best(candidates)
            if best:
                return best
        return ""

    def select_best(self, candidates: Sequence[str]) -> str:
        """Highest-scoring candidate (earliest on ties) if it clears the threshold."""
        if not candidates:
            return ""

        scored = [(candidate, score_name_candidate(candidate)) for candidate in candidates]
        self.logger.debug(
            "Name candidates: " + ", ".join(f"{c} ({s:.0f})" for c, s in scored)
        )

        best, best_score = max(scored, key=lambda pair: pair[1])
        return best if best_score >= NAME_ACCEPT_THRESHOLD else ""

    def from_label(self, lines: Sequence[str]) -> str:
        for line in lines:
            if not contains_any(line, NAME_LABELS):
                continue
            match = NAME_LABEL_RE.search(line)
            if match:
                name = match.group(1).strip()
                if is_valid_name(name):
                    return name
        return ""

    def first_plausible_line(self, lines: Sequence[str]) -> str:
        for line in lines:
            if contains_any(line, HEADER_KEYWORDS) or is_not_name(line):
                continue
            cleaned = _letters_only(line, _NON_LETTER_SPACE_RE)
            if is_valid_name(cleaned):
                return cleaned
        return ""
