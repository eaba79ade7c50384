"""
Aadhaar document validation.

Scores the primary transcript for evidence that it came from an Aadhaar card.
Positive evidence (authority keywords, a 12-digit UID, gender, birth date,
region) adds points; keywords of other document types, too little text and
too few words subtract. The score is clamped to [0, 100] and a document is
accepted at 50 or above.
"""

from __future__ import annotations

from typing import List

from .logger import get_logger
from .models import ValidationVerdict
from .text.patterns import (
    ANY_YEAR_RE,
    AUTHENTICITY_KEYWORDS,
    DATE_RE,
    FOREIGN_DOCUMENT_KEYWORDS,
    GENDER_LABEL_RE,
    GENDER_TOKENS,
    PIN_RE,
    UID_RE,
    contains_any,
    find_region,
    matching_keywords,
)

VALIDITY_THRESHOLD = 50.0

AUTHENTICITY_POINTS = 15.0
UID_POINTS = 25.0
GENDER_POINTS = 10.0
DATE_POINTS = 10.0
REGION_POINTS = 10.0
FOREIGN_KEYWORD_PENALTY = 20.0
SHORT_TEXT_PENALTY = 15.0
FEW_WORDS_PENALTY = 10.0

MIN_TEXT_LENGTH = 50
MIN_WORD_COUNT = 10


class DocumentValidator:
    """
    Decides whether a transcript is an Aadhaar card.

    Stateless; one instance can be shared by any number of processors.
    """

    def __init__(self):
        self.logger = get_logger("aadhaar_ocr.validator")

    def validate(self, text: str) -> ValidationVerdict:
        score = 0.0
        issues: List[str] = []

        score += AUTHENTICITY_POINTS * len(matching_keywords(text, AUTHENTICITY_KEYWORDS))

        if UID_RE.search(text):
            score += UID_POINTS
        else:
            issues.append("No 12-digit UID found")

        if contains_any(text, GENDER_TOKENS) or GENDER_LABEL_RE.search(text):
            score += GENDER_POINTS
        else:
            issues.append("No gender information found")

        if DATE_RE.search(text) or ANY_YEAR_RE.search(text):
            score += DATE_POINTS
        else:
            issues.append("No date/birth year pattern found")

        if find_region(text) or PIN_RE.search(text):
            score += REGION_POINTS

        foreign = matching_keywords(text, FOREIGN_DOCUMENT_KEYWORDS)
        if foreign:
            score -= FOREIGN_KEYWORD_PENALTY * len(foreign)
            issues.append(f"Contains non-Aadhaar keywords: {', '.join(foreign)}")

        if len(text) < MIN_TEXT_LENGTH:
            score -= SHORT_TEXT_PENALTY
            issues.append("Insufficient text content")

        if len(text.split()) < MIN_WORD_COUNT:
            score -= FEW_WORDS_PENALTY
            issues.append("Too few words detected")

        score = min(max(score, 0.0), 100.0)
        verdict = ValidationVerdict(
            is_valid=score >= VALIDITY_THRESHOLD,
            score=score,
            issues=tuple(issues),
        )

        self.logger.debug(f"Validation - score: {score:.0f}, valid: {verdict.is_valid}, issues: {issues}")
        return verdict

    __call__ = validate
