"""
Heuristic scoring of holder-name candidates.

Indian names on the card are usually two to four words (given name, optional
middle name, surname). Institutional text that survives cleaning ("Unique
Identification Authority", "... Limited") is pushed below the acceptance
threshold.
"""

from __future__ import annotations

NAME_ACCEPT_THRESHOLD = 50.0

_WORD_COUNT_POINTS = {2: 40.0, 3: 50.0, 4: 45.0, 1: 10.0}

# "umited" is a common misread of "Limited"
_INSTITUTIONAL_WORDS = ["authority", "government", "unique", "identification", "card", "umited", "limited"]

_SURNAME_ROOTS = ["kumar", "singh", "sharma", "patel", "mehta", "gupta", "verma", "shah", "jain"]


def score_name_candidate(text: str) -> float:
    """Score a cleaned name candidate; higher is more name-like, never negative."""
    words = text.split()
    if not words:
        return 0.0

    score = _WORD_COUNT_POINTS.get(len(words), 20.0)

    length = len(text)
    if 8 <= length <= 30:
        score += 30.0
    elif 6 <= length <= 40:
        score += 20.0
    elif 4 <= length <= 50:
        score += 10.0

    lowered = text.lower()
    if any(word in lowered for word in _INSTITUTIONAL_WORDS):
        score -= 30.0

    if any(root in word.lower() for word in words for root in _SURNAME_ROOTS):
        score += 15.0

    if all(2 <= len(word) <= 15 for word in words):
        score += 10.0
    else:
        score -= 10.0

    if any(len(word) == 1 for word in words):
        score -= 20.0

    return max(score, 0.0)
