"""
Keep/drop decisions for individual OCR lines.

The Latin pass turns Hindi print into garbage like "fft rrr" or "a b c".
`sanitize_line` drops such lines and returns a whitespace-collapsed copy of
everything that carries recognizable content.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from .patterns import DEVANAGARI_RANGE

GENDER_MARKERS = ("m", "f", "male", "female")

_GARBAGE_PATTERNS = [
    re.compile(r"^(.)\1{3,}$"),                             # one character repeated
    re.compile(r"[^a-zA-Z0-9\s]{4,}"),                      # symbol soup
    re.compile(r"(fft|ffr|rff|tft|rtr|ttt|rrr|fff)"),       # misread conjuncts
    re.compile(r"\b[a-z]\s+[a-z]\s+[a-z]"),                 # fragmented letters
]

_UNCOMMON_BIGRAMS = ["qx", "qz", "xq", "xz", "zx", "zq", "jx", "jz", "wx", "wz"]

_COMMON_WORDS = [
    "government", "india", "of", "authority", "unique", "identification",
    "male", "female", "gender", "date", "birth", "year", "address",
    "name", "aadhaar", "aadhar", "uid", "dob", "yob", "pin",
    "road", "street", "lane", "east", "west", "north", "south",
    "maharashtra", "delhi", "mumbai", "bangalore", "chennai", "kolkata",
    "gujarat", "rajasthan", "punjab", "haryana", "kerala", "karnataka",
]

_WHITESPACE_RE = re.compile(r"\s+")
_DIGIT_RE = re.compile(r"\d")
_ALPHA_WORD_RE = re.compile(r"[A-Za-z]+")


def is_gender_marker(line: str) -> bool:
    return line.strip().lower() in GENDER_MARKERS


def is_garbage_line(line: str) -> bool:
    """True for lines that look like Latin-pass noise from Hindi print."""
    lowered = line.strip().lower()
    if lowered in GENDER_MARKERS:
        return False

    if any(p.search(lowered) for p in _GARBAGE_PATTERNS):
        return True

    return sum(1 for bigram in _UNCOMMON_BIGRAMS if bigram in lowered) >= 2


def has_meaningful_content(line: str) -> bool:
    if is_gender_marker(line):
        return True
    if len(line) < 2:
        return False

    # UIDs, dates, house numbers, pin codes
    if _DIGIT_RE.search(line):
        return True

    lowered = line.lower()
    if any(word in lowered for word in _COMMON_WORDS):
        return True

    # Proper-name shape
    words = [w for w in line.split() if len(w) > 1]
    if 2 <= len(words) <= 4 and all(len(w) <= 15 and _ALPHA_WORD_RE.fullmatch(w) for w in words):
        return True

    vowels = sum(1 for c in lowered if c in "aeiou")
    consonants = sum(1 for c in lowered if c.isalpha() and c not in "aeiou")
    if vowels + consonants and 0.15 <= vowels / (vowels + consonants) <= 0.75:
        return True

    return len(line) >= 6


def sanitize_line(line: str) -> Optional[str]:
    """
    Cleaned line, or None when the line should be dropped.

    Gender markers ("M", "F", "Male", "Female") always survive.
    """
    cleaned = _WHITESPACE_RE.sub(" ", line.strip())
    if not cleaned or is_garbage_line(cleaned):
        return None
    if not has_meaningful_content(cleaned):
        return None
    return cleaned


def sanitize_lines(lines: Iterable[str]) -> List[str]:
    return [cleaned for cleaned in map(sanitize_line, lines) if cleaned is not None]


def devanagari_ratio(line: str) -> float:
    """Share of Devanagari among the line's letters (Latin + Devanagari)."""
    devanagari = sum(1 for c in line if DEVANAGARI_RANGE[0] <= c <= DEVANAGARI_RANGE[1])
    latin = sum(1 for c in line if ("a" <= c <= "z") or ("A" <= c <= "Z"))
    letters = devanagari + latin
    return devanagari / letters if letters else 0.0


def filter_devanagari_lines(lines: Iterable[str]) -> List[str]:
    """Secondary-pass lines that are at least 30% Devanagari."""
    kept = []
    for raw in lines:
        line = raw.strip()
        if line and devanagari_ratio(line) >= 0.3:
            kept.append(line)
    return kept
