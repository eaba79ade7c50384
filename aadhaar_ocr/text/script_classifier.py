"""
Per-line writing-system classification.

Tags are for diagnostics only: a line's tag never decides whether a field
extractor looks at it.

A Latin-only line can still be Devanagari in disguise. When the Latin pass
reads Hindi print it produces consonant clusters, stray one- and two-letter
fragments and transliterated words ("bharat", "sarkar"). Such lines are
scored for these artifacts before the character ratios are consulted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List

from ..models import Script
from .patterns import DEVANAGARI_RANGE

_CONSONANTS = "bcdfghjklmnpqrstvwxyz"
_VOWELS = "aeiou"

# Transliterated Hindi vocabulary seen in Latin-pass output
_HINDI_WORDS = [
    "bharata", "sarkar", "sarkara", "bharat", "india", "hindi",
    "naam", "janam", "pita", "mata", "ghar", "pata", "shahar",
]

_ARTIFACT_PATTERNS = [
    re.compile(r"([bcdfghjklmnpqrstvwxyz]){3,}"),
    re.compile(r"(sr|tr|kr|pr|br|dr|gr|hr|jr|mr|nr|wr|yr|th|dh|bh|kh|gh|ch|jh|ph|sh|rh)"),
    re.compile(r"(.)\1{2,}"),
    re.compile(r"^[a-z]{1,2}$"),
    re.compile(r"[bcdfghjklmnpqrstvwxyz]{2,}"),
]


@dataclass(frozen=True)
class ScriptTag:
    """Classification of one line."""
    line: str
    script: Script
    confidence: float


def is_devanagari(char: str) -> bool:
    return DEVANAGARI_RANGE[0] <= char <= DEVANAGARI_RANGE[1]


def is_latin(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z")


def artifact_score(line: str) -> float:
    """
    How strongly a Latin-only line looks like a misread of Devanagari print.

    Returns a score in [0, 1].
    """
    lowered = line.lower()
    score = 0.0

    score += 0.3 * sum(1 for word in _HINDI_WORDS if word in lowered)
    score += 0.2 * sum(1 for pattern in _ARTIFACT_PATTERNS if pattern.search(lowered))

    consonants = sum(1 for c in lowered if c in _CONSONANTS)
    vowels = sum(1 for c in lowered if c in _VOWELS)
    letters = consonants + vowels
    if letters > 3 and consonants / letters > 0.7:
        score += 0.4

    words = lowered.split()
    if words and sum(1 for w in words if len(w) <= 2) / len(words) > 0.6:
        score += 0.3

    return min(score, 1.0)


def classify_line(line: str) -> ScriptTag:
    """Classify a single trimmed line."""
    devanagari = latin = total = 0
    for char in line:
        if is_devanagari(char):
            devanagari += 1
            total += 1
        elif is_latin(char):
            latin += 1
            total += 1
        elif char.isdigit():
            total += 1

    if devanagari == 0:
        score = artifact_score(line)
        if score > 0.5:
            return ScriptTag(line, Script.DEVANAGARI, score)

    if total == 0:
        return ScriptTag(line, Script.UNKNOWN, 0.0)

    devanagari_ratio = devanagari / total
    latin_ratio = latin / total

    if devanagari_ratio > 0.7:
        return ScriptTag(line, Script.DEVANAGARI, devanagari_ratio)
    if latin_ratio > 0.7:
        return ScriptTag(line, Script.LATIN, latin_ratio)
    if devanagari_ratio > 0.3 and latin_ratio > 0.3:
        return ScriptTag(line, Script.MIXED, max(devanagari_ratio, latin_ratio))
    if devanagari_ratio > latin_ratio:
        return ScriptTag(line, Script.DEVANAGARI, devanagari_ratio)
    if latin_ratio > devanagari_ratio:
        return ScriptTag(line, Script.LATIN, latin_ratio)
    return ScriptTag(line, Script.UNKNOWN, 0.5)


def tag_lines(lines: Iterable[str]) -> List[str]:
    """Prefix every non-empty line with its script tag ("[EN] ...")."""
    tagged = []
    for raw in lines:
        line = raw.strip()
        if not line:
            tagged.append(line)
            continue
        tagged.append(f"{classify_line(line).script.tag} {line}")
    return tagged


def tag_transcript(lines: Iterable[str]) -> str:
    return "\n".join(tag_lines(lines))
