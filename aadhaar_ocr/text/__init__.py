"""
Text-level helpers shared by the validator and extractors.
"""

from .script_classifier import ScriptTag, classify_line, tag_transcript
from .sanitizer import (
    is_gender_marker,
    is_garbage_line,
    sanitize_line,
    sanitize_lines,
    filter_devanagari_lines,
)

__all__ = [
    "ScriptTag",
    "classify_line",
    "tag_transcript",
    "is_gender_marker",
    "is_garbage_line",
    "sanitize_line",
    "sanitize_lines",
    "filter_devanagari_lines",
]
