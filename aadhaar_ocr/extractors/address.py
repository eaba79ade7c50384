"""
Address extraction.

The address block on the back of the card ends with a line carrying the
state and the postal code. `AddressBlockAssembler` anchors on that line and
walks back to the street line; when no such anchor exists the text between
the gender label and the UID is used instead.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from ..text.patterns import (
    ADDRESS_KEYWORDS,
    DATE_RE,
    GENDER_TOKENS,
    HEADER_KEYWORDS,
    KNOWN_CITIES,
    PIN_RE,
    STREET_KEYWORDS,
    UID_RE,
    contains_any,
    display_region,
    find_region,
    title_case,
)
from ..text.sanitizer import sanitize_line
from .base import FieldExtractor, Strategy

# Lines either side of the region line searched for the postal code
PIN_WINDOW = 2
# Lines before the region line searched for a plausible block start
START_WINDOW = 8
# Block start when nothing plausible is found
DEFAULT_BLOCK_DEPTH = 6

_DIGIT_RE = re.compile(r"\d")
_LETTER_RE = re.compile(r"[a-zA-Z]")
_SYMBOLS_ONLY_RE = re.compile(r"^[^a-zA-Z0-9]*$")
_GENDER_WORD_RE = re.compile(r"\b(male|female|gender)\b")
_ADDRESS_JUNK_RE = re.compile(r"[^\w\s,.-]")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_address_line(line: str) -> str:
    """Keep word characters, spaces and , . - only."""
    return _WHITESPACE_RE.sub(" ", _ADDRESS_JUNK_RE.sub(" ", line)).strip()


def is_street_line(line: str) -> bool:
    return bool(_DIGIT_RE.search(line)) and contains_any(line, STREET_KEYWORDS)


def is_person_name_pattern(line: str) -> bool:
    """
    2-3 words with no digits and no address keywords.

    Such lines inside the block are usually a second name ("S/O ...") and
    are dropped, at the cost of the occasional short locality name.
    """
    words = line.split()
    return (
        2 <= len(words) <= 3
        and not _DIGIT_RE.search(line)
        and not contains_any(line, ADDRESS_KEYWORDS)
    )


def is_address_noise(line: str) -> bool:
    """Lines that never belong to an address block."""
    if contains_any(line, HEADER_KEYWORDS):
        return True
    if UID_RE.search(line) or DATE_RE.search(line):
        return True
    if contains_any(line, GENDER_TOKENS):
        return True
    if is_person_name_pattern(line):
        return True
    if len(line.strip()) < 3:
        return True
    return bool(_SYMBOLS_ONLY_RE.match(line))


def is_known_city(line: str) -> bool:
    return contains_any(line, KNOWN_CITIES)


class AddressBlockAssembler:
    """
    Builds an address from the block that ends at the region + postal code line.

    Usage:
        address = AddressBlockAssembler(lines).assemble()
    """

    def __init__(self, lines: Sequence[str]):
        self.lines = tuple(lines)

    def find_pin_near(self, index: int) -> str:
        low = max(0, index - PIN_WINDOW)
        high = min(len(self.lines) - 1, index + PIN_WINDOW)
        for line in self.lines[low:high + 1]:
            match = PIN_RE.search(line)
            if match:
                return match.group(1)
        return ""

    def locate_anchor(self) -> Optional[Tuple[int, str, str]]:
        """(line index, region, postal code) of the first region line with a nearby pin."""
        for i, line in enumerate(self.lines):
            region = find_region(line)
            if not region:
                continue
            pin = self.find_pin_near(i)
            if pin:
                return i, region, pin
        return None

    def block_start(self, region_index: int) -> int:
        # Nearest street line above the region line
        for i in range(region_index - 1, -1, -1):
            if is_street_line(self.lines[i]):
                return i

        for i in range(max(0, region_index - START_WINDOW), region_index):
            line = self.lines[i]
            if is_address_noise(line):
                continue
            if len(line) >= 5 and _LETTER_RE.search(line):
                return i

        return max(0, region_index - DEFAULT_BLOCK_DEPTH)

    def collect(self, start: int, region_index: int) -> List[str]:
        collected = []
        for line in self.lines[start:region_index]:
            if is_address_noise(line) or sanitize_line(line) is None:
                continue
            cleaned = clean_address_line(line)
            if len(cleaned) >= 3:
                collected.append(cleaned)
        return collected

    def locality_fragment(self, region_index: int, region: str, pin: str) -> str:
        """What the region line carries besides the region and postal code ("Pune")."""
        line = self.lines[region_index]
        line = re.sub(rf"\b{re.escape(region)}\b", " ", line, flags=re.IGNORECASE)
        line = line.replace(pin, " ")
        fragment = clean_address_line(line).strip(" ,.-")
        if len(fragment) < 3 or is_address_noise(fragment):
            return ""
        return fragment

    def assemble(self) -> str:
        anchor = self.locate_anchor()
        if anchor is None:
            return ""
        region_index, region, pin = anchor

        block = self.collect(self.block_start(region_index), region_index)
        fragment = self.locality_fragment(region_index, region, pin)
        if fragment:
            block.append(fragment)

        return self.format(block, region, pin)

    @staticmethod
    def format(block: Sequence[str], region: str, pin: str) -> str:
        if not block:
            return ""

        parts: List[str] = []
        cities: List[str] = []
        for line in block:
            lowered = line.lower()
            if is_known_city(line) or any(city.lower() in lowered for city in cities):
                cities.append(title_case(line))
            elif line not in parts:
                parts.append(line)

        if cities:
            parts.append(max(cities, key=len))
        parts.append(display_region(region))
        parts.append(pin)
        return ", ".join(parts)


def is_non_address_line(line: str) -> bool:
    lowered = line.lower()
    if contains_any(line, HEADER_KEYWORDS):
        return True
    if UID_RE.search(line) or DATE_RE.search(line):
        return True
    if _GENDER_WORD_RE.search(lowered):
        return True
    return len(line.strip()) < 3


class AddressExtractor(FieldExtractor):
    """Extract the postal address as one comma-separated string."""

    field_name = "address"

    def strategies(self) -> List[Tuple[str, Strategy]]:
        return [
            ("region and postal code", self.from_region_block),
            ("gender to uid section", self.from_section),
        ]

    def from_region_block(self, lines: Sequence[str]) -> str:
        return AddressBlockAssembler(lines).assemble()

    def from_section(self, lines: Sequence[str]) -> str:
        text = "\n".join(lines)
        gender_pos = text.lower().find("gender:")
        uid_match = UID_RE.search(text)
        if gender_pos == -1 or uid_match is None:
            return ""

        section_start = text.find("\n", gender_pos)
        if section_start == -1 or uid_match.start() <= section_start:
            return ""

        kept = []
        for line in text[section_start:uid_match.start()].split("\n"):
            line = line.strip()
            if len(line) <= 3 or is_non_address_line(line):
                continue
            cleaned = clean_address_line(line)
            if cleaned:
                kept.append(cleaned)
        return ", ".join(kept)
