"""
Field extractors.

Each extractor runs its strategies over the primary transcript lines and
returns the first non-empty result:
- NameExtractor: holder name
- GenderExtractor: "M" / "F"
- BirthDateExtractor: YYYY-MM-DD
- UIDExtractor: "DDDD DDDD DDDD"
- AddressExtractor: comma-separated address (AddressBlockAssembler)
"""

from .base import FieldExtractor
from .name import NameExtractor, is_not_name, is_valid_name
from .name_scorer import NAME_ACCEPT_THRESHOLD, score_name_candidate
from .gender import GenderExtractor
from .birth_date import BirthDateExtractor
from .uid import UIDExtractor, format_uid
from .address import AddressBlockAssembler, AddressExtractor, clean_address_line, is_person_name_pattern

__all__ = [
    "FieldExtractor",
    "NameExtractor",
    "GenderExtractor",
    "BirthDateExtractor",
    "UIDExtractor",
    "AddressExtractor",
    "AddressBlockAssembler",
    "NAME_ACCEPT_THRESHOLD",
    "score_name_candidate",
    "format_uid",
    "is_not_name",
    "is_valid_name",
    "clean_address_line",
    "is_person_name_pattern",
]
