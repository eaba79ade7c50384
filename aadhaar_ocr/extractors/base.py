"""
Base class for per-field extractors.

An extractor is an ordered list of independent strategies over the primary
transcript lines. The first strategy that returns a non-empty string wins;
strategies are never combined.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, List, Sequence, Tuple

from ..logger import get_logger

Strategy = Callable[[Sequence[str]], str]


class FieldExtractor(ABC):
    """
    Abstract base class for all field extractors.

    Subclasses name the field and list their strategies in priority order.
    """

    # Field name for logging (override in subclass)
    field_name: str = "field"

    def __init__(self):
        self.logger = get_logger(f"aadhaar_ocr.extractors.{self.field_name}")

    @abstractmethod
    def strategies(self) -> List[Tuple[str, Strategy]]:
        """(label, strategy) pairs in priority order."""
        pass

    def extract(self, lines: Sequence[str]) -> str:
        """
        Run strategies in order over the transcript lines.

        Args:
            lines: Trimmed, non-empty primary transcript lines

        Returns:
            First non-empty strategy result, or "" when every strategy misses
        """
        lines = tuple(lines)
        for label, strategy in self.strategies():
            value = strategy(lines)
            if value:
                self.logger.debug(f"{self.field_name}: '{value}' via {label}")
                return value

        self.logger.debug(f"{self.field_name}: not found")
        return ""

    __call__ = extract
