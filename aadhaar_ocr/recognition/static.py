"""
Recognizer that serves text that was recognized elsewhere.

Used for already-transcribed input (`--text` on the command line) and in
tests, where no OCR engine is available.
"""

from __future__ import annotations

from typing import Optional

from PIL import Image

from ..models import Script
from .base import TextRecognizer


class StaticRecognizer(TextRecognizer):
    """Returns the same text for every image; raises `error` if one is given."""

    engine = "static"

    def __init__(self, script: Script, text: str = "", error: Optional[Exception] = None):
        super().__init__(script)
        self.text = text
        self.error = error
        self.calls = 0

    def _recognize_text(self, image: Optional[Image.Image]) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.text
