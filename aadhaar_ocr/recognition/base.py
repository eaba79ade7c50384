"""
Text recognizer interface.

A recognizer turns an image into a Transcript for one script. Recognizers
may hold engine resources, so they are scoped: acquire at construction,
release with close() (or use as a context manager).
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from PIL import Image

from ..exceptions import RecognitionError
from ..models import Script, Transcript


class TextRecognizer(ABC):
    """Abstract base class for recognition engines."""

    # Engine name for logging and error details (override in subclass)
    engine: str = "recognizer"

    def __init__(self, script: Script):
        self.script = script
        self._closed = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def recognize(self, image: Image.Image) -> Transcript:
        """
        Recognize text in the image.

        Raises:
            RecognitionError: if the recognizer is closed or the engine fails
        """
        if self._closed:
            raise RecognitionError(f"{self.engine} recognizer used after close()", engine=self.engine)
        return Transcript.from_text(self._recognize_text(image), self.script)

    @abstractmethod
    def _recognize_text(self, image: Image.Image) -> str:
        """Raw engine output for the image."""
        pass

    def close(self) -> None:
        """Release engine resources. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._release()

    def _release(self) -> None:
        """Override to free engine resources."""

    def __enter__(self) -> "TextRecognizer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
