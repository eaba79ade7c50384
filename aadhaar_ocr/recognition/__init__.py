"""
Text recognition engines.
"""

from .base import TextRecognizer
from .static import StaticRecognizer
from .tesseract import TesseractRecognizer, configure_tesseract, installed_languages

__all__ = [
    "TextRecognizer",
    "StaticRecognizer",
    "TesseractRecognizer",
    "configure_tesseract",
    "installed_languages",
]
