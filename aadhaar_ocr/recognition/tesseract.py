"""
Tesseract-backed recognizers.

Each recognizer runs one Tesseract language pack: "eng" for the Latin pass
that feeds extraction, "hin" for the Devanagari pass kept for diagnostics.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import pytesseract
from PIL import Image

from ..config import OCRConfig, get_config
from ..exceptions import ConfigurationError, RecognitionError, TesseractNotFoundError
from ..logger import get_logger
from ..models import Script
from .base import TextRecognizer

logger = get_logger("aadhaar_ocr.recognition")

_WINDOWS_TESSERACT = r"C:\Program Files\Tesseract-OCR\tesseract.exe"


def configure_tesseract(tesseract_path: str = "") -> str:
    """
    Point pytesseract at the Tesseract binary and verify it runs.

    Returns:
        Tesseract version string

    Raises:
        TesseractNotFoundError: if the binary cannot be executed
    """
    if tesseract_path:
        pytesseract.pytesseract.tesseract_cmd = tesseract_path
    elif os.name == "nt" and Path(_WINDOWS_TESSERACT).exists():
        pytesseract.pytesseract.tesseract_cmd = _WINDOWS_TESSERACT

    try:
        version = str(pytesseract.get_tesseract_version())
    except (pytesseract.TesseractNotFoundError, OSError) as e:
        raise TesseractNotFoundError(tesseract_path or None) from e

    logger.debug(f"Tesseract version: {version}")
    return version


def installed_languages() -> list:
    """Language packs the configured Tesseract binary can load."""
    try:
        return pytesseract.get_languages(config="")
    except pytesseract.TesseractError as e:
        raise RecognitionError(f"Cannot list Tesseract languages: {e}", engine="tesseract") from e


class TesseractRecognizer(TextRecognizer):
    """One Tesseract language pass."""

    engine = "tesseract"

    def __init__(self, script: Script, lang: str, config: Optional[OCRConfig] = None):
        super().__init__(script)
        self.lang = lang
        self.ocr_config = config or get_config().ocr
        configure_tesseract(self.ocr_config.tesseract_path)

        installed = installed_languages()
        missing = [pack for pack in lang.split("+") if pack not in installed]
        if missing:
            raise ConfigurationError(
                f"Tesseract language pack not installed: {', '.join(missing)}",
                config_key="OCR_PRIMARY_LANG" if script == Script.LATIN else "OCR_SECONDARY_LANG",
            )

    def _recognize_text(self, image: Image.Image) -> str:
        try:
            return pytesseract.image_to_string(
                image, lang=self.lang, config=self.ocr_config.tesseract_config
            )
        except pytesseract.TesseractError as e:
            raise RecognitionError(
                f"Tesseract failed: {e}", engine=self.engine, languages=self.lang
            ) from e

    @classmethod
    def latin(cls, config: Optional[OCRConfig] = None) -> "TesseractRecognizer":
        config = config or get_config().ocr
        return cls(Script.LATIN, config.primary_lang, config)

    @classmethod
    def devanagari(cls, config: Optional[OCRConfig] = None) -> "TesseractRecognizer":
        config = config or get_config().ocr
        return cls(Script.DEVANAGARI, config.secondary_lang, config)
