import os

# Must be set before any aadhaar_ocr logger is created
os.environ["LOG_TO_FILE"] = "0"
os.environ.pop("DEBUG", None)

import pytest

from aadhaar_ocr.config import reset_config
from aadhaar_ocr.models import Script
from aadhaar_ocr.processors import AadhaarProcessor
from aadhaar_ocr.recognition import StaticRecognizer

reset_config()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_TO_FILE", "0")
    monkeypatch.setenv("EXPORT_DIR", str(tmp_path / "exports"))
    monkeypatch.delenv("DEBUG", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def make_processor():
    """Factory for processors whose recognizers return fixed text."""
    processors = []

    def factory(primary_text="", secondary_text="", primary_error=None, secondary_error=None):
        processor = AadhaarProcessor(
            primary=StaticRecognizer(Script.LATIN, primary_text, error=primary_error),
            secondary=StaticRecognizer(Script.DEVANAGARI, secondary_text, error=secondary_error),
        )
        processors.append(processor)
        return processor

    yield factory

    for processor in processors:
        processor.close()


@pytest.fixture
def card_image():
    from PIL import Image

    return Image.new("RGB", (64, 40), "white")
