"""
Aadhaar extraction pipeline.

image -> Latin and Devanagari recognition passes (concurrent, joined)
      -> validator scores the Latin transcript
      -> below threshold: rejected result, no extraction
      -> otherwise the five field extractors run over the Latin lines

The Devanagari pass never feeds extraction; its Devanagari-only lines are
kept in the labelled diagnostic text.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any, Dict, Optional, Sequence

from ..config import Config
from ..exceptions import RecognitionError
from ..extractors import (
    AddressExtractor,
    BirthDateExtractor,
    FieldExtractor,
    GenderExtractor,
    NameExtractor,
    UIDExtractor,
)
from ..models import ExtractionResult, RecognitionBundle, Script, Transcript
from ..recognition import TesseractRecognizer, TextRecognizer
from ..text import filter_devanagari_lines, tag_transcript
from ..utils.image_utils import load_image
from ..utils.timing import timed_operation
from ..validator import DocumentValidator
from .base import BaseProcessor


class AadhaarProcessor(BaseProcessor):
    """
    Extract validated fields from an Aadhaar card image.

    Owns both recognizers and a two-worker executor; release them with
    close() or by using the processor as a context manager:

        with AadhaarProcessor() as processor:
            result = processor.run("card.jpg")
    """

    name = "AadhaarProcessor"

    def __init__(
        self,
        primary: Optional[TextRecognizer] = None,
        secondary: Optional[TextRecognizer] = None,
        config: Optional[Config] = None,
        validator: Optional[DocumentValidator] = None,
    ):
        """
        Initialize processor.

        Args:
            primary: Latin-script recognizer (default: Tesseract "eng")
            secondary: Devanagari recognizer (default: Tesseract "hin")
            config: Configuration (default: global config)
            validator: Document validator (default: DocumentValidator())
        """
        super().__init__(config)
        self.primary = primary or TesseractRecognizer.latin(self.config.ocr)
        try:
            self.secondary = secondary or TesseractRecognizer.devanagari(self.config.ocr)
        except Exception:
            self.primary.close()
            raise
        self.validator = validator or DocumentValidator()
        self.extractors: Dict[str, FieldExtractor] = {
            "name": NameExtractor(),
            "gender": GenderExtractor(),
            "birth_date": BirthDateExtractor(),
            "uid": UIDExtractor(),
            "address": AddressExtractor(),
        }
        self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="recognition")
        self._closed = False

    def recognize(self, image: Any) -> RecognitionBundle:
        """
        Run both recognition passes and wait for both.

        Raises:
            RecognitionError: if either pass fails or the Latin pass finds no text
        """
        if self._closed:
            raise RecognitionError("Processor is closed")

        futures = {
            "primary": self._executor.submit(self.primary.recognize, image),
            "secondary": self._executor.submit(self.secondary.recognize, image),
        }
        wait(futures.values())

        transcripts = {}
        for role, future in futures.items():
            error = future.exception()
            if error is None:
                transcripts[role] = future.result()
                continue
            if isinstance(error, RecognitionError):
                raise error
            recognizer = self.primary if role == "primary" else self.secondary
            raise RecognitionError(
                f"{role.capitalize()} recognition failed: {error}", engine=recognizer.engine
            ) from error

        secondary = transcripts["secondary"]
        return RecognitionBundle(
            primary=transcripts["primary"],
            secondary=Transcript(secondary.script, tuple(filter_devanagari_lines(secondary.lines))),
        )

    def extract_fields(self, lines: Sequence[str]) -> Dict[str, str]:
        """Run every field extractor over the Latin lines."""
        return {field: extractor.extract(lines) for field, extractor in self.extractors.items()}

    def process(self, source: Any) -> ExtractionResult:
        """
        Args:
            source: image (path, bytes, numpy buffer, PIL image) or an
                already-recognized RecognitionBundle

        Returns:
            Accepted or rejected ExtractionResult
        """
        if isinstance(source, RecognitionBundle):
            bundle = source
        else:
            image = load_image(source)
            with timed_operation("Recognition", self.logger, timer=self.timer):
                bundle = self.recognize(image)

        if bundle.primary.is_empty:
            raise RecognitionError("No text recognized in image", engine=self.primary.engine)

        if self.config.dump_raw_ocr:
            self.logger.debug(f"Latin transcript:\n{bundle.primary.text}")

        raw_text = bundle.combined_text()
        tagged_text = tag_transcript(bundle.primary.lines)

        verdict = self.validator.validate(bundle.primary.text)
        if not verdict.is_valid:
            self.log_info(verdict.message)
            return ExtractionResult.rejected(verdict, raw_text=raw_text, tagged_text=tagged_text)

        with timed_operation("Field extraction", self.logger, timer=self.timer):
            fields = self.extract_fields(bundle.primary.lines)

        self.log_info(verdict.message, uid=fields["uid"] or "-")
        return ExtractionResult.accepted(fields, verdict, raw_text=raw_text, tagged_text=tagged_text)

    def run_text(self, primary_text: str, secondary_text: str = "") -> ExtractionResult:
        """Run the pipeline on text that was recognized elsewhere."""
        bundle = RecognitionBundle(
            primary=Transcript.from_text(primary_text, Script.LATIN),
            secondary=Transcript.from_text(
                "\n".join(filter_devanagari_lines(secondary_text.splitlines())), Script.DEVANAGARI
            ),
        )
        return self.run(bundle)

    def close(self) -> None:
        """Shut down the executor and release both recognizers."""
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=True)
        self.primary.close()
        self.secondary.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "AadhaarProcessor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
