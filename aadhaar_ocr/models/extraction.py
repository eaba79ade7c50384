"""
Extraction data models.

Transcripts produced by the recognition passes, the validator's verdict and
the final structured result handed to callers. Every model here is frozen:
once a pipeline call builds one, nobody mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Tuple


class Script(str, Enum):
    """Writing system of a transcript or line."""
    LATIN = "EN"
    DEVANAGARI = "HI"
    MIXED = "MX"
    UNKNOWN = "??"

    @property
    def tag(self) -> str:
        return f"[{self.value}]"


class Outcome(str, Enum):
    """How an extraction call ended."""
    ACCEPTED = "accepted"
    REJECTED = "rejected"  # text recognized, validator said no
    FAILED = "failed"      # recognition or pipeline error


@dataclass(frozen=True)
class Transcript:
    """Ordered, non-empty, trimmed lines from one recognition pass."""
    script: Script
    lines: Tuple[str, ...] = ()

    @classmethod
    def from_text(cls, text: str, script: Script) -> "Transcript":
        lines = tuple(ln.strip() for ln in (text or "").splitlines() if ln.strip())
        return cls(script=script, lines=lines)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class RecognitionBundle:
    """Both transcripts captured from one input image."""
    primary: Transcript
    secondary: Transcript

    def combined_text(self) -> str:
        """Labelled debug view of both passes."""
        parts = []
        if not self.primary.is_empty:
            parts.append("=== LATIN SCRIPT (PRIMARY FOR DATA EXTRACTION) ===")
            parts.extend(self.primary.lines)
            parts.append("")
        if not self.secondary.is_empty:
            parts.append("=== DEVANAGARI SCRIPT (HINDI TEXT ONLY) ===")
            parts.extend(self.secondary.lines)
        return "\n".join(parts).rstrip("\n")


@dataclass(frozen=True)
class ValidationVerdict:
    """Validator decision for one document."""
    is_valid: bool
    score: float
    issues: Tuple[str, ...] = ()

    @property
    def rounded_score(self) -> int:
        return int(round(self.score))

    @property
    def message(self) -> str:
        if self.is_valid:
            return f"Valid Aadhaar card detected (confidence: {self.rounded_score}%)"
        main_issues = "; ".join(self.issues[:2])
        return f"Not an Aadhaar card (confidence: {self.rounded_score}%). Issues: {main_issues}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "score": round(self.score, 2),
            "issues": list(self.issues),
            "message": self.message,
        }


CSV_FIELDS = ("name", "gender", "birth_date", "uid", "address")


@dataclass(frozen=True)
class ExtractionResult:
    """
    Externally visible output of one extraction call.

    Structured fields are only populated for ACCEPTED results. REJECTED and
    FAILED results carry diagnostics (verdict, message, raw text) only.
    """

    name: str = ""
    gender: str = ""
    birth_date: str = ""
    uid: str = ""
    address: str = ""

    verdict: ValidationVerdict = field(
        default_factory=lambda: ValidationVerdict(is_valid=False, score=0.0)
    )
    outcome: Outcome = Outcome.FAILED
    message: str = ""
    error: str = ""

    # Diagnostics only
    raw_text: str = ""
    tagged_text: str = ""

    def __post_init__(self):
        if not self.verdict.is_valid and any(getattr(self, f) for f in CSV_FIELDS):
            raise ValueError("Rejected documents cannot carry extracted fields")

    @classmethod
    def accepted(
        cls,
        fields: dict[str, str],
        verdict: ValidationVerdict,
        raw_text: str = "",
        tagged_text: str = "",
    ) -> "ExtractionResult":
        return cls(
            **{f: fields.get(f, "") for f in CSV_FIELDS},
            verdict=verdict,
            outcome=Outcome.ACCEPTED,
            message=verdict.message,
            raw_text=raw_text,
            tagged_text=tagged_text,
        )

    @classmethod
    def rejected(
        cls,
        verdict: ValidationVerdict,
        raw_text: str = "",
        tagged_text: str = "",
    ) -> "ExtractionResult":
        return cls(
            verdict=verdict,
            outcome=Outcome.REJECTED,
            message=verdict.message,
            raw_text=raw_text,
            tagged_text=tagged_text,
        )

    @classmethod
    def failed(cls, cause: str) -> "ExtractionResult":
        return cls(
            verdict=ValidationVerdict(is_valid=False, score=0.0, issues=(cause,)),
            outcome=Outcome.FAILED,
            message=f"Error processing image: {cause}",
            error=cause,
        )

    @property
    def is_valid(self) -> bool:
        return self.verdict.is_valid

    @property
    def score(self) -> float:
        return self.verdict.score

    def csv_row(self) -> list[str]:
        """The five structured fields in export order."""
        return [getattr(self, f) for f in CSV_FIELDS]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {f: getattr(self, f) for f in CSV_FIELDS}
        data.update({
            "outcome": self.outcome.value,
            "message": self.message,
            "error": self.error,
            "validation": self.verdict.to_dict(),
            "raw_text": self.raw_text,
            "tagged_text": self.tagged_text,
        })
        return data
