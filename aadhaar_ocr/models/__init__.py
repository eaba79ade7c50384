"""
Data models for the Aadhaar OCR engine.

These models are frozen dataclasses, serializable to JSON via to_dict().
"""

from .extraction import (
    CSV_FIELDS,
    ExtractionResult,
    Outcome,
    RecognitionBundle,
    Script,
    Transcript,
    ValidationVerdict,
)
from .workflow import (
    WORKFLOW_STEPS,
    WorkflowRecord,
    WorkflowResult,
    WorkflowState,
    WorkflowStep,
)

__all__ = [
    # Extraction models
    "CSV_FIELDS",
    "ExtractionResult",
    "Outcome",
    "RecognitionBundle",
    "Script",
    "Transcript",
    "ValidationVerdict",

    # Workflow models
    "WORKFLOW_STEPS",
    "WorkflowRecord",
    "WorkflowResult",
    "WorkflowState",
    "WorkflowStep",
]
