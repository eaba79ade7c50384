"""
Registration workflow models.

The workflow sits outside the extraction engine: it receives extracted
fields (notably the UID) and walks a linear sequence of states from capture
to hand-off into the external record system.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field, asdict, replace
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar


class WorkflowState(str, Enum):
    PENDING = "pending"                      # ready to capture
    CAPTURED = "captured"                    # photo taken
    PROCESSED = "processed"                  # fields extracted
    EXPORTED = "exported"                    # CSV row written
    COPIED = "copied"                        # CSV copied to import location
    EXTERNAL_IMPORTED = "external_imported"  # imported into record system
    EXTERNAL_VERIFIED = "external_verified"  # verified in record system
    COMPLETED = "completed"
    ERROR = "error"


STATE_SEQUENCE = [
    WorkflowState.PENDING,
    WorkflowState.CAPTURED,
    WorkflowState.PROCESSED,
    WorkflowState.EXPORTED,
    WorkflowState.COPIED,
    WorkflowState.EXTERNAL_IMPORTED,
    WorkflowState.EXTERNAL_VERIFIED,
    WorkflowState.COMPLETED,
]

STATE_DESCRIPTIONS = {
    WorkflowState.PENDING: "Ready to capture Aadhaar card",
    WorkflowState.CAPTURED: "Processing captured image...",
    WorkflowState.PROCESSED: "Generating CSV file...",
    WorkflowState.EXPORTED: "Copy CSV file to the import directory",
    WorkflowState.COPIED: "Import CSV file into the record system",
    WorkflowState.EXTERNAL_IMPORTED: "Verify patient in the record system",
    WorkflowState.EXTERNAL_VERIFIED: "Completing workflow...",
    WorkflowState.COMPLETED: "Patient registration complete",
    WorkflowState.ERROR: "Error - manual intervention required",
}


@dataclass(frozen=True)
class WorkflowStep:
    """Static definition of one guided step."""
    id: str
    title: str
    description: str
    skippable: bool = False
    validation_required: bool = False


WORKFLOW_STEPS = {
    step.id: step
    for step in (
        WorkflowStep("capture", "Capture Aadhaar Card", "Take a clear photo of the Aadhaar card"),
        WorkflowStep("process", "Process & Validate", "Extract and validate patient information",
                     validation_required=True),
        WorkflowStep("export", "Generate CSV File", "Create CSV file for import"),
        WorkflowStep("copy", "Copy to Import Directory", "Copy CSV file to the import location",
                     validation_required=True),
        WorkflowStep("external_import", "Import Record", "Import CSV file into the record system",
                     validation_required=True),
        WorkflowStep("external_verify", "Verify Record", "Confirm patient exists in the record system",
                     validation_required=True),
    )
}


def new_workflow_id() -> str:
    return f"WF_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


@dataclass(frozen=True)
class WorkflowRecord:
    """
    One patient registration, from capture to completion.

    Records are immutable snapshots; the tracker stores a new copy on every
    change (see `evolve`).
    """

    id: str = field(default_factory=new_workflow_id)
    state: WorkflowState = WorkflowState.PENDING

    uid: str = ""
    name: str = ""
    gender: str = ""
    birth_date: str = ""
    address: str = ""
    confidence_score: float = 0.0

    created_at: float = field(default_factory=time.time)
    last_modified: float = field(default_factory=time.time)

    csv_file_path: str = ""
    copied_file_path: str = ""
    external_id: str = ""
    error_message: str = ""
    completed_steps: tuple = ()

    def evolve(self, **changes: Any) -> "WorkflowRecord":
        """Copy with changes and a fresh modification time."""
        changes.setdefault("last_modified", time.time())
        return replace(self, **changes)

    def next_state(self) -> Optional[WorkflowState]:
        if self.state in (WorkflowState.COMPLETED, WorkflowState.ERROR):
            return None
        return STATE_SEQUENCE[STATE_SEQUENCE.index(self.state) + 1]

    def progress_percent(self) -> int:
        if self.state == WorkflowState.ERROR:
            return 0
        position = STATE_SEQUENCE.index(self.state)
        return int(position * 100 / (len(STATE_SEQUENCE) - 1))

    def step_description(self) -> str:
        return STATE_DESCRIPTIONS[self.state]

    @property
    def is_in_progress(self) -> bool:
        return self.state not in (WorkflowState.COMPLETED, WorkflowState.ERROR)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["state"] = self.state.value
        data["completed_steps"] = list(self.completed_steps)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WorkflowRecord":
        values = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        if "state" in values:
            values["state"] = WorkflowState(values["state"])
        if "completed_steps" in values:
            values["completed_steps"] = tuple(values["completed_steps"])
        return cls(**values)


T = TypeVar("T")


@dataclass(frozen=True)
class WorkflowResult(Generic[T]):
    """Success carries `value`; failure carries `error`."""
    ok: bool
    value: Optional[T] = None
    error: str = ""

    @classmethod
    def success(cls, value: T) -> "WorkflowResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "WorkflowResult[T]":
        return cls(ok=False, error=error)


def ordered_step_ids() -> List[str]:
    return list(WORKFLOW_STEPS.keys())
