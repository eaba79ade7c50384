"""
Patient registration workflow tracking.

A workflow follows one Aadhaar card from capture through CSV export to
hand-off into the external record system:

    PENDING -> CAPTURED -> PROCESSED -> EXPORTED -> COPIED
            -> EXTERNAL_IMPORTED -> EXTERNAL_VERIFIED -> COMPLETED

Any workflow can drop into ERROR. The tracker rejects a second workflow for
a UID that has already been registered.

Every operation returns a WorkflowResult instead of raising.
"""

from __future__ import annotations

import re
import threading
from datetime import datetime
from typing import Callable, List, Optional

from ..exceptions import AadhaarOCRError, ValidationError, WorkflowError
from ..logger import get_logger
from ..models import ExtractionResult, WorkflowRecord, WorkflowResult, WorkflowState
from ..models.workflow import WORKFLOW_STEPS, ordered_step_ids
from ..persistence.workflow_store import InMemoryWorkflowStore, WorkflowStore

_UID_FORMAT_RE = re.compile(r"^\d{4} \d{4} \d{4}$")

logger = get_logger("aadhaar_ocr.workflow")


def format_timestamp(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp).strftime("%b %d, %Y %H:%M")


def today_start() -> float:
    return datetime.now().replace(hour=0, minute=0, second=0, microsecond=0).timestamp()


class WorkflowTracker:
    """
    Creates and advances workflow records in a WorkflowStore.

    Usage:
        tracker = WorkflowTracker()
        record = tracker.start()
        outcome = tracker.record_extraction(record.id, result)
        if not outcome.ok:
            print(outcome.error)
    """

    def __init__(self, store: Optional[WorkflowStore] = None):
        self.store = store or InMemoryWorkflowStore()
        self.current_id: Optional[str] = None
        # Serializes read-modify-write sequences across threads
        self._lock = threading.RLock()

    @property
    def current(self) -> Optional[WorkflowRecord]:
        """The most recently started workflow, until it completes."""
        return self.store.get(self.current_id) if self.current_id else None

    def start(self) -> WorkflowRecord:
        record = WorkflowRecord()
        with self._lock:
            self.store.put(record)
            self.current_id = record.id
        logger.debug(f"Started workflow {record.id}")
        return record

    def _update(
        self,
        workflow_id: str,
        action: str,
        change: Callable[[WorkflowRecord], WorkflowRecord],
    ) -> WorkflowResult[WorkflowRecord]:
        with self._lock:
            try:
                current = self.store.get(workflow_id)
                if current is None:
                    raise WorkflowError(f"Workflow not found: {workflow_id}", workflow_id=workflow_id)
                updated = change(current)
                self.store.put(updated)
            except AadhaarOCRError as e:
                logger.warning(f"Cannot {action} for {workflow_id}: {e.message}")
                return WorkflowResult.failure(e.message)
        return WorkflowResult.success(updated)

    def record_extraction(
        self, workflow_id: str, result: ExtractionResult
    ) -> WorkflowResult[WorkflowRecord]:
        """Store extracted fields and move to PROCESSED; refuses duplicate UIDs."""

        def change(current: WorkflowRecord) -> WorkflowRecord:
            if not result.is_valid:
                raise ValidationError(
                    f"Cannot record a rejected extraction: {result.message}",
                    field_name="is_valid",
                    field_value=result.is_valid,
                )
            if result.uid:
                if not _UID_FORMAT_RE.match(result.uid):
                    raise ValidationError(
                        f"Malformed UID: {result.uid}",
                        field_name="uid",
                        field_value=result.uid,
                        expected="DDDD DDDD DDDD",
                    )
                duplicate = self.find_duplicate(result.uid, exclude_id=workflow_id)
                if duplicate is not None:
                    raise WorkflowError(
                        f"Duplicate Aadhaar number found. Patient '{duplicate.name}' "
                        f"was already processed on {format_timestamp(duplicate.created_at)}",
                        workflow_id=workflow_id,
                    )
            return current.evolve(
                uid=result.uid,
                name=result.name,
                gender=result.gender,
                birth_date=result.birth_date,
                address=result.address,
                confidence_score=result.score,
                state=WorkflowState.PROCESSED,
                completed_steps=_with_steps(current.completed_steps, "capture", "process"),
            )

        return self._update(workflow_id, "record extraction", change)

    def advance(
        self, workflow_id: str, new_state: Optional[WorkflowState] = None
    ) -> WorkflowResult[WorkflowRecord]:
        """Move to new_state, or to the next state in sequence when omitted."""

        def change(current: WorkflowRecord) -> WorkflowRecord:
            target = new_state or current.next_state()
            if target is None:
                raise WorkflowError(
                    f"Workflow is {current.state.value} and cannot advance", workflow_id=workflow_id
                )
            logger.debug(f"Workflow {workflow_id}: {current.state.value} -> {target.value}")
            return current.evolve(state=target)

        return self._update(workflow_id, "advance", change)

    def complete_step(self, workflow_id: str, step_id: str) -> WorkflowResult[WorkflowRecord]:
        def change(current: WorkflowRecord) -> WorkflowRecord:
            if step_id not in WORKFLOW_STEPS:
                raise WorkflowError(f"Unknown workflow step: {step_id}", workflow_id=workflow_id)
            if step_id in current.completed_steps:
                return current
            return current.evolve(completed_steps=_with_steps(current.completed_steps, step_id))

        return self._update(workflow_id, "complete step", change)

    def set_error(self, workflow_id: str, message: str) -> WorkflowResult[WorkflowRecord]:
        logger.error(f"Workflow {workflow_id} failed: {message}")
        return self._update(
            workflow_id,
            "set error",
            lambda current: current.evolve(state=WorkflowState.ERROR, error_message=message),
        )

    def attach_csv_path(self, workflow_id: str, csv_path: str) -> WorkflowResult[WorkflowRecord]:
        return self._update(
            workflow_id,
            "attach CSV path",
            lambda current: current.evolve(
                csv_file_path=str(csv_path),
                state=WorkflowState.EXPORTED,
                completed_steps=_with_steps(current.completed_steps, "export"),
            ),
        )

    def attach_copied_path(self, workflow_id: str, copied_path: str) -> WorkflowResult[WorkflowRecord]:
        return self._update(
            workflow_id,
            "attach copied path",
            lambda current: current.evolve(
                copied_file_path=str(copied_path),
                state=WorkflowState.COPIED,
                completed_steps=_with_steps(current.completed_steps, "copy"),
            ),
        )

    def attach_external_id(self, workflow_id: str, external_id: str) -> WorkflowResult[WorkflowRecord]:
        return self._update(
            workflow_id,
            "attach external id",
            lambda current: current.evolve(external_id=external_id),
        )

    def complete(self, workflow_id: str) -> WorkflowResult[WorkflowRecord]:
        outcome = self._update(
            workflow_id,
            "complete",
            lambda current: current.evolve(
                state=WorkflowState.COMPLETED,
                completed_steps=tuple(ordered_step_ids()),
            ),
        )
        if outcome.ok:
            with self._lock:
                if self.current_id == workflow_id:
                    self.current_id = None
            logger.info(f"Completed workflow {workflow_id}")
        return outcome

    def get(self, workflow_id: str) -> Optional[WorkflowRecord]:
        return self.store.get(workflow_id)

    def by_state(self, state: WorkflowState) -> List[WorkflowRecord]:
        return self.store.list_by(lambda record: record.state == state)

    def completed_today(self) -> int:
        start = today_start()
        return len(self.store.list_by(
            lambda record: record.state == WorkflowState.COMPLETED and record.last_modified >= start
        ))

    def in_progress_count(self) -> int:
        return len(self.store.list_by(lambda record: record.is_in_progress))

    def find_duplicate(self, uid: str, exclude_id: str = "") -> Optional[WorkflowRecord]:
        matches = self.store.list_by(lambda record: record.uid == uid and record.id != exclude_id)
        return matches[0] if matches else None


def _with_steps(completed: tuple, *step_ids: str) -> tuple:
    steps = list(completed)
    for step_id in step_ids:
        if step_id not in steps:
            steps.append(step_id)
    return tuple(steps)
