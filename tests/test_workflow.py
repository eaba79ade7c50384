import pytest

from aadhaar_ocr.exceptions import DataPersistenceError
from aadhaar_ocr.models import (
    ExtractionResult,
    ValidationVerdict,
    WorkflowRecord,
    WorkflowState,
)
from aadhaar_ocr.persistence import JSONWorkflowStore
from aadhaar_ocr.workflow import WorkflowTracker


def accepted(uid="1234 5678 9012", name="Rohit Kumar Sharma"):
    return ExtractionResult.accepted(
        {"name": name, "gender": "M", "birth_date": "1990-08-15", "uid": uid, "address": "Pune"},
        ValidationVerdict(is_valid=True, score=70.0),
    )


@pytest.fixture
def tracker():
    return WorkflowTracker()


def test_start(tracker):
    record = tracker.start()

    assert record.state == WorkflowState.PENDING
    assert record.id.startswith("WF_")
    assert tracker.current == record
    assert tracker.in_progress_count() == 1


def test_record_extraction(tracker):
    record = tracker.start()
    outcome = tracker.record_extraction(record.id, accepted())

    assert outcome.ok
    updated = outcome.value
    assert updated.state == WorkflowState.PROCESSED
    assert updated.uid == "1234 5678 9012"
    assert updated.confidence_score == 70.0
    assert updated.completed_steps == ("capture", "process")
    assert tracker.get(record.id) == updated


def test_duplicate_uid_refused(tracker):
    first = tracker.start()
    tracker.record_extraction(first.id, accepted())

    second = tracker.start()
    outcome = tracker.record_extraction(second.id, accepted(name="Someone Else"))

    assert not outcome.ok
    assert outcome.error.startswith(
        "Duplicate Aadhaar number found. Patient 'Rohit Kumar Sharma' was already processed on "
    )
    assert tracker.get(second.id).state == WorkflowState.PENDING


def test_same_workflow_may_record_again(tracker):
    record = tracker.start()
    tracker.record_extraction(record.id, accepted())
    assert tracker.record_extraction(record.id, accepted()).ok


def test_rejected_extraction_refused(tracker):
    record = tracker.start()
    rejected = ExtractionResult.rejected(ValidationVerdict(is_valid=False, score=10.0, issues=("x",)))

    outcome = tracker.record_extraction(record.id, rejected)
    assert not outcome.ok
    assert outcome.error.startswith("Cannot record a rejected extraction")


def test_malformed_uid_refused(tracker):
    record = tracker.start()
    outcome = tracker.record_extraction(record.id, accepted(uid="123456789012"))

    assert not outcome.ok
    assert outcome.error == "Malformed UID: 123456789012"


def test_unknown_workflow(tracker):
    outcome = tracker.advance("WF_missing")
    assert not outcome.ok
    assert outcome.error == "Workflow not found: WF_missing"


def test_advance_through_every_state(tracker):
    record = tracker.start()
    seen = []
    while True:
        outcome = tracker.advance(record.id)
        if not outcome.ok:
            break
        seen.append((outcome.value.state, outcome.value.progress_percent()))

    assert seen == [
        (WorkflowState.CAPTURED, 14),
        (WorkflowState.PROCESSED, 28),
        (WorkflowState.EXPORTED, 42),
        (WorkflowState.COPIED, 57),
        (WorkflowState.EXTERNAL_IMPORTED, 71),
        (WorkflowState.EXTERNAL_VERIFIED, 85),
        (WorkflowState.COMPLETED, 100),
    ]
    assert outcome.error == "Workflow is completed and cannot advance"


def test_advance_to_explicit_state(tracker):
    record = tracker.start()
    outcome = tracker.advance(record.id, WorkflowState.EXPORTED)
    assert outcome.value.state == WorkflowState.EXPORTED


def test_complete_step(tracker):
    record = tracker.start()

    assert tracker.complete_step(record.id, "capture").value.completed_steps == ("capture",)
    assert tracker.complete_step(record.id, "capture").value.completed_steps == ("capture",)

    outcome = tracker.complete_step(record.id, "print")
    assert not outcome.ok
    assert outcome.error == "Unknown workflow step: print"


def test_set_error(tracker):
    record = tracker.start()
    outcome = tracker.set_error(record.id, "Camera unavailable")

    assert outcome.value.state == WorkflowState.ERROR
    assert outcome.value.error_message == "Camera unavailable"
    assert outcome.value.progress_percent() == 0
    assert not tracker.advance(record.id).ok
    assert tracker.in_progress_count() == 0


def test_attachments(tracker):
    record = tracker.start()
    tracker.record_extraction(record.id, accepted())

    exported = tracker.attach_csv_path(record.id, "/tmp/a.csv").value
    assert exported.state == WorkflowState.EXPORTED
    assert exported.csv_file_path == "/tmp/a.csv"
    assert "export" in exported.completed_steps

    copied = tracker.attach_copied_path(record.id, "/import/a.csv").value
    assert copied.state == WorkflowState.COPIED
    assert copied.completed_steps == ("capture", "process", "export", "copy")

    assert tracker.attach_external_id(record.id, "P-100").value.external_id == "P-100"


def test_complete(tracker):
    record = tracker.start()
    other = tracker.start()
    outcome = tracker.complete(other.id)

    assert outcome.value.state == WorkflowState.COMPLETED
    assert len(outcome.value.completed_steps) == 6
    assert tracker.current is None
    assert tracker.completed_today() == 1
    assert tracker.in_progress_count() == 1
    assert tracker.by_state(WorkflowState.PENDING) == [tracker.get(record.id)]


def test_record_dict_round_trip():
    record = WorkflowRecord(uid="1234 5678 9012", completed_steps=("capture",))
    data = record.to_dict()

    assert data["state"] == "pending"
    assert data["completed_steps"] == ["capture"]
    assert WorkflowRecord.from_dict(data) == record


def test_json_store_persists(tmp_path):
    path = tmp_path / "workflows.json"
    tracker = WorkflowTracker(JSONWorkflowStore(path))
    record = tracker.start()
    updated = tracker.record_extraction(record.id, accepted()).value

    reopened = WorkflowTracker(JSONWorkflowStore(path))
    assert reopened.get(record.id) == updated
    assert reopened.find_duplicate("1234 5678 9012") == updated


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", '{"WF_1": {"state": "lost"}}'])
def test_json_store_corrupt_file(tmp_path, content):
    path = tmp_path / "workflows.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(DataPersistenceError):
        JSONWorkflowStore(path)


def test_step_description():
    assert WorkflowRecord().step_description() == "Ready to capture Aadhaar card"
    assert WorkflowRecord(state=WorkflowState.EXPORTED).step_description() == (
        "Copy CSV file to the import directory"
    )
