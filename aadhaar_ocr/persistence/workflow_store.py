"""
Storage for registration workflow records.

The tracker only talks to the `WorkflowStore` interface, so the in-memory
store used by a single session can be swapped for the JSON file store (or a
database) without touching workflow logic.
"""

from __future__ import annotations

import json
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..exceptions import DataPersistenceError
from ..models import WorkflowRecord

RecordPredicate = Callable[[WorkflowRecord], bool]


class WorkflowStore(ABC):
    """
    Abstract key-value store of workflow records.

    Implementations must be safe to call from several threads.
    """

    @abstractmethod
    def get(self, workflow_id: str) -> Optional[WorkflowRecord]:
        """
        Retrieve a record by ID.

        Returns:
            Record if found, None otherwise
        """
        pass

    @abstractmethod
    def put(self, record: WorkflowRecord) -> None:
        """Insert or replace a record (keyed by record.id)."""
        pass

    @abstractmethod
    def list_by(self, predicate: RecordPredicate) -> List[WorkflowRecord]:
        """Records matching predicate, in insertion order."""
        pass

    def list_all(self) -> List[WorkflowRecord]:
        return self.list_by(lambda record: True)


class InMemoryWorkflowStore(WorkflowStore):
    """Dict-backed store for one process."""

    def __init__(self):
        self._records: Dict[str, WorkflowRecord] = {}
        self._lock = threading.Lock()

    def get(self, workflow_id: str) -> Optional[WorkflowRecord]:
        with self._lock:
            return self._records.get(workflow_id)

    def put(self, record: WorkflowRecord) -> None:
        with self._lock:
            self._records[record.id] = record

    def list_by(self, predicate: RecordPredicate) -> List[WorkflowRecord]:
        with self._lock:
            records = list(self._records.values())
        return [record for record in records if predicate(record)]


class JSONWorkflowStore(WorkflowStore):
    """
    JSON file-backed store.

    The whole store is one JSON object keyed by workflow ID, rewritten on
    every put.
    """

    def __init__(self, path: Path):
        """
        Args:
            path: JSON file (created on first put)

        Raises:
            DataPersistenceError: if an existing file cannot be parsed
        """
        self.path = Path(path)
        self._lock = threading.Lock()
        self._records: Dict[str, WorkflowRecord] = self._load()

    def _load(self) -> Dict[str, WorkflowRecord]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return {wf_id: WorkflowRecord.from_dict(item) for wf_id, item in data.items()}
        except (OSError, ValueError, TypeError, AttributeError) as e:
            raise DataPersistenceError(
                f"Cannot load workflow store: {e}", file_path=str(self.path), operation="load"
            ) from e

    def _save(self) -> None:
        data = {wf_id: record.to_dict() for wf_id, record in self._records.items()}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise DataPersistenceError(
                f"Cannot save workflow store: {e}", file_path=str(self.path), operation="save"
            ) from e

    def get(self, workflow_id: str) -> Optional[WorkflowRecord]:
        with self._lock:
            return self._records.get(workflow_id)

    def put(self, record: WorkflowRecord) -> None:
        with self._lock:
            self._records[record.id] = record
            self._save()

    def list_by(self, predicate: RecordPredicate) -> List[WorkflowRecord]:
        with self._lock:
            records = list(self._records.values())
        return [record for record in records if predicate(record)]
