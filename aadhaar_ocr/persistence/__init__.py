"""
Persistence layer.

- CSVExporter: appends accepted results to the export CSV
- WorkflowStore: interface for workflow record storage
  (InMemoryWorkflowStore, JSONWorkflowStore)
"""

from .csv_exporter import CSV_HEADERS, CSVExporter
from .workflow_store import InMemoryWorkflowStore, JSONWorkflowStore, WorkflowStore

__all__ = [
    "CSV_HEADERS",
    "CSVExporter",
    "WorkflowStore",
    "InMemoryWorkflowStore",
    "JSONWorkflowStore",
]
