"""
CSV export of accepted extraction results.

One flat file, appended to; the header is written when the file is created.
Fields containing a comma, quote or newline are quoted with embedded quotes
doubled (csv.QUOTE_MINIMAL).
"""

from __future__ import annotations

import csv
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from ..config import ExportConfig, get_config
from ..exceptions import DataPersistenceError, ValidationError
from ..logger import get_logger
from ..models import ExtractionResult

CSV_HEADERS = ["Name", "Gender", "DOB", "UID", "Address", "Timestamp"]
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = get_logger("aadhaar_ocr.persistence")


class CSVExporter:
    """
    Appends extraction results to the export CSV.

    Usage:
        exporter = CSVExporter()
        path = exporter.export(result)
    """

    def __init__(self, csv_path: Optional[Path] = None, config: Optional[ExportConfig] = None):
        """
        Args:
            csv_path: Target file (default: EXPORT_DIR / EXPORT_FILENAME)
            config: Export configuration used when csv_path is not given
        """
        if csv_path is None:
            csv_path = (config or get_config().export).csv_path
        self.csv_path = Path(csv_path)
        self._lock = threading.Lock()

    @property
    def exists(self) -> bool:
        return self.csv_path.is_file()

    def export(self, result: ExtractionResult, timestamp: Optional[datetime] = None) -> Path:
        """
        Append one row for an accepted result.

        Returns:
            Path of the CSV file

        Raises:
            ValidationError: if the result was not accepted as an Aadhaar card
            DataPersistenceError: if the file cannot be written
        """
        if not result.is_valid:
            raise ValidationError(
                "Only valid Aadhaar results can be exported",
                field_name="is_valid",
                field_value=result.is_valid,
                expected="True",
            )

        stamp = (timestamp or datetime.now()).strftime(TIMESTAMP_FORMAT)
        row = result.csv_row() + [stamp]

        with self._lock:
            try:
                self.csv_path.parent.mkdir(parents=True, exist_ok=True)
                write_header = not self.exists or self.csv_path.stat().st_size == 0
                with open(self.csv_path, mode="a", newline="", encoding="utf-8") as csvfile:
                    writer = csv.writer(csvfile, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
                    if write_header:
                        writer.writerow(CSV_HEADERS)
                    writer.writerow(row)
            except OSError as e:
                raise DataPersistenceError(
                    f"Cannot write CSV: {e}", file_path=str(self.csv_path), operation="save"
                ) from e

        logger.debug(f"Exported {result.uid or '<no uid>'} to {self.csv_path}")
        return self.csv_path

    def read_records(self) -> List[Dict[str, str]]:
        """
        All exported rows keyed by header.

        Raises:
            DataPersistenceError: if the file exists but cannot be read
        """
        if not self.exists:
            return []

        try:
            with open(self.csv_path, mode="r", newline="", encoding="utf-8") as csvfile:
                reader = csv.DictReader(csvfile)
                return [
                    dict(record) for record in reader
                    if None not in record and None not in record.values()
                ]
        except (OSError, csv.Error) as e:
            raise DataPersistenceError(
                f"Cannot read CSV: {e}", file_path=str(self.csv_path), operation="load"
            ) from e
