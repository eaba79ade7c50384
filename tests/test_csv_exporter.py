import csv
from datetime import datetime

import pytest

from aadhaar_ocr.exceptions import ValidationError
from aadhaar_ocr.models import ExtractionResult, ValidationVerdict
from aadhaar_ocr.persistence import CSV_HEADERS, CSVExporter


def accepted(**fields):
    values = {
        "name": "Rohit Kumar Sharma",
        "gender": "M",
        "birth_date": "1990-08-15",
        "uid": "1234 5678 9012",
        "address": "123 MG Road, Pune, Maharashtra, 411001",
    }
    values.update(fields)
    return ExtractionResult.accepted(values, ValidationVerdict(is_valid=True, score=70.0))


STAMP = datetime(2024, 3, 5, 14, 30, 0)


@pytest.fixture
def exporter(tmp_path):
    return CSVExporter(tmp_path / "out" / "aadhaar.csv")


def test_header_written_once(exporter):
    exporter.export(accepted(), timestamp=STAMP)
    exporter.export(accepted(uid="1111 2222 3333"), timestamp=STAMP)

    lines = exporter.csv_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Name,Gender,DOB,UID,Address,Timestamp"
    assert len(lines) == 3
    assert lines[1] == (
        'Rohit Kumar Sharma,M,1990-08-15,1234 5678 9012,'
        '"123 MG Road, Pune, Maharashtra, 411001",2024-03-05 14:30:00'
    )


def test_default_location_comes_from_config(tmp_path):
    exporter = CSVExporter()
    assert exporter.csv_path == tmp_path / "exports" / "aadhaar_data.csv"


def test_quotes_and_newlines_escaped(exporter):
    exporter.export(accepted(name='Ravi "RK" Verma', address="Flat 1\nPune"), timestamp=STAMP)

    content = exporter.csv_path.read_text(encoding="utf-8")
    assert '"Ravi ""RK"" Verma"' in content
    assert '"Flat 1\nPune"' in content

    with open(exporter.csv_path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[1][0] == 'Ravi "RK" Verma'
    assert rows[1][4] == "Flat 1\nPune"


def test_rejected_result_not_exported(exporter):
    rejected = ExtractionResult.rejected(ValidationVerdict(is_valid=False, score=20.0))
    with pytest.raises(ValidationError):
        exporter.export(rejected)
    assert not exporter.exists


def test_failed_result_not_exported(exporter):
    with pytest.raises(ValidationError):
        exporter.export(ExtractionResult.failed("No text recognized in image"))


def test_read_records(exporter):
    assert exporter.read_records() == []

    exporter.export(accepted(), timestamp=STAMP)
    records = exporter.read_records()

    assert len(records) == 1
    assert list(records[0]) == CSV_HEADERS
    assert records[0]["UID"] == "1234 5678 9012"
    assert records[0]["Timestamp"] == "2024-03-05 14:30:00"


def test_read_records_skips_malformed_rows(exporter):
    exporter.export(accepted(), timestamp=STAMP)
    with open(exporter.csv_path, "a", encoding="utf-8") as f:
        f.write("only,three,cells\n")

    assert len(exporter.read_records()) == 1
