import logging

import pytest

from aadhaar_ocr.logger import UIDMaskingFilter, mask_uids, setup_logger


@pytest.mark.parametrize("text,expected", [
    ("uid=1234 5678 9012", "uid=XXXX XXXX 9012"),
    ("987654321098", "XXXXXXXX1098"),
    ("Account 12345678901234", "Account 12345678901234"),
    ("DOB: 15/08/1990", "DOB: 15/08/1990"),
])
def test_mask_uids(text, expected):
    assert mask_uids(text) == expected


def test_filter_masks_formatted_message():
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "uid=%s", ("1234 5678 9012",), None)

    assert UIDMaskingFilter().filter(record)
    assert record.getMessage() == "uid=XXXX XXXX 9012"


@pytest.fixture
def file_logger(tmp_path):
    logger = setup_logger("aadhaar_ocr.tests.file", log_dir=tmp_path, log_to_file=True)
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_log_file_never_holds_full_uid(file_logger, tmp_path):
    file_logger.debug("Exported %s", "1234 5678 9012")
    for handler in file_logger.handlers:
        handler.flush()

    (log_file,) = tmp_path.glob("*.log")
    content = log_file.read_text(encoding="utf-8")
    assert "Exported XXXX XXXX 9012" in content
    assert "1234 5678" not in content


def test_masking_can_be_disabled(monkeypatch, tmp_path):
    from aadhaar_ocr.config import reset_config

    monkeypatch.setenv("LOG_FULL_UID", "1")
    reset_config()
    logger = setup_logger("aadhaar_ocr.tests.unmasked", log_dir=tmp_path, log_to_file=False)
    try:
        assert not any(isinstance(f, UIDMaskingFilter) for h in logger.handlers for f in h.filters)
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
