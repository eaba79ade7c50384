"""
Logging for the Aadhaar OCR engine.

Every logger under "aadhaar_ocr" gets:
- a rich console handler (INFO, or DEBUG when DEBUG=1)
- a daily DEBUG log file under LOG_DIR, unless LOG_TO_FILE=0

Aadhaar numbers are masked to their last four digits in both handlers
(LOG_FULL_UID=1 turns masking off for local debugging).

Usage:
    from aadhaar_ocr.logger import get_logger
    logger = get_logger("aadhaar_ocr.validator")
    logger.info("Validation finished")
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from .config import get_config

FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"

_UID_IN_TEXT_RE = re.compile(r"(?<!\d)\d{4}( ?)\d{4}( ?)(\d{4})(?!\d)")


def mask_uids(text: str) -> str:
    """"1234 5678 9012" -> "XXXX XXXX 9012" (separators kept)."""
    return _UID_IN_TEXT_RE.sub(lambda m: f"XXXX{m.group(1)}XXXX{m.group(2)}{m.group(3)}", text)


class UIDMaskingFilter(logging.Filter):
    """Rewrites the formatted message with Aadhaar numbers masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = mask_uids(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def setup_logger(
    name: str = "aadhaar_ocr",
    log_dir: Optional[Path] = None,
    debug: Optional[bool] = None,
    log_to_file: Optional[bool] = None,
) -> logging.Logger:
    """
    Configure a logger once; later calls return it unchanged.

    Arguments left as None come from the global config.
    """
    config = get_config()
    debug = config.debug if debug is None else debug
    log_dir = config.logs_dir if log_dir is None else log_dir
    log_to_file = config.log_to_file if log_to_file is None else log_to_file

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    # Handlers decide what is emitted
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    handlers = [RichHandler(rich_tracebacks=True, show_time=True, show_level=True, show_path=False)]
    handlers[0].setLevel(logging.DEBUG if debug else logging.INFO)

    if log_to_file:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / f"{datetime.now():%Y%m%d}.log", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    for handler in handlers:
        if config.mask_uids:
            handler.addFilter(UIDMaskingFilter())
        logger.addHandler(handler)

    return logger


_loggers: dict[str, logging.Logger] = {}


def get_logger(name: str = "aadhaar_ocr") -> logging.Logger:
    """Cached `setup_logger(name)`."""
    if name not in _loggers:
        _loggers[name] = setup_logger(name)
    return _loggers[name]
