"""
Centralized configuration management.

Configuration is loaded from:
1. Environment variables
2. .env file (if present)
3. Default values

Only ambient concerns (logging, OCR engine wiring, export location) are
configurable. Validation thresholds and keyword tables are fixed.

Usage:
    from aadhaar_ocr.config import get_config
    config = get_config()
    print(config.ocr.primary_lang)  # "eng" unless OCR_PRIMARY_LANG is set
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


def _load_dotenv(dotenv_path: Optional[Path] = None) -> None:
    """
    Minimal .env loader (no external dependency).

    Supports KEY=VALUE, ignores blank lines and comments (#).
    Does not override existing environment variables.
    """
    if dotenv_path is None:
        dotenv_path = Path(__file__).resolve().parent.parent / ".env"

    if not dotenv_path.exists() or not dotenv_path.is_file():
        return

    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue
        if os.getenv(key) in (None, ""):
            os.environ[key] = value.strip().strip('"').strip("'")


_load_dotenv()


def _get_bool_env(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(key, "").strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    return default


def _get_int_env(key: str, default: int) -> int:
    """Get integer from environment variable."""
    value = os.getenv(key, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass
class OCRConfig:
    """Tesseract configuration for the two recognition passes."""
    primary_lang: str = field(default_factory=lambda: os.getenv("OCR_PRIMARY_LANG", "eng"))
    secondary_lang: str = field(default_factory=lambda: os.getenv("OCR_SECONDARY_LANG", "hin"))
    tesseract_path: str = field(default_factory=lambda: os.getenv("TESSERACT_PATH", ""))
    psm: int = field(default_factory=lambda: _get_int_env("OCR_PSM", 6))
    oem: int = field(default_factory=lambda: _get_int_env("OCR_OEM", 1))

    @property
    def tesseract_config(self) -> str:
        """Command-line flags passed to every Tesseract call."""
        return f"--psm {self.psm} --oem {self.oem}"


@dataclass
class ExportConfig:
    """CSV export location."""
    export_dir: Optional[Path] = None
    filename: str = field(default_factory=lambda: os.getenv("EXPORT_FILENAME", "aadhaar_data.csv"))

    @property
    def csv_path(self) -> Path:
        return Path(self.export_dir) / self.filename


@dataclass
class Config:
    """
    Main application configuration.

    All settings are loaded from environment variables with sensible defaults.
    Set DEBUG=1 in environment to enable debug mode.
    """

    # Base directory (project root)
    base_dir: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    logs_dir: Path = field(default=None)

    # Debug mode (verbose console logging, raw transcripts in logs)
    debug: bool = field(default_factory=lambda: _get_bool_env("DEBUG", False))
    log_to_file: bool = field(default_factory=lambda: _get_bool_env("LOG_TO_FILE", True))
    # Aadhaar numbers are masked in logs unless LOG_FULL_UID=1
    mask_uids: bool = field(default_factory=lambda: not _get_bool_env("LOG_FULL_UID", False))

    ocr: OCRConfig = field(default_factory=OCRConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    def __post_init__(self):
        """Resolve paths after initialization."""
        if self.logs_dir is None:
            self.logs_dir = self.base_dir / os.getenv("LOG_DIR", "logs")
        if self.export.export_dir is None:
            self.export.export_dir = self.base_dir / os.getenv("EXPORT_DIR", "exports")

    @property
    def dump_raw_ocr(self) -> bool:
        """Whether to log full recognized transcripts."""
        return self.debug or _get_bool_env("DUMP_RAW_OCR", False)


# Global config instance (lazily initialized)
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
