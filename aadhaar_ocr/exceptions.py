"""
Custom exceptions for the Aadhaar OCR engine.

All application-specific exceptions inherit from AadhaarOCRError. The
extraction pipeline never lets these escape to its caller: they are turned
into a failed ExtractionResult at the processor boundary.
"""

from __future__ import annotations

from typing import Optional, Any


class AadhaarOCRError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details (for debugging)
        recoverable: Whether the error can potentially be recovered from
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(AadhaarOCRError):
    """
    Invalid or missing configuration.

    Examples:
        - Unknown Tesseract language pack
        - Invalid value for configuration option
    """

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else None
        super().__init__(message, details=details, recoverable=False)


class ImageLoadError(AadhaarOCRError):
    """Input could not be decoded into an image."""

    def __init__(self, message: str, source: Optional[str] = None):
        details = {"source": source} if source else None
        super().__init__(message, details=details, recoverable=False)


class RecognitionError(AadhaarOCRError):
    """
    Text recognition failed.

    Examples:
        - Recognizer raised while reading the image
        - Recognizer returned no text at all
        - Recognizer used after close()
    """

    def __init__(
        self,
        message: str,
        engine: Optional[str] = None,
        languages: Optional[str] = None
    ):
        details = {}
        if engine:
            details["engine"] = engine
        if languages:
            details["languages"] = languages
        super().__init__(message, details=details, recoverable=False)


class TesseractNotFoundError(RecognitionError):
    """Tesseract OCR is not installed or not accessible."""

    def __init__(self, tesseract_path: Optional[str] = None):
        message = (
            "Tesseract OCR not found. Please install Tesseract with the eng and hin language packs:\n"
            "  - Windows: https://github.com/UB-Mannheim/tesseract/wiki\n"
            "  - macOS: brew install tesseract tesseract-lang\n"
            "  - Ubuntu: sudo apt install tesseract-ocr tesseract-ocr-hin"
        )
        super().__init__(message, engine="tesseract")
        if tesseract_path:
            self.details["tesseract_path_tried"] = tesseract_path


class DataPersistenceError(AadhaarOCRError):
    """
    Failed to save or load data.

    Examples:
        - CSV file write permission denied
        - Corrupt workflow store file
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        operation: Optional[str] = None  # "save" or "load"
    ):
        details = {}
        if file_path:
            details["file_path"] = file_path
        if operation:
            details["operation"] = operation
        super().__init__(message, details=details, recoverable=False)


class ValidationError(AadhaarOCRError):
    """
    Data validation failed.

    Examples:
        - Exporting a result that was rejected as not an Aadhaar card
        - Malformed UID handed to the workflow tracker
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        expected: Optional[str] = None
    ):
        details = {}
        if field_name:
            details["field_name"] = field_name
        if field_value is not None:
            details["field_value"] = str(field_value)[:100]
        if expected:
            details["expected"] = expected
        super().__init__(message, details=details, recoverable=False)


class WorkflowError(AadhaarOCRError):
    """Workflow tracker operation could not be applied."""

    def __init__(self, message: str, workflow_id: Optional[str] = None):
        details = {"workflow_id": workflow_id} if workflow_id else None
        super().__init__(message, details=details, recoverable=True)
