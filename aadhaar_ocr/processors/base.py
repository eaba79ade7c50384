"""
Base processor class.

Provides common functionality for document processors: logging, timing,
configuration access and the failure boundary around `process`.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..config import Config, get_config
from ..exceptions import AadhaarOCRError
from ..logger import get_logger
from ..models import ExtractionResult
from ..utils.timing import Timer


def describe_error(error: Exception) -> str:
    """Failure cause as shown to callers (no debugging details)."""
    if isinstance(error, AadhaarOCRError):
        return error.message
    return str(error) or type(error).__name__


class BaseProcessor(ABC):
    """
    Abstract base class for document processors.

    Provides:
    - Consistent logging
    - Timing instrumentation
    - Error handling: `run` never raises, failures become failed results
    - Configuration access
    """

    # Processor name for logging (override in subclass)
    name: str = "BaseProcessor"

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize processor.

        Args:
            config: Configuration (default: global config)
        """
        self.config = config or get_config()
        self.logger = get_logger(f"aadhaar_ocr.{self.name}")
        # Stage timings accumulate across every run
        self.timer = Timer()

    @property
    def debug_mode(self) -> bool:
        """Check if debug mode is enabled."""
        return self.config.debug

    def log_debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message (only in debug mode)."""
        if self.debug_mode:
            extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
            self.logger.debug(f"{message} {extra}".strip())

    def log_info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
        self.logger.info(f"{message} {extra}".strip())

    def log_error(self, message: str, error: Optional[Exception] = None) -> None:
        """Log error message."""
        if error:
            self.logger.error(f"{message}: {error}", exc_info=self.debug_mode)
        else:
            self.logger.error(message)

    @abstractmethod
    def process(self, source: Any) -> ExtractionResult:
        """
        Execute the processor's main task.

        May raise; `run` converts exceptions into a failed result.
        """
        pass

    def run(self, source: Any) -> ExtractionResult:
        """
        Run processor with timing and error handling.

        Returns:
            ExtractionResult (outcome FAILED if anything raised)
        """
        start = time.perf_counter()

        try:
            result = self.process(source)
        except Exception as e:
            self.log_error(f"{self.name} failed after {time.perf_counter() - start:.2f}s", error=e)
            return ExtractionResult.failed(describe_error(e))

        self.log_debug(f"Completed {self.name}", duration=f"{time.perf_counter() - start:.2f}s")
        return result
