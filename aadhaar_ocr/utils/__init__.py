"""
Utility functions for the Aadhaar OCR engine.
"""

from .image_utils import ImageSource, load_image
from .timing import StageStats, Timer, TimingResult, format_duration, timed_operation

__all__ = [
    # Image utilities
    "ImageSource",
    "load_image",

    # Timing utilities
    "StageStats",
    "Timer",
    "TimingResult",
    "format_duration",
    "timed_operation",
]
