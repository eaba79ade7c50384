"""
Document processors.

- BaseProcessor: logging, timing and the failure boundary
- AadhaarProcessor: recognition, validation and field extraction
"""

from .base import BaseProcessor, describe_error
from .aadhaar_processor import AadhaarProcessor

__all__ = [
    "BaseProcessor",
    "AadhaarProcessor",
    "describe_error",
]
