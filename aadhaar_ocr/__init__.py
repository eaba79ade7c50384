"""
Aadhaar OCR Engine

Turns bilingual OCR output from a photographed Aadhaar card into validated,
structured fields (name, gender, birth date, UID, address).

Modules:
- config: Centralized configuration management
- logger: Structured logging setup
- exceptions: Custom exception types
- models: Data models (Transcript, ExtractionResult, WorkflowRecord)
- text: Script classification, line sanitizing and keyword tables
- extractors: Per-field extraction strategies
- validator: Aadhaar document scoring
- recognition: Text recognition engines (Tesseract, static text)
- processors: Extraction pipeline
- persistence: CSV export and workflow stores
- workflow: Registration workflow tracking
- utils: Image loading and timing helpers
"""

__version__ = "1.0.0"
