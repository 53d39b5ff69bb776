"""
Reader Errors

Exception hierarchy for a board reading run. Every failure the pipeline
reports is a ReaderError subclass so callers can tell them apart.
"""

from typing import Optional


class ReaderError(Exception):
    """Base class for all board reader failures."""


class DetectionEmptyError(ReaderError):
    """No candidate island regions were found (or none survived filtering)."""


class EngineNotReadyError(ReaderError):
    """OCR engine failed to initialize, timed out, or is not in READY state."""


class OCRFailureError(ReaderError):
    """A single recognition call failed; the whole extraction is aborted."""

    def __init__(self, rect, cause: Optional[BaseException] = None):
        self.rect = rect
        self.cause = cause
        super().__init__(f"OCR failed for region {rect}: {cause}")


class ZeroUnitSpacingError(ReaderError):
    """Computed grid pitch is not positive (duplicate positions upstream)."""


class SolverError(ReaderError):
    """External puzzle solver could not produce a solution."""
