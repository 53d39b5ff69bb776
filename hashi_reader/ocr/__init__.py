"""
OCR Module for the Hashi board reader

Pluggable OCR architecture for reading island clue digits from image
patches.

Usage:
    from hashi_reader.ocr import create_engine

    # Create an OCR engine (Tesseract)
    with create_engine() as engine:
        engine.await_ready()
        text = engine.recognize(patch)

Example with custom templates:
    engine = create_engine("template", template_dir="./my_templates")
"""

# Public API - Result types
from .result import ExtractedValue, UNKNOWN_VALUE

# Public API - Base class for custom engines
from .base import OCREngine, EngineState

# Public API - Factory functions
from .factory import (
    create_engine,
    register_engine,
    available_engines,
)

# Debug utilities
from .debug import DEBUG_DIR, DEBUG_PREFIX, save_debug_image

__all__ = [
    # Result types
    "ExtractedValue",
    "UNKNOWN_VALUE",
    # Base class
    "OCREngine",
    "EngineState",
    # Factory
    "create_engine",
    "register_engine",
    "available_engines",
    # Debug
    "DEBUG_DIR",
    "DEBUG_PREFIX",
    "save_debug_image",
]
