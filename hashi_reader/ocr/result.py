"""
OCR Result Dataclasses

Shared data structures for value extraction results.
"""

from dataclasses import dataclass


# Cell characters
UNKNOWN_VALUE = "?"  # Island present, digit not recognized


@dataclass(frozen=True)
class ExtractedValue:
    """Recognized value for one surviving island region."""
    x: int             # Top-left x of the source rectangle
    y: int             # Top-left y of the source rectangle
    value: str         # '1'-'9' or UNKNOWN_VALUE
    raw_text: str = ""  # Engine output before normalization

    @property
    def is_unknown(self) -> bool:
        return self.value == UNKNOWN_VALUE
