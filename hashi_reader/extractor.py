"""
Value Extractor

Crops each island region, runs OCR on it and normalizes the result to a
single clue character.
"""

import logging
import re
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

import cv2
import numpy as np
from PIL import Image

from .errors import EngineNotReadyError, OCRFailureError
from .ocr.base import OCREngine
from .ocr.result import ExtractedValue, UNKNOWN_VALUE
from .vision.regions import Rectangle


logger = logging.getLogger(__name__)


DIGIT_RUN = re.compile(r"[0-9]+")
CLUE_DIGITS = "123456789"


def normalize_value(text: Optional[str]) -> str:
    """
    Reduce OCR output to one clue character.

    Takes the first run of digits. A single digit 1-9 is kept; no digits,
    a zero, or a multi-digit run becomes UNKNOWN_VALUE.
    """
    match = DIGIT_RUN.search(text or "")
    if match is None:
        return UNKNOWN_VALUE
    run = match.group(0)
    if len(run) == 1 and run in CLUE_DIGITS:
        return run
    return UNKNOWN_VALUE


@contextmanager
def crop_patch(image: np.ndarray, rect: Rectangle) -> Iterator[Image.Image]:
    """
    Crop a region into a PIL image that is closed on every exit path.

    Args:
        image: BGR, BGRA or grayscale numpy image
        rect: Region to crop
    """
    roi = image[rect.y:rect.bottom, rect.x:rect.right]
    if roi.ndim == 3:
        code = cv2.COLOR_BGRA2RGB if roi.shape[2] == 4 else cv2.COLOR_BGR2RGB
        roi = cv2.cvtColor(roi, code)
    patch = Image.fromarray(np.ascontiguousarray(roi))
    try:
        yield patch
    finally:
        patch.close()


def extract_values(
    image: np.ndarray,
    regions: Sequence[Rectangle],
    engine: OCREngine,
    ready_timeout: Optional[float] = None,
) -> List[ExtractedValue]:
    """
    Recognize the clue value of every region, one at a time, in order.

    Args:
        image: Source image the regions were detected in
        regions: Non-overlapping island rectangles
        engine: OCR engine (started here if needed)
        ready_timeout: Seconds to wait for engine initialization

    Returns:
        One ExtractedValue per region, in region order

    Raises:
        EngineNotReadyError: If the engine cannot be made ready
        OCRFailureError: If any recognition call fails
    """
    engine.await_ready(ready_timeout)

    values: List[ExtractedValue] = []
    for rect in regions:
        with crop_patch(image, rect) as patch:
            try:
                text = engine.recognize(patch)
            except EngineNotReadyError:
                raise
            except Exception as e:
                raise OCRFailureError(rect, e) from e

        value = normalize_value(text)
        logger.debug(f"Region {rect.to_tuple()}: raw={text!r} -> '{value}'")
        values.append(ExtractedValue(x=rect.x, y=rect.y, value=value, raw_text=text or ""))

    unknown = sum(1 for v in values if v.is_unknown)
    logger.info(f"Extracted {len(values)} values ({unknown} unrecognized)")
    return values
