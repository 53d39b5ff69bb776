"""
Board Reader Module

Runs the full image-to-grid pipeline for one board image:

    detect -> filter -> resolve overlaps -> extract values -> reconstruct grid

The reader keeps no state between calls; every run is rebuilt from the
image alone.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

import cv2
import numpy as np
from PIL import Image

from .errors import DetectionEmptyError
from .extractor import extract_values
from .grid import Grid, reconstruct_grid
from .ocr.base import OCREngine
from .ocr.result import ExtractedValue
from .vision import Rectangle, RegionDetector, filter_regions, resolve_overlaps


logger = logging.getLogger(__name__)


@dataclass
class ReadResult:
    """Complete result of reading one board image."""
    grid: Grid                      # Reconstructed clue grid
    values: List[ExtractedValue]    # Per-island values, extraction order
    regions: List[Rectangle]        # Surviving island rectangles
    detected_count: int             # Raw detector candidates
    processing_time_ms: float       # Time taken

    @property
    def text(self) -> str:
        """Grid text for the solver."""
        return self.grid.to_text()


def pil_to_bgr(image: Image.Image) -> np.ndarray:
    """Convert a PIL image to an OpenCV BGR array."""
    return cv2.cvtColor(np.array(image.convert("RGB")), cv2.COLOR_RGB2BGR)


def load_image(path: Union[str, Path]) -> np.ndarray:
    """
    Load an image file as a BGR numpy array.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    with Image.open(path) as img:
        return pil_to_bgr(img)


def find_islands(image: np.ndarray, detector: RegionDetector) -> Tuple[List[Rectangle], int]:
    """
    Detect, filter and dedup island regions.

    Returns:
        Tuple of (surviving regions, raw candidate count)

    Raises:
        DetectionEmptyError: If nothing was detected or nothing survived filtering
    """
    candidates = detector.detect(image)
    if not candidates:
        raise DetectionEmptyError("Detector found no candidate regions")

    plausible = filter_regions(candidates, image.shape[:2])
    if not plausible:
        raise DetectionEmptyError(
            f"None of {len(candidates)} candidate regions look like islands"
        )

    regions = resolve_overlaps(plausible)
    logger.info(
        f"Regions: {len(candidates)} detected, {len(plausible)} plausible, "
        f"{len(regions)} after overlap resolution"
    )
    return regions, len(candidates)


def read_board(
    image: np.ndarray,
    detector: RegionDetector,
    engine: OCREngine,
    ready_timeout: Optional[float] = None,
) -> ReadResult:
    """
    Read a Hashi board image into a clue grid.

    Args:
        image: BGR numpy image of the board
        detector: Region detector
        engine: OCR engine (started and awaited if needed)
        ready_timeout: Seconds to wait for engine initialization

    Returns:
        ReadResult with the grid and intermediate data

    Raises:
        ReaderError subclasses: DetectionEmptyError, EngineNotReadyError,
        OCRFailureError, ZeroUnitSpacingError
    """
    start_time = time.perf_counter()

    regions, detected_count = find_islands(image, detector)
    values = extract_values(image, regions, engine, ready_timeout=ready_timeout)
    grid = reconstruct_grid(values)

    return ReadResult(
        grid=grid,
        values=values,
        regions=regions,
        detected_count=detected_count,
        processing_time_ms=(time.perf_counter() - start_time) * 1000
    )
