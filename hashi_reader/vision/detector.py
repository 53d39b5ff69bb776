"""
Region Detector

Finds candidate island rectangles in a board image using OpenCV contours.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

import cv2
import numpy as np

from .regions import Rectangle, filter_regions


logger = logging.getLogger(__name__)


# Detection parameters (tested on puzzle-bridges.com progress screenshots)
DARK_THRESHOLD = 200  # Pixels darker than this are ink
MASK_MARGIN = 3       # Shrink applied when redrawing boxes on the mask


class RegionDetector(ABC):
    """
    Abstract base class for region detectors.

    Implementations return axis-aligned rectangles in a stable,
    deterministic order for a given image.
    """

    @abstractmethod
    def detect(self, image: np.ndarray) -> List[Rectangle]:
        """
        Detect candidate island regions.

        Args:
            image: BGR (or grayscale) numpy image

        Returns:
            Rectangles in detection order
        """
        pass


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert a BGR, BGRA or grayscale image to single-channel grayscale."""
    if image.ndim == 2:
        return image
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


class ContourRegionDetector(RegionDetector):
    """
    Two-pass contour detector.

    First pass thresholds dark ink and collects bounding boxes of every
    contour. Plausible boxes are redrawn, slightly shrunk and filled, on a
    blank mask so nested contours (circle outline, digit strokes) merge into
    one blob per island. Second pass contours the mask.
    """

    def __init__(self, threshold: int = DARK_THRESHOLD, mask_margin: int = MASK_MARGIN):
        self.threshold = threshold
        self.mask_margin = mask_margin

    def detect(self, image: np.ndarray) -> List[Rectangle]:
        gray = to_grayscale(image)
        rows, cols = gray.shape[:2]

        _, binary = cv2.threshold(gray, self.threshold, 255, cv2.THRESH_BINARY_INV)
        contours, _ = cv2.findContours(binary, cv2.RETR_TREE, cv2.CHAIN_APPROX_SIMPLE)

        first_pass = [Rectangle.from_tuple(cv2.boundingRect(cnt)) for cnt in contours]
        plausible = filter_regions(first_pass, (rows, cols))
        logger.debug(f"First pass: {len(first_pass)} contours, {len(plausible)} plausible")

        mask = self._draw_mask(plausible, rows, cols)
        contours, _ = cv2.findContours(mask, cv2.RETR_TREE, cv2.CHAIN_APPROX_SIMPLE)

        regions = [Rectangle.from_tuple(cv2.boundingRect(cnt)) for cnt in contours]
        logger.info(f"Detected {len(regions)} candidate regions")
        return regions

    def _draw_mask(self, rects: List[Rectangle], rows: int, cols: int) -> np.ndarray:
        """Fill each rectangle, shrunk by the margin, onto a blank mask."""
        mask = np.zeros((rows, cols), dtype=np.uint8)
        m = self.mask_margin
        for rect in rects:
            cv2.rectangle(
                mask,
                (rect.x + m, rect.y + m),
                (rect.right - 2 * m, rect.bottom - 2 * m),
                255,
                cv2.FILLED
            )
        return mask
