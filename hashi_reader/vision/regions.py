"""
Region Module - Candidate island rectangles, plausibility filter and dedup.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

logger = logging.getLogger(__name__)


# Plausibility thresholds for island markers
MIN_REGION_WIDTH = 10
MIN_REGION_HEIGHT = 10
MIN_REGION_AREA = 100
MAX_AREA_DIVISOR = 10  # area must stay below image_area / MAX_AREA_DIVISOR


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned pixel rectangle produced by a region detector.

    Attributes:
        x: Left edge in pixels
        y: Top edge in pixels
        width: Width in pixels
        height: Height in pixels
    """
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_tuple(cls, box: Tuple[int, int, int, int]) -> 'Rectangle':
        """Create from an (x, y, w, h) tuple as returned by cv2.boundingRect."""
        x, y, w, h = box
        return cls(x=int(x), y=int(y), width=int(w), height=int(h))

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def overlaps(self, other: 'Rectangle') -> bool:
        """
        Check whether two rectangles intersect on both axes.

        Touching edges count as overlap.
        """
        return not (
            self.right < other.x
            or other.right < self.x
            or self.bottom < other.y
            or other.bottom < self.y
        )

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class Candidate:
    """A rectangle tagged with its detection-order index."""
    index: int
    rect: Rectangle


def to_candidates(rects: Iterable[Rectangle]) -> List[Candidate]:
    """Tag rectangles with their position in detection order."""
    return [Candidate(index=i, rect=r) for i, r in enumerate(rects)]


def is_plausible(rect: Rectangle, image_shape: Sequence[int]) -> bool:
    """
    Check if a rectangle could be an island marker.

    Args:
        rect: Candidate rectangle
        image_shape: (rows, cols) of the source image

    Returns:
        True if the rectangle is neither a speck nor an oversized region
    """
    rows, cols = image_shape[0], image_shape[1]
    return (
        rect.width > MIN_REGION_WIDTH
        and rect.height > MIN_REGION_HEIGHT
        and rect.area > MIN_REGION_AREA
        and rect.area < (rows * cols) / MAX_AREA_DIVISOR
    )


def filter_regions(rects: Iterable[Rectangle], image_shape: Sequence[int]) -> List[Rectangle]:
    """
    Drop rectangles implausible as island markers, preserving order.

    Args:
        rects: Rectangles in detection order
        image_shape: (rows, cols) of the source image

    Returns:
        Plausible rectangles, same relative order
    """
    kept = [r for r in rects if is_plausible(r, image_shape)]
    logger.debug(f"Region filter kept {len(kept)} candidates")
    return kept


def resolve_overlaps(rects: Sequence[Rectangle]) -> List[Rectangle]:
    """
    Remove duplicate/overlapping candidates, first-seen wins.

    A candidate is dropped if it overlaps ANY earlier candidate in the
    input, including earlier candidates that were themselves dropped.

    Args:
        rects: Filtered rectangles in detection order

    Returns:
        Non-overlapping subsequence of the input
    """
    candidates = to_candidates(rects)
    accepted: List[Rectangle] = []

    for cand in candidates:
        earlier = next(
            (prev for prev in candidates[:cand.index] if cand.rect.overlaps(prev.rect)),
            None
        )
        if earlier is not None:
            logger.debug(
                f"Skipping region #{cand.index} {cand.rect.to_tuple()}: "
                f"overlaps #{earlier.index} {earlier.rect.to_tuple()}"
            )
            continue
        accepted.append(cand.rect)

    return accepted
