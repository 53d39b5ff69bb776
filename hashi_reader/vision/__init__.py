"""
Vision Package - Candidate region detection and cleanup.

Public API:
    - Rectangle: Immutable pixel rectangle
    - Candidate: Rectangle with detection-order index
    - filter_regions(): Drop specks and oversized regions
    - resolve_overlaps(): First-seen-wins dedup
    - RegionDetector: Abstract detector interface
    - ContourRegionDetector: OpenCV two-pass contour detector
"""

from .regions import (
    Rectangle,
    Candidate,
    to_candidates,
    is_plausible,
    filter_regions,
    resolve_overlaps,
)
from .detector import (
    RegionDetector,
    ContourRegionDetector,
    to_grayscale,
)

__all__ = [
    "Rectangle",
    "Candidate",
    "to_candidates",
    "is_plausible",
    "filter_regions",
    "resolve_overlaps",
    "RegionDetector",
    "ContourRegionDetector",
    "to_grayscale",
]
