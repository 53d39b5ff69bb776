"""
Unit tests for region filtering and overlap resolution.

Usage:
    python -m pytest tests/test_regions.py
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hashi_reader.vision import (
    Rectangle,
    filter_regions,
    is_plausible,
    resolve_overlaps,
    to_candidates,
)


IMAGE_SHAPE = (200, 200)  # area 40000, max region area 4000


# ============================================================================
# Rectangle
# ============================================================================

def test_rectangle_from_bounding_rect_tuple():
    rect = Rectangle.from_tuple((3, 4, 15, 20))
    assert rect == Rectangle(3, 4, 15, 20)
    assert rect.area == 300
    assert rect.right == 18
    assert rect.bottom == 24
    assert rect.to_tuple() == (3, 4, 15, 20)


def test_overlapping_rectangles():
    assert Rectangle(0, 0, 20, 20).overlaps(Rectangle(5, 5, 20, 20))


def test_touching_edges_count_as_overlap():
    left = Rectangle(0, 0, 10, 10)
    assert left.overlaps(Rectangle(10, 0, 10, 10))
    assert left.overlaps(Rectangle(0, 10, 10, 10))


def test_separated_rectangles_do_not_overlap():
    left = Rectangle(0, 0, 10, 10)
    assert not left.overlaps(Rectangle(11, 0, 10, 10))
    assert not left.overlaps(Rectangle(0, 11, 10, 10))
    # Overlap on one axis only
    assert not left.overlaps(Rectangle(5, 50, 10, 10))


def test_candidates_carry_detection_order():
    rects = [Rectangle(50, 0, 15, 15), Rectangle(0, 0, 15, 15)]
    candidates = to_candidates(rects)
    assert [c.index for c in candidates] == [0, 1]
    assert [c.rect for c in candidates] == rects


# ============================================================================
# Region filter
# ============================================================================

@pytest.mark.parametrize("rect, expected", [
    (Rectangle(0, 0, 11, 11), True),
    (Rectangle(0, 0, 10, 20), False),    # width not > 10
    (Rectangle(0, 0, 20, 10), False),    # height not > 10
    (Rectangle(0, 0, 11, 9), False),
    (Rectangle(0, 0, 60, 66), True),     # area 3960 < 4000
    (Rectangle(0, 0, 40, 100), False),   # area 4000 not < 4000
    (Rectangle(0, 0, 190, 190), False),  # board outline
])
def test_is_plausible(rect, expected):
    assert is_plausible(rect, IMAGE_SHAPE) == expected


def test_filter_preserves_order():
    rects = [
        Rectangle(100, 0, 20, 20),
        Rectangle(0, 0, 3, 3),        # speck
        Rectangle(0, 50, 20, 20),
        Rectangle(0, 0, 199, 199),    # outline
        Rectangle(50, 50, 20, 20),
    ]
    assert filter_regions(rects, IMAGE_SHAPE) == [rects[0], rects[2], rects[4]]


def test_filter_empty_input():
    assert filter_regions([], IMAGE_SHAPE) == []


# ============================================================================
# Overlap resolver
# ============================================================================

def test_first_seen_wins():
    first = Rectangle(0, 0, 20, 20)
    second = Rectangle(5, 5, 20, 20)
    assert resolve_overlaps([first, second]) == [first]
    assert resolve_overlaps([second, first]) == [second]


def test_non_overlapping_all_kept_in_order():
    rects = [Rectangle(40, 0, 15, 15), Rectangle(0, 0, 15, 15), Rectangle(0, 40, 15, 15)]
    assert resolve_overlaps(rects) == rects


def test_dropped_candidate_still_blocks_later_ones():
    a = Rectangle(0, 0, 20, 20)
    b = Rectangle(15, 0, 20, 20)   # overlaps a, dropped
    c = Rectangle(30, 0, 20, 20)   # overlaps only b
    assert resolve_overlaps([a, b, c]) == [a]


def test_duplicate_regions_never_merged():
    a = Rectangle(10, 10, 20, 20)
    duplicate = Rectangle(10, 10, 20, 20)
    assert resolve_overlaps([a, duplicate]) == [a]


if __name__ == "__main__":
    sys.exit(pytest.main([__file__]))
