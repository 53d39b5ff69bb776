"""
Coordinate Axis Module - Quantizes pixel positions onto grid indices.

Islands sit on a regular lattice, but only occupied lattice points are
visible. The smallest spacing between two distinct positions is taken as
one lattice step, and wider spacings are rounded to a whole number of
steps with the missing steps filled by gap slots.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..errors import ZeroUnitSpacingError


@dataclass(frozen=True)
class CoordinateAxis:
    """
    Ordered grid slots for one image dimension.

    Attributes:
        slots: Pixel position of each slot, None for inferred gaps
        unit: Pitch in pixels, None when fewer than two distinct positions
    """
    slots: Tuple[Optional[int], ...]
    unit: Optional[int] = None
    _index: Dict[int, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        index = {pos: i for i, pos in enumerate(self.slots) if pos is not None}
        object.__setattr__(self, "_index", index)

    def __len__(self) -> int:
        return len(self.slots)

    def index_of(self, position: int) -> int:
        """
        Get the slot index of a real pixel position.

        Raises:
            KeyError: If the position was not observed on this axis
        """
        return self._index[position]

    @property
    def positions(self) -> List[int]:
        """Real (observed) positions in slot order."""
        return [p for p in self.slots if p is not None]

    @property
    def gap_count(self) -> int:
        """Number of inferred empty slots."""
        return sum(1 for p in self.slots if p is None)


def compute_unit(positions: List[int]) -> int:
    """
    Smallest difference between consecutive sorted distinct positions.

    Raises:
        ZeroUnitSpacingError: If the smallest difference is not positive
    """
    unit = min(b - a for a, b in zip(positions, positions[1:]))
    if unit <= 0:
        raise ZeroUnitSpacingError(f"Non-positive grid pitch {unit} in {positions}")
    return unit


def count_steps(delta: int, unit: int) -> int:
    """Round delta / unit half-up to whole lattice steps, never below 1."""
    return max(1, math.floor(delta / unit + 0.5))


def build_axis(positions: Iterable[int]) -> CoordinateAxis:
    """
    Build the grid axis for a set of observed pixel positions.

    Args:
        positions: Pixel positions on one dimension, any order, duplicates allowed

    Returns:
        CoordinateAxis whose length is the number of grid rows/columns
    """
    distinct = sorted(set(positions))

    if not distinct:
        return CoordinateAxis(slots=(None,))
    if len(distinct) == 1:
        return CoordinateAxis(slots=(distinct[0],))

    unit = compute_unit(distinct)

    slots: List[Optional[int]] = [distinct[0]]
    for prev, pos in zip(distinct, distinct[1:]):
        steps = count_steps(pos - prev, unit)
        slots.extend([None] * (steps - 1))
        slots.append(pos)

    return CoordinateAxis(slots=tuple(slots), unit=unit)
