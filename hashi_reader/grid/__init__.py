"""
Grid Package - Rebuilds the logical clue grid from pixel positions.

Public API:
    - CoordinateAxis: Slots for one dimension, with gap inference
    - build_axis(): Quantize positions onto grid indices
    - Grid: Immutable clue grid
    - reconstruct_grid(): Place extracted values on a dense grid
    - BLANK: Character for lattice points without an island
"""

from .axis import CoordinateAxis, build_axis, compute_unit, count_steps
from .board import BLANK, Grid, reconstruct_grid

__all__ = [
    "CoordinateAxis",
    "build_axis",
    "compute_unit",
    "count_steps",
    "BLANK",
    "Grid",
    "reconstruct_grid",
]
