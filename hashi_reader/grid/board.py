"""
Grid Module - Dense clue grid rebuilt from extracted island values.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from ..ocr.result import ExtractedValue, UNKNOWN_VALUE
from .axis import CoordinateAxis, build_axis


logger = logging.getLogger(__name__)


BLANK = " "  # No island at this lattice point


@dataclass(frozen=True)
class Grid:
    """
    Immutable clue grid.

    Uses tuple-of-tuples for hashability and immutability.
    Cells contain '1'-'9', UNKNOWN_VALUE or BLANK.

    Attributes:
        cells: Tuple of row tuples, indexed [row][col]
        x_axis: Column axis the cells were placed on
        y_axis: Row axis the cells were placed on
    """
    cells: Tuple[Tuple[str, ...], ...]
    x_axis: CoordinateAxis
    y_axis: CoordinateAxis

    @property
    def rows(self) -> int:
        """Get number of rows in grid."""
        return len(self.cells)

    @property
    def cols(self) -> int:
        """Get number of columns in grid."""
        return len(self.cells[0]) if self.rows > 0 else 0

    def get_cell(self, row: int, col: int) -> str:
        """
        Get character at a grid position.

        Returns:
            Cell character, BLANK if out of range
        """
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return self.cells[row][col]
        return BLANK

    def island_count(self) -> int:
        """Count cells holding an island (known or unknown value)."""
        return sum(1 for row in self.cells for c in row if c != BLANK)

    def unknown_count(self) -> int:
        """Count islands whose value was not recognized."""
        return sum(1 for row in self.cells for c in row if c == UNKNOWN_VALUE)

    def to_text(self) -> str:
        """
        Serialize for the solver.

        Returns:
            Rows joined by newline, characters concatenated, trailing blanks kept
        """
        return "\n".join("".join(row) for row in self.cells)

    def to_list(self) -> List[List[str]]:
        """Convert to mutable 2D list representation."""
        return [list(row) for row in self.cells]

    def __str__(self) -> str:
        return self.to_text()


def reconstruct_grid(values: Iterable[ExtractedValue]) -> Grid:
    """
    Place extracted values on a dense grid with inferred empty rows/columns.

    Args:
        values: Every extracted value of the run

    Returns:
        Grid of len(y_axis) rows by len(x_axis) columns
    """
    values = list(values)

    x_axis = build_axis(v.x for v in values)
    y_axis = build_axis(v.y for v in values)

    cells = [[BLANK] * len(x_axis) for _ in range(len(y_axis))]
    placed: Dict[Tuple[int, int], ExtractedValue] = {}

    for v in values:
        row, col = y_axis.index_of(v.y), x_axis.index_of(v.x)
        if (row, col) in placed:
            logger.warning(
                f"Duplicate island at ({v.x}, {v.y}): "
                f"'{placed[(row, col)].value}' replaced by '{v.value}'"
            )
        placed[(row, col)] = v
        cells[row][col] = v.value

    logger.info(
        f"Grid {len(y_axis)}x{len(x_axis)} "
        f"({y_axis.gap_count} empty rows, {x_axis.gap_count} empty cols)"
    )

    return Grid(
        cells=tuple(tuple(row) for row in cells),
        x_axis=x_axis,
        y_axis=y_axis,
    )
