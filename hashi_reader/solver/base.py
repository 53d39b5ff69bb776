"""
Solver Base Module - Abstract interface to an external Hashi solver.
"""

from abc import ABC, abstractmethod


class PuzzleSolver(ABC):
    """
    Abstract base class for puzzle solver backends.

    Subclasses must implement solve() and define name and description
    class attributes.

    Attributes:
        name: Short identifier for the solver
        description: Human-readable description
    """
    name: str = "base"
    description: str = "Base solver"

    @abstractmethod
    def solve(self, grid_text: str, max_bridges_per_edge: int) -> str:
        """
        Solve a clue grid.

        Args:
            grid_text: Rows joined by newline, characters '1'-'9', '?' or ' '
            max_bridges_per_edge: Bridge limit between two islands

        Returns:
            Solver output text

        Raises:
            SolverError: If no solution could be produced
        """
        pass
