"""
Solver Package - Hands the recognized grid to an external Hashi solver.

The solver itself lives outside this project; this package only defines
the interface and adapters for invoking it.

Public API:
    - PuzzleSolver: Abstract base for solver backends
    - CommandSolver: Runs a solver program over stdin/stdout
    - create_solver(): Factory function
    - register_solver(): Registration decorator
    - available_solvers(): List registered solver names

Usage:
    from hashi_reader.solver import create_solver

    solver = create_solver("command", command=["hashi-solver"])
    print(solver.solve(grid_text, 3))
"""

from .base import PuzzleSolver
from .factory import (
    create_solver,
    register_solver,
    available_solvers,
)

# Import solvers to register them
from .command import CommandSolver

__all__ = [
    "PuzzleSolver",
    "CommandSolver",
    "create_solver",
    "register_solver",
    "available_solvers",
]
