"""
Command Solver - Runs an external solver program over stdin/stdout.
"""

import logging
import subprocess
from typing import List, Optional, Sequence

from ..errors import SolverError
from .base import PuzzleSolver
from .factory import register_solver


logger = logging.getLogger(__name__)


DEFAULT_COMMAND = ("hashi-solver",)
DEFAULT_TIMEOUT_SEC = 60.0
MAX_BRIDGES_PLACEHOLDER = "{max_bridges}"


@register_solver
class CommandSolver(PuzzleSolver):
    """
    Pipes the grid text to a solver executable and returns its stdout.

    Any argument containing "{max_bridges}" has it replaced by the
    requested bridge limit.
    """
    name = "command"
    description = "External solver program (grid text on stdin)"

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_COMMAND,
        timeout_sec: Optional[float] = DEFAULT_TIMEOUT_SEC,
    ):
        if not command:
            raise ValueError("Solver command must not be empty")
        self.command = list(command)
        self.timeout_sec = timeout_sec

    def build_args(self, max_bridges_per_edge: int) -> List[str]:
        """Expand the bridge limit placeholder in the command line."""
        return [
            arg.replace(MAX_BRIDGES_PLACEHOLDER, str(max_bridges_per_edge))
            for arg in self.command
        ]

    def solve(self, grid_text: str, max_bridges_per_edge: int) -> str:
        args = self.build_args(max_bridges_per_edge)
        logger.info(f"Running solver: {' '.join(args)}")

        try:
            proc = subprocess.run(
                args,
                input=grid_text,
                capture_output=True,
                text=True,
                timeout=self.timeout_sec,
            )
        except FileNotFoundError as e:
            raise SolverError(f"Solver executable not found: {args[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise SolverError(f"Solver timed out after {self.timeout_sec}s") from e

        if proc.returncode != 0:
            detail = proc.stderr.strip() or proc.stdout.strip()
            raise SolverError(f"Solver exited with status {proc.returncode}: {detail}")

        return proc.stdout
