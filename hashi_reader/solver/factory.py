"""
Solver Factory Module - Registry and factory for solver instantiation.
"""

from typing import Any, Dict, List, Type

from .base import PuzzleSolver


# Global registry of solvers
_SOLVERS: Dict[str, Type[PuzzleSolver]] = {}


def register_solver(cls: Type[PuzzleSolver]) -> Type[PuzzleSolver]:
    """
    Decorator to register a solver class.

    Usage:
        @register_solver
        class MySolver(PuzzleSolver):
            name = "my_solver"
            ...

    Args:
        cls: Solver class to register

    Returns:
        The same class (for decorator chaining)
    """
    _SOLVERS[cls.name] = cls
    return cls


def create_solver(name: str, **kwargs: Any) -> PuzzleSolver:
    """
    Create a solver instance by name.

    Args:
        name: Solver name (e.g., "command")
        **kwargs: Additional arguments passed to solver constructor

    Returns:
        Solver instance

    Raises:
        ValueError: If solver name not found
    """
    if name not in _SOLVERS:
        available = ", ".join(_SOLVERS.keys())
        raise ValueError(f"Unknown solver: {name}. Available: {available}")
    return _SOLVERS[name](**kwargs)


def available_solvers() -> List[str]:
    """Get list of registered solver names."""
    return list(_SOLVERS.keys())

