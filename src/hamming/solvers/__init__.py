from __future__ import annotations

from .base import Solver, validate_index
from .bounded import BoundedIntegerSolver
from .dense import DenseMergeSolver
from .windowed import WindowedMergeSolver, WindowStats

__all__ = [
    "BoundedIntegerSolver",
    "DenseMergeSolver",
    "Solver",
    "WindowStats",
    "WindowedMergeSolver",
    "validate_index",
]
