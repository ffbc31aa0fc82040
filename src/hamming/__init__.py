from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("hamming")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .bounds import count_smooth_upto, rank, safe_index_limit
from .calculator import HammingCalculator, SolveReport, solve_bounded, solve_dense_exact, solve_windowed_exact
from .errors import (
    HammingError,
    IncompleteError,
    InvalidMultiplierError,
    OutOfMemoryError,
    OutOfRangeError,
    UserInputError,
)
from .registry import discover, get_solver
from .runtime import APPLY, CFG
from .smooth import SmoothNumber, is_smooth
from .solvers import BoundedIntegerSolver, DenseMergeSolver, WindowedMergeSolver

__all__ = [
    "APPLY",
    "CFG",
    "BoundedIntegerSolver",
    "DenseMergeSolver",
    "HammingCalculator",
    "HammingError",
    "IncompleteError",
    "InvalidMultiplierError",
    "OutOfMemoryError",
    "OutOfRangeError",
    "SmoothNumber",
    "SolveReport",
    "UserInputError",
    "WindowedMergeSolver",
    "__version__",
    "count_smooth_upto",
    "discover",
    "get_solver",
    "is_smooth",
    "rank",
    "safe_index_limit",
    "solve_bounded",
    "solve_dense_exact",
    "solve_windowed_exact",
]
