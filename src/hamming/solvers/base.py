# src/hamming/solvers/base.py
from __future__ import annotations

from collections.abc import Callable
from time import perf_counter
from typing import Any

from hamming.errors import IncompleteError, UserInputError
from hamming.runtime import CFG

ProgressFn = Callable[[int, int], None]

MULTIPLIERS = (2, 3, 5)


def validate_index(n: Any) -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise UserInputError(f"index must be an integer, got {type(n).__name__}")
    if n < 0:
        raise UserInputError(f"index must be non-negative, got {n}")
    return n


class Solver:
    """
    Common plumbing for the solvers: index validation, progress callbacks
    and an optional wall-clock budget.

    Each call to solve() allocates its own storage, so one instance can be
    reused for many indices but never shares state with another instance.
    """

    name = "base"
    description = ""
    exact = True

    def __init__(self, *, on_progress: ProgressFn | None = None,
                 max_seconds: float | None = None, check_every: int | None = None):
        self.on_progress = on_progress
        if max_seconds is None:
            max_seconds = CFG("SOLVER.MAX_SECONDS", 0) or None
        self.max_seconds = max_seconds
        self.check_every = max(1, int(check_every or CFG("SOLVER.CHECK_EVERY", 65536)))
        self._t0 = 0.0
        self._target = 0

    def solve(self, n: int):
        raise NotImplementedError

    def _begin(self, n: int) -> int:
        n = validate_index(n)
        self._target = n
        self._t0 = perf_counter()
        return n

    def _checkpoint(self, done: int, current) -> None:
        """Report progress; raise IncompleteError once the time budget is spent."""
        if self.on_progress is not None:
            self.on_progress(done, self._target)
        if self.max_seconds is not None and perf_counter() - self._t0 > self.max_seconds:
            raise IncompleteError(done, current, self._target)
