# -----------------------------------------------------------------------------
#  calculator.py
#  Entry points: one function per solver plus a timing facade
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass, field
from time import perf_counter
from typing import Any

from hamming.errors import OutOfRangeError
from hamming.registry import discover, get_solver
from hamming.runtime import CFG
from hamming.smooth import SmoothNumber
from hamming.solvers import BoundedIntegerSolver, DenseMergeSolver, WindowedMergeSolver
from hamming.solvers.base import validate_index


def solve_bounded(n: int, bits: int | None = None) -> int:
    """H(n) as a plain integer; OutOfRangeError beyond the word-width limit."""
    return BoundedIntegerSolver(bits=bits).solve(n)


def solve_dense_exact(n: int) -> SmoothNumber:
    return DenseMergeSolver().solve(n)


def solve_windowed_exact(n: int) -> SmoothNumber:
    return WindowedMergeSolver().solve(n)


@dataclass
class SolveReport:
    method: str
    target: int
    value: SmoothNumber
    elapsed: float                  # seconds
    integer: int | None = None      # set when the value fits the word width


@dataclass
class HammingCalculator:
    """
    Runs solvers for a single target index and keeps what they produced.

        calc = HammingCalculator(1500)
        calc.solve("bounded")
        calc.solve("windowed")
        calc.result_hamming, calc.result_int, calc.reports
    """
    target: int
    result_hamming: SmoothNumber = field(default_factory=SmoothNumber.zero)
    result_int: int | None = 1
    reports: list[SolveReport] = field(default_factory=list)
    skipped: list[tuple[str, str]] = field(default_factory=list)   # (method, reason)

    def __post_init__(self):
        self.target = validate_index(self.target)

    def solve(self, method: str, **solver_kwargs: Any) -> SolveReport:
        info = get_solver(method)
        engine = info.cls(**solver_kwargs)
        bits = int(CFG("BOUNDED.WORD_BITS", 64))

        t0 = perf_counter()
        raw = engine.solve(self.target)
        elapsed = perf_counter() - t0

        if isinstance(raw, SmoothNumber):
            value = raw
            integer = raw.materialize() if raw.fits(bits) else None
        else:
            value = SmoothNumber.from_int(raw)
            integer = raw

        self.result_hamming = value
        self.result_int = integer
        report = SolveReport(info.name, self.target, value, elapsed, integer)
        self.reports.append(report)
        return report

    def solve_all(self, bits: int | None = None, **solver_kwargs: Any) -> list[SolveReport]:
        """
        Run every registered solver; width-limited ones that refuse are
        recorded in `skipped`. `bits` only goes to the width-limited solvers.
        """
        out = []
        for name, info in discover().items():
            kwargs = dict(solver_kwargs)
            if not info.exact and bits is not None:
                kwargs["bits"] = bits
            try:
                out.append(self.solve(name, **kwargs))
            except OutOfRangeError as e:
                self.skipped.append((name, str(e)))
        return out
