# src/hamming/solvers/windowed.py
from __future__ import annotations

from dataclasses import dataclass

from hamming.errors import OutOfMemoryError
from hamming.registry import solver
from hamming.smooth import SmoothNumber
from hamming.solvers.base import Solver


@dataclass
class WindowStats:
    steps: int = 0          # terms produced after H(0)
    evicted: int = 0        # final offset
    peak_window: int = 1    # most live terms held at once
    peak_buffer: int = 1    # largest backing list, dead prefix included
    compactions: int = 0


@solver(
    name="windowed",
    description="Three-pointer merge keeping only the terms the lagging pointer can still reach",
)
class WindowedMergeSolver(Solver):
    """
    Same merge as the dense solver, but terms below min(i2, i3, i5) can never
    be read again, so they are dropped.

    The terms live in a plain list whose first slot holds logical index
    `base`; logical index i is buf[i - base]. `offset` is the number of terms
    evicted so far. Evicting only moves `offset`; once the dead prefix
    buf[:offset - base] is more than half the list it is deleted in one
    slice, so every read is O(1) and front removal is amortized O(1).

    The pointers only move forward and each moves at most one place per
    step, so evicting at most one term per step keeps
    offset == min(i2, i3, i5). Memory is bounded by the distance between the
    x5 pointer and the write position, which grows far slower than N.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.stats = WindowStats()

    def solve(self, n: int) -> SmoothNumber:
        n = self._begin(n)
        stats = self.stats = WindowStats()

        one = SmoothNumber.zero()
        buf = [one]
        base = offset = 0
        i2 = i3 = i5 = 0
        next2, next3, next5 = one * 2, one * 3, one * 5
        every = self.check_every
        peak = peak_buf = 1
        compactions = 0

        try:
            # logical length is base + len(buf); stop at n + 1 terms
            while base + len(buf) <= n:
                nxt = min(next2, next3, next5)
                buf.append(nxt)

                if nxt == next2:
                    i2 += 1
                    next2 = buf[i2 - base] * 2
                if nxt == next3:
                    i3 += 1
                    next3 = buf[i3 - base] * 3
                if nxt == next5:
                    i5 += 1
                    next5 = buf[i5 - base] * 5

                live = base + len(buf) - offset
                if live > peak:
                    peak = live

                # strict: the term at the lowest pointer is still needed
                if offset < min(i2, i3, i5):
                    offset += 1
                    dead = offset - base
                    if dead * 2 > len(buf):
                        del buf[:dead]
                        base = offset
                        compactions += 1

                if len(buf) > peak_buf:
                    peak_buf = len(buf)

                done = base + len(buf) - 1
                if done % every == 0:
                    stats.steps, stats.evicted, stats.peak_window = done, offset, peak
                    stats.peak_buffer, stats.compactions = peak_buf, compactions
                    self._checkpoint(done, nxt)
        except MemoryError as e:
            raise OutOfMemoryError(base + len(buf) - 1) from e

        stats.steps, stats.evicted, stats.peak_window = n, offset, peak
        stats.peak_buffer, stats.compactions = peak_buf, compactions
        return buf[n - base]
