# src/hamming/solvers/bounded.py
from __future__ import annotations

import heapq

from hamming.bounds import safe_index_limit
from hamming.errors import OutOfRangeError, UserInputError
from hamming.registry import solver
from hamming.runtime import CFG
from hamming.smooth import SmoothNumber
from hamming.solvers.base import MULTIPLIERS, Solver


@solver(
    name="bounded",
    description="Min-heap of plain integers with a seen-set; refuses indices that could overflow the word width",
    exact=False,
)
class BoundedIntegerSolver(Solver):
    """
    Emit Hamming numbers as literal integers by repeatedly popping the
    smallest pending candidate and pushing its multiples by 2, 3 and 5.

    A set of every value ever pushed keeps duplicates (6 = 2*3 = 3*2) out of
    the heap. O(N log N) time, O(N) memory.

    Python integers never wrap, but the solver still behaves as if it ran on
    an unsigned word of `bits` width: indices whose computation would need a
    larger integer are refused with OutOfRangeError.
    """

    def __init__(self, bits: int | None = None, **kwargs):
        super().__init__(**kwargs)
        self.bits = int(bits if bits is not None else CFG("BOUNDED.WORD_BITS", 64))
        if self.bits < 3:
            raise UserInputError(f"word width must be at least 3 bits, got {self.bits}")

    @property
    def limit(self) -> int:
        return safe_index_limit(self.bits)

    def solve(self, n: int) -> int:
        n = self._begin(n)
        if n > self.limit:
            raise OutOfRangeError(
                f"index {n} exceeds the {self.bits}-bit safe limit {self.limit}; "
                "use an exact solver",
                n=n, limit=self.limit,
            )

        heap = [1]
        seen = {1}
        current = 1
        every = self.check_every
        for i in range(n + 1):
            current = heapq.heappop(heap)
            for k in MULTIPLIERS:
                candidate = k * current
                if candidate not in seen:
                    heapq.heappush(heap, candidate)
                    seen.add(candidate)
            if i and i % every == 0:
                self._checkpoint(i, current)
        return current

    def solve_exact(self, n: int) -> SmoothNumber:
        return SmoothNumber.from_int(self.solve(n))
