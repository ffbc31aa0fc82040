# src/hamming/solvers/dense.py
from __future__ import annotations

from hamming.errors import OutOfMemoryError
from hamming.registry import solver
from hamming.smooth import SmoothNumber
from hamming.solvers.base import Solver


@solver(
    name="dense",
    description="Three-pointer merge over exponent triples, keeping the whole sequence",
)
class DenseMergeSolver(Solver):
    """
    Classic three-pointer merge. seq grows by exactly one term per step;
    the pointers i2, i3, i5 mark the terms whose x2, x3, x5 multiples are the
    pending candidates. O(N) time and O(N) memory, no overflow anywhere
    since only exponents are touched.
    """

    def sequence(self, n: int) -> list[SmoothNumber]:
        """The first n + 1 Hamming numbers, H(0) .. H(n)."""
        n = self._begin(n)
        one = SmoothNumber.zero()
        seq = [one]
        i2 = i3 = i5 = 0
        next2, next3, next5 = one * 2, one * 3, one * 5
        every = self.check_every

        try:
            while len(seq) < n + 1:
                nxt = min(next2, next3, next5)
                seq.append(nxt)

                # independent checks: a tie (6 = 2*3 = 3*2) must advance every
                # pointer that produced it, or the value comes back later
                if nxt == next2:
                    i2 += 1
                    next2 = seq[i2] * 2
                if nxt == next3:
                    i3 += 1
                    next3 = seq[i3] * 3
                if nxt == next5:
                    i5 += 1
                    next5 = seq[i5] * 5

                if (len(seq) - 1) % every == 0:
                    self._checkpoint(len(seq) - 1, nxt)
        except MemoryError as e:
            raise OutOfMemoryError(len(seq) - 1) from e
        return seq

    def solve(self, n: int) -> SmoothNumber:
        return self.sequence(n)[n]
