# -----------------------------------------------------------------------------
#  bounds.py
#  Exact counting of 5-smooth numbers and the overflow bound that follows
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache

from hamming.errors import UserInputError
from hamming.smooth import SmoothNumber

# Every candidate the heap solver builds is 2, 3 or 5 times an emitted term.
LARGEST_MULTIPLIER = 5


def count_smooth_upto(x: int) -> int:
    """
    Number of 5-smooth integers <= x.

    Walks every 5^r * 3^q <= x and counts the powers of two that still fit:
    2^p * m <= x  <=>  2^p <= x // m  <=>  p < (x // m).bit_length().
    """
    if x < 1:
        return 0
    total = 0
    m5 = 1
    while m5 <= x:
        m = m5
        while m <= x:
            total += (x // m).bit_length()
            m *= 3
        m5 *= 5
    return total


@lru_cache(maxsize=None)
def safe_index_limit(bits: int) -> int:
    """
    Largest 0-based index N for which the heap solver stays inside an
    unsigned `bits`-wide word.

    While producing H(0..N) the largest integer ever formed is 5 * H(N),
    so H(N) must not exceed (2**bits - 1) // 5.
    """
    if bits < 3:
        raise UserInputError(f"word width must be at least 3 bits, got {bits}")
    ceiling = (2 ** bits - 1) // LARGEST_MULTIPLIER
    return count_smooth_upto(ceiling) - 1


def rank(value: SmoothNumber | int) -> int:
    """0-based position of a 5-smooth value in the Hamming sequence."""
    if isinstance(value, SmoothNumber):
        value = value.materialize()
    else:
        # validates smoothness
        SmoothNumber.from_int(value)
    return count_smooth_upto(value) - 1
