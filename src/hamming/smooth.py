# -----------------------------------------------------------------------------
#  smooth.py
#  Symbolic 5-smooth numbers: 2^p * 3^q * 5^r kept as exponents
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
from dataclasses import dataclass, field
from functools import total_ordering

import gmpy2

from hamming.errors import InvalidMultiplierError, OutOfRangeError

LN2 = math.log(2)
LN3 = math.log(3)
LN5 = math.log(5)
LN10 = math.log(10)

BASES = (2, 3, 5)

# Relative width of the band in which two log sums are too close to trust.
# A double carries ~1.1e-16 relative error per operation and the sum uses five.
_LOG_REL_TOL = 1e-12


def _exact_lt(a: SmoothNumber, b: SmoothNumber) -> bool:
    """Compare a < b with integers, after cancelling the powers both share."""
    dp, dq, dr = a.p - b.p, a.q - b.q, a.r - b.r
    one = gmpy2.mpz(1)
    lhs = one * gmpy2.mpz(2) ** max(dp, 0) * gmpy2.mpz(3) ** max(dq, 0) * gmpy2.mpz(5) ** max(dr, 0)
    rhs = one * gmpy2.mpz(2) ** max(-dp, 0) * gmpy2.mpz(3) ** max(-dq, 0) * gmpy2.mpz(5) ** max(-dr, 0)
    return lhs < rhs


@total_ordering
@dataclass(frozen=True)
class SmoothNumber:
    """
    The value 2**p * 3**q * 5**r, held as its exponents.

    Equality and hashing look at the exponent triple only. Ordering is by
    magnitude using the natural-log sum p*ln2 + q*ln3 + r*ln5, so arbitrarily
    large members compare without being built. When two log sums fall inside
    the floating-point error band the comparison is redone exactly.
    """
    p: int = 0
    q: int = 0
    r: int = 0
    log: float = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        for name in ("p", "q", "r"):
            e = getattr(self, name)
            if not isinstance(e, int) or isinstance(e, bool) or e < 0:
                raise ValueError(f"exponent {name} must be a non-negative int, got {e!r}")
        object.__setattr__(self, "log", LN2 * self.p + LN3 * self.q + LN5 * self.r)

    # --- construction ---------------------------------------------------------

    @classmethod
    def zero(cls) -> SmoothNumber:
        """The first Hamming number, 1 = 2^0 * 3^0 * 5^0."""
        return cls(0, 0, 0)

    @classmethod
    def from_int(cls, n: int) -> SmoothNumber:
        """Split a positive integer into its 2/3/5 exponents; ValueError if n is not 5-smooth."""
        if not isinstance(n, int) or isinstance(n, bool) or n < 1:
            raise ValueError(f"expected a positive integer, got {n!r}")
        rest = gmpy2.mpz(n)
        exps = []
        for b in BASES:
            rest, k = gmpy2.remove(rest, b)
            exps.append(int(k))
        if rest != 1:
            raise ValueError(f"{n} has a prime factor greater than 5")
        return cls(*exps)

    def multiply(self, k: int) -> SmoothNumber:
        if not isinstance(k, int) or isinstance(k, bool):
            raise InvalidMultiplierError(k)
        if k == 2:
            return SmoothNumber(self.p + 1, self.q, self.r)
        if k == 3:
            return SmoothNumber(self.p, self.q + 1, self.r)
        if k == 5:
            return SmoothNumber(self.p, self.q, self.r + 1)
        raise InvalidMultiplierError(k)

    def __mul__(self, k):
        if not isinstance(k, int):
            return NotImplemented
        return self.multiply(k)

    __rmul__ = __mul__

    # --- comparison -----------------------------------------------------------

    def __lt__(self, other):
        if not isinstance(other, SmoothNumber):
            return NotImplemented
        diff = self.log - other.log
        band = _LOG_REL_TOL * max(1.0, self.log, other.log)
        if diff < -band:
            return True
        if diff > band:
            return False
        if self.exponents == other.exponents:
            return False
        return _exact_lt(self, other)

    def compare_to(self, other: SmoothNumber) -> int:
        """-1, 0 or 1 as self is smaller than, equal to or larger than other."""
        if self == other:
            return 0
        return -1 if self < other else 1

    def equals(self, other: SmoothNumber) -> bool:
        return self.exponents == other.exponents

    @property
    def exponents(self) -> tuple[int, int, int]:
        return (self.p, self.q, self.r)

    # --- materialization ------------------------------------------------------

    def bit_length(self) -> int:
        """Exact bit length of the materialized value."""
        return int(gmpy2.mpz(3) ** self.q * gmpy2.mpz(5) ** self.r).bit_length() + self.p

    def fits(self, bits: int) -> bool:
        """True if the value fits an unsigned integer `bits` wide."""
        # cheap reject before building anything
        if self.log / LN2 > bits + 1:
            return False
        return self.bit_length() <= bits

    def materialize(self, bits: int | None = None) -> int:
        """
        Build the literal integer. With `bits`, refuse (OutOfRangeError) any
        value that an unsigned word of that width could not hold.
        """
        if bits is not None and not self.fits(bits):
            raise OutOfRangeError(
                f"{self.exponent_form()} does not fit in {bits} bits", limit=bits
            )
        return int(gmpy2.mpz(2) ** self.p * gmpy2.mpz(3) ** self.q * gmpy2.mpz(5) ** self.r)

    # --- display --------------------------------------------------------------

    @property
    def log10(self) -> float:
        return self.log / LN10

    def approx(self, digits: int = 4) -> str:
        """Scientific-notation approximation that never overflows a float."""
        l10 = self.log10
        exp = math.floor(l10)
        mant = 10 ** (l10 - exp)
        if round(mant, digits) >= 10:
            mant /= 10
            exp += 1
        return f"{mant:.{digits}f}e+{exp}"

    def exponent_form(self) -> str:
        return f"2^{self.p} * 3^{self.q} * 5^{self.r}"

    def __str__(self) -> str:
        return f"{self.exponent_form()} ≈ {self.approx()}"


def is_smooth(n: int) -> bool:
    """True if n is a positive integer with no prime factor above 5."""
    try:
        SmoothNumber.from_int(n)
    except ValueError:
        return False
    return True
