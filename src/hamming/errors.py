# -----------------------------------------------------------------------------
#  Error taxonomy
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hamming.smooth import SmoothNumber


class HammingError(Exception):
    pass


class UserInputError(HammingError, ValueError):
    pass


class InvalidMultiplierError(HammingError, ValueError):
    """A SmoothNumber was multiplied by something other than 2, 3 or 5."""

    def __init__(self, factor: object):
        self.factor = factor
        super().__init__(f"multiplier must be one of 2, 3, 5 (got {factor!r})")


class OutOfRangeError(HammingError):
    """
    Raised instead of returning an integer that would not fit the guarded
    word width. `n` is the requested index (or None for materialization),
    `limit` the largest accepted index or the bit width.
    """

    def __init__(self, message: str, *, n: int | None = None, limit: int | None = None):
        self.n = n
        self.limit = limit
        super().__init__(message)


class OutOfMemoryError(HammingError, MemoryError):
    def __init__(self, reached: int, message: str | None = None):
        self.reached = reached
        super().__init__(message or f"storage exhausted after {reached} terms; "
                                    "use the windowed solver or a smaller index")


class IncompleteError(HammingError):
    """Computation stopped early; `partial` is the term at index `reached`."""

    def __init__(self, reached: int, partial: SmoothNumber | int | None, target: int):
        self.reached = reached
        self.partial = partial
        self.target = target
        super().__init__(f"stopped at index {reached} of {target}")
