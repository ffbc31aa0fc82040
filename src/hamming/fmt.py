# src/hamming/fmt.py
from __future__ import annotations

import re

from colorama import Fore, Style

from hamming.smooth import SmoothNumber

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(s: str | None) -> str:
    return ANSI_RE.sub("", s or "")


def dec_digits(n: int) -> int:
    """Exact decimal digit count without str(); handles n >= 0."""
    n = abs(n)
    if n == 0:
        return 1
    # floor(log10(n)) ~= floor(bitlen*log10(2))
    est = int((n.bit_length() * 30103) // 100000)
    p10 = 10 ** est
    if n < p10:
        while n < p10:
            est -= 1
            p10 //= 10
    else:
        p10 *= 10
        while n >= p10:
            est += 1
            p10 *= 10
    return est + 1


def abbr_int_fast(n: int, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Abbreviate very large ints as first<head>…last<tail> without str(n)."""
    if n == 0:
        return "0"
    sign = "-" if n < 0 else ""
    a = -n if n < 0 else n

    d = dec_digits(a)
    if d <= threshold or head + tail >= d:
        return sign + str(a)

    first = a // 10 ** (d - head)
    last = a % 10 ** tail
    return f"{sign}{first}{ellipsis}{last:0{tail}d}"


def format_duration(seconds: float) -> str:
    """ms if <1s; s with millis if <60s; else mm:ss.mmm (and hh:mm:ss.mmm if ≥1h)."""
    MAX_SECONDS = 60
    if seconds < 1:
        return f"{round(seconds * 1000)} ms"
    if seconds < MAX_SECONDS:
        return f"{seconds:.3f} s"
    m, s = divmod(seconds, MAX_SECONDS)
    if m < MAX_SECONDS:
        return f"{int(m)}:{s:06.3f}"               # mm:ss.mmm
    h, m = divmod(int(m), MAX_SECONDS)
    return f"{h}:{m:02d}:{s:06.3f}"                # hh:mm:ss.mmm


def format_index(n: int) -> str:
    return f"{n:,}".replace(",", "_")


def format_result(n: int, value: SmoothNumber, *, max_digits: int = 60, color: bool = True) -> str:
    """
    One line per result:  H(n) = 2^p * 3^q * 5^r ≈ m.mmmme+k [= exact]
    The exact integer is appended only when it has at most max_digits digits.
    """
    head = f"H({format_index(n)})"
    body = f"{value.exponent_form()} ≈ {value.approx()}"
    if max_digits > 0 and value.log10 < max_digits:
        exact = value.materialize()
        if dec_digits(exact) <= max_digits:
            body += f" = {abbr_int_fast(exact, threshold=max_digits)}"
    if not color:
        return f"{head} = {body}"
    return f"{Fore.YELLOW}{Style.BRIGHT}{head}{Style.RESET_ALL} = {Fore.GREEN}{body}{Style.RESET_ALL}"
