# tests/test_smooth.py
from __future__ import annotations

import pytest

from hamming import smooth
from hamming.errors import InvalidMultiplierError, OutOfRangeError
from hamming.smooth import SmoothNumber, is_smooth

# ---------- construction ------------------------------------------------------


def test_zero_is_one():
    z = SmoothNumber.zero()
    assert z.exponents == (0, 0, 0)
    assert z.materialize() == 1


@pytest.mark.parametrize("k,expected", [(2, (1, 0, 0)), (3, (0, 1, 0)), (5, (0, 0, 1))],
                         ids=["x2", "x3", "x5"])
def test_multiply_increments_matching_exponent(k, expected):
    one = SmoothNumber.zero()
    assert one.multiply(k).exponents == expected
    assert (one * k).exponents == expected
    assert (k * one).exponents == expected


@pytest.mark.parametrize("k", [0, 1, 4, 7, 10, -2])
def test_multiply_rejects_other_factors(k):
    with pytest.raises(InvalidMultiplierError):
        SmoothNumber.zero().multiply(k)


def test_multiply_rejects_non_int():
    with pytest.raises(InvalidMultiplierError):
        SmoothNumber.zero().multiply(2.0)
    with pytest.raises(TypeError):
        SmoothNumber.zero() * "2"


def test_multiply_returns_new_object():
    a = SmoothNumber(1, 2, 3)
    b = a * 5
    assert a.exponents == (1, 2, 3)
    assert b.exponents == (1, 2, 4)


@pytest.mark.parametrize("bad", [(-1, 0, 0), (0, 1.5, 0), (0, 0, True)])
def test_rejects_bad_exponents(bad):
    with pytest.raises(ValueError):
        SmoothNumber(*bad)


def test_frozen():
    with pytest.raises(AttributeError):
        SmoothNumber.zero().p = 3


@pytest.mark.parametrize("n,expected", [
    (1, (0, 0, 0)),
    (60, (2, 1, 1)),
    (859963392, (17, 8, 0)),
    (2125764000, (5, 12, 3)),
])
def test_from_int(n, expected):
    assert SmoothNumber.from_int(n).exponents == expected


@pytest.mark.parametrize("n", [0, -4, 7, 14, 2 ** 40 * 11])
def test_from_int_rejects_non_smooth(n):
    with pytest.raises(ValueError):
        SmoothNumber.from_int(n)
    assert not is_smooth(n)


# ---------- equality / ordering ----------------------------------------------


def test_equality_is_exponent_equality():
    assert SmoothNumber(1, 1, 0) == SmoothNumber(1, 1, 0)
    assert SmoothNumber(1, 1, 0).equals(SmoothNumber(1, 1, 0))
    assert SmoothNumber(1, 1, 0) != SmoothNumber(0, 0, 1)
    assert len({SmoothNumber(2, 0, 0), SmoothNumber(2, 0, 0), SmoothNumber(0, 1, 0)}) == 2


@pytest.mark.parametrize("a,b", [
    ((2, 0, 0), (0, 0, 1)),       # 4 < 5
    ((0, 0, 1), (1, 1, 0)),       # 5 < 6
    ((3, 0, 0), (0, 2, 0)),       # 8 < 9
    ((0, 2, 0), (1, 0, 1)),       # 9 < 10
    ((55, 47, 64), (56, 47, 64)),
])
def test_ordering_by_magnitude(a, b):
    x, y = SmoothNumber(*a), SmoothNumber(*b)
    assert x < y
    assert y > x
    assert x <= y and x != y
    assert x.compare_to(y) == -1
    assert y.compare_to(x) == 1
    assert x.compare_to(SmoothNumber(*a)) == 0


def test_ordering_matches_integers_for_large_exponents():
    samples = [SmoothNumber(p, q, r) for p in (0, 7, 400, 1601) for q in (0, 13, 252, 1010) for r in (0, 9, 172, 689)]
    ints = {s: s.materialize() for s in samples}
    for a in samples:
        for b in samples:
            assert (a < b) == (ints[a] < ints[b])


def test_exact_fallback_agrees_with_log_order(monkeypatch, prefix):
    # widen the band so every comparison goes through integer arithmetic
    monkeypatch.setattr(smooth, "_LOG_REL_TOL", 10.0)
    head = prefix[:400]
    for a, b in zip(head, head[1:]):
        assert a < b
        assert not b < a


# ---------- materialization / display ----------------------------------------


def test_materialize_exact_big():
    x = SmoothNumber(55, 47, 64)
    assert x.materialize() == 2 ** 55 * 3 ** 47 * 5 ** 64


@pytest.mark.parametrize("exps,bits,fits", [
    ((63, 0, 0), 64, True),
    ((64, 0, 0), 64, False),
    ((0, 40, 0), 64, True),      # 3^40 ~ 1.2e19 < 2^64
    ((0, 41, 0), 64, False),
    ((0, 0, 0), 3, True),
])
def test_fits_and_guarded_materialize(exps, bits, fits):
    x = SmoothNumber(*exps)
    assert x.fits(bits) is fits
    if fits:
        assert x.materialize(bits) == x.materialize()
    else:
        with pytest.raises(OutOfRangeError):
            x.materialize(bits)


def test_bit_length_matches_int():
    for exps in [(0, 0, 0), (1, 0, 0), (10, 3, 7), (0, 41, 0), (120, 80, 33)]:
        x = SmoothNumber(*exps)
        assert x.bit_length() == x.materialize().bit_length()


def test_display_forms():
    x = SmoothNumber(55, 47, 64)
    assert x.exponent_form() == "2^55 * 3^47 * 5^64"
    assert x.approx().endswith("e+83")
    assert x.approx().startswith("5.19")
    assert str(SmoothNumber(3, 0, 0)) == "2^3 * 3^0 * 5^0 ≈ 8.0000e+0"
