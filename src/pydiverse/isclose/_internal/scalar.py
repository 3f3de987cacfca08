from __future__ import annotations

import cmath
import math
import numbers
from fractions import Fraction
from typing import Any

from pydiverse.isclose._internal import errors
from pydiverse.isclose._internal.impl_store import IMPLS
from pydiverse.isclose._internal.tolerance import FLOAT64


def close_real(a: Any, b: Any, rel_tol: Any, abs_tol: Any) -> bool:
    """
    The scalar comparison rule, ``|a - b| <= max(abs_tol, rel_tol * max(|a|, |b|))``.

    Equal values are always close, which also covers two infinities of the same sign.
    Any other infinity is not close to anything, and NaN fails every comparison.
    """
    if a == b:
        return True
    if math.isinf(a) or math.isinf(b):
        return False
    return abs(a - b) <= max(abs_tol, rel_tol * max(abs(a), abs(b)))


def close_rational(a: Any, b: Any, rel_tol: Any, abs_tol: Any) -> bool:
    """
    The scalar rule evaluated exactly for ints and fractions, so integers beyond
    the float range never overflow.
    """
    if a == b:
        return True
    diff = abs(a - b)
    # diff / max(|a|, |b|) is at most 2, so the division never overflows
    return diff <= float(abs_tol) or diff / max(abs(a), abs(b)) <= float(rel_tol)


def close_int_real(n: int, x: Any, rel_tol: Any, abs_tol: Any) -> bool:
    """
    Compares an int with a float without rounding the int to float.
    """
    x = float(x)
    if not math.isfinite(x):
        return False
    return close_rational(Fraction(n), Fraction(x), rel_tol, abs_tol)


def within_squared(dist2: Fraction, tol: Any, scale2: Fraction) -> bool:
    # dist2 <= (tol * scale)**2 for a non-negative tol, without leaving the rationals
    tol = float(tol)
    if math.isnan(tol) or tol < 0:
        return False
    if math.isinf(tol):
        return scale2 > 0
    return dist2 <= Fraction(tol) ** 2 * scale2


def close_complex_int(z: complex, n: int, rel_tol: Any, abs_tol: Any) -> bool:
    """
    Compares a complex number with an int by squared moduli in exact arithmetic.
    """
    if cmath.isinf(z) or cmath.isnan(z):
        return False
    re, im, n = Fraction(z.real), Fraction(z.imag), Fraction(n)
    if re == n and im == 0:
        return True
    dist2 = (re - n) ** 2 + im**2
    return within_squared(dist2, abs_tol, Fraction(1)) or within_squared(
        dist2, rel_tol, max(re**2 + im**2, n**2)
    )


def close_complex(a: Any, b: Any, rel_tol: Any, abs_tol: Any) -> bool:
    if a == b:
        return True
    if cmath.isinf(a) or cmath.isinf(b):
        return False
    return abs(a - b) <= max(abs_tol, rel_tol * max(abs(a), abs(b)))


with IMPLS.impl_manager as impl:

    @impl(float, tolerance=FLOAT64)
    def _float(lhs, rhs, rel_tol, abs_tol):
        errors.check_arg_type(numbers.Real, "is_close", "other", rhs)
        if isinstance(rhs, numbers.Integral):
            return close_int_real(int(rhs), lhs, rel_tol, abs_tol)
        return close_real(float(lhs), float(rhs), rel_tol, abs_tol)

    @impl(int, tolerance=FLOAT64)
    def _int(lhs, rhs, rel_tol, abs_tol):
        errors.check_arg_type(numbers.Real, "is_close", "other", rhs)
        if isinstance(rhs, numbers.Integral):
            return close_rational(int(lhs), int(rhs), rel_tol, abs_tol)
        return close_int_real(int(lhs), rhs, rel_tol, abs_tol)

    @impl(complex, tolerance=FLOAT64)
    def _complex(lhs, rhs, rel_tol, abs_tol):
        errors.check_arg_type(numbers.Number, "is_close", "other", rhs)
        if isinstance(rhs, numbers.Integral):
            return close_complex_int(complex(lhs), int(rhs), rel_tol, abs_tol)
        return close_complex(complex(lhs), complex(rhs), rel_tol, abs_tol)
