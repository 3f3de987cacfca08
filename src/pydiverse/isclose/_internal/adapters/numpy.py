from __future__ import annotations

import numbers
from typing import Any

import numpy as np

from pydiverse.isclose._internal import errors
from pydiverse.isclose._internal.impl_store import IMPLS
from pydiverse.isclose._internal.scalar import (
    close_complex,
    close_complex_int,
    close_int_real,
    close_rational,
    close_real,
)
from pydiverse.isclose._internal.tolerance import (
    BFLOAT16,
    FLOAT16,
    FLOAT32,
    FLOAT64,
    Tolerance,
)


def dtype_tolerance(dtype: np.dtype) -> Tolerance:
    """
    Default tolerances for a numpy dtype. Complex types use the tolerance of their
    component type, everything that is not floating point counts as double
    precision. ``bfloat16`` is the dtype registered by ml_dtypes.
    """
    dtype = np.dtype(dtype)
    if dtype.name == "bfloat16":
        return BFLOAT16
    if dtype.kind == "c":
        dtype = np.dtype(f"f{dtype.itemsize // 2}")
    if dtype == np.float16:
        return FLOAT16
    if dtype == np.float32:
        return FLOAT32
    return FLOAT64


def scalar_tolerance(value: np.generic) -> Tolerance:
    return dtype_tolerance(value.dtype)


def array_tolerance(value: np.ndarray) -> Tolerance:
    return dtype_tolerance(value.dtype)


def close_arrays(a: np.ndarray, b: np.ndarray, rel_tol: Any, abs_tol: Any) -> bool:
    """
    Element-wise version of the scalar rule. Arrays of different shapes are never
    close. Half precision arrays are compared in single precision.
    """
    if a.shape != b.shape:
        return False

    # bfloat16 has no promotion rules with the builtin numpy dtypes
    if a.dtype.name == "bfloat16":
        a = a.astype(np.float32)
    if b.dtype.name == "bfloat16":
        b = b.astype(np.float32)

    dtype = np.result_type(a, b, np.float32)
    a = a.astype(dtype, copy=False)
    b = b.astype(dtype, copy=False)

    with np.errstate(invalid="ignore", over="ignore"):
        diff = np.abs(a - b)
        tol = np.maximum(abs_tol, rel_tol * np.maximum(np.abs(a), np.abs(b)))
        close = (a == b) | (np.isfinite(a) & np.isfinite(b) & (diff <= tol))
    return bool(np.all(close))


def is_extended(value: Any) -> bool:
    """
    Whether ``value`` is a numpy float with more precision than a Python float.
    """
    return (
        isinstance(value, np.inexact)
        and value.dtype.kind in "fc"
        and np.finfo(value.dtype).nmant > np.finfo(np.float64).nmant
    )


def close_extended(lhs: Any, rhs: Any, rel_tol: Any, abs_tol: Any) -> bool:
    # long doubles would overflow or lose precision as Python floats
    dtype = np.result_type(lhs, rhs) if isinstance(rhs, np.generic) else lhs.dtype
    return close_arrays(
        np.asarray(lhs, dtype=dtype), np.asarray(rhs, dtype=dtype), rel_tol, abs_tol
    )


def as_array(fn: str, value: Any) -> np.ndarray:
    if isinstance(value, np.ndarray):
        return value
    if isinstance(value, list | tuple | np.generic | numbers.Number):
        return np.asarray(value)
    raise TypeError(
        f"cannot compare a numpy array with a value of type `{type(value).__name__}` "
        f"in `{fn}`"
    )


with IMPLS.impl_manager as impl:

    @impl(np.floating, tolerance=scalar_tolerance)
    def _floating(lhs, rhs, rel_tol, abs_tol):
        errors.check_arg_type(numbers.Real, "is_close", "other", rhs)
        if is_extended(lhs) or is_extended(rhs):
            return close_extended(lhs, rhs, rel_tol, abs_tol)
        if isinstance(rhs, numbers.Integral):
            return close_int_real(int(rhs), lhs, rel_tol, abs_tol)
        # up to double precision numpy floats convert to float exactly
        return close_real(float(lhs), float(rhs), rel_tol, abs_tol)

    @impl(np.integer, tolerance=FLOAT64)
    def _integer(lhs, rhs, rel_tol, abs_tol):
        errors.check_arg_type(numbers.Real, "is_close", "other", rhs)
        if isinstance(rhs, numbers.Integral):
            return close_rational(int(lhs), int(rhs), rel_tol, abs_tol)
        if is_extended(rhs):
            return close_extended(rhs, lhs, rel_tol, abs_tol)
        return close_int_real(int(lhs), rhs, rel_tol, abs_tol)

    @impl(np.complexfloating, tolerance=scalar_tolerance)
    def _complexfloating(lhs, rhs, rel_tol, abs_tol):
        errors.check_arg_type(numbers.Number, "is_close", "other", rhs)
        if is_extended(lhs) or is_extended(rhs):
            return close_extended(lhs, rhs, rel_tol, abs_tol)
        if isinstance(rhs, numbers.Integral):
            return close_complex_int(complex(lhs), int(rhs), rel_tol, abs_tol)
        return close_complex(complex(lhs), complex(rhs), rel_tol, abs_tol)

    @impl(np.ndarray, tolerance=array_tolerance)
    def _ndarray(lhs, rhs, rel_tol, abs_tol):
        return close_arrays(lhs, as_array("is_close", rhs), rel_tol, abs_tol)
