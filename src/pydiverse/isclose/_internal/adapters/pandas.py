from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from pydiverse.isclose._internal import errors
from pydiverse.isclose._internal.adapters.numpy import close_arrays, dtype_tolerance
from pydiverse.isclose._internal.impl_store import IMPLS
from pydiverse.isclose._internal.tolerance import Tolerance, loosest


def numpy_dtype(series: pd.Series) -> np.dtype:
    dtype = series.dtype
    if isinstance(dtype, np.dtype):
        return dtype
    # extension dtypes like `Float32` wrap a numpy dtype
    return np.dtype(getattr(dtype, "numpy_dtype", np.float64))


def series_tolerance(series: pd.Series) -> Tolerance:
    return dtype_tolerance(numpy_dtype(series))


def frame_tolerance(df: pd.DataFrame) -> Tolerance:
    return loosest(series_tolerance(df[name]) for name in df.columns)


def to_numpy(series: pd.Series) -> np.ndarray:
    # NA becomes NaN, so it is not close to anything
    dtype = np.float32 if numpy_dtype(series) == np.float32 else np.float64
    return series.to_numpy(dtype=dtype, na_value=np.nan)


def close_series(lhs: pd.Series, rhs: pd.Series, rel_tol: Any, abs_tol: Any) -> bool:
    if len(lhs) != len(rhs):
        return False
    return close_arrays(to_numpy(lhs), to_numpy(rhs), rel_tol, abs_tol)


with IMPLS.impl_manager as impl:

    @impl(pd.Series, tolerance=series_tolerance)
    def _series(lhs, rhs, rel_tol, abs_tol):
        errors.check_arg_type(pd.Series, "is_close", "other", rhs)
        return close_series(lhs, rhs, rel_tol, abs_tol)

    @impl(pd.DataFrame, tolerance=frame_tolerance)
    def _data_frame(lhs, rhs, rel_tol, abs_tol):
        errors.check_arg_type(pd.DataFrame, "is_close", "other", rhs)
        if list(lhs.columns) != list(rhs.columns):
            return False
        return all(
            close_series(lhs[name], rhs[name], rel_tol, abs_tol)
            for name in lhs.columns
        )
