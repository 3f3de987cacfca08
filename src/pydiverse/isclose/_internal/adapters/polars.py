from __future__ import annotations

from typing import Any

import numpy as np
import polars as pl

from pydiverse.common import Dtype, Float32
from pydiverse.isclose._internal import errors
from pydiverse.isclose._internal.adapters.numpy import close_arrays
from pydiverse.isclose._internal.impl_store import IMPLS
from pydiverse.isclose._internal.tolerance import (
    FLOAT32,
    FLOAT64,
    Tolerance,
    loosest,
)


def series_tolerance(series: pl.Series) -> Tolerance:
    if isinstance(Dtype.from_polars(series.dtype), Float32):
        return FLOAT32
    return FLOAT64


def frame_tolerance(df: pl.DataFrame) -> Tolerance:
    return loosest(series_tolerance(df.get_column(name)) for name in df.columns)


def to_numpy(series: pl.Series) -> np.ndarray:
    # nulls become NaN, so they are not close to anything
    if series.dtype == pl.Float32:
        return series.to_numpy().astype(np.float32, copy=False)
    return series.cast(pl.Float64).to_numpy()


def close_series(lhs: pl.Series, rhs: pl.Series, rel_tol: Any, abs_tol: Any) -> bool:
    if lhs.len() != rhs.len():
        return False
    return close_arrays(to_numpy(lhs), to_numpy(rhs), rel_tol, abs_tol)


with IMPLS.impl_manager as impl:

    @impl(pl.Series, tolerance=series_tolerance)
    def _series(lhs, rhs, rel_tol, abs_tol):
        errors.check_arg_type(pl.Series, "is_close", "other", rhs)
        return close_series(lhs, rhs, rel_tol, abs_tol)

    @impl(pl.DataFrame, tolerance=frame_tolerance)
    def _data_frame(lhs, rhs, rel_tol, abs_tol):
        errors.check_arg_type(pl.DataFrame, "is_close", "other", rhs)
        if lhs.columns != rhs.columns:
            return False
        return all(
            close_series(lhs.get_column(name), rhs.get_column(name), rel_tol, abs_tol)
            for name in lhs.columns
        )
