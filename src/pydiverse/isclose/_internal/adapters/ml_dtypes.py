from __future__ import annotations

import numbers

import ml_dtypes

from pydiverse.isclose._internal import errors
from pydiverse.isclose._internal.impl_store import IMPLS
from pydiverse.isclose._internal.scalar import close_int_real, close_real
from pydiverse.isclose._internal.tolerance import BFLOAT16

# bfloat16 arrays are numpy arrays and go through the numpy adapter, this module
# only covers the scalar type.

with IMPLS.impl_manager as impl:

    @impl(ml_dtypes.bfloat16, tolerance=BFLOAT16)
    def _bfloat16(lhs, rhs, rel_tol, abs_tol):
        errors.check_arg_type(
            numbers.Real | ml_dtypes.bfloat16, "is_close", "other", rhs
        )
        if isinstance(rhs, numbers.Integral):
            return close_int_real(int(rhs), float(lhs), rel_tol, abs_tol)
        # bfloat16 values are exact in single and double precision
        return close_real(float(lhs), float(rhs), rel_tol, abs_tol)
