# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from ._internal import containers, scalar  # noqa: F401  (registers builtin impls)
from ._internal.assertions import assert_is_close, assert_is_not_close
from ._internal.core import (
    IsClose,
    default_tolerance,
    is_close,
    is_close_abs_tol,
    is_close_rel_tol,
    is_close_tol,
    is_not_close,
    is_not_close_tol,
    register_impl,
)
from ._internal.tolerance import BFLOAT16, FLOAT16, FLOAT32, FLOAT64, Tolerance
from .errors import *
from .errors import __all__ as __errors
from .version import __version__

__all__ = [
    "__version__",
    "IsClose",
    "Tolerance",
    "BFLOAT16",
    "FLOAT16",
    "FLOAT32",
    "FLOAT64",
    "is_close",
    "is_close_tol",
    "is_close_rel_tol",
    "is_close_abs_tol",
    "is_not_close",
    "is_not_close_tol",
    "default_tolerance",
    "register_impl",
    "assert_is_close",
    "assert_is_not_close",
] + __errors
