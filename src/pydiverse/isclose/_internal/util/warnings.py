from __future__ import annotations

import math
import warnings as py_warnings
from typing import Any

from pydiverse.isclose._internal.errors import ToleranceWarning


def warn(
    message: str,
    category: type[Warning] = None,
    stacklevel=1,
):
    py_warnings.warn(message, category, stacklevel=stacklevel + 1)


def warn_bad_tolerance(
    param_name: str,
    value: Any,
    stacklevel=1,
):
    """
    Emits a `ToleranceWarning` if ``value`` is negative or not finite.
    """
    # NaN fails both comparisons, so test for finiteness separately
    if not math.isfinite(value):
        reason = "is not finite"
    elif value < 0:
        reason = "is negative"
    else:
        return

    warn(
        f"tolerance `{param_name}` {reason} ({value!r})\n"
        "hint: tolerances are expected to be non-negative finite numbers.",
        category=ToleranceWarning,
        stacklevel=stacklevel + 1,
    )
