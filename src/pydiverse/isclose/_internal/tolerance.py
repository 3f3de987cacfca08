from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from typing import Any


@dataclasses.dataclass(frozen=True, slots=True)
class Tolerance:
    """
    A pair of relative and absolute tolerances.

    Two values ``a`` and ``b`` are close under a tolerance if
    ``|a - b| <= max(abs_tol, rel_tol * max(|a|, |b|))``.
    """

    rel_tol: Any
    abs_tol: Any

    def loosest(self, other: Tolerance) -> Tolerance:
        return Tolerance(
            max(self.rel_tol, other.rel_tol), max(self.abs_tol, other.abs_tol)
        )


# Default tolerances per floating point precision.
BFLOAT16 = Tolerance(rel_tol=1e-2, abs_tol=1e-2)
FLOAT16 = Tolerance(rel_tol=1e-3, abs_tol=1e-3)
FLOAT32 = Tolerance(rel_tol=1e-6, abs_tol=1e-6)
FLOAT64 = Tolerance(rel_tol=1e-9, abs_tol=1e-9)


def loosest(tolerances: Iterable[Tolerance], empty: Tolerance = FLOAT64) -> Tolerance:
    result = None
    for tol in tolerances:
        result = tol if result is None else result.loosest(tol)
    return empty if result is None else result


def resolve(
    rel_tol: Any | None, abs_tol: Any | None, default: Tolerance
) -> Tolerance:
    """
    Fills in missing tolerances. If neither is given, ``default`` is used. If only
    one of them is given, the other one is zero.
    """
    if rel_tol is None and abs_tol is None:
        return default
    return Tolerance(
        rel_tol=0.0 if rel_tol is None else rel_tol,
        abs_tol=0.0 if abs_tol is None else abs_tol,
    )
