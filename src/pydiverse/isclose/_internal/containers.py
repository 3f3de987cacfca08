from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydiverse.isclose._internal import errors
from pydiverse.isclose._internal.core import default_tolerance, is_close_impl
from pydiverse.isclose._internal.impl_store import IMPLS
from pydiverse.isclose._internal.tolerance import Tolerance, loosest

# tuples and lists compare element-wise, mappings compare value-wise per key. The
# default tolerance of a container is the loosest default of its elements.


def sequence_tolerance(value: Sequence) -> Tolerance:
    return loosest(default_tolerance(elem) for elem in value)


def mapping_tolerance(value: Mapping) -> Tolerance:
    return loosest(default_tolerance(elem) for elem in value.values())


def check_sequence(rhs: Any):
    if not isinstance(rhs, Sequence) or isinstance(rhs, str | bytes | bytearray):
        raise TypeError(
            "cannot compare a sequence with a value of type "
            f"`{type(rhs).__name__}`"
        )


def close_sequences(lhs: Sequence, rhs: Any, rel_tol: Any, abs_tol: Any) -> bool:
    check_sequence(rhs)
    if len(lhs) != len(rhs):
        return False
    return all(
        is_close_impl(left, right, rel_tol, abs_tol)
        for left, right in zip(lhs, rhs, strict=True)
    )


with IMPLS.impl_manager as impl:
    impl(tuple, tolerance=sequence_tolerance)(close_sequences)
    impl(list, tolerance=sequence_tolerance)(close_sequences)

    @impl(Mapping, tolerance=mapping_tolerance)
    def _mapping(lhs, rhs, rel_tol, abs_tol):
        errors.check_arg_type(Mapping, "is_close", "other", rhs)
        if lhs.keys() != rhs.keys():
            return False
        return all(
            is_close_impl(value, rhs[key], rel_tol, abs_tol)
            for key, value in lhs.items()
        )
