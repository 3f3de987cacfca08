from __future__ import annotations

import dataclasses
from typing import Any

import pytest

from pydiverse.isclose import (
    FLOAT32,
    FLOAT64,
    IsClose,
    Tolerance,
    default_tolerance,
    is_close,
    is_close_tol,
    is_not_close,
)


@dataclasses.dataclass
class Pair(IsClose):
    REL_TOL = FLOAT64.rel_tol
    ABS_TOL = FLOAT64.abs_tol

    x: float
    y: float

    def is_close_impl(self, other: Any, rel_tol: Any, abs_tol: Any) -> bool:
        return is_close_tol(self.x, other.x, rel_tol, abs_tol) and is_close_tol(
            self.y, other.y, rel_tol, abs_tol
        )


class Loose(IsClose):
    REL_TOL = 0.1
    ABS_TOL = 0.0

    def __init__(self, value: float):
        self.value = value
        self.seen_tolerances = []

    def is_close_impl(self, other, rel_tol, abs_tol):
        self.seen_tolerances.append((rel_tol, abs_tol))
        return is_close_tol(self.value, other.value, rel_tol, abs_tol)


class TestDerivedOperations:
    def test_composite(self):
        assert Pair(0.1 + 0.2, 0.2 + 0.4).is_close(Pair(0.3, 0.6))
        assert not Pair(0.1 + 0.2, 0.2 + 0.4).is_close(Pair(0.3, 0.60001))
        assert Pair(0.1 + 0.2, 0.2 + 0.4).is_not_close(Pair(0.3, 0.60001))

    @pytest.mark.parametrize(
        "other, expected",
        [
            (Pair(1.0, 2.0), True),
            (Pair(1.0 + 1e-12, 2.0 - 1e-12), True),
            (Pair(1.1, 2.0), False),
            (Pair(1.0, 2.1), False),
            (Pair(1.1, 2.1), False),
        ],
    )
    def test_every_field_must_be_close(self, other, expected):
        assert Pair(1.0, 2.0).is_close(other) is expected
        assert Pair(1.0, 2.0).is_not_close(other) is not expected

    def test_explicit_tolerances_reach_components(self):
        lhs, rhs = Pair(1.0, 100.0), Pair(1.5, 105.0)
        assert not lhs.is_close(rhs)
        assert lhs.is_close_tol(rhs, 0.0, 5.0)
        assert not lhs.is_close_tol(rhs, 0.0, 4.9)
        assert lhs.is_close_rel_tol(rhs, 0.5)
        assert not lhs.is_close_abs_tol(rhs, 0.5)
        assert lhs.is_not_close_tol(rhs, 0.0, 0.1)

    def test_default_tolerances(self):
        value = Loose(10.0)
        assert value.is_close(Loose(10.5))
        assert not value.is_close(Loose(12.0))
        assert value.seen_tolerances == [(0.1, 0.0), (0.1, 0.0)]

    def test_rel_and_abs_tol_variants_zero_the_other(self):
        value = Loose(1.0)
        value.is_close_rel_tol(Loose(1.0), 0.2)
        value.is_close_abs_tol(Loose(1.0), 0.3)
        assert value.seen_tolerances == [(0.2, 0.0), (0.0, 0.3)]

    def test_module_level_functions(self):
        assert is_close(Pair(0.1 + 0.2, 0.6), Pair(0.3, 0.6))
        assert is_not_close(Pair(0.3, 0.6), Pair(0.3, 0.7))
        assert is_close_tol(Pair(0.3, 0.6), Pair(0.3, 0.7), 0.0, 0.2)
        assert default_tolerance(Pair(0.0, 0.0)) == FLOAT64
        assert default_tolerance(Loose(0.0)) == Tolerance(rel_tol=0.1, abs_tol=0.0)


class TestSubclassing:
    def test_abstract(self):
        with pytest.raises(TypeError):
            IsClose()

    @pytest.mark.parametrize(
        "name",
        [
            "is_close",
            "is_close_tol",
            "is_close_rel_tol",
            "is_close_abs_tol",
            "is_not_close",
            "is_not_close_tol",
        ],
    )
    def test_derived_operations_are_final(self, name):
        def method(self, *args):
            return True

        with pytest.raises(TypeError, match=f"may not override `{name}`"):
            type(
                "Bad",
                (IsClose,),
                {
                    "REL_TOL": 0.0,
                    "ABS_TOL": 0.0,
                    "is_close_impl": method,
                    name: method,
                },
            )

    def test_tolerances_required(self):
        with pytest.raises(TypeError, match="does not define `REL_TOL` and `ABS_TOL`"):

            class NoTolerance(IsClose):
                def is_close_impl(self, other, rel_tol, abs_tol):
                    return True

        with pytest.raises(TypeError, match="does not define `ABS_TOL`"):

            class NoAbsTolerance(IsClose):
                REL_TOL = 0.0

                def is_close_impl(self, other, rel_tol, abs_tol):
                    return True

    def test_inherited_tolerances(self):
        class Single(Pair):
            REL_TOL = FLOAT32.rel_tol
            ABS_TOL = FLOAT32.abs_tol

        class Refined(Single):
            def is_close_impl(self, other, rel_tol, abs_tol):
                return super().is_close_impl(other, rel_tol, abs_tol)

        assert Refined(1.0, 1.0).is_close(Refined(1.0 + 1e-7, 1.0))
        assert not Pair(1.0, 1.0).is_close(Pair(1.0 + 1e-7, 1.0))
