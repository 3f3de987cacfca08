from __future__ import annotations

import math

import pytest

from pydiverse.isclose import (
    FLOAT16,
    FLOAT32,
    FLOAT64,
    default_tolerance,
    is_close,
    is_close_tol,
)
from tests.util import assert_closeness

np = pytest.importorskip("numpy")


class TestScalars:
    @pytest.mark.parametrize(
        "value, tolerance",
        [
            (np.float16(1.0), FLOAT16),
            (np.float32(1.0), FLOAT32),
            (np.float64(1.0), FLOAT64),
            (np.int32(1), FLOAT64),
            (np.complex64(1.0), FLOAT32),
            (np.complex128(1.0), FLOAT64),
        ],
    )
    def test_default_tolerance(self, value, tolerance):
        assert default_tolerance(value) == tolerance

    def test_precision_ordering(self):
        assert FLOAT64.rel_tol < FLOAT32.rel_tol < FLOAT16.rel_tol
        assert FLOAT64.abs_tol < FLOAT32.abs_tol < FLOAT16.abs_tol

    def test_float16(self):
        a = np.float16(0.1) + np.float16(0.2)
        assert is_close(a, np.float16(0.3))
        assert not is_close_tol(a, np.float16(0.3), 1e-6, 1e-6)

    def test_float32(self):
        pi = np.float32(math.pi)
        assert is_close(pi, np.float32(355.0 / 113.0))
        assert not is_close(pi, np.float32(22.0 / 7.0))
        assert is_close_tol(pi, np.float32(22.0 / 7.0), 1e-2, 1e-2)

    def test_float64(self):
        assert is_close(np.float64(0.1) + np.float64(0.2), np.float64(0.3))
        assert not is_close(np.float64(math.pi), 355.0 / 113.0)

    def test_special_values(self):
        assert is_close(np.float32("inf"), np.float32("inf"))
        assert not is_close(np.float32("inf"), np.float32("-inf"))
        assert not is_close(np.float16("nan"), np.float16("nan"))
        assert not is_close(np.float32("inf"), np.float32(3.0e38))

    def test_mixed_with_builtins(self):
        assert is_close(np.float32(0.5), 0.5)
        assert is_close(0.5, np.float32(0.5))
        assert is_close(np.int64(5), 5)
        assert is_close(np.int64(5), 5.0)
        assert is_close(np.complex64(1 + 1j), 1 + 1j)

    def test_int_beyond_float_range(self):
        big = 10**400
        assert not is_close(np.float32(1.0), big)
        assert not is_close(np.float64("inf"), big)
        assert not is_close(np.int64(1), float("inf"))
        assert is_close(np.int64(2**62), 2**62)
        assert not is_close(np.int64(1), big)
        assert not is_close(np.complex128(1j), big)

    @pytest.mark.skipif(
        np.finfo(np.longdouble).nmant <= np.finfo(np.float64).nmant,
        reason="long double is double precision on this platform",
    )
    def test_long_double(self):
        a = np.longdouble("1e400")
        assert is_close(a, a)
        assert not is_close(a, np.longdouble("2e400"))
        assert is_close_tol(a, np.longdouble("2e400"), 0.6, 0.0)
        assert not is_close(a, 1e308)
        assert not is_close(np.float64(1e308), a)
        assert not is_close(np.int64(1), a)

        # the extra precision is kept
        one = np.longdouble(1)
        tiny = np.finfo(np.longdouble).eps * 4
        assert float(one + tiny) == 1.0
        assert not is_close_tol(one, one + tiny, 0.0, 0.0)
        assert is_close_tol(one, one + tiny, 0.0, float(tiny) * 2)

    def test_wrong_rhs(self):
        with pytest.raises(TypeError):
            is_close(np.float32(1.0), "1.0")


class TestArrays:
    def test_close(self):
        assert_closeness(np.array([0.1 + 0.2, 1.0]), np.array([0.3, 1.0]), True)
        assert_closeness(np.array([0.1 + 0.2, 1.0]), np.array([0.3, 1.1]), False)

    def test_shape_mismatch(self):
        assert not is_close(np.zeros(3), np.zeros(4))
        assert not is_close(np.zeros((2, 3)), np.zeros((3, 2)))
        assert is_close(np.zeros((0,)), np.zeros((0,)))

    def test_special_values(self):
        inf, nan = np.inf, np.nan
        assert is_close(np.array([inf, -inf, 1.0]), np.array([inf, -inf, 1.0]))
        assert not is_close(np.array([inf, 1.0]), np.array([-inf, 1.0]))
        assert not is_close(np.array([inf]), np.array([1e308]))
        assert not is_close(np.array([nan, 1.0]), np.array([nan, 1.0]))
        assert not is_close_tol(np.array([inf]), np.array([1.0]), 1.0, 0.0)

    def test_tolerance_rules(self):
        abs_tol = 1e-3
        assert is_close_tol(np.array([0.0]), np.array([abs_tol / 2]), 0.0, abs_tol)
        assert not is_close_tol(np.array([0.0]), np.array([abs_tol * 2]), 0.0, abs_tol)

        x = np.array([1e6, -1e3])
        rel_tol = 1e-6
        assert is_close_tol(x, x * (1 + rel_tol / 2), rel_tol, 0.0)
        assert not is_close_tol(x, x * (1 + rel_tol * 2), rel_tol, 0.0)

    def test_agrees_with_scalar_rule(self):
        a = np.array([0.0, 1.0, 100.0, -5.0, 1e-10])
        b = np.array([1e-10, 1.05, 101.0, -5.0, 0.0])
        for rel_tol, abs_tol in [(0.0, 1e-9), (0.05, 0.0), (0.01, 0.5), (0.0, 0.0)]:
            expected = all(
                is_close_tol(float(x), float(y), rel_tol, abs_tol)
                for x, y in zip(a, b, strict=True)
            )
            assert is_close_tol(a, b, rel_tol, abs_tol) is expected

    def test_rhs_conversion(self):
        assert is_close(np.array([0.1 + 0.2, 0.6]), [0.3, 0.6])
        assert is_close(np.array(0.1 + 0.2), 0.3)
        with pytest.raises(TypeError, match="cannot compare a numpy array"):
            is_close(np.array([1.0]), "1.0")

    def test_dtypes(self):
        assert default_tolerance(np.zeros(2, dtype=np.float16)) == FLOAT16
        assert default_tolerance(np.zeros(2, dtype=np.float32)) == FLOAT32
        assert default_tolerance(np.zeros(2)) == FLOAT64
        assert default_tolerance(np.zeros(2, dtype=np.int64)) == FLOAT64

        single = np.array([1.0], dtype=np.float32)
        assert is_close(single, single + np.float32(1e-7))
        assert not is_close(np.array([1.0]), np.array([1.0 + 1e-7]))
        assert is_close(np.arange(3), np.array([0.0, 1.0, 2.0]))

    def test_complex(self):
        assert is_close(np.array([1 + 1j]), np.array([1 + 1j + 1e-12]))
        assert not is_close(np.array([1 + 1j]), np.array([1 + 2j]))

    def test_inside_containers(self):
        assert is_close([np.array([0.1 + 0.2])], [np.array([0.3])])
        assert is_close({"a": np.float32(0.5)}, {"a": np.float32(0.5)})
