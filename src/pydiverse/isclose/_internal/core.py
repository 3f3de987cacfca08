from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydiverse.isclose._internal import errors
from pydiverse.isclose._internal.impl_store import IMPLS
from pydiverse.isclose._internal.tolerance import Tolerance
from pydiverse.isclose._internal.util.warnings import warn_bad_tolerance

DERIVED_OPS = (
    "is_close",
    "is_close_tol",
    "is_close_rel_tol",
    "is_close_abs_tol",
    "is_not_close",
    "is_not_close_tol",
)


class IsClose(ABC):
    """
    Base class for types that support approximate equality.

    A subclass implements :meth:`is_close_impl` and sets the default tolerances
    ``REL_TOL`` and ``ABS_TOL``. All other comparison methods are derived from
    these and may not be overridden.

    Composite types implement :meth:`is_close_impl` by comparing each component
    with :func:`pydiverse.isclose.is_close_tol` (or :func:`is_close_impl` from this
    module) using the tolerances they were called with.
    """

    REL_TOL: ClassVar[Any]
    ABS_TOL: ClassVar[Any]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        for name in DERIVED_OPS:
            if name in cls.__dict__:
                raise TypeError(
                    f"`{cls.__qualname__}` may not override `{name}`\n"
                    "hint: implement `is_close_impl` instead, all other comparison "
                    "methods are derived from it."
                )

        if "is_close_impl" in cls.__dict__:
            missing = [
                name for name in ("REL_TOL", "ABS_TOL") if not hasattr(cls, name)
            ]
            if missing:
                raise TypeError(
                    f"`{cls.__qualname__}` implements `is_close_impl` but does not "
                    f"define {' and '.join(f'`{m}`' for m in missing)}"
                )

    @abstractmethod
    def is_close_impl(self, other: Any, rel_tol: Any, abs_tol: Any) -> bool:
        """
        Checks whether ``self`` and ``other`` are approximately equal under the
        given tolerances. Never called with defaulted tolerances.
        """

    def is_close(self, other: Any) -> bool:
        return self.is_close_impl(other, self.REL_TOL, self.ABS_TOL)

    def is_close_tol(self, other: Any, rel_tol: Any, abs_tol: Any) -> bool:
        check_tolerances(rel_tol, abs_tol, stacklevel=2)
        return self.is_close_impl(other, rel_tol, abs_tol)

    def is_close_rel_tol(self, other: Any, rel_tol: Any) -> bool:
        check_tolerances(rel_tol, 0, stacklevel=2)
        return self.is_close_impl(other, rel_tol, 0.0)

    def is_close_abs_tol(self, other: Any, abs_tol: Any) -> bool:
        check_tolerances(0, abs_tol, stacklevel=2)
        return self.is_close_impl(other, 0.0, abs_tol)

    def is_not_close(self, other: Any) -> bool:
        return not self.is_close(other)

    def is_not_close_tol(self, other: Any, rel_tol: Any, abs_tol: Any) -> bool:
        check_tolerances(rel_tol, abs_tol, stacklevel=2)
        return not self.is_close_impl(other, rel_tol, abs_tol)


def check_tolerances(rel_tol: Any, abs_tol: Any, stacklevel=1):
    warn_bad_tolerance("rel_tol", rel_tol, stacklevel=stacklevel + 1)
    warn_bad_tolerance("abs_tol", abs_tol, stacklevel=stacklevel + 1)


def is_close_impl(lhs: Any, rhs: Any, rel_tol: Any, abs_tol: Any) -> bool:
    """
    Dispatches to the comparison primitive of ``lhs`` without checking the
    tolerances. Composite implementations use this for their components.
    """
    if isinstance(lhs, IsClose):
        return lhs.is_close_impl(rhs, rel_tol, abs_tol)

    impl = IMPLS.get_impl(type(lhs))
    if impl is None:
        raise errors.not_supported("is_close", lhs)
    return impl.fn(lhs, rhs, rel_tol, abs_tol)


def default_tolerance(value: Any) -> Tolerance:
    """
    Returns the default tolerances for comparing ``value``.
    """
    if isinstance(value, IsClose):
        return Tolerance(rel_tol=value.REL_TOL, abs_tol=value.ABS_TOL)

    impl = IMPLS.get_impl(type(value))
    if impl is None:
        raise errors.not_supported("default_tolerance", value)
    return impl.default_tolerance(value)


def is_close(lhs: Any, rhs: Any) -> bool:
    """
    Checks whether two values are approximately equal using the default tolerances
    of ``lhs``.

    Examples
    --------
    >>> 0.1 + 0.2 == 0.3
    False
    >>> is_close(0.1 + 0.2, 0.3)
    True
    """
    tol = default_tolerance(lhs)
    return is_close_impl(lhs, rhs, tol.rel_tol, tol.abs_tol)


def is_close_tol(lhs: Any, rhs: Any, rel_tol: Any, abs_tol: Any) -> bool:
    """
    Checks whether ``|lhs - rhs| <= max(abs_tol, rel_tol * max(|lhs|, |rhs|))``.
    Composite values must satisfy this for every component.

    :param rel_tol:
        Relative tolerance, scaled by the larger magnitude of the two operands.

    :param abs_tol:
        Absolute tolerance, relevant for values close to zero.
    """
    check_tolerances(rel_tol, abs_tol, stacklevel=2)
    return is_close_impl(lhs, rhs, rel_tol, abs_tol)


def is_close_rel_tol(lhs: Any, rhs: Any, rel_tol: Any) -> bool:
    """
    Same as :func:`is_close_tol` with an absolute tolerance of zero.
    """
    check_tolerances(rel_tol, 0, stacklevel=2)
    return is_close_impl(lhs, rhs, rel_tol, 0.0)


def is_close_abs_tol(lhs: Any, rhs: Any, abs_tol: Any) -> bool:
    """
    Same as :func:`is_close_tol` with a relative tolerance of zero.
    """
    check_tolerances(0, abs_tol, stacklevel=2)
    return is_close_impl(lhs, rhs, 0.0, abs_tol)


def is_not_close(lhs: Any, rhs: Any) -> bool:
    return not is_close(lhs, rhs)


def is_not_close_tol(lhs: Any, rhs: Any, rel_tol: Any, abs_tol: Any) -> bool:
    check_tolerances(rel_tol, abs_tol, stacklevel=2)
    return not is_close_impl(lhs, rhs, rel_tol, abs_tol)


def register_impl(
    cls: type,
    *,
    rel_tol: Any = None,
    abs_tol: Any = None,
    tolerance: Any = None,
):
    """
    Registers a comparison primitive for a type that cannot subclass
    :class:`IsClose`.

    The decorated function is called as ``f(lhs, rhs, rel_tol, abs_tol)`` with
    ``lhs`` an instance of ``cls``. Default tolerances are given either as
    ``rel_tol`` and ``abs_tol`` or as ``tolerance``, which may be a
    :class:`Tolerance` or a function computing one from the value being compared.

    Examples
    --------
    >>> @register_impl(Money, rel_tol=0.0, abs_tol=0.005)
    ... def _(lhs, rhs, rel_tol, abs_tol):
    ...     return is_close_tol(lhs.amount, rhs.amount, rel_tol, abs_tol)
    """
    errors.check_arg_type(type, "register_impl", "cls", cls)
    if tolerance is None:
        if rel_tol is None or abs_tol is None:
            raise TypeError(
                "`register_impl` requires either `tolerance` or both `rel_tol` and "
                "`abs_tol`"
            )
        tolerance = Tolerance(rel_tol=rel_tol, abs_tol=abs_tol)
    elif rel_tol is not None or abs_tol is not None:
        raise TypeError(
            "`register_impl` accepts either `tolerance` or `rel_tol` and `abs_tol`, "
            "not both"
        )

    return IMPLS.impl_manager(cls, tolerance=tolerance)
