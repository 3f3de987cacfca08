from __future__ import annotations

import typing
from typing import Any


class NotSupportedError(Exception):
    """
    Signals that no approximate comparison is implemented for a type.
    """


class ToleranceWarning(UserWarning):
    """
    Category for tolerances outside the expected range (negative or not finite).
    The comparison is still carried out with the given values.
    """


# Our error message format: The first line is in lowercase letters, without a dot at
# the end. More detail is given in the following lines in normal english sentences.
# To give advice to to the user, we write `hint: ...`.


def type_name(expected_type: type) -> str:
    type_args = typing.get_args(expected_type)
    return (
        expected_type.__name__
        if not type_args
        else " | ".join(t.__name__ for t in type_args)
    )


def check_arg_type(
    expected_type: type,
    fn: str,
    param_name: str,
    arg: Any,
):
    if not isinstance(arg, expected_type):
        raise TypeError(
            f"argument for parameter `{param_name}` of `{fn}` must have type "
            f"`{type_name(expected_type)}`, found `{type(arg).__name__}` instead"
        )


def check_same_type(fn: str, lhs: Any, rhs: Any):
    if type(rhs) is not type(lhs):
        raise TypeError(
            f"cannot compare `{type(lhs).__name__}` with `{type(rhs).__name__}` "
            f"in `{fn}`\n"
            "hint: both operands must be instances of the same class."
        )


def not_supported(fn: str, value: Any) -> NotSupportedError:
    cls = type(value)
    return NotSupportedError(
        f"`{fn}` is not implemented for type `{cls.__module__}.{cls.__qualname__}`\n"
        "hint: subclass `pydiverse.isclose.IsClose` or register an implementation "
        "with `pydiverse.isclose.register_impl`."
    )
