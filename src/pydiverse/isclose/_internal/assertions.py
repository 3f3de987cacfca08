from __future__ import annotations

import ast
import inspect
import itertools
import linecache
from typing import Any

from pydiverse.isclose._internal.core import (
    check_tolerances,
    default_tolerance,
    is_close_impl,
)
from pydiverse.isclose._internal.tolerance import Tolerance, resolve

UNKNOWN_EXPR = "<unknown>"


def assert_is_close(
    left: Any,
    right: Any,
    msg: str | None = None,
    *args: Any,
    rel_tol: Any = None,
    abs_tol: Any = None,
    **kwargs: Any,
) -> None:
    """
    Asserts that two values are approximately equal.

    If neither tolerance is given, the defaults of ``left`` are used. If only one
    of them is given, the other one is zero. On failure, an ``AssertionError`` is
    raised whose message contains both argument expressions, their values and the
    tolerances.

    :param msg:
        Optional message appended to the first line of the failure message. If
        ``args`` or ``kwargs`` are given, it is formatted with ``str.format``.

    Examples
    --------
    >>> assert_is_close(0.1 + 0.2, 0.3)
    >>> assert_is_close(1.0, 1.01, rel_tol=0.1)
    >>> assert_is_close(2.0, 3.0, "index {}", 4)
    Traceback (most recent call last):
    ...
    AssertionError: assertion `left ~= right` failed: index 4
     left expr: 2.0
    right expr: 3.0
          left: 2.0
         right: 3.0
       rel tol: 1e-09
       abs tol: 1e-09
    """
    __tracebackhide__ = True  # Hide traceback for py.test
    tol = resolve(rel_tol, abs_tol, default_tolerance(left))
    check_tolerances(tol.rel_tol, tol.abs_tol, stacklevel=2)
    if not is_close_impl(left, right, tol.rel_tol, tol.abs_tol):
        raise AssertionError(
            failure_message("~=", left, right, tol, format_msg(msg, args, kwargs))
        )


def assert_is_not_close(
    left: Any,
    right: Any,
    msg: str | None = None,
    *args: Any,
    rel_tol: Any = None,
    abs_tol: Any = None,
    **kwargs: Any,
) -> None:
    """
    Asserts that two values are not approximately equal. Takes the same arguments
    as :func:`assert_is_close`.
    """
    __tracebackhide__ = True  # Hide traceback for py.test
    tol = resolve(rel_tol, abs_tol, default_tolerance(left))
    check_tolerances(tol.rel_tol, tol.abs_tol, stacklevel=2)
    if is_close_impl(left, right, tol.rel_tol, tol.abs_tol):
        raise AssertionError(
            failure_message("!~=", left, right, tol, format_msg(msg, args, kwargs))
        )


def format_msg(msg: str | None, args: tuple, kwargs: dict) -> str | None:
    if msg is None:
        return None
    if args or kwargs:
        return msg.format(*args, **kwargs)
    return str(msg)


def failure_message(
    relation: str,
    left: Any,
    right: Any,
    tol: Tolerance,
    msg: str | None,
) -> str:
    # 0: call_arg_sources, 1: failure_message, 2: assert helper, 3: caller
    left_expr, right_expr = call_arg_sources(stacklevel=3)
    header = f"assertion `left {relation} right` failed"
    if msg is not None:
        header += f": {msg}"

    return (
        f"{header}\n"
        f" left expr: {left_expr}\n"
        f"right expr: {right_expr}\n"
        f"      left: {left!r}\n"
        f"     right: {right!r}\n"
        f"   rel tol: {tol.rel_tol!r}\n"
        f"   abs tol: {tol.abs_tol!r}"
    )


def call_arg_sources(stacklevel: int) -> tuple[str, str]:
    """
    Returns the source text of the ``left`` and ``right`` arguments, positional or
    by keyword, of the call expression that is currently executing in the frame
    ``stacklevel`` levels up.
    """
    stack = inspect.stack(context=0)
    try:
        frame = stack[stacklevel]
    except IndexError:
        return UNKNOWN_EXPR, UNKNOWN_EXPR

    positions = frame.positions
    filename = frame.filename
    frame_globals = frame.frame.f_globals

    del frame  # Prevent reference cycle
    del stack  # Prevent reference cycle

    if (
        positions is None
        or positions.lineno is None
        or positions.end_lineno is None
        or positions.col_offset is None
        or positions.end_col_offset is None
    ):
        return UNKNOWN_EXPR, UNKNOWN_EXPR

    lines = linecache.getlines(filename, frame_globals)
    if len(lines) < positions.end_lineno:
        return UNKNOWN_EXPR, UNKNOWN_EXPR

    # column offsets count utf-8 bytes
    source_lines = [
        line.encode() for line in lines[positions.lineno - 1 : positions.end_lineno]
    ]
    source_lines[-1] = source_lines[-1][: positions.end_col_offset]
    source_lines[0] = source_lines[0][positions.col_offset :]
    source = b"".join(source_lines).decode()

    try:
        call = ast.parse(source, mode="eval").body
    except SyntaxError:
        return UNKNOWN_EXPR, UNKNOWN_EXPR

    if not isinstance(call, ast.Call):
        return UNKNOWN_EXPR, UNKNOWN_EXPR

    # positions after a starred argument are unknown
    positional = itertools.takewhile(
        lambda arg: not isinstance(arg, ast.Starred), call.args
    )
    exprs = dict(zip(("left", "right"), positional, strict=False))
    exprs.update(
        (keyword.arg, keyword.value)
        for keyword in call.keywords
        if keyword.arg in ("left", "right")
    )

    return tuple(
        ast.get_source_segment(source, exprs[name]) or UNKNOWN_EXPR
        if name in exprs
        else UNKNOWN_EXPR
        for name in ("left", "right")
    )
