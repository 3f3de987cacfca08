from __future__ import annotations

import dataclasses
from typing import Any, ClassVar

from pydiverse.isclose._internal import errors
from pydiverse.isclose._internal.core import IsClose, is_close_impl
from pydiverse.isclose._internal.tolerance import FLOAT64


class Composite(IsClose):
    """
    Base class for geometric value types. Two instances are close if every field
    is close under the same tolerances.
    """

    __slots__ = ()

    REL_TOL: ClassVar[Any] = FLOAT64.rel_tol
    ABS_TOL: ClassVar[Any] = FLOAT64.abs_tol

    def is_close_impl(self, other: Any, rel_tol: Any, abs_tol: Any) -> bool:
        errors.check_same_type("is_close", self, other)
        return all(
            is_close_impl(
                getattr(self, field.name), getattr(other, field.name), rel_tol, abs_tol
            )
            for field in dataclasses.fields(self)
        )


@dataclasses.dataclass(frozen=True, slots=True)
class Angle(Composite):
    radians: float


@dataclasses.dataclass(frozen=True, slots=True)
class Length(Composite):
    value: float


@dataclasses.dataclass(frozen=True, slots=True)
class Point2D(Composite):
    x: float
    y: float


@dataclasses.dataclass(frozen=True, slots=True)
class Point3D(Composite):
    x: float
    y: float
    z: float


@dataclasses.dataclass(frozen=True, slots=True)
class Vector2D(Composite):
    x: float
    y: float


@dataclasses.dataclass(frozen=True, slots=True)
class Vector3D(Composite):
    x: float
    y: float
    z: float


@dataclasses.dataclass(frozen=True, slots=True)
class HomogeneousVector(Composite):
    x: float
    y: float
    z: float
    w: float


@dataclasses.dataclass(frozen=True, slots=True)
class Size2D(Composite):
    width: float
    height: float


@dataclasses.dataclass(frozen=True, slots=True)
class Size3D(Composite):
    width: float
    height: float
    depth: float


@dataclasses.dataclass(frozen=True, slots=True)
class Rect(Composite):
    origin: Point2D
    size: Size2D


@dataclasses.dataclass(frozen=True, slots=True)
class Box2D(Composite):
    min: Point2D
    max: Point2D


@dataclasses.dataclass(frozen=True, slots=True)
class Box3D(Composite):
    min: Point3D
    max: Point3D


@dataclasses.dataclass(frozen=True, slots=True)
class SideOffsets2D(Composite):
    top: float
    right: float
    bottom: float
    left: float


@dataclasses.dataclass(frozen=True, slots=True)
class Translation2D(Composite):
    x: float
    y: float


@dataclasses.dataclass(frozen=True, slots=True)
class Translation3D(Composite):
    x: float
    y: float
    z: float


@dataclasses.dataclass(frozen=True, slots=True)
class Rotation2D(Composite):
    angle: float


@dataclasses.dataclass(frozen=True, slots=True)
class Rotation3D(Composite):
    """
    A 3D rotation as the unit quaternion ``r + i*x + j*y + k*z``.
    """

    i: float
    j: float
    k: float
    r: float


@dataclasses.dataclass(frozen=True, slots=True)
class RigidTransform3D(Composite):
    rotation: Rotation3D
    translation: Vector3D


@dataclasses.dataclass(frozen=True, slots=True)
class Scale(Composite):
    factor: float


@dataclasses.dataclass(frozen=True, slots=True)
class Transform2D(Composite):
    """
    A 2D affine transform stored as the row-major matrix

        | m11 m12 0 |
        | m21 m22 0 |
        | m31 m32 1 |
    """

    m11: float
    m12: float
    m21: float
    m22: float
    m31: float
    m32: float


@dataclasses.dataclass(frozen=True, slots=True)
class Transform3D(Composite):
    """
    A 3D projective transform stored as a row-major 4x4 matrix.
    """

    m11: float
    m12: float
    m13: float
    m14: float
    m21: float
    m22: float
    m23: float
    m24: float
    m31: float
    m32: float
    m33: float
    m34: float
    m41: float
    m42: float
    m43: float
    m44: float
