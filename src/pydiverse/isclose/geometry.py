# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from ._internal.geometry import (
    Angle,
    Box2D,
    Box3D,
    HomogeneousVector,
    Length,
    Point2D,
    Point3D,
    Rect,
    RigidTransform3D,
    Rotation2D,
    Rotation3D,
    Scale,
    SideOffsets2D,
    Size2D,
    Size3D,
    Transform2D,
    Transform3D,
    Translation2D,
    Translation3D,
    Vector2D,
    Vector3D,
)

__all__ = [
    "Angle",
    "Box2D",
    "Box3D",
    "HomogeneousVector",
    "Length",
    "Point2D",
    "Point3D",
    "Rect",
    "RigidTransform3D",
    "Rotation2D",
    "Rotation3D",
    "Scale",
    "SideOffsets2D",
    "Size2D",
    "Size3D",
    "Transform2D",
    "Transform3D",
    "Translation2D",
    "Translation3D",
    "Vector2D",
    "Vector3D",
]
