"""Geometry module for box and sphere intersection.

Components:
    box: Axis-aligned box primitive with slab-method intersection
    sphere: Sphere primitive with quadratic intersection, plus the
        IntersectionResult record shared by both testers

All intersection routines are Taichi functions (@ti.func) for parallel
per-pixel testing. Both testers follow the pattern:
    result = hit_shape(ray_origin, ray_direction, shape)
and report entry/exit parameters on the same ray parametrization, where
t = 1 lies on the image plane.
"""

from .box import BoxShape, box_normal, hit_box, make_box
from .sphere import (
    IntersectionResult,
    SphereShape,
    hit_sphere,
    make_miss,
    make_sphere,
    sphere_discriminant,
    sphere_normal,
)

__all__ = [
    "BoxShape",
    "box_normal",
    "hit_box",
    "make_box",
    "IntersectionResult",
    "SphereShape",
    "hit_sphere",
    "make_miss",
    "make_sphere",
    "sphere_discriminant",
    "sphere_normal",
]
