"""Ray data structure and vector utilities for Taichi kernels.

This module provides the Ray dataclass and the fixed three-component vector
functions used by the intersection testers and the shader. All functions are
``@ti.func`` and can only be called from inside Taichi kernels.

Rays use a single parametrization throughout the renderer:

    P(t) = origin + t * direction

where direction is the (unnormalized) vector from the eye to the sampled
point on the image plane, so t = 0 at the eye and t = 1 on the image plane.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.5, 0.5, -0.5)
    >>> direction = ti.math.vec3(0.0, 0.0, 0.5)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 1.0)  # Point on the image plane
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Stand-in for an unbounded slab or a missing hit along a ray
T_MAX = 1e10


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (the eye).
        direction: Vector from the origin to the image-plane sample. Not
            normalized, so that t = 1 lands on the image plane.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return tm.length(v)


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return tm.dot(v, v)


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    A zero-length input is a caller bug. It is asserted when Taichi runs with
    ``debug=True``; release builds propagate NaN, which the rasterizer maps
    to black.

    Args:
        v: The input vector. Must have non-zero length.

    Returns:
        A unit vector in the same direction as v.
    """
    assert length_squared(v) > 0.0, "normalize() called with a zero-length vector"
    return v / tm.length(v)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product a . b."""
    return tm.dot(a, b)


@ti.func
def scale(v: vec3, k: ti.f32) -> vec3:
    """Multiply every component of v by the scalar k."""
    return v * k
