"""Sphere primitive with ray-sphere intersection.

This module provides the kernel-side SphereShape dataclass, the
IntersectionResult record shared by every primitive tester, and the
quadratic ray-sphere test.

The test works on the normalized ray direction u:

    d = origin - center
    discriminant = (u . d)^2 - |d|^2 + r^2
    ts = -(u . d) -/+ sqrt(discriminant)

and converts both roots back to the renderer's ray parametrization
(t = 1 on the image plane) by dividing by the length of the unnormalized
direction. A negative discriminant means the ray misses; zero means a
tangent ray with t0 == t1.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from phongtracer.geometry.sphere import SphereShape, hit_sphere
    >>> sphere = SphereShape(center=ti.math.vec3(0.5, 0.5, 0.5), radius=0.5)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from phongtracer.core.ray import dot, length, length_squared, normalize

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class SphereShape:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class IntersectionResult:
    """Record of a ray-primitive intersection.

    Both t values use the ray parametrization origin + t * direction and are
    ordered t0 <= t1. Entry and exit may lie behind the ray origin.

    Attributes:
        hit: Whether the ray intersects the primitive (1 if hit, 0 if miss).
        t0: Entry parameter. Only valid if hit == 1.
        t1: Exit parameter. Only valid if hit == 1.
        point0: World-space point at t0. Only valid if hit == 1.
        point1: World-space point at t1. Only valid if hit == 1.
        near: Per-axis slab entry parameters (boxes only, zero for spheres).
        far: Per-axis slab exit parameters (boxes only, zero for spheres).
    """

    hit: ti.i32
    t0: ti.f32
    t1: ti.f32
    point0: vec3
    point1: vec3
    near: vec3
    far: vec3


@ti.func
def make_miss() -> IntersectionResult:
    """Create an IntersectionResult indicating no intersection."""
    return IntersectionResult(
        hit=0,
        t0=0.0,
        t1=0.0,
        point0=vec3(0.0, 0.0, 0.0),
        point1=vec3(0.0, 0.0, 0.0),
        near=vec3(0.0, 0.0, 0.0),
        far=vec3(0.0, 0.0, 0.0),
    )


@ti.func
def sphere_discriminant(ray_origin: vec3, ray_direction: vec3, sphere: SphereShape) -> ti.f32:
    """Discriminant of the ray-sphere quadratic in the normalized direction."""
    u = normalize(ray_direction)
    d = ray_origin - sphere.center
    u_dot_d = dot(u, d)
    return u_dot_d * u_dot_d - length_squared(d) + sphere.radius * sphere.radius


@ti.func
def hit_sphere(ray_origin: vec3, ray_direction: vec3, sphere: SphereShape) -> IntersectionResult:
    """Test for ray-sphere intersection.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unnormalized ray direction (eye to image-plane
            sample). Must have non-zero length.
        sphere: The sphere to test intersection against.

    Returns:
        An IntersectionResult with both roots and points. near/far are zero.
    """
    result = make_miss()

    direction_length = length(ray_direction)
    u = normalize(ray_direction)
    d = ray_origin - sphere.center
    u_dot_d = dot(u, d)
    discriminant = u_dot_d * u_dot_d - length_squared(d) + sphere.radius * sphere.radius

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        # Roots in the normalized parametrization, then rescaled
        t0 = (-u_dot_d - sqrt_d) / direction_length
        t1 = (-u_dot_d + sqrt_d) / direction_length
        result = IntersectionResult(
            hit=1,
            t0=t0,
            t1=t1,
            point0=ray_origin + t0 * ray_direction,
            point1=ray_origin + t1 * ray_direction,
            near=vec3(0.0, 0.0, 0.0),
            far=vec3(0.0, 0.0, 0.0),
        )

    return result


@ti.func
def sphere_normal(sphere: SphereShape, point: vec3) -> vec3:
    """Outward unit normal of the sphere at a surface point."""
    return normalize(point - sphere.center)


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> SphereShape:
    """Create a sphere from center and radius."""
    return SphereShape(center=center, radius=radius)
