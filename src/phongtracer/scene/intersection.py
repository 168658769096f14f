"""Scene-level primitive storage and nearest-hit testing.

This module stores the scene's boxes and spheres in Taichi fields and
provides the scene-level ray query used by the rasterizer. Both primitive
kinds share one set of arrays, indexed in the scene's iteration order and
discriminated by a PrimitiveKind tag, so that nearest-hit ties resolve to
the primitive that comes first in the scene.

Geometry layout per primitive index i:
    box:    prim_point_a[i] = (lx, by, fz), prim_point_b[i] = (rx, ty, rz)
    sphere: prim_point_a[i] = (x, y, z),   prim_radius[i] = r

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from phongtracer.scene.intersection import upload_primitives, intersect_scene
    >>> upload_primitives(scene.primitives)
    >>> # Use intersect_scene within a Taichi kernel
"""

import logging
from collections.abc import Sequence

import taichi as ti
import taichi.math as tm

from phongtracer.core.ray import T_MAX
from phongtracer.geometry.box import BoxShape, box_normal, hit_box
from phongtracer.geometry.sphere import (
    IntersectionResult,
    SphereShape,
    hit_sphere,
    make_miss,
    sphere_normal,
)
from phongtracer.scene.model import Box, Primitive, PrimitiveKind, Sphere

logger = logging.getLogger(__name__)

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class SceneHitRecord:
    """Record of the nearest ray-scene intersection.

    Attributes:
        hit: Whether the ray hit any primitive (1 if hit, 0 if miss).
        index: Index of the winning primitive. -1 on a miss.
        t: Entry parameter of the winning primitive. Only valid if hit == 1.
        point: Entry point on the winning primitive. Only valid if hit == 1.
        normal: Outward unit surface normal at point. Only valid if hit == 1.
    """

    hit: ti.i32
    index: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3


# Maximum number of primitives supported in the scene
MAX_PRIMITIVES = 1024

# Primitive storage: Structure of Arrays layout for GPU efficiency
prim_kinds = ti.field(dtype=ti.i32, shape=MAX_PRIMITIVES)
prim_point_a = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
prim_point_b = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
prim_radius = ti.field(dtype=ti.f32, shape=MAX_PRIMITIVES)

# Phong material per primitive
prim_ambient = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
prim_diffuse = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
prim_specular = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
prim_shininess = ti.field(dtype=ti.f32, shape=MAX_PRIMITIVES)

num_primitives = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all primitives from the scene.

    Resets the primitive count to zero. The field data is not cleared but
    will be overwritten when new primitives are added.
    """
    num_primitives[None] = 0


def add_primitive(primitive: Primitive) -> int:
    """Append a box or sphere to the scene storage.

    Args:
        primitive: The primitive to store. It is assumed to be validated.

    Returns:
        The index of the added primitive.

    Raises:
        RuntimeError: If the maximum number of primitives is exceeded.
        TypeError: If primitive is neither a Box nor a Sphere.
    """
    idx = num_primitives[None]
    if idx >= MAX_PRIMITIVES:
        raise RuntimeError(f"Maximum number of primitives ({MAX_PRIMITIVES}) exceeded")

    match primitive:
        case Box():
            prim_point_a[idx] = list(primitive.min_corner)
            prim_point_b[idx] = list(primitive.max_corner)
            prim_radius[idx] = 0.0
        case Sphere():
            prim_point_a[idx] = list(primitive.center)
            prim_point_b[idx] = [0.0, 0.0, 0.0]
            prim_radius[idx] = primitive.r
        case _:
            raise TypeError(f"Unsupported primitive type: {type(primitive).__name__}")

    prim_kinds[idx] = int(primitive.kind)
    prim_ambient[idx] = list(primitive.ambient)
    prim_diffuse[idx] = list(primitive.diffuse)
    prim_specular[idx] = list(primitive.specular)
    prim_shininess[idx] = primitive.n
    num_primitives[None] = idx + 1
    return idx


def upload_primitives(primitives: Sequence[Primitive]) -> None:
    """Replace the stored primitives with the given ones, in order.

    Raises:
        RuntimeError: If there are more than MAX_PRIMITIVES primitives. The
            storage is left empty in that case.
    """
    clear_scene()
    if len(primitives) > MAX_PRIMITIVES:
        raise RuntimeError(
            f"Scene has {len(primitives)} primitives, maximum is {MAX_PRIMITIVES}"
        )
    for primitive in primitives:
        add_primitive(primitive)
    logger.info("Uploaded %d primitives", len(primitives))


def get_primitive_count() -> int:
    """Get the number of primitives in the scene."""
    return int(num_primitives[None])


# =============================================================================
# Kernel-side queries
# =============================================================================


@ti.func
def intersect_primitive(index: ti.i32, ray_origin: vec3, ray_direction: vec3) -> IntersectionResult:
    """Test the ray against one stored primitive, dispatching on its kind."""
    result = make_miss()
    kind = prim_kinds[index]
    if kind == int(PrimitiveKind.BOX):
        box = BoxShape(min_corner=prim_point_a[index], max_corner=prim_point_b[index])
        result = hit_box(ray_origin, ray_direction, box)
    elif kind == int(PrimitiveKind.SPHERE):
        sphere = SphereShape(center=prim_point_a[index], radius=prim_radius[index])
        result = hit_sphere(ray_origin, ray_direction, sphere)
    return result


@ti.func
def primitive_normal(index: ti.i32, record: IntersectionResult, ray_direction: vec3) -> vec3:
    """Outward unit normal of a stored primitive at record.point0."""
    normal = vec3(0.0, 0.0, 0.0)
    if prim_kinds[index] == int(PrimitiveKind.BOX):
        normal = box_normal(record, ray_direction)
    else:
        sphere = SphereShape(center=prim_point_a[index], radius=prim_radius[index])
        normal = sphere_normal(sphere, record.point0)
    return normal


@ti.func
def _make_miss_record() -> SceneHitRecord:
    """Create a SceneHitRecord indicating no intersection."""
    return SceneHitRecord(
        hit=0,
        index=-1,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
    )


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHitRecord:
    """Find the nearest primitive along the ray.

    Iterates over every primitive in scene order and keeps the one with the
    strictly smallest entry parameter t0, so the first primitive wins ties.
    Primitives that lie entirely behind the ray origin (exit t1 < 0) are
    ignored. A ray starting inside a primitive still reports that primitive,
    with a negative t0.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unnormalized ray direction.

    Returns:
        A SceneHitRecord for the nearest hit, or a miss record.
    """
    closest_t = T_MAX
    closest_index = -1
    closest = make_miss()

    for i in range(num_primitives[None]):
        rec = intersect_primitive(i, ray_origin, ray_direction)
        if rec.hit == 1 and rec.t1 >= 0.0 and rec.t0 < closest_t:
            closest_t = rec.t0
            closest_index = i
            closest = rec

    result = _make_miss_record()
    if closest_index >= 0:
        result = SceneHitRecord(
            hit=1,
            index=closest_index,
            t=closest.t0,
            point=closest.point0,
            normal=primitive_normal(closest_index, closest, ray_direction),
        )
    return result
