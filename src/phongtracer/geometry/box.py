"""Axis-aligned box primitive with slab-method intersection.

A box is the intersection of three slabs, one per axis. For each axis with a
non-zero ray direction component the ray crosses the slab's two bounding
planes at

    ta = (min[axis] - origin[axis]) / direction[axis]
    tb = (max[axis] - origin[axis]) / direction[axis]

giving near = min(ta, tb) and far = max(ta, tb). An axis with a zero
direction component never crosses its planes: it is unbounded when the ray
origin lies inside that slab, and a miss otherwise. The ray enters the box at
the largest near value and leaves at the smallest far value; it hits when
t1 >= t0.

The per-axis near/far values are kept in the IntersectionResult so that the
face normal can be recovered from which slab produced t0.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from phongtracer.geometry.box import BoxShape, hit_box
    >>> box = BoxShape(
    ...     min_corner=ti.math.vec3(0, 0, 0),
    ...     max_corner=ti.math.vec3(1, 1, 1),
    ... )
    >>> # Use hit_box within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from phongtracer.core.ray import T_MAX, normalize

from .sphere import IntersectionResult, make_miss

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class BoxShape:
    """An axis-aligned box given by its two extreme corners.

    Attributes:
        min_corner: (lx, by, fz).
        max_corner: (rx, ty, rz).
    """

    min_corner: vec3
    max_corner: vec3


@ti.func
def hit_box(ray_origin: vec3, ray_direction: vec3, box: BoxShape) -> IntersectionResult:
    """Test for ray-box intersection using the slab method.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unnormalized ray direction.
        box: The box to test intersection against.

    Returns:
        An IntersectionResult with entry/exit parameters, their points and
        the per-axis near/far slab parameters.
    """
    near = vec3(-T_MAX, -T_MAX, -T_MAX)
    far = vec3(T_MAX, T_MAX, T_MAX)
    outside_slab = 0

    for axis in ti.static(range(3)):
        d = ray_direction[axis]
        o = ray_origin[axis]
        if d != 0.0:
            ta = (box.min_corner[axis] - o) / d
            tb = (box.max_corner[axis] - o) / d
            near[axis] = ti.min(ta, tb)
            far[axis] = ti.max(ta, tb)
        elif o < box.min_corner[axis] or o > box.max_corner[axis]:
            outside_slab = 1

    t0 = ti.max(ti.max(near[0], near[1]), near[2])
    t1 = ti.min(ti.min(far[0], far[1]), far[2])

    result = make_miss()
    if t1 >= t0 and outside_slab == 0:
        result = IntersectionResult(
            hit=1,
            t0=t0,
            t1=t1,
            point0=ray_origin + t0 * ray_direction,
            point1=ray_origin + t1 * ray_direction,
            near=near,
            far=far,
        )
    return result


@ti.func
def box_normal(record: IntersectionResult, ray_direction: vec3) -> vec3:
    """Outward unit normal of the face the ray entered through.

    For each axis, the component is the outward normal of the entry plane
    when t0 came from that axis's near value, of the exit plane when it came
    from the far value, and 0 otherwise. Edge and corner hits match several
    axes and give a blended normal.

    Args:
        record: A hit returned by hit_box for the same ray.
        ray_direction: The ray direction used for that test.

    Returns:
        The unit surface normal at record.point0.
    """
    n = vec3(0.0, 0.0, 0.0)
    for axis in ti.static(range(3)):
        # Entering a slab through its min plane when travelling towards +axis
        sign = ti.select(ray_direction[axis] < 0.0, -1.0, 1.0)
        if record.t0 == record.near[axis]:
            n[axis] = -sign
        elif record.t0 == record.far[axis]:
            n[axis] = sign
    return normalize(n)


@ti.func
def make_box(min_corner: vec3, max_corner: vec3) -> BoxShape:
    """Create a box from its extreme corners."""
    return BoxShape(min_corner=min_corner, max_corner=max_corner)
