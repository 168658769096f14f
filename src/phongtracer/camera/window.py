"""Fixed image window camera: maps pixels to rays.

Every ray starts at the eye and passes through the center of its pixel's
cell on the image window, the unit square [0, 1] x [0, 1] in the plane
z = 0. For a raster of width x height pixels, pixel (col, row) samples

    x = left + (col + 0.5) / width * (right - left)
    y = top - (row + 0.5) / height * (top - bottom)      if flip_vertical
    y = bottom + (row + 0.5) / height * (top - bottom)   otherwise

Row 0 is the first row of the output buffer (the top of a displayed image).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from phongtracer.camera.window import setup_camera, get_ray
    >>> from phongtracer.scene.model import ImageWindow, Point
    >>> setup_camera(Point(0.5, 0.5, -0.5), ImageWindow(flip_vertical=True))
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(0, 0, 512, 512)  # Ray through the top-left pixel
"""

import taichi as ti
import taichi.math as tm

from phongtracer.core.ray import Ray, make_ray
from phongtracer.core.vector import add, dot, scale
from phongtracer.scene.model import (
    WINDOW_BOTTOM,
    WINDOW_LEFT,
    WINDOW_PLANE_Z,
    WINDOW_RIGHT,
    WINDOW_TOP,
    ImageWindow,
    Point,
)

vec3 = tm.vec3

# Direction the window faces; rays must cross the plane along this axis
WINDOW_FACING = (0.0, 0.0, 1.0)

# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_eye = ti.Vector.field(3, dtype=ti.f32, shape=())
_flip_vertical = ti.field(dtype=ti.i32, shape=())


def setup_camera(eye: Point, window: ImageWindow) -> None:
    """Store the eye position and window orientation for ray generation.

    Args:
        eye: The ray origin for every pixel.
        window: The image window orientation.

    Raises:
        ValueError: If the eye lies in the image plane, where every ray
            would run parallel to the window.
    """
    offset = add(window.center, scale(eye.as_tuple(), -1.0))
    if dot(offset, WINDOW_FACING) == 0.0:
        raise ValueError(
            f"Eye {eye.as_tuple()} lies in the image plane z = {WINDOW_PLANE_Z}"
        )

    _eye[None] = [eye.x, eye.y, eye.z]
    _flip_vertical[None] = 1 if window.flip_vertical else 0


def get_camera_info() -> dict[str, object]:
    """Get current camera state for debugging."""
    eye = _eye[None]
    return {
        "eye": (float(eye[0]), float(eye[1]), float(eye[2])),
        "flip_vertical": bool(_flip_vertical[None]),
    }


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def get_sample_point(col: ti.i32, row: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """World-space center of pixel (col, row) on the image window."""
    fx = (ti.cast(col, ti.f32) + 0.5) / ti.cast(width, ti.f32)
    fy = (ti.cast(row, ti.f32) + 0.5) / ti.cast(height, ti.f32)

    x = WINDOW_LEFT + fx * (WINDOW_RIGHT - WINDOW_LEFT)
    y = WINDOW_BOTTOM + fy * (WINDOW_TOP - WINDOW_BOTTOM)
    if _flip_vertical[None] == 1:
        y = WINDOW_TOP - fy * (WINDOW_TOP - WINDOW_BOTTOM)

    return vec3(x, y, WINDOW_PLANE_Z)


@ti.func
def get_ray(col: ti.i32, row: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray for pixel (col, row).

    The direction is left unnormalized so that t = 1 lands on the window.
    """
    origin = _eye[None]
    return make_ray(origin, get_sample_point(col, row, width, height) - origin)


@ti.func
def get_eye() -> vec3:
    """Get the eye position in world space."""
    return _eye[None]
