"""Per-pixel ray casting renderer.

This module implements the rasterizer: for every pixel it builds the primary
ray through the image window, finds the nearest primitive, shades it and
writes the result into a color buffer. Pixels whose ray misses every
primitive are opaque black.

A render call is all-or-nothing. The scene is validated and uploaded first,
the whole raster is computed by one kernel launch, and only then is the
buffer copied out as a fresh RGBA uint8 array. Nothing is returned if
validation fails.

Pixels are independent and read-only over the scene fields, so Taichi
parallelizes the pixel loop freely and repeated renders of the same scene
are byte-identical.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from phongtracer.core.renderer import render
    >>> from phongtracer.scene.sample import create_sample_scene
    >>>
    >>> image = render(create_sample_scene(), 256, 256)
    >>> image.shape
    (256, 256, 4)
"""

import logging
import time
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from phongtracer.camera.window import get_eye, get_ray, setup_camera
from phongtracer.core.shading import (
    ShadingMode,
    shade_flat,
    shade_phong,
    to_pixel_color,
    upload_lights,
)
from phongtracer.scene.intersection import (
    SceneHitRecord,
    intersect_scene,
    prim_ambient,
    prim_diffuse,
    prim_shininess,
    prim_specular,
    upload_primitives,
)
from phongtracer.scene.model import Scene, validate_scene

logger = logging.getLogger(__name__)

vec3 = tm.vec3

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Alpha channel value for every pixel
OPAQUE = 255

# Pixel colors in [0, 255], indexed (col, row)
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# Single-pixel probe results
_probe_hit = ti.field(dtype=ti.i32, shape=())
_probe_index = ti.field(dtype=ti.i32, shape=())
_probe_t = ti.field(dtype=ti.f32, shape=())
_probe_point = ti.Vector.field(3, dtype=ti.f32, shape=())
_probe_normal = ti.Vector.field(3, dtype=ti.f32, shape=())
_probe_color = ti.Vector.field(3, dtype=ti.f32, shape=())
_probe_pixel = ti.Vector.field(3, dtype=ti.f32, shape=())

# Shading mode for the current render (a ShadingMode value)
_shading_mode = ti.field(dtype=ti.i32, shape=())


def clear_render_target() -> None:
    """Clear the color buffer to black."""
    _color_buffer.fill(0.0)


@dataclass(frozen=True)
class PixelProbe:
    """Result of tracing a single pixel.

    Attributes:
        index: Index of the nearest primitive in scene.primitives, or None
            if the ray missed everything.
        t: Entry parameter of the hit (t = 1 on the image window).
        point: World-space hit point.
        normal: Outward unit normal at the hit point.
        color: Unclamped shaded color, nominally in [0, 1] per channel.
        rgba: The 8-bit pixel the renderer writes for this color.
    """

    index: int | None
    t: float
    point: tuple[float, float, float]
    normal: tuple[float, float, float]
    color: tuple[float, float, float]
    rgba: tuple[int, int, int, int]


# =============================================================================
# Per-pixel Shading
# =============================================================================


@ti.func
def shade_hit(record: SceneHitRecord, shading_mode: ti.i32) -> vec3:
    """Unclamped color of a hit, using the material of the hit primitive."""
    i = record.index
    color = vec3(0.0, 0.0, 0.0)
    if shading_mode == int(ShadingMode.FLAT):
        color = shade_flat(prim_diffuse[i])
    else:
        color = shade_phong(
            record.point,
            record.normal,
            get_eye(),
            prim_ambient[i],
            prim_diffuse[i],
            prim_specular[i],
            prim_shininess[i],
        )
    return color


@ti.func
def trace_primary(col: ti.i32, row: ti.i32, width: ti.i32, height: ti.i32) -> SceneHitRecord:
    """Nearest hit along the primary ray of pixel (col, row)."""
    ray = get_ray(col, row, width, height)
    return intersect_scene(ray.origin, ray.direction)


@ti.func
def pixel_color(record: SceneHitRecord) -> vec3:
    """Unclamped color for a pixel's nearest hit, black on a miss."""
    color = vec3(0.0, 0.0, 0.0)
    if record.hit == 1:
        color = shade_hit(record, _shading_mode[None])
    return color


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_kernel(width: ti.i32, height: ti.i32):
    """Shade every pixel into the color buffer."""
    for i, j in ti.ndrange(width, height):
        record = trace_primary(i, j, width, height)
        _color_buffer[i, j] = to_pixel_color(pixel_color(record))


@ti.kernel
def _probe_kernel(col: ti.i32, row: ti.i32, width: ti.i32, height: ti.i32):
    """Trace a single pixel and store the details in the probe fields."""
    record = trace_primary(col, row, width, height)
    _probe_hit[None] = record.hit
    _probe_index[None] = record.index
    _probe_t[None] = record.t
    _probe_point[None] = record.point
    _probe_normal[None] = record.normal
    color = pixel_color(record)
    _probe_color[None] = color
    _probe_pixel[None] = to_pixel_color(color)


# =============================================================================
# Public Rendering API
# =============================================================================


def _check_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )


def _prepare(scene: Scene, width: int, height: int, shading: ShadingMode) -> None:
    """Validate the scene and copy it into the Taichi fields."""
    _check_dimensions(width, height)
    validate_scene(scene)
    setup_camera(scene.eye, scene.window)
    upload_primitives(scene.primitives)
    upload_lights(scene.lights)
    _shading_mode[None] = int(ShadingMode(shading))


def _quantize(color: npt.NDArray[np.float32]) -> npt.NDArray[np.uint8]:
    """Round [0, 255] colors to 8 bits and append an opaque alpha channel."""
    rgb = np.rint(np.clip(color, 0.0, 255.0)).astype(np.uint8)
    alpha = np.full(rgb.shape[:-1] + (1,), OPAQUE, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=-1)


def render(
    scene: Scene,
    width: int,
    height: int,
    shading: ShadingMode = ShadingMode.PHONG,
) -> npt.NDArray[np.uint8]:
    """Render a scene to an RGBA image.

    Args:
        scene: The scene to render. It is validated before anything is drawn.
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).
        shading: Phong shading (default) or flat diffuse color.

    Returns:
        A new uint8 array of shape (height, width, 4). Row 0 is the top row
        of the image.

    Raises:
        InvalidSceneRecordError: If any scene entity is malformed.
        ValueError: If the dimensions are out of range or the eye lies in
            the image plane.
        RuntimeError: If the scene exceeds primitive or light capacity.
    """
    _prepare(scene, width, height, shading)

    start = time.perf_counter()
    _render_kernel(width, height)

    # Extract active region and transpose (col, row) -> (row, col)
    color = _color_buffer.to_numpy()[:width, :height, :]
    image = _quantize(np.transpose(color, (1, 0, 2)))

    logger.info(
        "Rendered %dx%d image of %d primitives and %d lights in %.3fs",
        width,
        height,
        len(scene.primitives),
        len(scene.lights),
        time.perf_counter() - start,
    )
    return image


def trace_pixel(
    scene: Scene,
    col: int,
    row: int,
    width: int,
    height: int,
    shading: ShadingMode = ShadingMode.PHONG,
) -> PixelProbe:
    """Trace a single pixel and report what it hit.

    Uses exactly the same kernel-side code path as render(), for testing
    and debugging individual pixels.

    Args:
        scene: The scene to trace.
        col: Pixel column (0 = left).
        row: Pixel row (0 = top of the output image).
        width: Raster width the pixel belongs to.
        height: Raster height the pixel belongs to.
        shading: Shading mode.

    Returns:
        A PixelProbe describing the hit, or a miss with index None.
    """
    if not (0 <= col < width and 0 <= row < height):
        raise ValueError(f"Pixel ({col}, {row}) is outside a {width}x{height} raster")
    _prepare(scene, width, height, shading)
    _probe_kernel(col, row, width, height)

    hit = _probe_hit[None] == 1
    color = _probe_color[None]
    point = _probe_point[None]
    normal = _probe_normal[None]
    r, g, b, a = (int(v) for v in _quantize(_probe_pixel.to_numpy()))

    return PixelProbe(
        index=int(_probe_index[None]) if hit else None,
        t=float(_probe_t[None]),
        point=(float(point[0]), float(point[1]), float(point[2])),
        normal=(float(normal[0]), float(normal[1]), float(normal[2])),
        color=(float(color[0]), float(color[1]), float(color[2])),
        rgba=(r, g, b, a),
    )
