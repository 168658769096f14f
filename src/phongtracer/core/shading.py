"""Phong illumination and light storage.

This module stores the scene's point lights in Taichi fields and implements
the shading functions the rasterizer applies to the winning hit of each
pixel.

Phong shading sums, over every light and independently per color channel:

    ambient  = Ka * La
    diffuse  = Kd * Ld * max(N . L, 0)
    specular = Ks * Ls * max(N . H, 0) ^ n

where N is the unit surface normal, L the unit vector towards the light,
V the unit vector towards the eye and H = normalize(V + L). No shadow rays
are cast: every light reaches every surface.

The sum is not bounded; to_pixel_color() applies the 8-bit clamp policy.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from phongtracer.core.shading import upload_lights
    >>> upload_lights(scene.lights)
    >>> # Use shade_phong within a Taichi kernel
"""

import logging
from collections.abc import Sequence
from enum import IntEnum

import taichi as ti
import taichi.math as tm

from phongtracer.core.ray import dot, normalize
from phongtracer.scene.model import Light

logger = logging.getLogger(__name__)

vec3 = tm.vec3


class ShadingMode(IntEnum):
    """How a hit is turned into a color."""

    PHONG = 0
    # Diffuse color only, no lights
    FLAT = 1


# =============================================================================
# Light Storage
# =============================================================================

# Maximum number of point lights supported in the scene
MAX_LIGHTS = 64

light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_ambient = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_diffuse = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_specular = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())


def clear_lights() -> None:
    """Remove all lights."""
    num_lights[None] = 0


def add_light(light: Light) -> int:
    """Append a point light.

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_positions[idx] = list(light.position)
    light_ambient[idx] = list(light.ambient)
    light_diffuse[idx] = list(light.diffuse)
    light_specular[idx] = list(light.specular)
    num_lights[None] = idx + 1
    return idx


def upload_lights(lights: Sequence[Light]) -> None:
    """Replace the stored lights with the given ones."""
    clear_lights()
    if len(lights) > MAX_LIGHTS:
        raise RuntimeError(f"Scene has {len(lights)} lights, maximum is {MAX_LIGHTS}")
    for light in lights:
        add_light(light)
    if not lights:
        logger.warning("Scene has no lights; Phong shading will render black")


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


# =============================================================================
# Shading Functions
# =============================================================================


@ti.func
def shade_phong(
    point: vec3,
    normal: vec3,
    eye: vec3,
    ambient: vec3,
    diffuse: vec3,
    specular: vec3,
    shininess: ti.f32,
) -> vec3:
    """Phong color at a surface point, summed over all stored lights.

    Args:
        point: The surface point being shaded.
        normal: Outward unit normal at point.
        eye: The viewer position.
        ambient: Surface ambient coefficients (Ka).
        diffuse: Surface diffuse coefficients (Kd).
        specular: Surface specular coefficients (Ks).
        shininess: Specular exponent n.

    Returns:
        The unclamped RGB sum, nominally in [0, 1] per channel.
    """
    view = normalize(eye - point)
    color = vec3(0.0, 0.0, 0.0)

    for i in range(num_lights[None]):
        to_light = normalize(light_positions[i] - point)
        half = normalize(view + to_light)
        n_dot_l = ti.max(dot(normal, to_light), 0.0)
        n_dot_h = ti.max(dot(normal, half), 0.0)

        color += ambient * light_ambient[i]
        color += diffuse * light_diffuse[i] * n_dot_l
        color += specular * light_specular[i] * (n_dot_h**shininess)

    return color


@ti.func
def shade_flat(diffuse: vec3) -> vec3:
    """Unlit color: the surface's diffuse coefficients."""
    return diffuse


@ti.func
def to_pixel_color(color: vec3) -> vec3:
    """Scale a shaded color to [0, 255], clamping out-of-range channels.

    NaN channels (from degenerate geometry) become 0. The result is still
    floating point; rounding to 8 bits happens when the buffer is copied out.
    """
    scaled = color * 255.0
    for c in ti.static(range(3)):
        if tm.isnan(scaled[c]):
            scaled[c] = 0.0
    return tm.clamp(scaled, 0.0, 255.0)
