"""Core module for vector math, shading and rendering.

Components:
    vector: Host-side vector operations on plain sequences
    ray: Ray struct and Taichi-side vec3 helpers
    shading: Point light storage and Phong shading functions
    renderer: Per-pixel ray casting into an RGBA image

The ray, shading and renderer modules declare Taichi fields or structs, so
only the host-side vector functions are exported here. Import the others
directly once Taichi is initialized:
    from phongtracer.core.renderer import render
"""

from .vector import add, dot, magnitude, normalize, scale

__all__ = [
    "add",
    "dot",
    "magnitude",
    "normalize",
    "scale",
]
