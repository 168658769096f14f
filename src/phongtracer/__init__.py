"""Python implementation of a Taichi-based Phong ray caster.

This package renders static scenes of axis-aligned boxes and spheres lit by
point lights, casting one ray per pixel from a fixed eye point through a unit
image window, with support for:
- Slab-method ray-box and quadratic ray-sphere intersection
- Nearest-hit selection over a heterogeneous primitive list
- Phong (ambient + diffuse + specular) and flat diffuse shading
- RGBA 8-bit output with explicit clamping

Subpackages:
    core: Vector utilities, rays, shading and the rasterizer
    geometry: Box and sphere intersection algorithms
    scene: Scene model, validation, loading and GPU-side primitive storage
    camera: Image window and pixel-to-ray mapping
    preview: PNG export and matplotlib display
"""

__version__ = "0.1.0"
