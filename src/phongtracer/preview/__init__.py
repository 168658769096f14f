"""Preview module for output and visualization.

Components:
    display: Matplotlib-based preview display
    export: PNG export via Pillow

Both work on the RGBA uint8 arrays returned by
``phongtracer.core.renderer.render``.

Example:
    >>> from phongtracer.preview import save_png, show_image
    >>> save_png(image, "scene.png")
    >>> show_image(image, title="Phong")
"""

from .display import show_image
from .export import image_to_pil, save_png

__all__ = [
    "show_image",
    "image_to_pil",
    "save_png",
]
