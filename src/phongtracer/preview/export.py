"""Image export utilities for rendered images.

The renderer already produces final 8-bit RGBA pixels, so export is a
straight conversion to a Pillow image with no tone mapping or gamma.

Example:
    >>> from phongtracer.preview.export import save_png
    >>> save_png(image, "output.png")
"""

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def image_to_pil(image: npt.NDArray[np.uint8]) -> PILImage.Image:
    """Convert a rendered image array to a Pillow RGBA image.

    Args:
        image: Array of shape (H, W, 4) with dtype uint8, row 0 at the top.

    Returns:
        The Pillow image.

    Raises:
        ValueError: If the array is not an (H, W, 4) uint8 image.
    """
    if image.ndim != 3 or image.shape[2] != 4:
        raise ValueError(f"Expected an (H, W, 4) RGBA array, got shape {image.shape}")
    if image.dtype != np.uint8:
        raise ValueError(f"Expected dtype uint8, got {image.dtype}")
    # (H, W, 4) uint8 arrays map to RGBA
    return PILImage.fromarray(np.ascontiguousarray(image))


def save_png(image: npt.NDArray[np.uint8], filepath: str | Path) -> Path:
    """Save a rendered image as an RGBA PNG file.

    Args:
        image: Array of shape (H, W, 4) with dtype uint8.
        filepath: Output file path (should end in .png).

    Returns:
        The path written.
    """
    path = Path(filepath)
    image_to_pil(image).save(path, format="PNG")
    return path
