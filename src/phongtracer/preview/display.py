"""Matplotlib-based preview display for rendered images.

Example:
    >>> from phongtracer.preview.display import show_image
    >>> show_image(image, title="Sample scene")
"""

import numpy as np
import numpy.typing as npt


def show_image(
    image: npt.NDArray[np.uint8],
    title: str | None = None,
    block: bool = True,
    *,
    figsize: tuple[float, float] = (8, 8),
) -> None:
    """Display a rendered RGBA image in a Matplotlib figure.

    Args:
        image: Array of shape (H, W, 4) with dtype uint8, row 0 at the top.
        title: Figure title (default shows the image size).
        block: Whether to block execution until the figure is closed.
        figsize: Figure size in inches (width, height).
    """
    import matplotlib.pyplot as plt

    height, width = image.shape[:2]

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    # Nearest-neighbour keeps single pixels crisp on small renders
    ax.imshow(image, interpolation="nearest")
    ax.axis("off")
    ax.set_title(title if title is not None else f"Render Preview - {width}x{height}")

    plt.tight_layout()
    plt.show(block=block)
