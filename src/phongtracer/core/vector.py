"""Host-side vector utilities for scene preparation.

These functions operate on plain Python sequences of any length and return
tuples of floats. They are used outside Taichi kernels, for validating scene
geometry and camera placement before anything is uploaded to the GPU.

Vectors of unequal length are zero-padded to the longest length rather than
rejected, so ``add([1, 2], [1, 2, 3])`` is ``(2.0, 4.0, 3.0)``.

Example:
    >>> from phongtracer.core.vector import add, magnitude, normalize
    >>> magnitude((3.0, 4.0))
    5.0
    >>> normalize((0.0, 0.0, 2.0))
    (0.0, 0.0, 1.0)
"""

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

Vector = tuple[float, ...]


def _as_arrays(*vectors: Sequence[float]) -> list[npt.NDArray[np.float64]]:
    """Convert sequences to float64 arrays zero-padded to a common length."""
    size = max((len(v) for v in vectors), default=0)
    arrays = []
    for v in vectors:
        arr = np.asarray(v, dtype=np.float64)
        arrays.append(np.pad(arr, (0, size - arr.shape[0])))
    return arrays


def _to_vector(arr: npt.NDArray[np.float64]) -> Vector:
    return tuple(float(x) for x in arr)


def magnitude(v: Sequence[float]) -> float:
    """Compute the Euclidean norm of a vector.

    Args:
        v: The input vector.

    Returns:
        The length of the vector.
    """
    return float(np.linalg.norm(np.asarray(v, dtype=np.float64)))


def normalize(v: Sequence[float]) -> Vector:
    """Scale a vector to unit length.

    Args:
        v: The input vector. Must have a non-zero length.

    Returns:
        A unit vector in the same direction as v.

    Raises:
        ValueError: If v has zero length.
    """
    length = magnitude(v)
    if length == 0.0:
        raise ValueError(f"Cannot normalize zero-length vector {tuple(v)}")
    return scale(v, 1.0 / length)


def add(*vectors: Sequence[float]) -> Vector:
    """Component-wise sum of any number of vectors (zero-padded)."""
    if not vectors:
        return ()
    return _to_vector(np.sum(_as_arrays(*vectors), axis=0))


def dot(v1: Sequence[float], v2: Sequence[float]) -> float:
    """Dot product of two vectors (zero-padded)."""
    a, b = _as_arrays(v1, v2)
    return float(np.dot(a, b))


def scale(v: Sequence[float], k: float) -> Vector:
    """Multiply every component of a vector by k."""
    return _to_vector(np.asarray(v, dtype=np.float64) * k)
