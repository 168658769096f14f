"""Immutable scene description: primitives, lights, eye and image window.

The scene is described on the host with frozen dataclasses and only copied
into Taichi fields for the duration of a render call (see
``phongtracer.scene.intersection``). Renderable primitives form a closed
variant of two members, Box and Sphere, each tagged with an explicit
PrimitiveKind and carrying its own Phong illumination coefficients.

Example:
    >>> from phongtracer.scene.model import Box, Light, Point, Scene
    >>> white = (1.0, 1.0, 1.0)
    >>> box = Box(0, 1, 0, 1, 0, 1, ambient=white, diffuse=white, specular=white, n=1)
    >>> light = Light(-0.5, 1.5, -0.5, ambient=white, diffuse=white, specular=white)
    >>> scene = Scene(primitives=(box,), lights=(light,), eye=Point(0.5, 0.5, -0.5))
    >>> validate_scene(scene)
"""

import logging
import math
import numbers
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, ClassVar

from phongtracer.core.vector import add, scale

logger = logging.getLogger(__name__)

Color = tuple[float, float, float]

# Fixed image window: the unit square in the plane z = 0, facing +z
WINDOW_LEFT = 0.0
WINDOW_RIGHT = 1.0
WINDOW_BOTTOM = 0.0
WINDOW_TOP = 1.0
WINDOW_PLANE_Z = 0.0


class PrimitiveKind(IntEnum):
    """Tag identifying the primitive variant.

    Used for dispatch inside kernels, where primitives of both kinds share
    one storage array.
    """

    BOX = 0
    SPHERE = 1


class InvalidSceneRecordError(ValueError):
    """A scene entity has a missing or malformed field.

    Attributes:
        entity: Label of the offending entity, e.g. ``"box[2]"``.
        field: Name of the offending field, or None when the whole record
            is unusable.
    """

    def __init__(self, entity: str, field: str | None, reason: str) -> None:
        self.entity = entity
        self.field = field
        if field is None:
            message = f"Invalid scene record {entity}: {reason}"
        else:
            message = f"Invalid scene record {entity}: field '{field}' {reason}"
        super().__init__(message)


@dataclass(frozen=True)
class Point:
    """A point in world space."""

    x: float
    y: float
    z: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Box:
    """An axis-aligned box with Phong material.

    Attributes:
        lx, rx: Left and right x bounds (lx <= rx).
        by, ty: Bottom and top y bounds (by <= ty).
        fz, rz: Front and rear z bounds (fz <= rz).
        ambient, diffuse, specular: Reflection coefficients per RGB channel.
        n: Specular exponent (n >= 0).
    """

    kind: ClassVar[PrimitiveKind] = PrimitiveKind.BOX
    geometry_fields: ClassVar[tuple[str, ...]] = ("lx", "rx", "by", "ty", "fz", "rz")

    lx: float
    rx: float
    by: float
    ty: float
    fz: float
    rz: float
    ambient: Color
    diffuse: Color
    specular: Color
    n: float

    @property
    def min_corner(self) -> tuple[float, float, float]:
        return (self.lx, self.by, self.fz)

    @property
    def max_corner(self) -> tuple[float, float, float]:
        return (self.rx, self.ty, self.rz)


@dataclass(frozen=True)
class Sphere:
    """A sphere with Phong material.

    Attributes:
        x, y, z: Center of the sphere.
        r: Radius (r > 0).
        ambient, diffuse, specular: Reflection coefficients per RGB channel.
        n: Specular exponent (n >= 0).
    """

    kind: ClassVar[PrimitiveKind] = PrimitiveKind.SPHERE
    geometry_fields: ClassVar[tuple[str, ...]] = ("x", "y", "z", "r")

    x: float
    y: float
    z: float
    r: float
    ambient: Color
    diffuse: Color
    specular: Color
    n: float

    @property
    def center(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


Primitive = Box | Sphere


@dataclass(frozen=True)
class Light:
    """A point light with per-channel ambient, diffuse and specular color."""

    x: float
    y: float
    z: float
    ambient: Color
    diffuse: Color
    specular: Color

    @property
    def position(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class ImageWindow:
    """The image plane window rays are cast through.

    The window itself is fixed to the unit square in the plane z = 0. Only
    its vertical orientation is configurable.

    Attributes:
        flip_vertical: If True, output row 0 samples the top edge of the
            window (world +y appears up in the image). If False, row 0
            samples the bottom edge.
    """

    flip_vertical: bool = True

    left: ClassVar[float] = WINDOW_LEFT
    right: ClassVar[float] = WINDOW_RIGHT
    bottom: ClassVar[float] = WINDOW_BOTTOM
    top: ClassVar[float] = WINDOW_TOP
    plane_z: ClassVar[float] = WINDOW_PLANE_Z

    @property
    def center(self) -> tuple[float, float, float]:
        return (
            (self.left + self.right) / 2.0,
            (self.bottom + self.top) / 2.0,
            self.plane_z,
        )


@dataclass(frozen=True)
class Scene:
    """A complete, read-only scene.

    Attributes:
        primitives: Boxes and spheres in iteration order. Order decides
            nearest-hit ties: the earlier primitive wins.
        lights: Point lights, all of which contribute to every hit.
        eye: The ray origin for every pixel.
        window: The image window orientation.
    """

    primitives: tuple[Primitive, ...]
    lights: tuple[Light, ...]
    eye: Point
    window: ImageWindow = field(default_factory=ImageWindow)

    @property
    def boxes(self) -> tuple[Box, ...]:
        return tuple(p for p in self.primitives if isinstance(p, Box))

    @property
    def spheres(self) -> tuple[Sphere, ...]:
        return tuple(p for p in self.primitives if isinstance(p, Sphere))


# =============================================================================
# Validation
# =============================================================================


def check_number(entity: str, field_name: str, value: Any) -> float:
    """Return value as a float, or raise if it is not a finite number."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidSceneRecordError(
            entity, field_name, f"must be a number, got {value!r}"
        )
    if not math.isfinite(value):
        raise InvalidSceneRecordError(entity, field_name, f"must be finite, got {value!r}")
    return float(value)


def check_color(entity: str, field_name: str, value: Any) -> Color:
    """Return value as an RGB triple, or raise if it is malformed."""
    if isinstance(value, str) or not isinstance(value, (list, tuple)) or len(value) != 3:
        raise InvalidSceneRecordError(
            entity, field_name, f"must be a 3-component color, got {value!r}"
        )
    r, g, b = (check_number(entity, field_name, c) for c in value)
    return (r, g, b)


def _check_material(entity: str, item: Box | Sphere | Light) -> None:
    for name in ("ambient", "diffuse", "specular"):
        check_color(entity, name, getattr(item, name))


def _warn_if_degenerate(entity: str, primitive: Primitive) -> None:
    """Log a warning for geometry that cannot produce a visible surface."""
    match primitive:
        case Box():
            extents = add(primitive.max_corner, scale(primitive.min_corner, -1.0))
            if min(extents) <= 0.0:
                logger.warning("%s has zero or negative extent %s", entity, extents)
        case Sphere():
            if primitive.r <= 0.0:
                logger.warning("%s has non-positive radius %s", entity, primitive.r)


def validate_primitive(entity: str, primitive: Any) -> None:
    """Check one primitive eagerly.

    Args:
        entity: Label used in error messages.
        primitive: The Box or Sphere to check.

    Raises:
        InvalidSceneRecordError: If a field is missing, non-finite or
            malformed, or if the object is not a Box or Sphere.
    """
    match primitive:
        case Box() | Sphere():
            for name in primitive.geometry_fields:
                check_number(entity, name, getattr(primitive, name))
            _check_material(entity, primitive)
            n = check_number(entity, "n", primitive.n)
            if n < 0.0:
                raise InvalidSceneRecordError(entity, "n", f"must be >= 0, got {n}")
        case _:
            raise InvalidSceneRecordError(
                entity, None, f"unknown primitive type {type(primitive).__name__}"
            )
    _warn_if_degenerate(entity, primitive)


def validate_light(entity: str, light: Any) -> None:
    """Check one light eagerly."""
    if not isinstance(light, Light):
        raise InvalidSceneRecordError(entity, None, f"expected a Light, got {light!r}")
    for name in ("x", "y", "z"):
        check_number(entity, name, getattr(light, name))
    _check_material(entity, light)


def primitive_labels(primitives: tuple[Primitive, ...]) -> list[str]:
    """Label primitives per kind, e.g. ``["box[0]", "sphere[0]", "box[1]"]``."""
    counts: dict[str, int] = {}
    labels = []
    for primitive in primitives:
        kind = type(primitive).__name__.lower()
        labels.append(f"{kind}[{counts.get(kind, 0)}]")
        counts[kind] = counts.get(kind, 0) + 1
    return labels


def validate_scene(scene: Scene) -> None:
    """Validate every entity of a scene before rendering.

    Raises:
        InvalidSceneRecordError: On the first malformed entity.
    """
    for label, primitive in zip(primitive_labels(scene.primitives), scene.primitives):
        validate_primitive(label, primitive)
    for i, light in enumerate(scene.lights):
        validate_light(f"light[{i}]", light)
    for name in ("x", "y", "z"):
        check_number("eye", name, getattr(scene.eye, name))
