"""Scene loading from flat JSON attribute records.

Scene descriptions arrive as JSON lists of flat records, one list per entity
kind:

    boxes:   {lx, rx, by, ty, fz, rz, ambient[3], diffuse[3], specular[3], n}
    spheres: {x, y, z, r, ambient[3], diffuse[3], specular[3], n}
    lights:  {x, y, z, ambient[3], diffuse[3], specular[3]}

Every record is validated eagerly. A missing or malformed field raises
InvalidSceneRecordError naming the entity (e.g. ``"sphere[3]"``) and the
field, so a broken scene fails before any rendering starts.

Example:
    >>> from phongtracer.scene.loader import build_scene, load_records
    >>> boxes = load_records("boxes.json")
    >>> spheres = load_records("https://ncsucgclass.github.io/prog1/spheres.json")
    >>> scene = build_scene(boxes=boxes, spheres=spheres)
"""

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import requests

from phongtracer.scene.model import (
    Box,
    ImageWindow,
    InvalidSceneRecordError,
    Light,
    Point,
    Scene,
    Sphere,
    check_color,
    check_number,
    validate_light,
    validate_primitive,
)

# Course scene sources, used as command-line defaults
DEFAULT_BOXES_URL = "https://ncsucgclass.github.io/prog1/boxes.json"
DEFAULT_SPHERES_URL = "https://ncsucgclass.github.io/prog1/spheres.json"

DEFAULT_EYE = Point(0.5, 0.5, -0.5)

# White light above and to the left of the eye
DEFAULT_LIGHT = Light(
    x=-0.5,
    y=1.5,
    z=-0.5,
    ambient=(1.0, 1.0, 1.0),
    diffuse=(1.0, 1.0, 1.0),
    specular=(1.0, 1.0, 1.0),
)


def load_records(source: str | Path, timeout: float = 10.0) -> list[dict[str, Any]]:
    """Load a JSON list of records from a file path or an http(s) URL.

    Args:
        source: Local path, or a URL starting with http:// or https://.
        timeout: Request timeout in seconds for URLs.

    Returns:
        The decoded list of records.

    Raises:
        requests.HTTPError: If the server answers with an error status.
        OSError: If the file cannot be read.
        ValueError: If the content is not a JSON list.
    """
    text = str(source)
    if text.startswith(("http://", "https://")):
        response = requests.get(text, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    else:
        with open(source, encoding="utf-8") as f:
            data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON list of records in {text}, got {type(data).__name__}")
    return data


def _require(entity: str, record: Any, field_name: str) -> Any:
    if not isinstance(record, Mapping):
        raise InvalidSceneRecordError(entity, None, f"must be an object, got {record!r}")
    if field_name not in record:
        raise InvalidSceneRecordError(entity, field_name, "is missing")
    return record[field_name]


def _material(entity: str, record: Any) -> dict[str, Any]:
    return {
        name: check_color(entity, name, _require(entity, record, name))
        for name in ("ambient", "diffuse", "specular")
    }


def box_from_record(record: Mapping[str, Any], entity: str = "box") -> Box:
    """Build a Box from a flat record.

    Raises:
        InvalidSceneRecordError: If a field is missing or malformed.
    """
    geometry = {
        name: check_number(entity, name, _require(entity, record, name))
        for name in Box.geometry_fields
    }
    n = check_number(entity, "n", _require(entity, record, "n"))
    box = Box(**geometry, **_material(entity, record), n=n)
    validate_primitive(entity, box)
    return box


def sphere_from_record(record: Mapping[str, Any], entity: str = "sphere") -> Sphere:
    """Build a Sphere from a flat record.

    Raises:
        InvalidSceneRecordError: If a field is missing or malformed.
    """
    geometry = {
        name: check_number(entity, name, _require(entity, record, name))
        for name in Sphere.geometry_fields
    }
    n = check_number(entity, "n", _require(entity, record, "n"))
    sphere = Sphere(**geometry, **_material(entity, record), n=n)
    validate_primitive(entity, sphere)
    return sphere


def light_from_record(record: Mapping[str, Any], entity: str = "light") -> Light:
    """Build a Light from a flat record.

    Raises:
        InvalidSceneRecordError: If a field is missing or malformed.
    """
    position = {
        name: check_number(entity, name, _require(entity, record, name))
        for name in ("x", "y", "z")
    }
    light = Light(**position, **_material(entity, record))
    validate_light(entity, light)
    return light


def build_scene(
    boxes: Sequence[Mapping[str, Any]] = (),
    spheres: Sequence[Mapping[str, Any]] = (),
    lights: Sequence[Mapping[str, Any]] | None = None,
    eye: Point = DEFAULT_EYE,
    window: ImageWindow | None = None,
) -> Scene:
    """Build a validated Scene from record collections.

    Primitives are ordered boxes first, then spheres, each in input order.

    Args:
        boxes: Box records.
        spheres: Sphere records.
        lights: Light records. None means the single DEFAULT_LIGHT.
        eye: The eye position.
        window: Image window orientation. None means ImageWindow().

    Returns:
        The scene.

    Raises:
        InvalidSceneRecordError: On the first malformed record.
    """
    primitives: list[Box | Sphere] = []
    primitives.extend(box_from_record(r, f"box[{i}]") for i, r in enumerate(boxes))
    primitives.extend(sphere_from_record(r, f"sphere[{i}]") for i, r in enumerate(spheres))

    if lights is None:
        scene_lights = (DEFAULT_LIGHT,)
    else:
        scene_lights = tuple(light_from_record(r, f"light[{i}]") for i, r in enumerate(lights))

    return Scene(
        primitives=tuple(primitives),
        lights=scene_lights,
        eye=eye,
        window=window if window is not None else ImageWindow(),
    )


def scene_from_dict(data: Mapping[str, Any]) -> Scene:
    """Build a Scene from a single mapping.

    Args:
        data: Mapping with optional keys 'boxes', 'spheres', 'lights'
            (record lists), 'eye' ([x, y, z]) and 'flip_vertical' (bool).

    Raises:
        InvalidSceneRecordError: On the first malformed record.
    """
    eye = DEFAULT_EYE
    if "eye" in data:
        raw_eye = data["eye"]
        if isinstance(raw_eye, str) or not isinstance(raw_eye, Sequence) or len(raw_eye) != 3:
            raise InvalidSceneRecordError("eye", None, f"must be [x, y, z], got {raw_eye!r}")
        x, y, z = (check_number("eye", axis, v) for axis, v in zip("xyz", raw_eye))
        eye = Point(x, y, z)

    flip = data.get("flip_vertical", True)
    if not isinstance(flip, bool):
        raise InvalidSceneRecordError("window", "flip_vertical", f"must be a boolean, got {flip!r}")

    return build_scene(
        boxes=data.get("boxes", []),
        spheres=data.get("spheres", []),
        lights=data.get("lights"),
        eye=eye,
        window=ImageWindow(flip_vertical=flip),
    )
