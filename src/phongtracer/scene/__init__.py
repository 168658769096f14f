"""Scene module for describing and loading scenes.

Components:
    model: Frozen dataclasses for primitives, lights, eye and image window,
        plus eager validation
    loader: Builds scenes from flat JSON records (files or URLs)
    sample: A small built-in scene
    intersection: Taichi-side primitive storage and nearest-hit search

The intersection module declares Taichi fields and is not imported here:
    from phongtracer.scene.intersection import upload_primitives
"""

from .loader import (
    DEFAULT_EYE,
    DEFAULT_LIGHT,
    box_from_record,
    build_scene,
    light_from_record,
    load_records,
    scene_from_dict,
    sphere_from_record,
)
from .model import (
    Box,
    ImageWindow,
    InvalidSceneRecordError,
    Light,
    Point,
    PrimitiveKind,
    Scene,
    Sphere,
    validate_scene,
)
from .sample import create_sample_scene

__all__ = [
    # Model
    "Box",
    "Sphere",
    "Light",
    "Point",
    "ImageWindow",
    "Scene",
    "PrimitiveKind",
    "InvalidSceneRecordError",
    "validate_scene",
    # Loading
    "load_records",
    "box_from_record",
    "sphere_from_record",
    "light_from_record",
    "build_scene",
    "scene_from_dict",
    "DEFAULT_EYE",
    "DEFAULT_LIGHT",
    "create_sample_scene",
]
