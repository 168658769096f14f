"""Pytest configuration for phongtracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti

WHITE = (1.0, 1.0, 1.0)


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    invalidate the module-level fields declared by the renderer.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear primitive, light and image storage around each test."""
    # Import here so Taichi is initialized before any field is declared
    from phongtracer.core.renderer import clear_render_target
    from phongtracer.core.shading import clear_lights
    from phongtracer.scene.intersection import clear_scene

    def _clear_all():
        clear_scene()
        clear_lights()
        clear_render_target()

    _clear_all()
    yield
    _clear_all()


@pytest.fixture
def white_light():
    """The course's default white light at (-0.5, 1.5, -0.5)."""
    from phongtracer.scene.loader import DEFAULT_LIGHT

    return DEFAULT_LIGHT


@pytest.fixture
def box_record():
    """A valid unit box record in the course's JSON layout."""
    return {
        "lx": 0.0,
        "rx": 1.0,
        "by": 0.0,
        "ty": 1.0,
        "fz": 0.0,
        "rz": 1.0,
        "ambient": [0.1, 0.1, 0.1],
        "diffuse": [0.6, 0.2, 0.2],
        "specular": [0.3, 0.3, 0.3],
        "n": 5,
    }


@pytest.fixture
def sphere_record():
    """A valid sphere record in the course's JSON layout."""
    return {
        "x": 0.5,
        "y": 0.5,
        "z": 0.5,
        "r": 0.5,
        "ambient": [0.1, 0.1, 0.1],
        "diffuse": [0.0, 0.0, 0.6],
        "specular": [0.3, 0.3, 0.3],
        "n": 11,
    }
