"""Unit tests for primitive storage and nearest-hit search.

Tests cover:
- Uploading boxes and spheres into the shared storage
- Capacity and type errors
- Nearest-hit selection across kinds
- Deterministic tie-breaking by scene order
- Primitives behind the eye
"""

import pytest
import taichi as ti

WHITE = (1.0, 1.0, 1.0)

RED = (1.0, 0.0, 0.0)
BLUE = (0.0, 0.0, 1.0)

EYE = (0.5, 0.5, -0.5)
CENTER_DIRECTION = (0.0, 0.0, 0.5)


def _box(lo, hi, diffuse=WHITE):
    from phongtracer.scene.model import Box

    return Box(
        lx=lo[0], rx=hi[0], by=lo[1], ty=hi[1], fz=lo[2], rz=hi[2],
        ambient=WHITE, diffuse=diffuse, specular=WHITE, n=1.0,
    )


def _sphere(center, r, diffuse=WHITE):
    from phongtracer.scene.model import Sphere

    return Sphere(
        x=center[0], y=center[1], z=center[2], r=r,
        ambient=WHITE, diffuse=diffuse, specular=WHITE, n=1.0,
    )


def _nearest(origin=EYE, direction=CENTER_DIRECTION):
    """Run intersect_scene in a kernel and return the hit record."""
    from phongtracer.scene.intersection import intersect_scene

    hit = ti.field(dtype=ti.i32, shape=())
    index = ti.field(dtype=ti.i32, shape=())
    t = ti.field(dtype=ti.f32, shape=())
    point = ti.field(dtype=ti.math.vec3, shape=())
    normal = ti.field(dtype=ti.math.vec3, shape=())

    @ti.kernel
    def test_kernel(o: ti.math.vec3, d: ti.math.vec3):
        record = intersect_scene(o, d)
        hit[None] = record.hit
        index[None] = record.index
        t[None] = record.t
        point[None] = record.point
        normal[None] = record.normal

    test_kernel(ti.math.vec3(*origin), ti.math.vec3(*direction))
    return {
        "hit": hit[None],
        "index": index[None],
        "t": t[None],
        "point": tuple(point.to_numpy()),
        "normal": tuple(normal.to_numpy()),
    }


class TestPrimitiveStorage:
    """Tests for uploading primitives."""

    def test_upload_preserves_order_and_kind(self):
        from phongtracer.scene.intersection import (
            get_primitive_count,
            prim_kinds,
            prim_radius,
            upload_primitives,
        )
        from phongtracer.scene.model import PrimitiveKind

        upload_primitives([_sphere((0.5, 0.5, 0.5), 0.25), _box((0, 0, 0), (1, 1, 1))])

        assert get_primitive_count() == 2
        assert prim_kinds[0] == int(PrimitiveKind.SPHERE)
        assert prim_kinds[1] == int(PrimitiveKind.BOX)
        assert abs(prim_radius[0] - 0.25) < 1e-6

    def test_upload_replaces_previous_primitives(self):
        from phongtracer.scene.intersection import get_primitive_count, upload_primitives

        upload_primitives([_box((0, 0, 0), (1, 1, 1))] * 3)
        upload_primitives([_box((0, 0, 0), (1, 1, 1))])
        assert get_primitive_count() == 1

    def test_add_primitive_returns_index(self):
        from phongtracer.scene.intersection import add_primitive

        assert add_primitive(_box((0, 0, 0), (1, 1, 1))) == 0
        assert add_primitive(_sphere((0, 0, 0), 1.0)) == 1

    def test_too_many_primitives_raises(self):
        from phongtracer.scene.intersection import (
            MAX_PRIMITIVES,
            get_primitive_count,
            upload_primitives,
        )

        with pytest.raises(RuntimeError, match="maximum"):
            upload_primitives([_box((0, 0, 0), (1, 1, 1))] * (MAX_PRIMITIVES + 1))
        assert get_primitive_count() == 0

    def test_unknown_primitive_type_raises(self):
        from phongtracer.scene.intersection import add_primitive

        with pytest.raises(TypeError):
            add_primitive("not a primitive")


class TestNearestHit:
    """Tests for intersect_scene."""

    def test_empty_scene_misses(self):
        result = _nearest()
        assert result["hit"] == 0
        assert result["index"] == -1

    def test_sphere_in_front_of_box_wins(self):
        from phongtracer.scene.intersection import upload_primitives

        # Box listed first so that scene order cannot decide the winner
        upload_primitives([
            _box((0, 0, 1), (1, 1, 2), diffuse=BLUE),
            _sphere((0.5, 0.5, 0.5), 0.25, diffuse=RED),
        ])
        result = _nearest()
        assert result["hit"] == 1
        assert result["index"] == 1
        assert result["point"] == pytest.approx((0.5, 0.5, 0.25), abs=1e-6)
        assert result["normal"] == pytest.approx((0.0, 0.0, -1.0), abs=1e-6)

    def test_nearer_box_wins_over_sphere(self):
        from phongtracer.scene.intersection import upload_primitives

        upload_primitives([
            _sphere((0.5, 0.5, 2.0), 0.5),
            _box((0, 0, 0), (1, 1, 1)),
        ])
        result = _nearest()
        assert result["index"] == 1
        assert result["t"] == pytest.approx(1.0, abs=1e-6)

    def test_equal_entry_resolves_to_first_primitive(self):
        from phongtracer.scene.intersection import upload_primitives

        upload_primitives([
            _box((0, 0, 0), (1, 1, 1), diffuse=RED),
            _box((0, 0, 0), (1, 1, 2), diffuse=BLUE),
        ])
        assert _nearest()["index"] == 0

        upload_primitives([
            _box((0, 0, 0), (1, 1, 2), diffuse=BLUE),
            _box((0, 0, 0), (1, 1, 1), diffuse=RED),
        ])
        assert _nearest()["index"] == 0

    def test_box_behind_eye_is_ignored(self):
        from phongtracer.scene.intersection import upload_primitives

        upload_primitives([_box((0, 0, -3), (1, 1, -2))])
        assert _nearest()["hit"] == 0

    def test_eye_inside_primitive_reports_it(self):
        from phongtracer.scene.intersection import upload_primitives

        upload_primitives([_sphere(EYE, 0.25)])
        result = _nearest()
        assert result["hit"] == 1
        assert result["t"] < 0.0
