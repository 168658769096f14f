"""Unit tests for axis-aligned box intersection.

Tests cover:
- Rays entering each face, with the outward face normal
- Rays missing the box
- Ray directions with zero components (unbounded slabs)
- Ray origins inside and behind the box
"""

import pytest
import taichi as ti


def _trace_box(origin, direction, min_corner=(0.0, 0.0, 0.0), max_corner=(1.0, 1.0, 1.0)):
    """Run hit_box and box_normal in a kernel and return the results."""
    from phongtracer.geometry.box import box_normal, hit_box, make_box

    hit = ti.field(dtype=ti.i32, shape=())
    t0 = ti.field(dtype=ti.f32, shape=())
    t1 = ti.field(dtype=ti.f32, shape=())
    point = ti.field(dtype=ti.math.vec3, shape=())
    normal = ti.field(dtype=ti.math.vec3, shape=())

    @ti.kernel
    def test_kernel(o: ti.math.vec3, d: ti.math.vec3, lo: ti.math.vec3, hi: ti.math.vec3):
        record = hit_box(o, d, make_box(lo, hi))
        hit[None] = record.hit
        t0[None] = record.t0
        t1[None] = record.t1
        point[None] = record.point0
        if record.hit == 1:
            normal[None] = box_normal(record, d)

    test_kernel(
        ti.math.vec3(*origin),
        ti.math.vec3(*direction),
        ti.math.vec3(*min_corner),
        ti.math.vec3(*max_corner),
    )
    return {
        "hit": hit[None],
        "t0": t0[None],
        "t1": t1[None],
        "point": tuple(point.to_numpy()),
        "normal": tuple(normal.to_numpy()),
    }


class TestBoxIntersection:
    """Tests for hit_box."""

    def test_center_ray_hits_near_face_on_image_plane(self):
        """Test the eye ray through the window center enters at z=0 with t=1."""
        result = _trace_box((0.5, 0.5, -0.5), (0.0, 0.0, 0.5))
        assert result["hit"] == 1
        assert result["t0"] == pytest.approx(1.0, abs=1e-6)
        assert result["t1"] == pytest.approx(3.0, abs=1e-6)
        assert result["point"] == pytest.approx((0.5, 0.5, 0.0), abs=1e-6)
        assert result["normal"] == pytest.approx((0.0, 0.0, -1.0), abs=1e-6)

    def test_oblique_ray_hits(self):
        result = _trace_box((0.5, 0.5, -0.5), (-0.3, 0.3, 0.5))
        assert result["hit"] == 1
        assert result["t0"] <= result["t1"]
        assert result["point"][2] == pytest.approx(0.0, abs=1e-5)

    def test_ray_misses_box(self):
        result = _trace_box((0.5, 0.5, -0.5), (0.0, 2.0, 0.5))
        assert result["hit"] == 0

    def test_ray_passing_beside_box_misses(self):
        result = _trace_box((2.0, 0.5, -1.0), (0.0, 0.0, 1.0))
        assert result["hit"] == 0

    @pytest.mark.parametrize(
        ("origin", "direction", "expected_normal"),
        [
            ((-1.0, 0.5, 0.5), (1.0, 0.0, 0.0), (-1.0, 0.0, 0.0)),
            ((2.0, 0.5, 0.5), (-1.0, 0.0, 0.0), (1.0, 0.0, 0.0)),
            ((0.5, -1.0, 0.5), (0.0, 1.0, 0.0), (0.0, -1.0, 0.0)),
            ((0.5, 2.0, 0.5), (0.0, -1.0, 0.0), (0.0, 1.0, 0.0)),
            ((0.5, 0.5, -1.0), (0.0, 0.0, 1.0), (0.0, 0.0, -1.0)),
            ((0.5, 0.5, 2.0), (0.0, 0.0, -1.0), (0.0, 0.0, 1.0)),
        ],
    )
    def test_entry_face_normal_points_outward(self, origin, direction, expected_normal):
        """Test each face reports its outward normal for a ray coming from outside."""
        result = _trace_box(origin, direction)
        assert result["hit"] == 1
        assert result["t0"] == pytest.approx(1.0, abs=1e-6)
        assert result["normal"] == pytest.approx(expected_normal, abs=1e-6)

    def test_origin_inside_box(self):
        """Test a ray from inside reports a negative entry and positive exit."""
        result = _trace_box((0.5, 0.5, 0.5), (0.0, 0.0, 1.0))
        assert result["hit"] == 1
        assert result["t0"] < 0.0 < result["t1"]
        assert result["t1"] == pytest.approx(0.5, abs=1e-6)

    def test_box_behind_origin_reports_negative_interval(self):
        """Test the tester itself does not filter boxes behind the origin."""
        result = _trace_box(
            (0.5, 0.5, -0.5),
            (0.0, 0.0, 0.5),
            min_corner=(0.0, 0.0, -3.0),
            max_corner=(1.0, 1.0, -2.0),
        )
        assert result["hit"] == 1
        assert result["t0"] <= result["t1"] < 0.0

    def test_non_degenerate_box_has_ordered_interval(self):
        """Test t0 <= t1 on a hit for several ray directions."""
        for direction in [(0.1, 0.2, 0.5), (-0.2, -0.1, 0.5), (0.0, 0.3, 0.5)]:
            result = _trace_box((0.5, 0.5, -0.5), direction)
            assert result["hit"] == 1
            assert result["t0"] <= result["t1"]
