"""Tests for the render_scene example script.

The script's main() initializes Taichi itself, so these tests call
parse_args() and render_scene() directly within the test session.
"""

import json

import numpy as np
import pytest
from PIL import Image as PILImage

from examples.render_scene import parse_args, render_scene
from phongtracer.scene.loader import DEFAULT_BOXES_URL, DEFAULT_SPHERES_URL


class TestParseArgs:
    """Tests for command-line parsing."""

    def test_defaults(self):
        args = parse_args([])
        assert args.boxes == DEFAULT_BOXES_URL
        assert args.spheres == DEFAULT_SPHERES_URL
        assert args.width == 512
        assert args.height == 512
        assert args.eye == [0.5, 0.5, -0.5]
        assert args.no_flip is False
        assert args.shading == "phong"
        assert args.output == "scene.png"

    def test_options(self):
        args = parse_args([
            "--boxes", "b.json",
            "--spheres", "s.json",
            "--width", "64",
            "--height", "32",
            "--eye", "0.5", "0.5", "-2",
            "--no-flip",
            "--shading", "flat",
            "--cpu",
            "--quiet",
            "--verbose",
        ])
        assert (args.boxes, args.spheres) == ("b.json", "s.json")
        assert (args.width, args.height) == (64, 32)
        assert args.eye == [0.5, 0.5, -2.0]
        assert args.no_flip and args.cpu and args.quiet and args.verbose
        assert args.shading == "flat"

    def test_rejects_unknown_shading(self):
        with pytest.raises(SystemExit):
            parse_args(["--shading", "toon"])


class TestRenderScene:
    """Tests for the end-to-end render_scene() helper."""

    def test_sample_scene(self, tmp_path):
        output = render_scene(
            use_sample_scene=True,
            width=24,
            height=16,
            output_path=str(tmp_path / "sample.png"),
            quiet=True,
        )
        with PILImage.open(output) as loaded:
            assert loaded.size == (24, 16)
            assert loaded.mode == "RGBA"

    def test_records_from_files(self, tmp_path, box_record, sphere_record):
        boxes = tmp_path / "boxes.json"
        spheres = tmp_path / "spheres.json"
        boxes.write_text(json.dumps([box_record]))
        spheres.write_text(json.dumps([sphere_record]))

        output = render_scene(
            boxes=str(boxes),
            spheres=str(spheres),
            width=9,
            height=9,
            shading="flat",
            output_path=str(tmp_path / "records.png"),
            quiet=True,
        )
        with PILImage.open(output) as loaded:
            pixels = np.asarray(loaded)
        # Box and sphere both enter at t = 1; the box comes first and wins
        assert tuple(pixels[4, 4]) == (153, 51, 51, 255)

    def test_progress_output(self, tmp_path, capsys):
        render_scene(
            use_sample_scene=True,
            width=8,
            height=8,
            output_path=str(tmp_path / "progress.png"),
        )
        out = capsys.readouterr().out
        assert "Creating sample scene" in out
        assert "Saved to:" in out
