"""
Unit tests for image_models module.

Tests operation construction, validation and the invocation context.
"""

import dataclasses
from pathlib import Path

import pytest

from Mirage_Libs.constants import MAX_FRACTAL_WORKERS
from Mirage_Libs.errors import ArgumentError
from Mirage_Libs.ImageEditingLib.image_models import (
    Blur,
    Brighten,
    Crop,
    Fractal,
    Generate,
    Grayscale,
    Invert,
    InvocationContext,
    Rotate,
)


class TestOperationDefaults:
    """Tests for default values and command names."""

    def test_blur_default(self):
        assert Blur().intensity == 2.0

    def test_brighten_default(self):
        assert Brighten().delta == 10

    def test_fractal_default_workers(self):
        assert Fractal().workers == 1

    def test_command_names(self):
        names = [op.name for op in (Blur, Brighten, Crop, Rotate, Generate, Invert, Grayscale, Fractal)]
        assert names == ["blur", "brighten", "crop", "rotate", "generate", "invert", "grayscale", "fractal"]

    def test_only_generators_skip_input(self):
        assert not Generate.requires_input
        assert not Fractal.requires_input
        for op in (Blur, Brighten, Crop, Rotate, Invert, Grayscale):
            assert op.requires_input

    def test_operations_are_immutable(self):
        blur = Blur(3.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            blur.intensity = 4.0

    def test_to_dict_includes_command(self):
        assert Crop(1, 2, 3, 4).to_dict() == {
            "command": "crop", "x": 1, "y": 2, "width": 3, "height": 4,
        }
        assert Invert().to_dict() == {"command": "invert"}


class TestOperationValidation:
    """Tests for values rejected at construction."""

    @pytest.mark.parametrize("degrees", [90, 180, 270])
    def test_rotate_accepts_quarter_turns(self, degrees):
        assert Rotate(degrees).degrees == degrees

    @pytest.mark.parametrize("degrees", [0, 45, 360, -90, "90"])
    def test_rotate_rejects_other_angles(self, degrees):
        with pytest.raises(ArgumentError):
            Rotate(degrees)

    @pytest.mark.parametrize("value", [-1, 256, 1.5, True])
    def test_generate_rejects_non_bytes(self, value):
        with pytest.raises(ArgumentError):
            Generate(value, 0, 0)

    def test_generate_color(self):
        assert Generate(1, 2, 3).color == (1, 2, 3)

    def test_crop_rejects_negative(self):
        with pytest.raises(ArgumentError):
            Crop(-1, 0, 10, 10)

    def test_crop_rejects_values_above_u32(self):
        with pytest.raises(ArgumentError):
            Crop(0, 0, 2 ** 32, 10)

    def test_crop_box(self):
        assert Crop(2, 3, 10, 20).box == (2, 3, 12, 23)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "2", None])
    def test_blur_rejects_invalid_intensity(self, value):
        with pytest.raises(ArgumentError):
            Blur(value)

    @pytest.mark.parametrize("value", [0, -2.0, 100.5, 150])
    def test_blur_accepts_any_finite_intensity(self, value):
        assert Blur(value).intensity == value

    def test_brighten_accepts_negative(self):
        assert Brighten(-300).delta == -300

    def test_brighten_rejects_float(self):
        with pytest.raises(ArgumentError):
            Brighten(1.5)

    @pytest.mark.parametrize("workers", [0, -1, MAX_FRACTAL_WORKERS + 1])
    def test_fractal_rejects_bad_worker_count(self, workers):
        with pytest.raises(ArgumentError):
            Fractal(workers)

    def test_fractal_accepts_worker_limit(self):
        assert Fractal(MAX_FRACTAL_WORKERS).workers == MAX_FRACTAL_WORKERS

    def test_argument_error_is_value_error(self):
        with pytest.raises(ValueError):
            Rotate(45)


class TestInvocationContext:
    """Tests for InvocationContext."""

    def test_paths_are_coerced(self):
        context = InvocationContext(outfile="out.png", infile="in.png")

        assert context.outfile == Path("out.png")
        assert context.infile == Path("in.png")

    def test_infile_optional(self):
        assert InvocationContext(outfile="out.png").infile is None
