"""
Unit tests for image_editing_ops module.

Tests the Pillow-backed transforms: blur, brighten, crop, rotate, invert
and grayscale.
"""

import numpy as np
import pytest
from PIL import Image

from Mirage_Libs.errors import ArgumentError
from Mirage_Libs.ImageEditingLib.image_editing_ops import (
    apply_blur,
    apply_brighten,
    apply_crop,
    apply_grayscale,
    apply_invert,
    apply_rotate,
)


class TestApplyBlur:
    """Tests for apply_blur function."""

    def test_keeps_size_and_mode(self, sample_rgb_image):
        result = apply_blur(sample_rgb_image, 2.0)

        assert result.size == sample_rgb_image.size
        assert result.mode == "RGB"

    def test_smooths_a_hard_edge(self):
        image = Image.new("L", (20, 1), 0)
        image.paste(255, (10, 0, 20, 1))

        result = apply_blur(image, 2.0)

        assert 0 < result.getpixel((9, 0)) < 255
        assert 0 < result.getpixel((10, 0)) < 255

    @pytest.mark.parametrize("sigma", [float("nan"), float("inf")])
    def test_invalid_sigma(self, sample_rgb_image, sigma):
        with pytest.raises(ArgumentError):
            apply_blur(sample_rgb_image, sigma)

    @pytest.mark.parametrize("sigma", [0, -3.5])
    def test_non_positive_sigma_blurs_with_one(self, sample_rgb_image, sigma):
        expected = apply_blur(sample_rgb_image, 1.0)

        assert apply_blur(sample_rgb_image, sigma).tobytes() == expected.tobytes()

    def test_large_sigma(self, sample_rgb_image):
        result = apply_blur(sample_rgb_image, 150)

        assert result.size == sample_rgb_image.size

    def test_rejects_non_image(self):
        with pytest.raises(TypeError):
            apply_blur("not_an_image", 2.0)


class TestApplyBrighten:
    """Tests for apply_brighten function."""

    def test_adds_delta(self):
        image = Image.new("RGB", (2, 2), (10, 20, 30))

        assert apply_brighten(image, 10).getpixel((0, 0)) == (20, 30, 40)

    def test_saturates_at_255(self):
        image = Image.new("RGB", (1, 1), (250, 100, 255))

        assert apply_brighten(image, 10).getpixel((0, 0)) == (255, 110, 255)

    def test_saturates_at_0(self):
        image = Image.new("RGB", (1, 1), (5, 100, 0))

        assert apply_brighten(image, -10).getpixel((0, 0)) == (0, 90, 0)

    def test_huge_delta_does_not_wrap(self):
        image = Image.new("RGB", (1, 1), (1, 2, 3))

        assert apply_brighten(image, 2 ** 31 - 1).getpixel((0, 0)) == (255, 255, 255)
        assert apply_brighten(image, -(2 ** 31)).getpixel((0, 0)) == (0, 0, 0)

    def test_alpha_untouched(self, sample_rgba_image):
        result = apply_brighten(sample_rgba_image, 40)
        before = np.array(sample_rgba_image)
        after = np.array(result)

        assert result.mode == "RGBA"
        assert np.array_equal(after[..., 3], before[..., 3])
        assert np.array_equal(after[..., :3], np.clip(before[..., :3].astype(int) + 40, 0, 255))

    def test_grayscale_image(self):
        image = Image.new("L", (2, 1), 200)

        result = apply_brighten(image, 100)

        assert result.mode == "L"
        assert result.getpixel((0, 0)) == 255

    def test_input_not_modified(self, sample_rgb_image):
        before = sample_rgb_image.tobytes()
        apply_brighten(sample_rgb_image, 50)

        assert sample_rgb_image.tobytes() == before


class TestApplyCrop:
    """Tests for apply_crop function."""

    def test_crop_inside_bounds(self, sample_rgb_image):
        result = apply_crop(sample_rgb_image, 1, 2, 4, 2)

        assert result.size == (4, 2)
        for y in range(2):
            for x in range(4):
                assert result.getpixel((x, y)) == sample_rgb_image.getpixel((x + 1, y + 2))

    def test_full_image_crop(self, sample_rgb_image):
        result = apply_crop(sample_rgb_image, 0, 0, 6, 4)

        assert result.tobytes() == sample_rgb_image.tobytes()

    @pytest.mark.parametrize("rect", [(0, 0, 7, 4), (0, 0, 6, 5), (5, 0, 2, 1), (0, 3, 1, 2), (6, 0, 1, 1)])
    def test_out_of_bounds_rejected(self, sample_rgb_image, rect):
        with pytest.raises(ArgumentError):
            apply_crop(sample_rgb_image, *rect)

    @pytest.mark.parametrize("rect", [(0, 0, 0, 2), (0, 0, 2, 0)])
    def test_empty_rect_rejected(self, sample_rgb_image, rect):
        with pytest.raises(ArgumentError):
            apply_crop(sample_rgb_image, *rect)


class TestApplyRotate:
    """Tests for apply_rotate function."""

    def test_rotate_90_is_clockwise(self, sample_rgb_image):
        result = apply_rotate(sample_rgb_image, 90)
        width, height = sample_rgb_image.size

        assert result.size == (height, width)
        # top-left of the source ends up at the top-right
        assert result.getpixel((height - 1, 0)) == sample_rgb_image.getpixel((0, 0))
        # bottom-left of the source ends up at the top-left
        assert result.getpixel((0, 0)) == sample_rgb_image.getpixel((0, height - 1))

    def test_rotate_180(self, sample_rgb_image):
        result = apply_rotate(sample_rgb_image, 180)

        assert result.size == sample_rgb_image.size
        assert result.getpixel((0, 0)) == sample_rgb_image.getpixel((5, 3))

    def test_rotate_270_undoes_90(self, sample_rgb_image):
        result = apply_rotate(apply_rotate(sample_rgb_image, 90), 270)

        assert result.tobytes() == sample_rgb_image.tobytes()

    def test_four_quarter_turns_are_identity(self, sample_rgba_image):
        result = sample_rgba_image
        for _ in range(4):
            result = apply_rotate(result, 90)

        assert result.tobytes() == sample_rgba_image.tobytes()

    @pytest.mark.parametrize("degrees", [0, 45, 360])
    def test_invalid_angle(self, sample_rgb_image, degrees):
        with pytest.raises(ArgumentError):
            apply_rotate(sample_rgb_image, degrees)


class TestApplyInvert:
    """Tests for apply_invert function."""

    def test_complements_channels(self):
        image = Image.new("RGB", (1, 1), (0, 100, 255))

        assert apply_invert(image).getpixel((0, 0)) == (255, 155, 0)

    def test_involution(self, sample_rgb_image):
        twice = apply_invert(apply_invert(sample_rgb_image))

        assert twice.tobytes() == sample_rgb_image.tobytes()

    def test_alpha_untouched(self, sample_rgba_image):
        result = apply_invert(sample_rgba_image)

        assert result.mode == "RGBA"
        assert result.getpixel((1, 1)) == (15, 250, 127, 55)

    def test_grayscale_image(self):
        image = Image.new("LA", (1, 1), (30, 200))

        assert apply_invert(image).getpixel((0, 0)) == (225, 200)


class TestApplyGrayscale:
    """Tests for apply_grayscale function."""

    def test_rgb_becomes_luma(self):
        image = Image.new("RGB", (1, 1), (255, 0, 0))

        result = apply_grayscale(image)

        assert result.mode == "L"
        # ITU-R 601-2: L = R * 299/1000 + G * 587/1000 + B * 114/1000
        assert result.getpixel((0, 0)) == 76

    def test_gray_input_unchanged(self):
        image = Image.new("RGB", (3, 3), (128, 128, 128))

        assert apply_grayscale(image).getpixel((1, 1)) == 128

    def test_alpha_kept(self, sample_rgba_image):
        result = apply_grayscale(sample_rgba_image)

        assert result.mode == "LA"
        assert result.getpixel((2, 0))[1] == sample_rgba_image.getpixel((2, 0))[3]

    def test_already_gray_copied(self):
        image = Image.new("L", (2, 2), 10)

        result = apply_grayscale(image)

        assert result is not image
        assert result.tobytes() == image.tobytes()
