"""
Pytest configuration and shared fixtures for Mirage tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import pytest
from pathlib import Path

from PIL import Image


@pytest.fixture
def temp_output_dir(tmp_path):
    """
    Provide a temporary directory for output files.

    Args:
        tmp_path: Pytest's built-in temporary directory fixture

    Returns:
        Path object pointing to a temporary directory
    """
    return tmp_path


@pytest.fixture
def sample_rgb_image():
    """
    Provide a small RGB image where every pixel is distinct.

    Pixel (x, y) is (x * 20, y * 30, (x + y) * 10) on a 6x4 canvas, so
    rotations, crops and inversions can be checked pixel by pixel.
    """
    image = Image.new("RGB", (6, 4))
    pixels = image.load()
    for y in range(image.height):
        for x in range(image.width):
            pixels[x, y] = (x * 20, y * 30, (x + y) * 10)
    return image


@pytest.fixture
def sample_rgba_image():
    """Provide a 5x5 RGBA image with varying alpha."""
    image = Image.new("RGBA", (5, 5))
    pixels = image.load()
    for y in range(image.height):
        for x in range(image.width):
            pixels[x, y] = (250 - x * 10, y * 5, 128, 50 * x + 5)
    return image


@pytest.fixture
def sample_png(tmp_path, sample_rgb_image):
    """
    Write ``sample_rgb_image`` to a PNG file.

    Returns:
        Path to the PNG file
    """
    path = tmp_path / "sample.png"
    sample_rgb_image.save(path, format="PNG")
    return path
