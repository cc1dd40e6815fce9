"""Shared fixtures for color filter tests."""

import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_image(rng):
    """10x10 RGB image with random channel values."""
    return rng.integers(0, 256, size=(10, 10, 3), dtype=np.uint8)


@pytest.fixture
def swatch_image():
    """2x3 RGB image with hand-picked pixels.

    Row 0: red-ish, dark grey, white
    Row 1: black, pure green, mid blue
    """
    return np.array(
        [
            [[200, 10, 10], [40, 40, 40], [255, 255, 255]],
            [[0, 0, 0], [0, 255, 0], [30, 60, 120]],
        ],
        dtype=np.uint8,
    )
