"""Tests for recoloring stopped pixels."""

import numpy as np
import pytest

from color_filter.compositor import composite


@pytest.fixture
def mask():
    return np.array([[True, False, False], [False, True, False]])


class TestComposite:
    def test_black_path(self, swatch_image, mask):
        output = composite(swatch_image, mask)
        assert not output[mask].any()
        np.testing.assert_array_equal(output[~mask], swatch_image[~mask])

    def test_custom_color(self, swatch_image, mask):
        output = composite(swatch_image, mask, (255, 0, 128))
        assert (output[mask] == [255, 0, 128]).all()
        np.testing.assert_array_equal(output[~mask], swatch_image[~mask])

    def test_empty_mask_copies_region(self, swatch_image):
        output = composite(swatch_image, np.zeros((2, 3), dtype=bool), (1, 2, 3))
        np.testing.assert_array_equal(output, swatch_image)

    def test_read_only_region(self, swatch_image, mask):
        region = swatch_image[:, :]
        region.flags.writeable = False
        output = composite(region, mask, (5, 5, 5))
        assert output.flags.writeable
        assert output.dtype == np.uint8

    def test_region_not_modified(self, swatch_image, mask):
        original = swatch_image.copy()
        composite(swatch_image, mask, (5, 5, 5))
        np.testing.assert_array_equal(swatch_image, original)

    def test_mask_shape_mismatch(self, swatch_image):
        with pytest.raises(ValueError):
            composite(swatch_image, np.zeros((3, 2), dtype=bool))
