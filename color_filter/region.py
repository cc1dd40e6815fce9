"""Top-left region selection applied before classification."""

from __future__ import annotations

import numbers

import numpy as np

from .exceptions import InvalidRegionError


def _check_extent(name: str, value: object, limit: int) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidRegionError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidRegionError(f"{name}={value} must be at least 1")
    if value > limit:
        raise InvalidRegionError(f"{name}={value} exceeds image {name} {limit}")
    return int(value)


def resolve_extent(
    shape: tuple[int, ...],
    height: int | None = None,
    width: int | None = None,
) -> tuple[int, int]:
    """Resolve the requested crop extent against an image shape.

    Omitted extents default to the image's own. Requests larger than the
    image are rejected rather than clamped.

    Args:
        shape: Image shape, (rows, columns, ...)
        height: Requested number of rows, or None for all
        width: Requested number of columns, or None for all

    Returns:
        Tuple of (height, width)

    Raises:
        InvalidRegionError: If an extent is not a positive integer or exceeds the image
    """
    img_h, img_w = shape[:2]
    h = img_h if height is None else _check_extent("height", height, img_h)
    w = img_w if width is None else _check_extent("width", width, img_w)
    return h, w


def select_region(
    image: np.ndarray,
    height: int | None = None,
    width: int | None = None,
) -> np.ndarray:
    """Return the top-left height x width block of an image.

    The result is a read-only view, so the rest of the pipeline cannot write
    through to the source image.

    Args:
        image: Input image as numpy array (H, W, 3)
        height: Number of rows to keep (default: all)
        width: Number of columns to keep (default: all)

    Returns:
        Read-only view of image[:height, :width]
    """
    h, w = resolve_extent(image.shape, height, width)
    region = image[:h, :w]
    region.flags.writeable = False
    return region
