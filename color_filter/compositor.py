"""Recoloring of stopped pixels."""

from __future__ import annotations

import numpy as np

from .models import BLACK, Color


def composite(
    region: np.ndarray, mask: np.ndarray, color: Color = BLACK
) -> np.ndarray:
    """Build the output image from a region and its stop mask.

    Args:
        region: RGB image region (H, W, 3) uint8
        mask: Boolean (H, W) array, True where the pixel is stopped
        color: RGB color given to stopped pixels

    Returns:
        New uint8 image; stopped pixels set to color, the rest copied unchanged
    """
    if mask.shape != region.shape[:2]:
        raise ValueError(
            f"Mask shape {mask.shape} does not match region shape {region.shape[:2]}"
        )

    output = region.copy()
    if tuple(color) == BLACK:
        output[mask] = 0
    else:
        output[mask] = np.asarray(color, dtype=np.uint8)
    return output
