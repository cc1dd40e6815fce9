"""Color filtering pipeline: region selection, threshold mask, recoloring."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

import numpy as np

from .compositor import composite
from .exceptions import InvalidImageError
from .models import (
    BLACK,
    Color,
    FilterConfig,
    FilterResult,
    PolicyMode,
    ThresholdBounds,
    parse_mode,
)
from .policies import compute_metrics, evaluate_mask
from .region import select_region

if TYPE_CHECKING:
    from .visualizer import DebugVisualizer

logger = logging.getLogger(__name__)


def validate_image(image: object) -> np.ndarray:
    """Check that image is a non-empty (H, W, 3) uint8 array.

    Raises:
        InvalidImageError: If the image is malformed or empty
    """
    if not isinstance(image, np.ndarray):
        raise InvalidImageError(f"expected numpy array, got {type(image).__name__}")
    if image.dtype != np.uint8:
        raise InvalidImageError(f"expected uint8, got {image.dtype}")
    if image.ndim != 3 or image.shape[2] != 3:
        raise InvalidImageError(f"expected shape (H, W, 3), got {image.shape}")
    if image.size == 0:
        raise InvalidImageError("image is empty")
    return image


def validate_bounds(
    bounds: Iterable[float] | ThresholdBounds, mode: object
) -> tuple[ThresholdBounds, PolicyMode]:
    """Check bounds and mode together.

    The bound count is checked first, then the mode, then whether the two
    agree.

    Returns:
        Tuple of (ThresholdBounds, PolicyMode)
    """
    parsed = ThresholdBounds.parse(bounds)
    policy = parse_mode(mode)
    parsed.check_mode(policy)
    return parsed, policy


def run_filter(
    image: np.ndarray,
    bounds: Iterable[float] | ThresholdBounds,
    config: FilterConfig | None = None,
    visualizer: DebugVisualizer | None = None,
) -> FilterResult:
    """Classify the pixels of an image and recolor the stopped ones.

    Args:
        image: RGB image as numpy array (H, W, 3) uint8
        bounds: Two or six bounds matching config.mode
        config: Crop extent, replacement color and policy (default: FilterConfig())
        visualizer: Optional debug visualizer to save intermediate images

    Returns:
        FilterResult with the stop mask and the output image

    Raises:
        ColorFilterError: If any input is invalid; nothing is computed in that case
    """
    if config is None:
        config = FilterConfig()

    validate_image(image)
    parsed_bounds, mode = validate_bounds(bounds, config.mode)
    config.validate()
    height, width = config.resolve_region(image.shape)

    # Step 1: Crop to the requested top-left region
    region = select_region(image, height, width)
    logger.debug("Region %dx%d of %dx%d image", height, width, image.shape[0], image.shape[1])
    if visualizer:
        visualizer.save_region(region)

    # Step 2: Evaluate the policy
    mask = evaluate_mask(region, mode, parsed_bounds)
    if visualizer:
        visualizer.save_metric_histograms(compute_metrics(region, mode), parsed_bounds, mode)
        visualizer.save_mask(region, mask)

    # Step 3: Recolor stopped pixels
    output = composite(region, mask, config.color)
    if visualizer:
        visualizer.save_output(output)

    result = FilterResult(
        mask=mask, output=output, mode=mode, bounds=parsed_bounds, color=config.color
    )
    logger.info(
        "Mode %d (%s): stopped %d of %d pixels (%.1f%%)",
        int(mode),
        mode.name.lower(),
        result.stopped_count,
        mask.size,
        result.stopped_fraction * 100,
    )
    return result


def filter_image(
    image: np.ndarray,
    bounds: Iterable[float] | ThresholdBounds,
    height: int | None = None,
    width: int | None = None,
    color: Color = BLACK,
    mode: int = 0,
    visualizer: DebugVisualizer | None = None,
) -> np.ndarray:
    """Filter an image pixelwise by color values.

    Stopped pixels are set to color (black by default); passed pixels are
    copied unchanged. The source image is not modified.

    Args:
        image: RGB image as numpy array (H, W, 3) uint8
        bounds: Six values for modes 0 and 1, two values for modes 2 and 3
            (e.g. [80, 256, 0, 112, 120, 200] for mode 0)
        height: Rows of the top-left region to filter (default: all)
        width: Columns of the top-left region to filter (default: all)
        color: RGB color for stopped pixels, 0-255 each
        mode: 0 channel range, 1 ratio range, 2 sum range, 3 spread range
        visualizer: Optional debug visualizer to save intermediate images

    Returns:
        Filtered (height, width, 3) uint8 image
    """
    config = FilterConfig(height=height, width=width, color=color, mode=mode)
    return run_filter(image, bounds, config, visualizer).output
