"""Threshold policies that decide which pixels are stopped."""

from __future__ import annotations

import numpy as np

from .models import PolicyMode, ThresholdBounds


def channel_values(region: np.ndarray) -> list[np.ndarray]:
    """Return the red, green and blue planes of an RGB region."""
    return [region[:, :, 0], region[:, :, 1], region[:, :, 2]]


def channel_ratios(region: np.ndarray) -> list[np.ndarray]:
    """Return the R/G, G/B and B/R ratio planes.

    Channels are normalized to 0.0-1.0 before dividing. A zero denominator
    gives +inf for a non-zero numerator and NaN for 0/0.
    """
    normalized = region.astype(np.float64) / 255.0
    red, green, blue = normalized[:, :, 0], normalized[:, :, 1], normalized[:, :, 2]
    with np.errstate(divide="ignore", invalid="ignore"):
        return [red / green, green / blue, blue / red]


def channel_sum(region: np.ndarray) -> list[np.ndarray]:
    """Return the per-pixel R+G+B plane (0-765)."""
    return [region.sum(axis=2, dtype=np.int32)]


def channel_spread(region: np.ndarray) -> list[np.ndarray]:
    """Return the per-pixel 2/3 * (max - min) plane (0-170)."""
    spread = region.max(axis=2).astype(np.float64) - region.min(axis=2)
    return [(2 / 3) * spread]


_METRIC_FUNCTIONS = {
    PolicyMode.RAW: channel_values,
    PolicyMode.RATIO: channel_ratios,
    PolicyMode.SUM: channel_sum,
    PolicyMode.SPREAD: channel_spread,
}


def compute_metrics(region: np.ndarray, mode: PolicyMode) -> dict[str, np.ndarray]:
    """Compute the metric planes a policy compares against its bounds.

    Args:
        region: RGB image region (H, W, 3) uint8
        mode: Policy whose metrics to compute

    Returns:
        Dictionary mapping metric name to (H, W) array, in bound-pair order
    """
    planes = _METRIC_FUNCTIONS[mode](region)
    return dict(zip(mode.metric_names, planes))


def outside_range(metric: np.ndarray, lower: float, upper: float) -> np.ndarray:
    """Mark values strictly below lower or strictly above upper."""
    return (metric < lower) | (metric > upper)


def _stopped_by_any(metrics: list[np.ndarray], bounds: ThresholdBounds) -> np.ndarray:
    stopped = np.zeros(metrics[0].shape, dtype=bool)
    for metric, (lower, upper) in zip(metrics, bounds.pairs):
        stopped |= outside_range(metric, lower, upper)
    return stopped


def apply_raw_range(region: np.ndarray, bounds: ThresholdBounds) -> np.ndarray:
    """Stop pixels with any channel outside its range.

    Args:
        region: RGB image region (H, W, 3) uint8
        bounds: Six values, lower/upper for red, green and blue (0-256)

    Returns:
        Boolean mask, True where the pixel is stopped
    """
    return _stopped_by_any(channel_values(region), bounds)


def apply_ratio_range(region: np.ndarray, bounds: ThresholdBounds) -> np.ndarray:
    """Stop pixels with any channel ratio outside its range.

    A ratio with a zero denominator is +inf and stops the pixel unless its
    upper bound is inf. An undefined 0/0 ratio always stops the pixel.

    Args:
        region: RGB image region (H, W, 3) uint8
        bounds: Six values, lower/upper for R/G, G/B and B/R (0-inf)

    Returns:
        Boolean mask, True where the pixel is stopped
    """
    ratios = channel_ratios(region)
    stopped = _stopped_by_any(ratios, bounds)
    for ratio in ratios:
        stopped |= np.isnan(ratio)
    return stopped


def apply_sum_range(region: np.ndarray, bounds: ThresholdBounds) -> np.ndarray:
    """Stop pixels whose channel sum is outside the range.

    Args:
        region: RGB image region (H, W, 3) uint8
        bounds: Two values, lower/upper for R+G+B (0-766)

    Returns:
        Boolean mask, True where the pixel is stopped
    """
    return _stopped_by_any(channel_sum(region), bounds)


def apply_spread_range(region: np.ndarray, bounds: ThresholdBounds) -> np.ndarray:
    """Stop pixels whose channel spread is outside the range.

    The spread is 2/3 of the difference between the largest and smallest
    channel, so near-grey pixels score low.

    Args:
        region: RGB image region (H, W, 3) uint8
        bounds: Two values, lower/upper for the spread (0-170)

    Returns:
        Boolean mask, True where the pixel is stopped
    """
    return _stopped_by_any(channel_spread(region), bounds)


# Mapping from PolicyMode enum to policy function
_POLICY_FUNCTIONS = {
    PolicyMode.RAW: apply_raw_range,
    PolicyMode.RATIO: apply_ratio_range,
    PolicyMode.SUM: apply_sum_range,
    PolicyMode.SPREAD: apply_spread_range,
}


def evaluate_mask(
    region: np.ndarray, mode: PolicyMode, bounds: ThresholdBounds
) -> np.ndarray:
    """Apply the specified threshold policy.

    Args:
        region: RGB image region (H, W, 3) uint8
        mode: Which policy to use
        bounds: Bounds matching the policy's bound count

    Returns:
        Boolean mask (H, W), True where the pixel is stopped
    """
    bounds.check_mode(mode)
    policy_fn = _POLICY_FUNCTIONS[mode]
    return policy_fn(region, bounds)


def evaluate_all_masks(
    region: np.ndarray, bounds: ThresholdBounds
) -> dict[str, np.ndarray]:
    """Apply every policy that accepts the given bounds.

    Args:
        region: RGB image region (H, W, 3) uint8
        bounds: Two or six bounds

    Returns:
        Dictionary mapping lower-case policy name to mask
    """
    results = {}
    for mode in PolicyMode:
        if mode.bound_count == len(bounds):
            results[mode.name.lower()] = evaluate_mask(region, mode, bounds)
    return results
