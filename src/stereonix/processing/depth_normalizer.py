"""
Robust normalization of raw model depth.

Percentile bounds come from a fixed-resolution histogram rather than a
sort: one linear pass, with quantization error of at most one bucket width.
"""

from __future__ import annotations

import numpy as np

from ..core.constants import ERROR_MESSAGES, HISTOGRAM_BUCKETS, PERCENTILE_HIGH, PERCENTILE_LOW
from ..core.exceptions import EmptyImage, InvalidConfiguration


def _check_percentiles(p_low: float, p_high: float) -> None:
    if not (0.0 <= p_low <= p_high <= 1.0):
        raise InvalidConfiguration(
            ERROR_MESSAGES["invalid_percentiles"].format(low=p_low, high=p_high)
        )


def find_percentiles_histogram(
    data: np.ndarray,
    p_low: float = PERCENTILE_LOW,
    p_high: float = PERCENTILE_HIGH,
    num_buckets: int = HISTOGRAM_BUCKETS,
) -> tuple[float, float]:
    """
    Approximate low/high percentiles with a histogram walk.

    Args:
        data: Depth values (any shape); non-finite values are ignored
        p_low: Lower percentile as a fraction (e.g. 0.02)
        p_high: Upper percentile as a fraction (e.g. 0.98)
        num_buckets: Histogram resolution

    Returns:
        Tuple of (low_value, high_value), each a bucket midpoint

    Raises:
        EmptyImage: If there are no finite values
        InvalidConfiguration: If the percentile pair or bucket count is invalid
    """
    _check_percentiles(p_low, p_high)
    if num_buckets <= 0:
        raise InvalidConfiguration(f"Histogram bucket count must be positive, got {num_buckets}")

    values = np.asarray(data, dtype=np.float64).ravel()
    values = values[np.isfinite(values)]
    count = values.size
    if count == 0:
        raise EmptyImage(ERROR_MESSAGES["empty_image"].format(width=0, height=0))

    min_val = float(values.min())
    max_val = float(values.max())
    value_range = (max_val - min_val) or 1.0
    bucket_size = value_range / num_buckets

    indices = np.floor((values - min_val) / bucket_size).astype(np.int64)
    np.clip(indices, 0, num_buckets - 1, out=indices)
    cumulative = np.cumsum(np.bincount(indices, minlength=num_buckets))

    low_target = int(np.floor(count * p_low))
    high_target = int(np.floor(count * p_high))

    # cumulative[-1] == count >= both targets, so searchsorted always lands in range
    low_bucket = int(np.searchsorted(cumulative, low_target, side="left"))
    high_bucket = int(np.searchsorted(cumulative, high_target, side="left"))

    low_value = min_val + (low_bucket + 0.5) * bucket_size
    high_value = min_val + (high_bucket + 0.5) * bucket_size
    return low_value, high_value


def normalize_depth(
    raw_depth: np.ndarray,
    p_low: float = PERCENTILE_LOW,
    p_high: float = PERCENTILE_HIGH,
    num_buckets: int = HISTOGRAM_BUCKETS,
) -> np.ndarray:
    """
    Clip raw depth to its percentile bounds and map it to 8-bit.

    The stored value is inverted (255 at the low bound, 0 at the high
    bound) so that brighter means nearer.

    Args:
        raw_depth: Cropped model output (H x W, float)
        p_low: Lower clipping percentile
        p_high: Upper clipping percentile
        num_buckets: Histogram resolution for the percentile estimate

    Returns:
        uint8 depth map of the same shape
    """
    raw = np.asarray(raw_depth, dtype=np.float64)
    if raw.size == 0:
        height, width = (raw.shape + (0, 0))[:2]
        raise EmptyImage(ERROR_MESSAGES["empty_image"].format(width=width, height=height))

    low_value, high_value = find_percentiles_histogram(raw, p_low, p_high, num_buckets)
    value_range = (high_value - low_value) or 1.0

    normalized = (raw - low_value) * (1.0 / value_range)
    normalized = np.nan_to_num(normalized, nan=0.0, posinf=1.0, neginf=0.0)
    np.clip(normalized, 0.0, 1.0, out=normalized)

    return np.floor((1.0 - normalized) * 255.0).astype(np.uint8)
