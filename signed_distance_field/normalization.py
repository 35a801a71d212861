# signed_distance_field/normalization.py
from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .buffers import prepare_buffer
from .dtypes import (
    DistanceMap,
    GrayMap,
    NormalizedMap,
    GRAY_DTYPE,
    NORMALIZED_DTYPE,
)
from .errors import InvalidRange


# Constants
_CONSTANT_FIELD_VALUE: float = 0.5  # Value assigned everywhere when min == max
_GRAY_MAX: int = 255


def normalize_distances(
    distances: DistanceMap,
    out: Optional[NDArray] = None,
) -> NormalizedMap:
    """Linearly remap [min, max] of `distances` onto [0, 1]."""
    distances = np.asarray(distances)
    result = prepare_buffer(out, distances.shape, NORMALIZED_DTYPE, "normalized buffer")

    # float64 keeps the endpoints exact: (max - min) / (max - min) == 1.0
    values = distances.astype(np.float64)
    low = float(values.min())
    high = float(values.max())

    if high == low:
        result[...] = _CONSTANT_FIELD_VALUE
        return result

    result[...] = (values - low) / (high - low)
    return result


def normalize_clamped_distances(
    distances: DistanceMap,
    low: float,
    high: float,
    out: Optional[NDArray] = None,
) -> NormalizedMap:
    """Map [low, high] onto [0, 1], clamping values outside the range."""
    distances = np.asarray(distances)
    low = float(low)
    high = float(high)
    # Also rejects NaN and infinite bounds
    if not (np.isfinite(low) and np.isfinite(high) and low < high):
        raise InvalidRange(low, high)

    result = prepare_buffer(out, distances.shape, NORMALIZED_DTYPE, "normalized buffer")

    values = (distances.astype(np.float64) - low) / (high - low)
    result[...] = np.clip(values, 0.0, 1.0)
    return result


def to_gray_u8(
    normalized: NormalizedMap,
    out: Optional[NDArray] = None,
) -> GrayMap:
    """Convert [0, 1] values to an 8-bit grayscale array."""
    result = prepare_buffer(out, normalized.shape, GRAY_DTYPE, "gray buffer")
    scaled = np.clip(normalized.astype(np.float64), 0.0, 1.0) * _GRAY_MAX
    result[...] = np.rint(scaled).astype(GRAY_DTYPE)
    return result
