# signed_distance_field/dtypes.py
from __future__ import annotations

from enum import Enum
from typing import TypeAlias, Union

import numpy as np
from numpy.typing import DTypeLike, NDArray


# Type Aliases
BinaryMask: TypeAlias = NDArray[np.bool_]
"""Binary classification grid. Shape: (H, W). Values: True=inside, False=outside."""

OffsetField: TypeAlias = NDArray[np.float64]
"""Per-pixel offset to the nearest boundary point. Shape: (H, W, 2). Last axis: (dx, dy)."""

DistanceMap: TypeAlias = NDArray[np.floating]
"""Signed distance field. Shape: (H, W). Negative inside, positive outside."""

NormalizedMap: TypeAlias = NDArray[np.float32]
"""Remapped distance field. Shape: (H, W). Values: [0, 1]."""

GrayMap: TypeAlias = NDArray[np.uint8]
"""8-bit grayscale rendering of a normalized field. Shape: (H, W)."""


# Working and output dtypes
OFFSET_DTYPE = np.dtype(np.float64)
NORMALIZED_DTYPE = np.dtype(np.float32)
GRAY_DTYPE = np.dtype(np.uint8)


class Precision(Enum):
    """Storage policy of a distance field.

    Only the dtype of the stored distances changes; propagation always
    runs on float64 offsets.
    """

    HALF = "float16"
    SINGLE = "float32"
    DOUBLE = "float64"

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.value)

    @classmethod
    def coerce(cls, value: Union["Precision", str, DTypeLike, None]) -> "Precision":
        """Resolve a Precision, a short name ("f16", "f32", "f64") or a numpy dtype.

        None selects the default, SINGLE.
        """
        if value is None:
            return cls.SINGLE
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.lower()
            if key in _PRECISION_ALIASES:
                return _PRECISION_ALIASES[key]
            if key.upper() in cls.__members__:
                return cls[key.upper()]
        try:
            dtype = np.dtype(value)
        except TypeError:
            raise ValueError(f"Unknown precision: {value!r}") from None
        for member in cls:
            if member.dtype == dtype:
                return member
        raise ValueError(
            f"Unsupported precision dtype: {dtype}. Must be float16, float32 or float64."
        )


_PRECISION_ALIASES = {
    "f16": Precision.HALF,
    "f32": Precision.SINGLE,
    "f64": Precision.DOUBLE,
}
