# signed_distance_field/field.py
from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .dtypes import (
    DistanceMap,
    GrayMap,
    NormalizedMap,
    OffsetField,
    Precision,
)
from .normalization import (
    normalize_clamped_distances,
    normalize_distances,
    to_gray_u8,
)


def sentinel_component(width: int, height: int) -> float:
    """Offset component of the "unknown" vector; its length exceeds any reachable distance."""
    return float(width + height)


class VectorField:
    """Per-pixel offsets (dx, dy) to the nearest known boundary point.

    The boundary point of pixel (x, y) is (x + dx, y + dy). Pixels that
    never received boundary information hold the sentinel vector
    (W + H, W + H).
    """

    def __init__(self, offsets: OffsetField) -> None:
        if offsets.ndim != 3 or offsets.shape[2] != 2:
            raise ValueError(f"Offsets must have shape (H, W, 2), got {offsets.shape}")
        self._offsets = offsets

    @property
    def offsets(self) -> OffsetField:
        return self._offsets

    @property
    def width(self) -> int:
        return self._offsets.shape[1]

    @property
    def height(self) -> int:
        return self._offsets.shape[0]

    @property
    def dx(self) -> NDArray[np.float64]:
        return self._offsets[..., 0]

    @property
    def dy(self) -> NDArray[np.float64]:
        return self._offsets[..., 1]

    @property
    def sentinel_length(self) -> float:
        component = sentinel_component(self.width, self.height)
        return float(np.hypot(component, component))

    def get(self, x: int, y: int) -> Tuple[float, float]:
        dx, dy = self._offsets[y, x]
        return float(dx), float(dy)

    def magnitudes(self) -> NDArray[np.float64]:
        """Unsigned distance to the nearest known boundary point."""
        return np.hypot(self.dx, self.dy)

    def is_known(self) -> NDArray[np.bool_]:
        """Mask of pixels that received a boundary estimate."""
        return self.magnitudes() < self.sentinel_length

    def targets(self) -> NDArray[np.float64]:
        """Absolute (x, y) position of each pixel's nearest boundary point. Shape: (H, W, 2)."""
        ys, xs = np.mgrid[0:self.height, 0:self.width]
        return self._offsets + np.stack([xs, ys], axis=-1)

    def read_only(self) -> "VectorField":
        view = self._offsets.view()
        view.flags.writeable = False
        return VectorField(view)

    def __repr__(self) -> str:
        return f"VectorField(width={self.width}, height={self.height})"


class NormalizedField:
    """Distances remapped into [0, 1]. Not further propagatable."""

    def __init__(self, values: NormalizedMap) -> None:
        self.values = values

    @property
    def width(self) -> int:
        return self.values.shape[1]

    @property
    def height(self) -> int:
        return self.values.shape[0]

    def to_gray_u8(self, out: Optional[NDArray] = None) -> GrayMap:
        """8-bit grayscale rendering, ready for an imaging library to encode."""
        return to_gray_u8(self.values, out=out)

    def __repr__(self) -> str:
        return f"NormalizedField(width={self.width}, height={self.height})"


class DistanceField:
    """Signed distances (negative inside, positive outside) with their vector field."""

    def __init__(
        self,
        distances: DistanceMap,
        vectors: VectorField,
        precision: Precision,
    ) -> None:
        if distances.dtype != precision.dtype:
            raise ValueError(
                f"Distances dtype {distances.dtype} does not match precision {precision.name}"
            )
        self.distances = distances
        self.precision = precision
        self._vectors = vectors

    @property
    def width(self) -> int:
        return self.distances.shape[1]

    @property
    def height(self) -> int:
        return self.distances.shape[0]

    def get_distance(self, x: int, y: int) -> float:
        return float(self.distances[y, x])

    def vector_field(self) -> VectorField:
        """Read-only view of the nearest-boundary offsets."""
        return self._vectors.read_only()

    def inside_mask(self) -> NDArray[np.bool_]:
        """Classification reconstructed from the distance sign."""
        return self.distances < 0

    def normalize_distances(self, out: Optional[NDArray] = None) -> NormalizedField:
        """Map the field's minimum to 0.0 and maximum to 1.0."""
        return NormalizedField(normalize_distances(self.distances, out=out))

    def normalize_clamped_distances(
        self,
        low: float,
        high: float,
        out: Optional[NDArray] = None,
    ) -> NormalizedField:
        """Map `low` to 0.0 and `high` to 1.0, clamping everything outside."""
        return NormalizedField(normalize_clamped_distances(self.distances, low, high, out=out))

    def __repr__(self) -> str:
        return (
            f"DistanceField(width={self.width}, height={self.height}, "
            f"precision={self.precision.name})"
        )
