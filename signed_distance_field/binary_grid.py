# signed_distance_field/binary_grid.py
from __future__ import annotations

from typing import Callable

import numpy as np
from numpy.typing import ArrayLike

from .dtypes import BinaryMask
from .errors import EmptyGrid


# A pixel must be brighter than this value to be inside the shape
DEFAULT_THRESHOLD: int = 127


class BinaryGrid:
    """Immutable inside/outside classification of a W x H pixel grid.

    Pixels are addressed as (x, y); the mask is stored row-major as
    ``mask[y, x]``.
    """

    __slots__ = ("_mask",)

    def __init__(self, mask: ArrayLike) -> None:
        mask = np.array(mask, dtype=bool)
        if mask.ndim != 2:
            raise ValueError(f"Binary grid must be 2D (H, W), got shape {mask.shape}")

        height, width = mask.shape
        if width == 0 or height == 0:
            raise EmptyGrid(f"Binary grid must not be empty, got {width}x{height}")

        mask.flags.writeable = False
        self._mask = mask

    @classmethod
    def from_grayscale(cls, image: ArrayLike, threshold: float = DEFAULT_THRESHOLD) -> "BinaryGrid":
        """Classify every pixel brighter than `threshold` as inside."""
        image = np.asarray(image)
        if image.ndim != 2:
            raise ValueError(f"Grayscale image must be 2D (H, W), got shape {image.shape}")
        return cls(image > threshold)

    @classmethod
    def from_function(
        cls,
        width: int,
        height: int,
        is_inside: Callable[[int, int], bool],
    ) -> "BinaryGrid":
        """Build a grid by evaluating ``is_inside(x, y)`` at every pixel."""
        mask = np.zeros((height, width), dtype=bool)
        for y in range(height):
            for x in range(width):
                mask[y, x] = bool(is_inside(x, y))
        return cls(mask)

    @property
    def mask(self) -> BinaryMask:
        """Read-only (H, W) boolean array."""
        return self._mask

    @property
    def width(self) -> int:
        return self._mask.shape[1]

    @property
    def height(self) -> int:
        return self._mask.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        return self._mask.shape

    @property
    def pixel_count(self) -> int:
        return self._mask.size

    def is_inside(self, x: int, y: int) -> bool:
        return bool(self._mask[y, x])

    def __invert__(self) -> "BinaryGrid":
        return BinaryGrid(~self._mask)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinaryGrid):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._mask, other._mask))

    __hash__ = None

    def __repr__(self) -> str:
        inside = int(np.count_nonzero(self._mask))
        return f"BinaryGrid(width={self.width}, height={self.height}, inside={inside})"
