# signed_distance_field/validation.py
"""Accuracy checks of an approximate distance field against an exact reference."""
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from .binary_grid import BinaryGrid
from .field import DistanceField


# Boundary sits halfway between a pixel and its differing neighbour
_HALF_PIXEL: float = 0.5


def reference_distance_field(grid: BinaryGrid) -> NDArray[np.float64]:
    """Exact signed distance to the half-pixel boundary, via an exact Euclidean transform.

    Pixels of a single-class grid have no boundary and get +inf (outside)
    or -inf (inside).
    """
    mask = grid.mask
    if mask.all() or not mask.any():
        return np.where(mask, -np.inf, np.inf)

    # Distance from each pixel to the nearest pixel of the opposite class
    outside = ndimage.distance_transform_edt(~mask)
    inside = ndimage.distance_transform_edt(mask)

    return np.where(mask, -(inside - _HALF_PIXEL), outside - _HALF_PIXEL)


def mean_absolute_error(field: DistanceField, reference: NDArray) -> float:
    """Average absolute difference per pixel."""
    distances = field.distances.astype(np.float64)
    if distances.shape != reference.shape:
        raise ValueError(
            f"Shape mismatch: field {distances.shape} vs reference {reference.shape}"
        )
    return float(np.mean(np.abs(distances - reference)))


def misclassified_fraction(grid: BinaryGrid, field: DistanceField) -> float:
    """Share of pixels whose distance sign disagrees with the grid."""
    if grid.shape != field.distances.shape:
        raise ValueError(
            f"Shape mismatch: grid {grid.shape} vs field {field.distances.shape}"
        )
    wrong = np.count_nonzero(field.inside_mask() != grid.mask)
    return wrong / grid.pixel_count
