# signed_distance_field/solver.py
"""Dead reckoning signed distance transform.

Based on G. J. Grevera, "The 'dead reckoning' signed distance transform"
(2004): boundary pixels are seeded with sub-pixel offsets, then two
raster passes propagate the nearest known boundary point from neighbour
to neighbour. Each pixel does constant work, so the whole transform is
O(W * H).
"""
from __future__ import annotations

import logging
import math
from typing import Optional, Tuple, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .binary_grid import BinaryGrid
from .buffers import prepare_buffer
from .dtypes import (
    BinaryMask,
    DistanceMap,
    OffsetField,
    Precision,
    OFFSET_DTYPE,
)
from .field import DistanceField, VectorField, sentinel_component


logger = logging.getLogger(__name__)


# Constants

# Level at which the 0/1 classification step is crossed
_CROSSING_LEVEL: float = 0.5

# 4-connected edge directions as (offset component, step): west, east, north, south.
# Order decides ties between equally close crossings.
_EDGE_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, -1), (0, 1), (1, -1), (1, 1))

# Neighbours (ox, oy) on the already finished row of each pass
_FORWARD_ROW_MASK: Tuple[Tuple[int, int], ...] = ((-1, -1), (0, -1), (1, -1))
_BACKWARD_ROW_MASK: Tuple[Tuple[int, int], ...] = ((1, 1), (0, 1), (-1, 1))


class DeadReckoningSolver:
    """Two-pass dead reckoning distance transform on a binary grid."""

    @staticmethod
    def _neighbour_level(level: NDArray[np.float64], component: int, step: int) -> NDArray[np.float64]:
        """Classification of the neighbour in one direction; NaN outside the grid."""
        neighbour = np.full_like(level, np.nan)
        if component == 0:
            if step < 0:
                neighbour[:, 1:] = level[:, :-1]
            else:
                neighbour[:, :-1] = level[:, 1:]
        else:
            if step < 0:
                neighbour[1:, :] = level[:-1, :]
            else:
                neighbour[:-1, :] = level[1:, :]
        return neighbour

    @classmethod
    def _seed_edges(
        cls,
        mask: BinaryMask,
        offsets: OffsetField,
    ) -> NDArray[np.float64]:
        """Seed boundary pixels with their sub-pixel crossing, everything else with the sentinel.

        Returns the working distance (length of each seeded vector).
        """
        H, W = mask.shape
        level = mask.astype(np.float64)

        offsets[...] = sentinel_component(W, H)
        seed_length = np.full((H, W), np.inf)

        for component, step in _EDGE_DIRECTIONS:
            neighbour = cls._neighbour_level(level, component, step)
            # Out-of-grid neighbours (NaN) never form an edge
            differs = np.isfinite(neighbour) & (neighbour != level)

            # Linear interpolation of the step between pixel and neighbour
            crossing = np.zeros_like(level)
            np.divide(
                _CROSSING_LEVEL - level,
                neighbour - level,
                out=crossing,
                where=differs,
            )

            closer = differs & (crossing < seed_length)
            offsets[closer] = 0.0
            offsets[..., component][closer] = step * crossing[closer]
            seed_length[closer] = crossing[closer]

        return np.hypot(offsets[..., 0], offsets[..., 1])

    @staticmethod
    def _relax_from_row(
        offsets: OffsetField,
        distances: NDArray[np.float64],
        y: int,
        row_mask: Tuple[Tuple[int, int], ...],
        sentinel_length: float,
    ) -> None:
        """Relax a whole row against neighbours on a finished row."""
        W = offsets.shape[1]
        for ox, oy in row_mask:
            ny = y + oy
            # Pixel columns and their neighbour columns for this offset
            p = slice(max(0, -ox), W - max(0, ox))
            n = slice(max(0, ox), W - max(0, -ox))

            # Neighbour's boundary point seen from p: v_n + (n - p)
            candidate = offsets[ny, n] + (ox, oy)
            candidate_length = np.hypot(candidate[:, 0], candidate[:, 1])

            known = distances[ny, n] < sentinel_length
            better = known & (candidate_length < distances[y, p])

            offsets[y, p][better] = candidate[better]
            distances[y, p][better] = candidate_length[better]

    @staticmethod
    def _sweep_row(
        offsets: OffsetField,
        distances: NDArray[np.float64],
        y: int,
        step: int,
        sentinel_length: float,
    ) -> None:
        """Relax a row against its in-row neighbour, sweeping in `step` direction.

        Each pixel reads the neighbour already updated in this sweep, so
        the loop is inherently sequential.
        """
        row_dx = offsets[y, :, 0].tolist()
        row_dy = offsets[y, :, 1].tolist()
        row_d = distances[y].tolist()
        W = len(row_d)

        xs = range(1, W) if step > 0 else range(W - 2, -1, -1)
        for x in xs:
            prev = x - step
            if row_d[prev] >= sentinel_length:
                continue

            cx = row_dx[prev] - step
            cy = row_dy[prev]
            cd = math.hypot(cx, cy)
            if cd < row_d[x]:
                row_dx[x] = cx
                row_dy[x] = cy
                row_d[x] = cd

        offsets[y, :, 0] = row_dx
        offsets[y, :, 1] = row_dy
        distances[y] = row_d

    @classmethod
    def _forward_pass(
        cls,
        offsets: OffsetField,
        distances: NDArray[np.float64],
        sentinel_length: float,
    ) -> None:
        """Top-to-bottom, left-to-right; mask {NW, N, NE, W}."""
        H = offsets.shape[0]
        for y in range(H):
            if y > 0:
                cls._relax_from_row(offsets, distances, y, _FORWARD_ROW_MASK, sentinel_length)
            cls._sweep_row(offsets, distances, y, 1, sentinel_length)

    @classmethod
    def _backward_pass(
        cls,
        offsets: OffsetField,
        distances: NDArray[np.float64],
        sentinel_length: float,
    ) -> None:
        """Bottom-to-top, right-to-left; mask {SE, S, SW, E}."""
        H = offsets.shape[0]
        for y in range(H - 1, -1, -1):
            if y < H - 1:
                cls._relax_from_row(offsets, distances, y, _BACKWARD_ROW_MASK, sentinel_length)
            cls._sweep_row(offsets, distances, y, -1, sentinel_length)

    @staticmethod
    def _assign_signs(
        mask: BinaryMask,
        magnitudes: NDArray[np.float64],
        out: DistanceMap,
    ) -> None:
        """Inside pixels negative, outside pixels positive."""
        out[...] = np.where(mask, -magnitudes, magnitudes)

    @classmethod
    def compute(
        cls,
        grid: Union[BinaryGrid, ArrayLike],
        precision: Union[Precision, str, None] = Precision.SINGLE,
        out: Optional[NDArray] = None,
        vector_out: Optional[NDArray] = None,
    ) -> DistanceField:
        """Compute the signed distance field of a binary grid."""
        if not isinstance(grid, BinaryGrid):
            grid = BinaryGrid(grid)
        precision = Precision.coerce(precision)
        H, W = grid.shape

        # 1. Buffers (both validated before either is written)
        offsets = prepare_buffer(vector_out, (H, W, 2), OFFSET_DTYPE, "vector buffer")
        signed = prepare_buffer(out, (H, W), precision.dtype, "distance buffer")

        # 2. Edge seeding
        mask = grid.mask
        distances = cls._seed_edges(mask, offsets)
        component = sentinel_component(W, H)
        sentinel_length = float(np.hypot(component, component))

        num_seeds = int(np.count_nonzero(distances < sentinel_length))
        logger.debug("Seeded %d boundary pixels on %dx%d grid", num_seeds, W, H)
        if num_seeds == 0:
            logger.info(
                "Grid %dx%d has no boundary; every pixel keeps the sentinel distance %.3f",
                W, H, sentinel_length,
            )

        # 3. Propagation
        if num_seeds > 0:
            cls._forward_pass(offsets, distances, sentinel_length)
            cls._backward_pass(offsets, distances, sentinel_length)
            logger.debug("Propagated distances on %dx%d grid", W, H)

        # 4. Signs and storage precision
        cls._assign_signs(mask, distances, signed)

        return DistanceField(signed, VectorField(offsets), precision)


def compute_distance_field(
    grid: Union[BinaryGrid, ArrayLike],
    precision: Union[Precision, str, None] = Precision.SINGLE,
    out: Optional[NDArray] = None,
    vector_out: Optional[NDArray] = None,
) -> DistanceField:
    """Compute the signed distance field of `grid` stored with `precision`."""
    return DeadReckoningSolver.compute(grid, precision=precision, out=out, vector_out=vector_out)


def compute_f16_distance_field(
    grid: Union[BinaryGrid, ArrayLike],
    out: Optional[NDArray] = None,
    vector_out: Optional[NDArray] = None,
) -> DistanceField:
    """Half-precision storage: less memory, coarser far-field values."""
    return compute_distance_field(grid, Precision.HALF, out=out, vector_out=vector_out)


def compute_f32_distance_field(
    grid: Union[BinaryGrid, ArrayLike],
    out: Optional[NDArray] = None,
    vector_out: Optional[NDArray] = None,
) -> DistanceField:
    """Single-precision storage, the default policy."""
    return compute_distance_field(grid, Precision.SINGLE, out=out, vector_out=vector_out)
