# signed_distance_field/batch.py
from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray
from tqdm import tqdm

from .binary_grid import BinaryGrid
from .buffers import prepare_buffer
from .dtypes import DistanceMap, Precision, OFFSET_DTYPE
from .errors import DimensionMismatch
from .solver import DeadReckoningSolver


logger = logging.getLogger(__name__)


def compute_distance_fields(
    grids: Sequence[Union[BinaryGrid, ArrayLike]],
    precision: Union[Precision, str, None] = Precision.SINGLE,
    out: Optional[NDArray] = None,
    show_progress: bool = False,
) -> DistanceMap:
    """Signed distance fields of equally sized grids, stacked as (N, H, W).

    One working vector buffer is shared by all grids; only the stacked
    distances are allocated (or written into `out`).
    """
    grids = [g if isinstance(g, BinaryGrid) else BinaryGrid(g) for g in grids]
    if not grids:
        raise ValueError("At least one grid is required")

    precision = Precision.coerce(precision)
    H, W = grids[0].shape

    # Validate every grid and the destination before computing anything
    for i, grid in enumerate(grids):
        if grid.shape != (H, W):
            raise DimensionMismatch(f"grid {i}", (H, W), grid.shape)

    N = len(grids)
    stacked = prepare_buffer(out, (N, H, W), precision.dtype, "distance buffer")

    # Working state reused across grids
    offsets = np.empty((H, W, 2), dtype=OFFSET_DTYPE)

    logger.info("Computing %d distance fields (%dx%d, %s)", N, W, H, precision.name)

    iterator = range(N)
    if show_progress:
        iterator = tqdm(iterator, desc="distance fields")

    for i in iterator:
        DeadReckoningSolver.compute(
            grids[i],
            precision=precision,
            out=stacked[i],
            vector_out=offsets,
        )

    return stacked
