# signed_distance_field/buffers.py
from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .errors import DimensionMismatch, PrecisionMismatch


def check_buffer(
    out: NDArray,
    shape: Tuple[int, ...],
    dtype: np.dtype,
    name: str,
) -> None:
    """Validate a caller-supplied destination buffer without touching it."""
    if not isinstance(out, np.ndarray):
        raise TypeError(f"{name} must be a numpy array, got {type(out).__name__}")

    expected = int(np.prod(shape))
    if out.size != expected:
        raise DimensionMismatch(name, expected, int(out.size))

    if out.dtype != dtype:
        raise PrecisionMismatch(f"{name} has dtype {out.dtype}, expected {dtype}")

    # Reshaping must yield a view, otherwise writes would land in a copy
    if not out.flags.c_contiguous:
        raise ValueError(f"{name} must be C-contiguous")
    if not out.flags.writeable:
        raise ValueError(f"{name} is read-only")


def prepare_buffer(
    out: Optional[NDArray],
    shape: Tuple[int, ...],
    dtype: np.dtype,
    name: str,
) -> NDArray:
    """Return a fresh array, or a view of `out` with the requested shape."""
    if out is None:
        return np.empty(shape, dtype=dtype)

    check_buffer(out, shape, dtype, name)
    return out.reshape(shape)
