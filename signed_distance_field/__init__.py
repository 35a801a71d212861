# signed_distance_field/__init__.py

from signed_distance_field.dtypes import (
    BinaryMask,
    OffsetField,
    DistanceMap,
    NormalizedMap,
    GrayMap,
    Precision,
)
from signed_distance_field.errors import (
    DistanceFieldError,
    DimensionMismatch,
    EmptyGrid,
    InvalidRange,
    PrecisionMismatch,
)
from signed_distance_field.binary_grid import BinaryGrid, DEFAULT_THRESHOLD
from signed_distance_field.field import VectorField, DistanceField, NormalizedField
from signed_distance_field.solver import (
    DeadReckoningSolver,
    compute_distance_field,
    compute_f16_distance_field,
    compute_f32_distance_field,
)
from signed_distance_field.normalization import (
    normalize_distances,
    normalize_clamped_distances,
    to_gray_u8,
)
from signed_distance_field.batch import compute_distance_fields
from signed_distance_field.validation import (
    reference_distance_field,
    mean_absolute_error,
    misclassified_fraction,
)


__version__ = "0.6.3"

__all__ = [
    # Type aliases
    "BinaryMask",
    "OffsetField",
    "DistanceMap",
    "NormalizedMap",
    "GrayMap",
    # Storage policy
    "Precision",
    # Errors
    "DistanceFieldError",
    "DimensionMismatch",
    "EmptyGrid",
    "InvalidRange",
    "PrecisionMismatch",
    # Data containers
    "BinaryGrid",
    "DEFAULT_THRESHOLD",
    "VectorField",
    "DistanceField",
    "NormalizedField",
    # Main solver
    "DeadReckoningSolver",
    "compute_distance_field",
    "compute_f16_distance_field",
    "compute_f32_distance_field",
    "compute_distance_fields",
    # Normalization
    "normalize_distances",
    "normalize_clamped_distances",
    "to_gray_u8",
    # Validation utilities
    "reference_distance_field",
    "mean_absolute_error",
    "misclassified_fraction",
]
