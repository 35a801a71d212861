# -*- coding: utf-8 -*-
"""Tests for normalization, clamping and the 8-bit output adapter."""

import numpy as np
import pytest

from signed_distance_field import (
    BinaryGrid,
    DimensionMismatch,
    InvalidRange,
    compute_distance_field,
    normalize_clamped_distances,
    normalize_distances,
    to_gray_u8,
)


def test_normalize_maps_extremes_exactly(rectangle_grid):
    field = compute_distance_field(rectangle_grid)
    normalized = field.normalize_distances().values

    assert normalized.dtype == np.float32
    assert normalized.min() == 0.0
    assert normalized.max() == 1.0
    assert normalized.flat[np.argmin(field.distances)] == 0.0
    assert normalized.flat[np.argmax(field.distances)] == 1.0


def test_normalize_is_linear():
    distances = np.array([[-2.0, 0.0, 2.0, 6.0]], dtype=np.float32)
    np.testing.assert_allclose(normalize_distances(distances), [[0.0, 0.25, 0.5, 1.0]])


@pytest.mark.parametrize("value", [False, True])
def test_constant_field_normalizes_to_half(value):
    field = compute_distance_field(BinaryGrid(np.full((4, 7), value)))
    normalized = field.normalize_distances().values

    np.testing.assert_array_equal(normalized, np.full((4, 7), 0.5, dtype=np.float32))


def test_clamped_mapping():
    distances = np.array([[-3.0, -2.0, -1.0, 0.0, 1.0, 2.0, 3.0]])
    result = normalize_clamped_distances(distances, -2.0, 2.0)

    np.testing.assert_allclose(result, [[0.0, 0.0, 0.25, 0.5, 0.75, 1.0, 1.0]])
    assert result[0, 3] == 0.5


def test_clamped_distances_on_field(single_pixel_grid):
    field = compute_distance_field(single_pixel_grid)
    normalized = field.normalize_clamped_distances(-1.0, 1.0).values

    assert normalized[2, 2] == pytest.approx(0.25)
    assert normalized[2, 1] == pytest.approx(0.75)
    assert normalized[0, 0] == 1.0


@pytest.mark.parametrize("low, high", [(1.0, 1.0), (2.0, -2.0), (float("nan"), 1.0)])
def test_invalid_range_produces_no_output(single_pixel_grid, low, high):
    field = compute_distance_field(single_pixel_grid)
    out = np.full((5, 5), 7.0, dtype=np.float32)

    with pytest.raises(InvalidRange):
        field.normalize_clamped_distances(low, high, out=out)
    assert np.all(out == 7.0)


def test_invalid_range_is_a_value_error():
    with pytest.raises(ValueError):
        normalize_clamped_distances(np.zeros((2, 2)), 0.0, 0.0)


def test_normalized_buffer_is_written_in_place(single_pixel_grid):
    field = compute_distance_field(single_pixel_grid)
    out = np.empty(25, dtype=np.float32)

    normalized = field.normalize_distances(out=out)
    assert np.shares_memory(normalized.values, out)
    assert out.max() == 1.0


def test_wrong_size_normalized_buffer_is_untouched(single_pixel_grid):
    field = compute_distance_field(single_pixel_grid)
    out = np.full(30, 7.0, dtype=np.float32)

    with pytest.raises(DimensionMismatch):
        field.normalize_distances(out=out)
    with pytest.raises(DimensionMismatch):
        field.normalize_clamped_distances(-1.0, 1.0, out=out)
    assert np.all(out == 7.0)


def test_gray_conversion():
    normalized = np.array([[0.0, 0.5, 1.0]], dtype=np.float32)
    gray = to_gray_u8(normalized)

    assert gray.dtype == np.uint8
    np.testing.assert_array_equal(gray, [[0, 128, 255]])


def test_gray_conversion_from_field(rectangle_grid):
    field = compute_distance_field(rectangle_grid)
    out = np.zeros((48, 64), dtype=np.uint8)

    gray = field.normalize_distances().to_gray_u8(out=out)
    assert np.shares_memory(gray, out)
    assert gray.min() == 0
    assert gray.max() == 255


@pytest.mark.parametrize(
    "low, high",
    [(float("-inf"), 1.0), (-1.0, float("inf")), (float("-inf"), float("inf"))],
)
def test_infinite_range_is_rejected(low, high):
    out = np.full((1, 3), 7.0, dtype=np.float32)

    with pytest.raises(InvalidRange):
        normalize_clamped_distances(np.array([[-1.0, 0.0, 5.0]]), low, high, out=out)
    assert np.all(out == 7.0)


def test_wrong_size_gray_buffer_is_untouched(rectangle_grid):
    normalized = compute_distance_field(rectangle_grid).normalize_distances()
    out = np.full(48 * 64 - 1, 7, dtype=np.uint8)

    with pytest.raises(DimensionMismatch):
        normalized.to_gray_u8(out=out)
    assert np.all(out == 7)
