# -*- coding: utf-8 -*-
"""Shared fixtures for the signed_distance_field test suite."""

import numpy as np
import pytest

from signed_distance_field import BinaryGrid


def make_disk(size, center, radius):
    """Grid with every pixel closer than `radius` to `center` inside."""
    ys, xs = np.mgrid[0:size, 0:size]
    cx, cy = center
    return BinaryGrid(np.hypot(xs - cx, ys - cy) < radius)


@pytest.fixture
def single_pixel_grid():
    """5x5 grid with only (2, 2) inside."""
    mask = np.zeros((5, 5), dtype=bool)
    mask[2, 2] = True
    return BinaryGrid(mask)


@pytest.fixture
def disk_grid():
    """Disk of radius 50 centred in a 161x161 canvas."""
    return make_disk(161, (80, 80), 50)


@pytest.fixture
def rectangle_grid():
    """Off-centre rectangle on a non-square canvas."""
    mask = np.zeros((48, 64), dtype=bool)
    mask[10:30, 20:51] = True
    return BinaryGrid(mask)
