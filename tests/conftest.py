"""
Pytest configuration and shared fixtures for watermark remover tests.

This module provides shared image buffers and selections used across
multiple test modules.
"""

import numpy as np
import pytest

from WR_Libs.InpaintingLib.inpaint_models import SelectionRegion


@pytest.fixture
def white_with_black_square():
    """
    100x100 opaque white RGBA buffer with a black 20x20 square at (40, 40).
    
    Returns:
        uint8 array of shape (100, 100, 4)
    """
    buffer = np.full((100, 100, 4), 255, dtype=np.uint8)
    buffer[40:60, 40:60, :3] = 0
    return buffer


@pytest.fixture
def square_selection():
    """Selection covering the black square of white_with_black_square."""
    return SelectionRegion("sel-1", 40, 40, 20, 20)


@pytest.fixture
def red_blue_split():
    """
    60x40 RGBA buffer, red for x < 30 and blue for x >= 30.
    
    Returns:
        uint8 array of shape (40, 60, 4)
    """
    buffer = np.zeros((40, 60, 4), dtype=np.uint8)
    buffer[:, :30] = (255, 0, 0, 255)
    buffer[:, 30:] = (0, 0, 255, 255)
    return buffer


@pytest.fixture
def textured_buffer():
    """80x80 RGBA buffer with gradients and stripes, no flat areas."""
    ys, xs = np.mgrid[0:80, 0:80]
    buffer = np.zeros((80, 80, 4), dtype=np.uint8)
    buffer[..., 0] = (xs * 3) % 256
    buffer[..., 1] = (ys * 5) % 256
    buffer[..., 2] = ((xs // 4 + ys // 4) % 2) * 200
    buffer[..., 3] = 255
    return buffer
