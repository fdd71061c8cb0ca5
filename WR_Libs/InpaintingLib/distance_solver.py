"""
Upwind Eikonal update used by the fast marching front.

Functions:
    eikonal_update: Solve the 2D upwind update from four neighbour distances
    solve_eikonal: Same update, reading neighbours from a distance field
"""

import math

import numpy as np

from WR_Libs.constants import DISTANCE_SENTINEL


def eikonal_update(left: float, right: float, up: float, down: float) -> float:
    """
    Estimate a pixel's distance from its four axis-aligned neighbours.
    
    Uses the smaller neighbour on each axis. When the two axis values differ
    by one or more the front arrives along a single axis; otherwise the
    quadratic two-axis solution is taken.
    
    Args:
        left, right, up, down: Neighbour distances (sentinel for unknown)
        
    Returns:
        New distance estimate
    """
    min_h = min(left, right)
    min_v = min(up, down)
    delta = min_h - min_v

    if abs(delta) >= 1.0:
        return min(min_h, min_v) + 1.0

    return (min_h + min_v + math.sqrt(max(0.0, 2.0 - delta * delta))) / 2.0


def solve_eikonal(distance: np.ndarray, x: int, y: int) -> float:
    """
    Apply eikonal_update at (x, y) of a distance field.
    
    Neighbours outside the field count as the sentinel distance.
    
    Args:
        distance: 2D array of shape (height, width)
        x: Column of the pixel
        y: Row of the pixel
        
    Returns:
        New distance estimate for (x, y)
    """
    height, width = distance.shape
    left = float(distance[y, x - 1]) if x > 0 else DISTANCE_SENTINEL
    right = float(distance[y, x + 1]) if x < width - 1 else DISTANCE_SENTINEL
    up = float(distance[y - 1, x]) if y > 0 else DISTANCE_SENTINEL
    down = float(distance[y + 1, x]) if y < height - 1 else DISTANCE_SENTINEL
    return eikonal_update(left, right, up, down)
