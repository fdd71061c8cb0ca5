"""
Gradient-aware reconstruction kernel.

Each pixel resolved by the band scheduler gets its colour from a weighted
average of KNOWN pixels within a fixed radius. The weight of a sample is the
product of:

- geometric weight: 1 / (d^2 + eps), closer samples count more
- level-set weight: 1 / (1 + 2 |T_sample - T_pixel|), samples on the same
  front count more
- directional weight: 0.5 + 0.5 |dir . perp(grad)|, samples along the local
  isophote count more, so edges carry straight through the hole

Functions:
    estimate_gradient: Unit intensity-gradient direction from KNOWN neighbours
    reconstruct_pixel: Paint one pixel from its KNOWN surroundings
    nearest_known_color: Colour of the closest KNOWN pixel
    fill_unreached: Fill pixels the front never reached
"""

from functools import lru_cache
from typing import Optional, Tuple

import numpy as np

from WR_Libs.constants import (
    COLOR_CHANNELS,
    DIRECTION_BASE_WEIGHT,
    GEOMETRIC_EPSILON,
    GRADIENT_EPSILON,
    GRADIENT_HALF_WINDOW,
    LEVEL_SET_FACTOR,
    NEUTRAL_GRAY,
    RECONSTRUCTION_RADIUS,
)
from WR_Libs.InpaintingLib.inpaint_models import PixelState


@lru_cache(maxsize=8)
def _offset_grid(radius: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """dx, dy and Euclidean length for every offset in a (2r+1)^2 square."""
    span = np.arange(-radius, radius + 1, dtype=np.float64)
    dy, dx = np.meshgrid(span, span, indexing="ij")
    length = np.sqrt(dx * dx + dy * dy)
    return dx, dy, length


def _round_half_up(values: np.ndarray) -> np.ndarray:
    # np.round rounds halves to even; 100.5 must become 101
    return np.floor(values + 0.5)


def _patch_bounds(x: int, y: int, radius: int, width: int, height: int):
    x0, x1 = max(0, x - radius), min(width, x + radius + 1)
    y0, y1 = max(0, y - radius), min(height, y + radius + 1)
    # Same region expressed in offset-grid coordinates
    grid = (
        slice(y0 - y + radius, y1 - y + radius),
        slice(x0 - x + radius, x1 - x + radius),
    )
    return (slice(y0, y1), slice(x0, x1)), grid


def _known_neighbours(flags: np.ndarray, x: int, y: int, radius: int):
    height, width = flags.shape
    image_slices, grid_slices = _patch_bounds(x, y, radius, width, height)
    known = flags[image_slices] == PixelState.KNOWN
    # The pixel being painted is already KNOWN; never sample it
    known[y - image_slices[0].start, x - image_slices[1].start] = False
    return image_slices, grid_slices, known


def estimate_gradient(
    pixels: np.ndarray,
    flags: np.ndarray,
    x: int,
    y: int,
    half_window: int = GRADIENT_HALF_WINDOW,
) -> Tuple[float, float]:
    """
    Estimate the local intensity gradient direction at (x, y).
    
    Accumulates intensity * offset over KNOWN pixels in the
    (2*half_window+1)^2 neighbourhood, where intensity is the mean of the
    colour channels, and normalises the result.
    
    Args:
        pixels: Window pixels, shape (h, w, channels)
        flags: PixelState per pixel, shape (h, w)
        x: Column of the pixel
        y: Row of the pixel
        half_window: Neighbourhood half size (2 gives 5x5)
        
    Returns:
        (gx, gy) of length just under 1, or (0, 0) with no KNOWN neighbours
    """
    image_slices, grid_slices, known = _known_neighbours(flags, x, y, half_window)
    dx, dy, _ = _offset_grid(half_window)

    count = int(known.sum())
    if count == 0:
        return 0.0, 0.0

    intensity = pixels[image_slices][..., :COLOR_CHANNELS].mean(axis=2)
    weighted = np.where(known, intensity, 0.0)
    grad_x = float((weighted * dx[grid_slices]).sum()) / count
    grad_y = float((weighted * dy[grid_slices]).sum()) / count

    magnitude = float(np.hypot(grad_x, grad_y)) + GRADIENT_EPSILON
    return grad_x / magnitude, grad_y / magnitude


def reconstruct_pixel(
    pixels: np.ndarray,
    flags: np.ndarray,
    distance: np.ndarray,
    x: int,
    y: int,
    radius: int = RECONSTRUCTION_RADIUS,
    channels: int = COLOR_CHANNELS,
) -> bool:
    """
    Paint pixel (x, y) from KNOWN pixels within `radius`.
    
    Only the first `channels` channels are written; with the default of 3
    the opacity channel is left as it was. Values are rounded so later
    pixels sample exactly what an 8-bit buffer would hold.
    
    Args:
        pixels: Window pixels as floats, shape (h, w, c), modified in place
        flags: PixelState per pixel, shape (h, w)
        distance: Distance field, shape (h, w)
        x: Column of the pixel
        y: Row of the pixel
        radius: Sampling radius in pixels
        channels: Number of leading channels to reconstruct
        
    Returns:
        True if the pixel was painted, False if no sample carried weight
    """
    grad_x, grad_y = estimate_gradient(pixels, flags, x, y)
    image_slices, grid_slices, known = _known_neighbours(flags, x, y, radius)
    dx, dy, length = (grid[grid_slices] for grid in _offset_grid(radius))

    usable = known & (length <= radius)
    if not usable.any():
        return False

    safe_length = np.where(length > 0, length, 1.0)
    geometric = 1.0 / (length * length + GEOMETRIC_EPSILON)
    level_set = 1.0 / (
        1.0 + LEVEL_SET_FACTOR * np.abs(distance[image_slices] - distance[y, x])
    )
    # Alignment with the isophote, perpendicular to the gradient
    alignment = np.abs((dx / safe_length) * -grad_y + (dy / safe_length) * grad_x)
    directional = DIRECTION_BASE_WEIGHT + (1.0 - DIRECTION_BASE_WEIGHT) * alignment

    weights = np.where(usable, geometric * level_set * directional, 0.0)
    total = float(weights.sum())
    if total <= 0.0:
        return False

    samples = pixels[image_slices][..., :channels]
    color = (samples * weights[..., None]).sum(axis=(0, 1)) / total
    pixels[y, x, :channels] = _round_half_up(color)
    return True


def nearest_known_color(
    pixels: np.ndarray,
    flags: np.ndarray,
    x: int,
    y: int,
    channels: int = COLOR_CHANNELS,
) -> Optional[np.ndarray]:
    """
    Colour of the KNOWN pixel closest to (x, y), excluding (x, y) itself.
    
    Ties go to the first candidate in row-major order.
    
    Returns:
        Channel values, or None if the window holds no other KNOWN pixel
    """
    known = flags == PixelState.KNOWN
    known[y, x] = False
    candidates = np.argwhere(known)
    if len(candidates) == 0:
        return None

    squared = (candidates[:, 0] - y) ** 2 + (candidates[:, 1] - x) ** 2
    ny, nx = candidates[int(np.argmin(squared))]
    return pixels[ny, nx, :channels].copy()


def fill_unreached(
    pixels: np.ndarray,
    flags: np.ndarray,
    channels: int = COLOR_CHANNELS,
) -> int:
    """
    Fill every pixel that is still not KNOWN after marching.
    
    Such pixels have no path to the context, e.g. a selection covering the
    whole image. They receive the mean colour of the window's KNOWN pixels,
    or neutral gray when there are none, and are marked KNOWN.
    
    Returns:
        Number of pixels filled
    """
    unreached = flags != PixelState.KNOWN
    count = int(unreached.sum())
    if count == 0:
        return 0

    known = ~unreached
    if known.any():
        fill = _round_half_up(pixels[known][:, :channels].mean(axis=0))
    else:
        fill = np.full(channels, NEUTRAL_GRAY, dtype=np.float64)

    pixels[unreached, :channels] = fill
    flags[unreached] = PixelState.KNOWN
    return count
