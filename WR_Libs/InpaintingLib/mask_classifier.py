"""
Mask classification for region inpainting.

Turns a selection rectangle into a padded working window whose pixels are
marked INSIDE (to be synthesized) or KNOWN (context), with a matching
distance field.
"""

import logging

import numpy as np

from WR_Libs.constants import CONTEXT_PADDING, DISTANCE_SENTINEL
from WR_Libs.InpaintingLib.inpaint_models import (
    ConfigError,
    InvalidSelectionError,
    PixelState,
    ResourceError,
    SelectionRegion,
    WorkingWindow,
)

logger = logging.getLogger(__name__)


def classify_window(
    region: SelectionRegion,
    image_width: int,
    image_height: int,
    padding: int = CONTEXT_PADDING,
) -> WorkingWindow:
    """
    Compute the padded window around a selection and classify its pixels.
    
    The window is the selection grown by `padding` on every side and clamped
    to the image. Pixels covered by the (clamped, unpadded) selection start
    INSIDE with the sentinel distance; all others start KNOWN at distance 0.
    
    Args:
        region: Selection in image pixel coordinates
        image_width: Width of the full image
        image_height: Height of the full image
        padding: Context margin in pixels (>= 0)
        
    Returns:
        WorkingWindow with flags and distance arrays
        
    Raises:
        ConfigError: If image dimensions or padding are invalid
        InvalidSelectionError: If the selection is empty after clamping
        ResourceError: If the window arrays cannot be allocated
    """
    if image_width <= 0 or image_height <= 0:
        raise ConfigError(
            f"image dimensions must be positive, got {image_width}x{image_height}"
        )

    if padding < 0:
        raise ConfigError(f"padding must be >= 0, got {padding}")

    hole = region.clamped(image_width, image_height)
    if hole is None:
        raise InvalidSelectionError(
            f"Selection '{region.id}' ({region.x}, {region.y}, "
            f"{region.width}x{region.height}) is empty or outside the "
            f"{image_width}x{image_height} image"
        )

    sx = max(0, hole.x - padding)
    sy = max(0, hole.y - padding)
    sw = min(image_width, hole.x + hole.width + padding) - sx
    sh = min(image_height, hole.y + hole.height + padding) - sy

    try:
        flags = np.full((sh, sw), PixelState.KNOWN, dtype=np.uint8)
        distance = np.zeros((sh, sw), dtype=np.float32)
    except MemoryError as e:
        raise ResourceError(f"Cannot allocate {sw}x{sh} working window: {e}")

    window = WorkingWindow(
        sx=sx,
        sy=sy,
        sw=sw,
        sh=sh,
        hole_x=hole.x - sx,
        hole_y=hole.y - sy,
        hole_width=hole.width,
        hole_height=hole.height,
        flags=flags,
        distance=distance,
    )

    rows, cols = window.hole_slices()
    flags[rows, cols] = PixelState.INSIDE
    distance[rows, cols] = DISTANCE_SENTINEL

    logger.debug(
        f"Window ({sx}, {sy}, {sw}x{sh}) for selection '{region.id}', "
        f"hole at ({window.hole_x}, {window.hole_y})"
    )
    return window
