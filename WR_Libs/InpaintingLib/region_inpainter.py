"""
Region inpainting orchestration.

Runs the fast marching engine over each selected rectangle of an image:
extract a padded working copy, classify it, march the band while painting
each resolved pixel, fill anything the front never reached, then write the
window back. Regions are processed strictly in order and each one reads the
live buffer, so later regions see the results of earlier ones.

Example:
    >>> import numpy as np
    >>> buffer = np.full((100, 100, 4), 255, dtype=np.uint8)
    >>> buffer[40:60, 40:60, :3] = 0
    >>> regions = [SelectionRegion("sel-1", 40, 40, 20, 20)]
    >>> result = inpaint_regions(buffer, 100, 100, regions, on_progress=print)
    100
"""

import logging
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union

import numpy as np
from PIL import Image

from WR_Libs.constants import (
    COLOR_CHANNELS,
    CONTEXT_PADDING,
    NEUTRAL_GRAY,
    RECONSTRUCTION_RADIUS,
)
from WR_Libs.InpaintingLib.band_scheduler import BandScheduler
from WR_Libs.InpaintingLib.inpaint_models import (
    BatchResult,
    ConfigError,
    InpaintError,
    InpaintReport,
    ResourceError,
    SelectionRegion,
    WorkingWindow,
)
from WR_Libs.InpaintingLib.mask_classifier import classify_window
from WR_Libs.InpaintingLib.reconstruction import (
    fill_unreached,
    nearest_known_color,
    reconstruct_pixel,
)

logger = logging.getLogger(__name__)

RegionLike = Union[SelectionRegion, Dict[str, Any]]
ProgressCallback = Callable[[int], None]


def _coerce_region(region: RegionLike) -> SelectionRegion:
    if isinstance(region, SelectionRegion):
        return region
    if isinstance(region, dict):
        try:
            return SelectionRegion.from_dict(region)
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid selection {region!r}: {e}")
    raise TypeError(f"Expected SelectionRegion or dict, got {type(region)}")


def validate_buffer(buffer: Any, width: int, height: int) -> int:
    """
    Check that `buffer` is a (height, width, channels) uint8 array.
    
    Returns:
        Channel count of the buffer
        
    Raises:
        ConfigError: If the buffer does not match the contract
    """
    if not isinstance(buffer, np.ndarray):
        raise ConfigError(f"Expected numpy array buffer, got {type(buffer)}")

    if buffer.ndim != 3:
        raise ConfigError(
            f"Buffer must have shape (height, width, channels), got {buffer.shape}"
        )

    if buffer.dtype != np.uint8:
        raise ConfigError(f"Buffer must be uint8, got {buffer.dtype}")

    if width <= 0 or height <= 0:
        raise ConfigError(f"Image dimensions must be positive, got {width}x{height}")

    if buffer.shape[0] != height or buffer.shape[1] != width:
        raise ConfigError(
            f"Buffer shape {buffer.shape[:2]} does not match {width}x{height} "
            f"(expected ({height}, {width}))"
        )

    if buffer.shape[2] < COLOR_CHANNELS:
        raise ConfigError(
            f"Buffer needs at least {COLOR_CHANNELS} channels, got {buffer.shape[2]}"
        )

    return int(buffer.shape[2])


def inpaint_window(
    pixels: np.ndarray,
    window: WorkingWindow,
    radius: int = RECONSTRUCTION_RADIUS,
    channels: int = COLOR_CHANNELS,
    region_id: str = "",
) -> InpaintReport:
    """
    Fill the hole of a classified working window in place.
    
    Args:
        pixels: Float copy of the window, shape (sh, sw, c)
        window: Classified window (flags and distance are updated)
        radius: Reconstruction radius
        channels: Leading channels to reconstruct
        region_id: Selection id recorded in the report
        
    Returns:
        InpaintReport with resolution statistics
    """
    report = InpaintReport(
        region_id=region_id,
        window=(window.sx, window.sy, window.sw, window.sh),
    )

    def paint(x: int, y: int) -> None:
        report.kernel_calls += 1
        if reconstruct_pixel(pixels, window.flags, window.distance, x, y, radius, channels):
            return
        color = nearest_known_color(pixels, window.flags, x, y, channels)
        pixels[y, x, :channels] = NEUTRAL_GRAY if color is None else color

    scheduler = BandScheduler(window)
    scheduler.seed()
    report.resolved_pixels = scheduler.march(paint)
    report.fallback_pixels = fill_unreached(pixels, window.flags, channels)

    if report.fallback_pixels:
        logger.warning(
            f"Selection '{region_id}': {report.fallback_pixels} pixels had no "
            f"surrounding context and were flat-filled"
        )

    return report


def inpaint_region(
    buffer: np.ndarray,
    width: int,
    height: int,
    region: RegionLike,
    padding: int = CONTEXT_PADDING,
    radius: int = RECONSTRUCTION_RADIUS,
    reconstruct_alpha: bool = False,
) -> InpaintReport:
    """
    Inpaint one selection of `buffer` in place.
    
    The buffer is only written once the whole region has been processed,
    so a failure leaves it untouched.
    
    Args:
        buffer: uint8 array of shape (height, width, channels)
        width: Image width in pixels
        height: Image height in pixels
        region: SelectionRegion or dict with x, y, width, height
        padding: Context margin around the selection
        radius: Reconstruction radius (> 0)
        reconstruct_alpha: Also rebuild the fourth channel (opacity)
        
    Returns:
        InpaintReport for the region
        
    Raises:
        ConfigError: If the buffer or parameters are invalid
        InvalidSelectionError: If the selection is empty after clamping
        ResourceError: If the working window cannot be allocated
    """
    buffer_channels = validate_buffer(buffer, width, height)

    if radius <= 0:
        raise ConfigError(f"radius must be > 0, got {radius}")

    region = _coerce_region(region)
    window = classify_window(region, width, height, padding)

    channels = COLOR_CHANNELS
    if reconstruct_alpha:
        channels = min(buffer_channels, COLOR_CHANNELS + 1)

    rows = slice(window.sy, window.sy + window.sh)
    cols = slice(window.sx, window.sx + window.sw)
    try:
        pixels = buffer[rows, cols].astype(np.float64)
    except MemoryError as e:
        raise ResourceError(f"Cannot copy working window for '{region.id}': {e}")

    report = inpaint_window(pixels, window, radius, channels, region.id)
    buffer[rows, cols] = np.clip(pixels, 0, 255).astype(np.uint8)

    logger.debug(
        f"Selection '{region.id}' done: {report.resolved_pixels} marched, "
        f"{report.fallback_pixels} filled"
    )
    return report


def inpaint_regions(
    buffer: np.ndarray,
    width: int,
    height: int,
    regions: Sequence[RegionLike],
    on_progress: Optional[ProgressCallback] = None,
    cancel_event: Optional[Any] = None,
    padding: int = CONTEXT_PADDING,
    radius: int = RECONSTRUCTION_RADIUS,
    reconstruct_alpha: bool = False,
) -> BatchResult:
    """
    Inpaint several selections of `buffer` in place, in order.
    
    A selection that fails is logged, recorded in the result and skipped;
    the rest of the batch still runs. `on_progress` receives an integer
    percentage after every selection, processed or rejected. `cancel_event`
    (anything with is_set(), e.g. threading.Event) is checked before each
    selection starts, never in the middle of one.
    
    Returns:
        BatchResult with per-region reports and rejections
        
    Raises:
        ConfigError: If the buffer, radius or padding is invalid
    """
    validate_buffer(buffer, width, height)

    if radius <= 0:
        raise ConfigError(f"radius must be > 0, got {radius}")

    if padding < 0:
        raise ConfigError(f"padding must be >= 0, got {padding}")

    result = BatchResult()
    total = len(regions)

    for index, region in enumerate(regions):
        if cancel_event is not None and cancel_event.is_set():
            result.cancelled = True
            logger.warning(f"Inpainting cancelled after {index} of {total} selections")
            break

        try:
            report = inpaint_region(
                buffer,
                width,
                height,
                region,
                padding=padding,
                radius=radius,
                reconstruct_alpha=reconstruct_alpha,
            )
            result.processed.append(report)
        except InpaintError as e:
            logger.warning(f"Skipping selection {index + 1}/{total}: {e}")
            result.rejected.append((_describe(region), e))

        if on_progress is not None:
            on_progress(int(round((index + 1) / total * 100)))

    logger.info(
        f"Inpainted {len(result.processed)} of {total} selections "
        f"({len(result.rejected)} rejected)"
    )
    return result


def _describe(region: RegionLike) -> SelectionRegion:
    """SelectionRegion to report for a rejected selection."""
    if isinstance(region, SelectionRegion):
        return region
    try:
        return SelectionRegion.from_dict(region)
    except (KeyError, TypeError, ValueError):
        return SelectionRegion(str(region.get("id", "")), 0, 0, 0, 0)


def inpaint_image(
    image: Any,
    regions: Sequence[RegionLike],
    on_progress: Optional[ProgressCallback] = None,
    cancel_event: Optional[Any] = None,
    padding: int = CONTEXT_PADDING,
    radius: int = RECONSTRUCTION_RADIUS,
    reconstruct_alpha: bool = False,
) -> Tuple[Any, BatchResult]:
    """
    Inpaint selections of a PIL Image.
    
    Rejected selections do not raise; check `result.rejected` (and
    `result.processed`) to see what was actually cleaned.
    
    Args:
        image: PIL Image (converted to RGBA)
        regions: Selections in image pixel coordinates
        on_progress: Optional percentage callback
        cancel_event: Optional object with is_set()
        padding: Context margin around each selection
        radius: Reconstruction radius
        reconstruct_alpha: Also rebuild the opacity channel
        
    Returns:
        (image, result): new RGBA PIL Image (the input is not modified)
        and the BatchResult of the run

    Raises:
        TypeError: If image is not a PIL Image
    """
    if not hasattr(image, "convert"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    buffer = np.array(image.convert("RGBA"), dtype=np.uint8)
    height, width = buffer.shape[:2]

    result = inpaint_regions(
        buffer,
        width,
        height,
        regions,
        on_progress=on_progress,
        cancel_event=cancel_event,
        padding=padding,
        radius=radius,
        reconstruct_alpha=reconstruct_alpha,
    )
    return Image.fromarray(buffer), result
