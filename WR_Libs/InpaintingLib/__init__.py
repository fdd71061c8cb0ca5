"""
InpaintingLib - Region inpainting engine

This module provides the fast marching inpainting engine used to remove
watermarks from user-selected rectangles, plus export of the result.
"""

from WR_Libs.InpaintingLib.inpaint_models import (
    BatchResult,
    ConfigError,
    InpaintError,
    InpaintReport,
    InvalidSelectionError,
    PixelState,
    ResourceError,
    SelectionRegion,
    SelectionSet,
    WorkingWindow,
)
from WR_Libs.InpaintingLib.mask_classifier import classify_window
from WR_Libs.InpaintingLib.distance_solver import eikonal_update, solve_eikonal
from WR_Libs.InpaintingLib.band_scheduler import BandScheduler
from WR_Libs.InpaintingLib.reconstruction import (
    estimate_gradient,
    reconstruct_pixel,
    fill_unreached,
)
from WR_Libs.InpaintingLib.region_inpainter import (
    inpaint_region,
    inpaint_regions,
    inpaint_image,
)
from WR_Libs.InpaintingLib.image_export import (
    build_export_filename,
    export_image,
)

__all__ = [
    "BatchResult",
    "ConfigError",
    "InpaintError",
    "InpaintReport",
    "InvalidSelectionError",
    "PixelState",
    "ResourceError",
    "SelectionRegion",
    "SelectionSet",
    "WorkingWindow",
    "classify_window",
    "eikonal_update",
    "solve_eikonal",
    "BandScheduler",
    "estimate_gradient",
    "reconstruct_pixel",
    "fill_unreached",
    "inpaint_region",
    "inpaint_regions",
    "inpaint_image",
    "build_export_filename",
    "export_image",
]
