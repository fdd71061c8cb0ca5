"""
Constants and configuration values for the watermark remover.

This module centralizes all constant values, magic numbers, and
tuning settings used by the inpainting engine and its wrappers.
"""

# Region extraction
CONTEXT_PADDING = 25

# Pixel states
STATE_KNOWN = 0
STATE_BAND = 1
STATE_INSIDE = 2

# Fast marching
DISTANCE_SENTINEL = 1e6
BOUNDARY_DISTANCE = 1.0

# Reconstruction kernel
RECONSTRUCTION_RADIUS = 8
GRADIENT_HALF_WINDOW = 2  # 5x5 neighbourhood
GEOMETRIC_EPSILON = 0.1
LEVEL_SET_FACTOR = 2.0
GRADIENT_EPSILON = 1e-4
DIRECTION_BASE_WEIGHT = 0.5
COLOR_CHANNELS = 3

# Fallback fill
NEUTRAL_GRAY = 128

# Selections
MIN_DRAG_SIZE = 10
SELECTION_ID_PREFIX = "sel-"

# Node types
NODE_TYPE_INPAINT = "Inpaint"
NODE_TYPE_EXPORT = "Export"

# Export
EXPORT_FILE_STEM = "watermark-removed"
DEFAULT_EXPORT_FORMAT = "png"
DEFAULT_EXPORT_QUALITY = 90
EXPORT_FORMATS = {
    "png": ("PNG", ".png"),
    "jpeg": ("JPEG", ".jpeg"),
    "webp": ("WEBP", ".webp"),
}
LOSSLESS_FORMATS = {"png"}
