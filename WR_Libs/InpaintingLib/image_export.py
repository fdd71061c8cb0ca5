"""
Export of finished images.

Encodes an inpainted image as PNG (lossless), JPEG or WebP with a quality
setting, using the same default filename as the interactive tool.

Functions:
    normalize_export_format: Resolve a user-supplied format name
    build_export_filename: Default filename for a format
    export_image: Save an image to a file or directory
"""

import logging
from pathlib import Path
from typing import Any, Union

from WR_Libs.constants import (
    DEFAULT_EXPORT_FORMAT,
    DEFAULT_EXPORT_QUALITY,
    EXPORT_FILE_STEM,
    EXPORT_FORMATS,
    LOSSLESS_FORMATS,
)
from WR_Libs.InpaintingLib.inpaint_models import ConfigError

logger = logging.getLogger(__name__)

FORMAT_ALIASES = {"jpg": "jpeg"}


def normalize_export_format(output_format: str) -> str:
    """
    Lower-case a format name and resolve aliases ('jpg' -> 'jpeg').
    
    Raises:
        ConfigError: If the format is not png, jpeg or webp
    """
    key = str(output_format).strip().lower().lstrip(".")
    key = FORMAT_ALIASES.get(key, key)
    if key not in EXPORT_FORMATS:
        valid = ", ".join(sorted(EXPORT_FORMATS))
        raise ConfigError(f"Unsupported export format: {output_format}. Valid formats: {valid}")
    return key


def build_export_filename(output_format: str = DEFAULT_EXPORT_FORMAT) -> str:
    key = normalize_export_format(output_format)
    return f"{EXPORT_FILE_STEM}{EXPORT_FORMATS[key][1]}"


def export_image(
    image: Any,
    output_path: Union[str, Path],
    output_format: str = DEFAULT_EXPORT_FORMAT,
    quality: int = DEFAULT_EXPORT_QUALITY,
) -> Path:
    """
    Save an image in the requested format.
    
    If `output_path` is an existing directory the default filename
    ('watermark-removed.<ext>') is used inside it. JPEG has no alpha
    channel, so images are flattened to RGB for it. Quality is ignored
    for PNG.
    
    Args:
        image: PIL Image to save
        output_path: Target file or existing directory
        output_format: 'png', 'jpeg' (or 'jpg') or 'webp'
        quality: Lossy quality 1-100
        
    Returns:
        Path of the written file
        
    Raises:
        TypeError: If image is not a PIL Image
        ConfigError: If format or quality is invalid
        OSError: If the target directory does not exist
    """
    if not hasattr(image, "save"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    key = normalize_export_format(output_format)

    if not (1 <= int(quality) <= 100):
        raise ConfigError(f"quality must be 1-100, got {quality}")

    path = Path(output_path)
    if path.is_dir():
        path = path / build_export_filename(key)

    if not path.parent.exists():
        raise OSError(f"Output directory does not exist: {path.parent}")

    pil_format = EXPORT_FORMATS[key][0]
    if key == "jpeg" and image.mode not in ("RGB", "L"):
        image = image.convert("RGB")

    if key in LOSSLESS_FORMATS:
        image.save(path, format=pil_format)
    else:
        image.save(path, format=pil_format, quality=int(quality))

    logger.info(f"Exported {pil_format} image to {path}")
    return path
