"""
Export Node for the watermark remover pipeline.

Saves the incoming image as PNG, JPEG or WebP.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List

from WR_Libs.constants import (
    DEFAULT_EXPORT_FORMAT,
    DEFAULT_EXPORT_QUALITY,
    NODE_TYPE_EXPORT,
)
from WR_Libs.InpaintingLib.image_export import export_image


@dataclass
class ExportNodeConfig:
    """Configuration for export node.
    
    Attributes:
        output_path: Target file, or directory for the default filename
        output_format: 'png', 'jpeg' or 'webp'
        quality: Lossy quality 1-100 (ignored for PNG)
    """
    output_path: str = "."
    output_format: str = DEFAULT_EXPORT_FORMAT
    quality: int = DEFAULT_EXPORT_QUALITY

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExportNodeConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                   if k in cls.__dataclass_fields__}
        return cls(**filtered)


def execute_export_node(node: Dict[str, Any], inputs: List[Any]) -> Any:
    """
    Execute export node in pipeline.
    
    Inputs:
        - [0]: Image to save (PIL Image)
        
    Returns:
        Path of the written file
        
    Raises:
        ValueError: If no input or invalid format/quality
        TypeError: If input not PIL Image
        OSError: If the target directory does not exist
    """
    if not inputs or len(inputs) < 1:
        raise ValueError("ExportNode requires image input")

    image = inputs[0]
    if not hasattr(image, "save"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    config = ExportNodeConfig.from_dict(node)

    try:
        return export_image(
            image,
            config.output_path,
            output_format=config.output_format,
            quality=int(config.quality),
        )
    except (ValueError, TypeError) as e:
        raise type(e)(f"Export node error: {str(e)}")


def create_export_node(
    node_id: str,
    output_path: str = ".",
    output_format: str = DEFAULT_EXPORT_FORMAT,
    quality: int = DEFAULT_EXPORT_QUALITY,
) -> Dict[str, Any]:
    """Create export node for graph."""
    return {
        "id": node_id,
        "type": NODE_TYPE_EXPORT,
        "output_path": str(output_path),
        "output_format": output_format,
        "quality": quality,
    }
