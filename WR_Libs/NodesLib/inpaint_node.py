"""
Inpaint Node for the watermark remover pipeline.

Wraps the region inpainting engine for use in the node graph system.
The node carries its list of selections; the image arrives as input.

Example:
    >>> from PIL import Image
    >>> from WR_Libs.NodesLib.inpaint_node import create_inpaint_node
    >>> from WR_Libs.NodesLib.node_executors import get_default_registry
    >>> 
    >>> node = create_inpaint_node(
    ...     "inpaint-1",
    ...     regions=[{"id": "sel-1", "x": 40, "y": 40, "width": 20, "height": 20}],
    ... )
    >>> image = Image.open("photo.png")
    >>> result = get_default_registry().execute("Inpaint", node, [image])
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from WR_Libs.constants import CONTEXT_PADDING, NODE_TYPE_INPAINT, RECONSTRUCTION_RADIUS
from WR_Libs.InpaintingLib.inpaint_models import SelectionRegion
from WR_Libs.InpaintingLib.region_inpainter import inpaint_image


@dataclass
class InpaintNodeConfig:
    """Configuration for inpaint node.
    
    Attributes:
        regions: Selections as dicts with id, x, y, width, height
        padding: Context margin around each selection (>= 0)
        radius: Reconstruction radius in pixels (> 0)
        reconstruct_alpha: Also rebuild the opacity channel
    """
    regions: List[Dict[str, Any]] = field(default_factory=list)
    padding: int = CONTEXT_PADDING
    radius: int = RECONSTRUCTION_RADIUS
    reconstruct_alpha: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "regions": [dict(region) for region in self.regions],
            "padding": self.padding,
            "radius": self.radius,
            "reconstruct_alpha": self.reconstruct_alpha,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InpaintNodeConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                   if k in cls.__dataclass_fields__}
        return cls(**filtered)


def execute_inpaint_node(node: Dict[str, Any], inputs: List[Any]) -> Any:
    """
    Execute inpaint node in pipeline.
    
    Node dict should contain:
        - 'regions': List of selection dicts (at least one)
        - Optional 'padding', 'radius', 'reconstruct_alpha'
        
    Inputs:
        - [0]: Image to clean (PIL Image)
        
    Returns:
        Inpainted PIL Image (RGBA mode)
        
    Raises:
        ValueError: If no input, no selections, invalid parameters or
            every selection was rejected
        TypeError: If input not PIL Image
    """
    if not inputs or len(inputs) < 1:
        raise ValueError("InpaintNode requires image input")

    image = inputs[0]
    if not hasattr(image, "convert"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    config = InpaintNodeConfig.from_dict(node)
    if not config.regions:
        raise ValueError("InpaintNode requires at least one selection")

    try:
        cleaned, result = inpaint_image(
            image,
            config.regions,
            padding=int(config.padding),
            radius=int(config.radius),
            reconstruct_alpha=bool(config.reconstruct_alpha),
        )
        if not result.processed:
            reasons = "; ".join(f"{region.id}: {error}" for region, error in result.rejected)
            raise ValueError(f"no selection could be processed ({reasons})")
    except (ValueError, TypeError) as e:
        raise type(e)(f"Inpaint node error: {str(e)}")

    return cleaned


def create_inpaint_node(
    node_id: str,
    regions: Optional[Sequence[Any]] = None,
    padding: int = CONTEXT_PADDING,
    radius: int = RECONSTRUCTION_RADIUS,
    reconstruct_alpha: bool = False,
) -> Dict[str, Any]:
    """
    Create inpaint node for graph.
    
    Args:
        node_id: Unique node identifier
        regions: SelectionRegion objects or dicts
        padding: Context margin around each selection
        radius: Reconstruction radius
        reconstruct_alpha: Also rebuild the opacity channel
        
    Returns:
        Node dict for graph
    """
    region_dicts = [
        region.to_dict() if isinstance(region, SelectionRegion) else dict(region)
        for region in (regions or [])
    ]
    return {
        "id": node_id,
        "type": NODE_TYPE_INPAINT,
        "regions": region_dicts,
        "padding": padding,
        "radius": radius,
        "reconstruct_alpha": reconstruct_alpha,
    }
