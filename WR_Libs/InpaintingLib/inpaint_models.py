"""
Inpainting data models for the watermark remover.

This module defines the core data structures used by the inpainting engine.

Classes:
    SelectionRegion: A user-selected rectangle in image pixel coordinates
    SelectionSet: Ordered collection of selections with generated ids
    PixelState: Per-pixel fast marching state (KNOWN, BAND, INSIDE)
    WorkingWindow: Padded extraction window with its state and distance arrays
    InpaintReport: Statistics for one processed region
    BatchResult: Outcome of a multi-region run

Exceptions:
    InpaintError: Base class for engine errors
    ConfigError: Invalid buffer, dimensions or parameters
    InvalidSelectionError: Selection empty or outside the image
    ResourceError: Working window could not be allocated
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np

from WR_Libs.constants import (
    MIN_DRAG_SIZE,
    SELECTION_ID_PREFIX,
    STATE_BAND,
    STATE_INSIDE,
    STATE_KNOWN,
)


class InpaintError(Exception):
    """Base class for inpainting engine errors."""


class ConfigError(InpaintError, ValueError):
    """Raised for invalid buffers, dimensions or engine parameters."""


class InvalidSelectionError(ConfigError):
    """Raised when a selection is empty or does not overlap the image."""


class ResourceError(InpaintError, MemoryError):
    """Raised when the working window cannot be allocated."""


class PixelState(IntEnum):
    KNOWN = STATE_KNOWN
    BAND = STATE_BAND
    INSIDE = STATE_INSIDE


@dataclass
class SelectionRegion:
    """Rectangle selected for removal.
    
    Attributes:
        id: Identifier of the selection (e.g. 'sel-1')
        x: Left edge in image pixels
        y: Top edge in image pixels
        width: Width in pixels (must be > 0)
        height: Height in pixels (must be > 0)
    """
    id: str
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_drag(
        cls,
        start: Tuple[float, float],
        end: Tuple[float, float],
        region_id: str = "",
    ) -> "SelectionRegion":
        """
        Build a selection from two drag corners in any order.
        
        Args:
            start: (x, y) where the drag started
            end: (x, y) where the drag ended
            region_id: Identifier for the new selection
            
        Returns:
            SelectionRegion anchored at the top-left corner
        """
        x0, y0 = int(round(start[0])), int(round(start[1]))
        x1, y1 = int(round(end[0])), int(round(end[1]))
        return cls(
            id=region_id,
            x=min(x0, x1),
            y=min(y0, y1),
            width=abs(x1 - x0),
            height=abs(y1 - y0),
        )

    def clamped(
        self, image_width: int, image_height: int
    ) -> Optional["SelectionRegion"]:
        """
        Intersect the selection with the image bounds.
        
        Returns:
            The clamped selection, or None if nothing of it lies in the image
        """
        if self.width <= 0 or self.height <= 0:
            return None

        left = max(0, self.x)
        top = max(0, self.y)
        right = min(image_width, self.x + self.width)
        bottom = min(image_height, self.y + self.height)

        if right <= left or bottom <= top:
            return None

        return SelectionRegion(self.id, left, top, right - left, bottom - top)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SelectionRegion":
        """Create from dictionary."""
        return cls(
            id=str(data.get("id", "")),
            x=int(data["x"]),
            y=int(data["y"]),
            width=int(data["width"]),
            height=int(data["height"]),
        )


class SelectionSet:
    """
    Ordered list of selections as drawn by the user.
    
    Ids are generated from a running counter so the same sequence of
    additions always yields the same ids.
    
    Example:
        >>> selections = SelectionSet()
        >>> selections.add(40, 40, 20, 20)
        SelectionRegion(id='sel-1', x=40, y=40, width=20, height=20)
        >>> selections.add_drag((5, 5), (8, 30)) is None
        True
    """

    def __init__(self, min_drag_size: int = MIN_DRAG_SIZE):
        self._regions: List[SelectionRegion] = []
        self._counter = 0
        self.min_drag_size = min_drag_size

    def _next_id(self) -> str:
        self._counter += 1
        return f"{SELECTION_ID_PREFIX}{self._counter}"

    def add(self, x: int, y: int, width: int, height: int) -> SelectionRegion:
        region = SelectionRegion(self._next_id(), int(x), int(y), int(width), int(height))
        self._regions.append(region)
        return region

    def add_drag(
        self,
        start: Tuple[float, float],
        end: Tuple[float, float],
    ) -> Optional[SelectionRegion]:
        """
        Add a selection from a drag gesture.
        
        Drags no larger than min_drag_size in either direction are treated
        as accidental clicks and ignored.
        
        Returns:
            The new selection, or None if the drag was too small
        """
        region = SelectionRegion.from_drag(start, end)
        if region.width <= self.min_drag_size or region.height <= self.min_drag_size:
            return None
        region.id = self._next_id()
        self._regions.append(region)
        return region

    def remove(self, region_id: str) -> bool:
        """Remove a selection by id. Returns False if no such id exists."""
        for index, region in enumerate(self._regions):
            if region.id == region_id:
                del self._regions[index]
                return True
        return False

    def clear(self) -> None:
        self._regions.clear()

    def __iter__(self) -> Iterator[SelectionRegion]:
        return iter(list(self._regions))

    def __len__(self) -> int:
        return len(self._regions)


@dataclass
class WorkingWindow:
    """Padded extraction window around one selection.
    
    Attributes:
        sx, sy: Top-left corner of the window in image coordinates
        sw, sh: Window width and height
        hole_x, hole_y: Top-left corner of the hole in window coordinates
        hole_width, hole_height: Hole size in pixels
        flags: PixelState per pixel, shape (sh, sw), uint8
        distance: Distance from the known boundary, shape (sh, sw), float32
    """
    sx: int
    sy: int
    sw: int
    sh: int
    hole_x: int
    hole_y: int
    hole_width: int
    hole_height: int
    flags: np.ndarray
    distance: np.ndarray

    def hole_slices(self) -> Tuple[slice, slice]:
        """Row and column slices of the hole inside the window arrays."""
        return (
            slice(self.hole_y, self.hole_y + self.hole_height),
            slice(self.hole_x, self.hole_x + self.hole_width),
        )


@dataclass
class InpaintReport:
    """Statistics for one processed region."""
    region_id: str
    window: Tuple[int, int, int, int]
    resolved_pixels: int = 0
    fallback_pixels: int = 0
    kernel_calls: int = 0


@dataclass
class BatchResult:
    """Outcome of processing a list of selections in order."""
    processed: List[InpaintReport] = field(default_factory=list)
    rejected: List[Tuple[SelectionRegion, InpaintError]] = field(default_factory=list)
    cancelled: bool = False

    @property
    def total_regions(self) -> int:
        return len(self.processed) + len(self.rejected)
