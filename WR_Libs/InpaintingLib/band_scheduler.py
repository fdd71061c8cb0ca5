"""
Narrow band scheduler for fast marching inpainting.

The band holds unresolved pixels next to the resolved region, keyed by their
current distance estimate. Pixels are resolved strictly in order of
increasing distance, Dijkstra style, and every resolution gives the
pixel's still-INSIDE 4-connected neighbours an Eikonal estimate.

Classes:
    BandScheduler: Min-heap frontier driving one working window to completion
"""

import heapq
import logging
from typing import Callable, List, Optional, Tuple

import numpy as np

from WR_Libs.constants import BOUNDARY_DISTANCE
from WR_Libs.InpaintingLib.distance_solver import solve_eikonal
from WR_Libs.InpaintingLib.inpaint_models import PixelState, WorkingWindow

logger = logging.getLogger(__name__)

NEIGHBOR_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))

# (distance, insertion order, x, y)
BandEntry = Tuple[float, int, int, int]


class BandScheduler:
    """
    Priority frontier over a working window.
    
    Entries are ordered by (distance, insertion order), so pixels at equal
    distance come out in the order they were queued. Only the first pop of
    a pixel does any work; an entry for a pixel that is already KNOWN is
    dropped.
    
    Example:
        >>> window = classify_window(region, width, height)
        >>> scheduler = BandScheduler(window)
        >>> scheduler.seed()
        >>> resolved = scheduler.march(lambda x, y: paint(x, y))
    """

    def __init__(self, window: WorkingWindow):
        self.window = window
        self._heap: List[BandEntry] = []
        self._sequence = 0

    def __len__(self) -> int:
        return len(self._heap)

    def push(self, x: int, y: int, distance: float) -> None:
        heapq.heappush(self._heap, (distance, self._sequence, x, y))
        self._sequence += 1

    def pop(self) -> Optional[Tuple[int, int, float]]:
        """Remove and return (x, y, distance) of the closest entry, or None."""
        if not self._heap:
            return None
        distance, _, x, y = heapq.heappop(self._heap)
        return x, y, distance

    def seed(self) -> int:
        """
        Queue every INSIDE pixel that touches a KNOWN pixel.
        
        Seeded pixels are marked BAND at the boundary distance. Pixels are
        queued in row-major order.
        
        Returns:
            Number of seeded pixels
        """
        flags = self.window.flags
        inside = flags == PixelState.INSIDE
        known = flags == PixelState.KNOWN

        touches_known = np.zeros_like(inside)
        touches_known[:, 1:] |= known[:, :-1]
        touches_known[:, :-1] |= known[:, 1:]
        touches_known[1:, :] |= known[:-1, :]
        touches_known[:-1, :] |= known[1:, :]

        boundary = inside & touches_known
        for y, x in np.argwhere(boundary):
            flags[y, x] = PixelState.BAND
            self.window.distance[y, x] = BOUNDARY_DISTANCE
            self.push(int(x), int(y), BOUNDARY_DISTANCE)

        return int(boundary.sum())

    def march(self, on_resolve: Callable[[int, int], None]) -> int:
        """
        Drain the band, resolving pixels nearest the boundary first.
        
        Each popped pixel is marked KNOWN and handed to `on_resolve`. Its
        INSIDE neighbours then get an Eikonal estimate; a neighbour whose
        estimate beats its current distance is marked BAND and queued.
        BAND pixels keep their first estimate, which keeps the pop order
        non-decreasing.
        
        Args:
            on_resolve: Called once per resolved pixel with (x, y)
            
        Returns:
            Number of pixels resolved
        """
        flags = self.window.flags
        distance = self.window.distance
        width, height = self.window.sw, self.window.sh
        resolved = 0

        while self._heap:
            x, y, _ = self.pop()
            if flags[y, x] == PixelState.KNOWN:
                continue

            flags[y, x] = PixelState.KNOWN
            on_resolve(x, y)
            resolved += 1

            for dx, dy in NEIGHBOR_OFFSETS:
                nx, ny = x + dx, y + dy
                if not (0 <= nx < width and 0 <= ny < height):
                    continue
                if flags[ny, nx] != PixelState.INSIDE:
                    continue

                estimate = solve_eikonal(distance, nx, ny)
                if estimate < float(distance[ny, nx]):
                    distance[ny, nx] = estimate
                    flags[ny, nx] = PixelState.BAND
                    self.push(nx, ny, float(distance[ny, nx]))

        logger.debug(f"Band drained: {resolved} pixels resolved")
        return resolved
