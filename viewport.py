# Pan and zoom transform between screen pixels and document coordinates.

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import config

Point = Tuple[float, float]


@dataclass
class Viewport:
    """Document point (x, y) shows at screen ((x + pan_x) * zoom, (y + pan_y) * zoom).

    Pan is kept in document units, so panning by a document-space delta
    moves the drawing by exactly that delta at any zoom.
    """

    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = 1.0

    def document_to_screen(self, point: Point) -> Point:
        """Description: Document to screen
        Inputs: point: Point
        """
        return ((point[0] + self.pan_x) * self.zoom, (point[1] + self.pan_y) * self.zoom)

    def screen_to_document(self, point: Point) -> Point:
        """Description: Screen to document
        Inputs: point: Point
        """
        return (point[0] / self.zoom - self.pan_x, point[1] / self.zoom - self.pan_y)

    def pan_by(self, dx: float, dy: float) -> None:
        self.pan_x += dx
        self.pan_y += dy

    def zoom_by(self, delta: float, anchor: Point = (0.0, 0.0)) -> bool:
        """Description: Change zoom by delta, clamped, keeping the screen anchor over the same document point
        Inputs: delta: float, anchor: Point
        """
        new_zoom = min(config.ZOOM_MAX, max(config.ZOOM_MIN, round(self.zoom + delta, 6)))
        if new_zoom == self.zoom:
            return False
        world = self.screen_to_document(anchor)
        self.zoom = new_zoom
        self.pan_x = anchor[0] / self.zoom - world[0]
        self.pan_y = anchor[1] / self.zoom - world[1]
        return True

    def reset_zoom(self, anchor: Point = (0.0, 0.0)) -> None:
        self.zoom_by(1.0 - self.zoom, anchor)
