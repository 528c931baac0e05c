# Hit testing: which element is under a point, and which handle.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

import config
from geometry import is_near_point, is_on_segment
from model import BoundedElement, Element, PencilElement, TextElement, UnrecognizedTypeError


@dataclass(frozen=True)
class Hit:
    element: Element
    position: str


def _contains(x: float, y: float, x1: float, y1: float, x2: float, y2: float) -> bool:
    # Marquees are stored as dragged, so either corner may be the larger one.
    return min(x1, x2) <= x <= max(x1, x2) and min(y1, y2) <= y <= max(y1, y2)


def position_within(
    x: float,
    y: float,
    element: Element,
    tolerance: float = config.NEAR_POINT_TOLERANCE,
    pencil_tolerance: float = config.PENCIL_TOLERANCE,
) -> Optional[str]:
    """Description: Handle or "inside" tag for a point on the element, None when it misses
    Inputs: x: float, y: float, element: Element, tolerance: float, pencil_tolerance: float
    """
    if element.type == "line" and isinstance(element, BoundedElement):
        x1, y1, x2, y2 = element.coordinates
        if is_near_point(x, y, x1, y1, tolerance):
            return "start"
        if is_near_point(x, y, x2, y2, tolerance):
            return "end"
        if is_on_segment(x1, y1, x2, y2, x, y):
            return "inside"
        return None
    if element.type in ("rectangle", "capture") and isinstance(element, BoundedElement):
        x1, y1, x2, y2 = element.coordinates
        # Corners win over containment.
        corners = (("tl", x1, y1), ("tr", x2, y1), ("bl", x1, y2), ("br", x2, y2))
        for name, cx, cy in corners:
            if is_near_point(x, y, cx, cy, tolerance):
                return name
        return "inside" if _contains(x, y, x1, y1, x2, y2) else None
    if element.type == "pencil" and isinstance(element, PencilElement):
        points = element.points
        for start, end in zip(points, points[1:]):
            if is_on_segment(start.x, start.y, end.x, end.y, x, y, pencil_tolerance):
                return "inside"
        return None
    if element.type == "text" and isinstance(element, TextElement):
        return "inside" if _contains(x, y, element.x1, element.y1, element.x2, element.y2) else None
    raise UnrecognizedTypeError(element.type)


def locate_element_at(
    x: float,
    y: float,
    elements: Iterable[Element],
    tolerance: float = config.NEAR_POINT_TOLERANCE,
    pencil_tolerance: float = config.PENCIL_TOLERANCE,
) -> Optional[Hit]:
    """Description: First element in collection order under the point
    Inputs: x: float, y: float, elements: Iterable[Element], tolerance: float, pencil_tolerance: float
    """
    for element in elements:
        position = position_within(x, y, element, tolerance, pencil_tolerance)
        if position is not None:
            return Hit(element, position)
    return None


def cursor_for_handle(position: Optional[str]) -> str:
    if position in ("tl", "br", "start", "end"):
        return "nwse-resize"
    if position in ("tr", "bl"):
        return "nesw-resize"
    return "move"
