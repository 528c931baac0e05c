# Resize handles and post-drag coordinate canonicalization.

from __future__ import annotations

from dataclasses import replace
import logging
from typing import Optional, Tuple

from model import BoundedElement, Element

logger = logging.getLogger(__name__)

Coordinates = Tuple[float, float, float, float]


def compute_resized_coordinates(
    x: float, y: float, handle: str, coordinates: Coordinates
) -> Optional[Coordinates]:
    """Description: New (x1, y1, x2, y2) after dragging a handle to (x, y), None for unknown handles
    Inputs: x: float, y: float, handle: str, coordinates: Coordinates
    """
    x1, y1, x2, y2 = coordinates
    if handle in ("tl", "start"):
        return (x, y, x2, y2)
    if handle == "tr":
        return (x1, y, x, y2)
    if handle == "bl":
        return (x, y1, x2, y)
    if handle in ("br", "end"):
        return (x1, y1, x, y)
    logger.warning("Ignoring resize with unknown handle %r", handle)
    return None


def canonicalize_coordinates(element: Element) -> Element:
    """Description: Rectangles get x1<=x2, y1<=y2; lines start at the leftmost (then topmost) endpoint
    Inputs: element: Element
    """
    if not isinstance(element, BoundedElement):
        return element
    x1, y1, x2, y2 = element.coordinates
    if element.type == "rectangle":
        return replace(element, x1=min(x1, x2), y1=min(y1, y2), x2=max(x1, x2), y2=max(y1, y2))
    if element.type == "line":
        if x1 < x2 or (x1 == x2 and y1 <= y2):
            return element
        return replace(element, x1=x2, y1=y2, x2=x1, y2=y1)
    return element


def adjustment_required(type_tag: str) -> bool:
    return type_tag in ("line", "rectangle")
