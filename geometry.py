# Geometry primitives used by hit testing and the eraser.

from __future__ import annotations

from typing import Tuple
import math

import config

Point = Tuple[float, float]


def distance(a: Point, b: Point) -> float:
    """Description: Euclidean distance between two points
    Inputs: a: Point, b: Point
    """
    return math.hypot(a[0] - b[0], a[1] - b[1])


def is_near_point(
    x: float,
    y: float,
    px: float,
    py: float,
    tolerance: float = config.NEAR_POINT_TOLERANCE,
) -> bool:
    """Description: Square tolerance box test, both axis deltas strictly below tolerance
    Inputs: x: float, y: float, px: float, py: float, tolerance: float
    """
    return abs(x - px) < tolerance and abs(y - py) < tolerance


def is_on_segment(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    x: float,
    y: float,
    max_distance: float = config.SEGMENT_TOLERANCE,
) -> bool:
    """Description: Slack test, the detour through (x, y) is shorter than max_distance
    Inputs: x1: float, y1: float, x2: float, y2: float, x: float, y: float, max_distance: float
    """
    a = (x1, y1)
    b = (x2, y2)
    c = (x, y)
    offset = distance(a, b) - (distance(a, c) + distance(b, c))
    return abs(offset) < max_distance


def is_point_near_eraser(x: float, y: float, eraser_x: float, eraser_y: float, eraser_size: float) -> bool:
    return distance((x, y), (eraser_x, eraser_y)) <= eraser_size
