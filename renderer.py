# Offscreen rendering of elements, used to rasterize ink for region detection.

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from matplotlib import colors
from PIL import Image, ImageDraw, ImageFont

import config
from model import (
    BoundedElement,
    Element,
    PencilElement,
    TextElement,
    UnrecognizedTypeError,
    calculate_bounds_for_elements,
)

Point = Tuple[float, float]
RGBA = Tuple[int, int, int, int]


@dataclass
class Raster:
    image: Image.Image
    origin: Tuple[int, int]

    @property
    def alpha(self) -> np.ndarray:
        """Description: Alpha channel as a (height, width) uint8 array
        Inputs: None
        """
        return np.asarray(self.image.getchannel("A"))

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size


def color_to_rgba(color: str) -> RGBA:
    """Description: Color to rgba
    Inputs: color: str
    """
    rgba = colors.to_rgba(color)
    return (
        int(round(rgba[0] * 255)),
        int(round(rgba[1] * 255)),
        int(round(rgba[2] * 255)),
        int(round(rgba[3] * 255)),
    )


def visible_runs(element: PencilElement) -> List[List[Point]]:
    """Description: Split a pencil stroke into runs of consecutive non-erased points
    Inputs: element: PencilElement
    """
    runs: List[List[Point]] = []
    current: List[Point] = []
    for point in element.points:
        if not point.is_erased:
            current.append((point.x, point.y))
        elif current:
            runs.append(current)
            current = []
    if current:
        runs.append(current)
    return runs


def _text_font(size: int) -> ImageFont.ImageFont:
    return ImageFont.load_default(size=size)


def _dashed_segment(
    draw: ImageDraw.ImageDraw, start: Point, end: Point, dash: Sequence[int], fill: RGBA, width: int
) -> None:
    length = math.hypot(end[0] - start[0], end[1] - start[1])
    if length == 0:
        return
    ux = (end[0] - start[0]) / length
    uy = (end[1] - start[1]) / length
    on, off = dash
    pos = 0.0
    while pos < length:
        stop = min(pos + on, length)
        draw.line(
            [(start[0] + ux * pos, start[1] + uy * pos), (start[0] + ux * stop, start[1] + uy * stop)],
            fill=fill,
            width=width,
        )
        pos = stop + off


def render_element(
    draw: ImageDraw.ImageDraw,
    element: Element,
    origin: Point = (0, 0),
    color: str = config.RASTER_INK_COLOR,
) -> None:
    """Description: Draw one element, shifted so origin lands on pixel (0, 0)
    Inputs: draw: ImageDraw.ImageDraw, element: Element, origin: Point, color: str
    """
    ox, oy = origin
    fill = color_to_rgba(color)
    if element.type == "line" and isinstance(element, BoundedElement):
        draw.line(
            [(element.x1 - ox, element.y1 - oy), (element.x2 - ox, element.y2 - oy)],
            fill=fill,
            width=config.SHAPE_STROKE_WIDTH,
        )
    elif element.type == "rectangle" and isinstance(element, BoundedElement):
        x1, y1, x2, y2 = element.coordinates
        draw.rectangle(
            [min(x1, x2) - ox, min(y1, y2) - oy, max(x1, x2) - ox, max(y1, y2) - oy],
            outline=fill,
            width=config.SHAPE_STROKE_WIDTH,
        )
    elif element.type == "pencil" and isinstance(element, PencilElement):
        width = max(1, int(round(element.size)))
        radius = width / 2
        for run in visible_runs(element):
            if len(run) < 2:
                continue
            shifted = [(x - ox, y - oy) for x, y in run]
            draw.line(shifted, fill=fill, width=width, joint="curve")
            for x, y in (shifted[0], shifted[-1]):
                draw.ellipse([x - radius, y - radius, x + radius, y + radius], fill=fill)
    elif element.type == "text" and isinstance(element, TextElement):
        if element.text:
            draw.multiline_text(
                (element.x1 - ox, element.y1 - oy),
                element.text,
                fill=fill,
                font=_text_font(config.TEXT_FONT[1]),
            )
    elif element.type == "capture" and isinstance(element, BoundedElement):
        x1, y1 = min(element.x1, element.x2) - ox, min(element.y1, element.y2) - oy
        x2, y2 = max(element.x1, element.x2) - ox, max(element.y1, element.y2) - oy
        corners = [(x1, y1), (x2, y1), (x2, y2), (x1, y2)]
        for start, end in zip(corners, corners[1:] + corners[:1]):
            _dashed_segment(draw, start, end, config.CAPTURE_DASH, fill, config.CAPTURE_STROKE_WIDTH)
    else:
        raise UnrecognizedTypeError(element.type)


def rasterize_elements(
    elements: Iterable[Element],
    padding: float = config.REGION_PADDING,
    include_capture: bool = False,
) -> Optional[Raster]:
    """Description: Render elements onto a transparent image covering their padded bounds
    Inputs: elements: Iterable[Element], padding: float, include_capture: bool
    """
    content = [e for e in elements if include_capture or e.type != "capture"]
    bounds = calculate_bounds_for_elements(content, padding)
    if bounds is None:
        return None
    min_x, min_y, max_x, max_y = bounds
    origin = (int(math.floor(min_x)), int(math.floor(min_y)))
    width = int(math.ceil(max_x)) - origin[0] + 1
    height = int(math.ceil(max_y)) - origin[1] + 1
    image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    for element in content:
        render_element(draw, element, origin)
    return Raster(image=image, origin=origin)
