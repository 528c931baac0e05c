# Region detection: flood fill opaque pixels into blobs, then merge nearby blobs.

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
import logging
import math
from typing import Iterable, List, Optional, Set, Tuple, Union

import numpy as np
from PIL import Image

import config
from model import Bounds, Element, element_bounds
from renderer import Raster, rasterize_elements

logger = logging.getLogger(__name__)

Pixel = Tuple[int, int]
RasterSource = Union[Raster, Image.Image, np.ndarray]

_NEIGHBOURS = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


@dataclass
class Region:
    id: int
    bounds: Bounds
    points: Set[Pixel]
    elements: List[int] = field(default_factory=list)


@dataclass
class _Blob:
    min_x: int
    min_y: int
    max_x: int
    max_y: int
    points: Set[Pixel] = field(default_factory=set)

    @property
    def bounds(self) -> Bounds:
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def add(self, x: int, y: int) -> None:
        self.points.add((x, y))
        if x < self.min_x:
            self.min_x = x
        elif x > self.max_x:
            self.max_x = x
        if y < self.min_y:
            self.min_y = y
        elif y > self.max_y:
            self.max_y = y

    def merged_with(self, other: "_Blob") -> "_Blob":
        return _Blob(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
            self.points | other.points,
        )


def region_distance(a: Bounds, b: Bounds) -> float:
    """Description: Gap between two boxes, 0 when they overlap on both axes
    Inputs: a: Bounds, b: Bounds
    """
    gap_x = max(0, b[0] - a[2], a[0] - b[2])
    gap_y = max(0, b[1] - a[3], a[1] - b[3])
    return math.hypot(gap_x, gap_y)


def _alpha_channel(source: RasterSource) -> np.ndarray:
    if isinstance(source, Raster):
        return source.alpha
    if isinstance(source, Image.Image):
        if "A" in source.getbands():
            return np.asarray(source.getchannel("A"))
        if source.mode in ("1", "L"):
            return np.asarray(source.convert("L"))
        raise ValueError(f"image mode {source.mode} carries no alpha channel")
    array = np.asarray(source)
    if array.ndim == 2:
        return array
    if array.ndim == 3 and array.shape[2] == 4:
        return array[:, :, 3]
    raise ValueError(f"expected an alpha or RGBA array, got shape {array.shape}")


def _flood_fill(opaque: np.ndarray) -> List[_Blob]:
    """Description: 8-connected components of opaque pixels, found breadth-first in raster order
    Inputs: opaque: np.ndarray
    """
    height, width = opaque.shape
    rows = opaque.tolist()
    visited = [bytearray(width) for _ in range(height)]
    blobs: List[_Blob] = []
    for flat in np.flatnonzero(opaque):
        start_y, start_x = divmod(int(flat), width)
        if visited[start_y][start_x]:
            continue
        visited[start_y][start_x] = 1
        blob = _Blob(start_x, start_y, start_x, start_y)
        queue = deque([(start_x, start_y)])
        while queue:
            x, y = queue.popleft()
            blob.add(x, y)
            for dx, dy in _NEIGHBOURS:
                nx = x + dx
                ny = y + dy
                if 0 <= nx < width and 0 <= ny < height and rows[ny][nx] and not visited[ny][nx]:
                    visited[ny][nx] = 1
                    queue.append((nx, ny))
        blobs.append(blob)
    return blobs


def _merge_nearby(blobs: List[_Blob], grouping_distance: float) -> List[_Blob]:
    blobs = list(blobs)
    merged = True
    while merged:
        merged = False
        for i in range(len(blobs)):
            for j in range(i + 1, len(blobs)):
                if region_distance(blobs[i].bounds, blobs[j].bounds) <= grouping_distance:
                    blobs[i] = blobs[i].merged_with(blobs[j])
                    del blobs[j]
                    merged = True
                    break
            if merged:
                # A merged blob can now reach one that was out of range, rescan.
                break
    return blobs


def detect_regions(
    raster_source: RasterSource,
    min_region_size: int = config.MIN_REGION_SIZE,
    grouping_distance: float = config.GROUPING_DISTANCE,
    origin: Optional[Tuple[int, int]] = None,
) -> List[Region]:
    """Description: Label connected ink in a raster as merged bounding regions
    Inputs: raster_source: RasterSource, min_region_size: int, grouping_distance: float, origin: Optional[Tuple[int, int]]
    """
    if min_region_size < 1:
        raise ValueError(f"min_region_size must be at least 1, got {min_region_size}")
    if grouping_distance < 0:
        raise ValueError(f"grouping_distance must not be negative, got {grouping_distance}")
    if origin is None:
        origin = raster_source.origin if isinstance(raster_source, Raster) else (0, 0)

    alpha = _alpha_channel(raster_source)
    if alpha.size == 0:
        return []
    blobs = [blob for blob in _flood_fill(alpha > 0) if len(blob.points) >= min_region_size]
    merged = _merge_nearby(blobs, grouping_distance)
    logger.debug("Flood fill kept %d blobs, %d after merging", len(blobs), len(merged))

    ox, oy = origin
    regions: List[Region] = []
    for index, blob in enumerate(merged, start=1):
        regions.append(
            Region(
                id=index,
                bounds=(blob.min_x + ox, blob.min_y + oy, blob.max_x + ox, blob.max_y + oy),
                points={(x + ox, y + oy) for x, y in blob.points},
            )
        )
    return regions


def attach_elements(regions: List[Region], elements: Iterable[Element]) -> List[Region]:
    """Description: Fill each region's element list with ids of elements whose bounds touch it
    Inputs: regions: List[Region], elements: Iterable[Element]
    """
    boxes = [(element.id, element_bounds(element)) for element in elements]
    for region in regions:
        rx1, ry1, rx2, ry2 = region.bounds
        region.elements = [
            element_id
            for element_id, box in boxes
            if box is not None and box[0] <= rx2 and box[2] >= rx1 and box[1] <= ry2 and box[3] >= ry1
        ]
    return regions


def detect_element_regions(
    elements: Iterable[Element],
    min_region_size: int = config.MIN_REGION_SIZE,
    grouping_distance: float = config.GROUPING_DISTANCE,
    padding: float = config.REGION_PADDING,
) -> List[Region]:
    """Description: Rasterize the drawing offscreen and detect its regions
    Inputs: elements: Iterable[Element], min_region_size: int, grouping_distance: float, padding: float
    """
    content = [element for element in elements if element.type != "capture"]
    raster = rasterize_elements(content, padding)
    if raster is None:
        return []
    regions = detect_regions(raster, min_region_size, grouping_distance)
    attach_elements(regions, content)
    logger.info("Detected %d regions in a %dx%d raster", len(regions), *raster.size)
    return regions
