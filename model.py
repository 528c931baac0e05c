from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

import config
from geometry import is_point_near_eraser

Point = Tuple[float, float]
Bounds = Tuple[float, float, float, float]

ELEMENT_TYPES = ("line", "rectangle", "pencil", "text", "capture")
BOUNDED_TYPES = ("line", "rectangle", "capture")


class UnrecognizedTypeError(ValueError):
    """Raised when an element type tag is not one of ELEMENT_TYPES."""

    def __init__(self, type_tag: object) -> None:
        self.type_tag = type_tag
        super().__init__(f"Type not recognised: {type_tag}")


class UnsupportedUpdateError(TypeError):
    """Raised when an update command does not apply to the element variant."""

    def __init__(self, element: "Element", command: object) -> None:
        self.element = element
        self.command = command
        super().__init__(f"{type(command).__name__} cannot update a {element.type} element")


@dataclass(frozen=True)
class PencilPoint:
    x: float
    y: float
    is_erased: bool = False

    def to_dict(self) -> Dict:
        return {"x": self.x, "y": self.y, "is_erased": self.is_erased}


@dataclass(frozen=True)
class BoundedElement:
    id: int
    type: str
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def coordinates(self) -> Bounds:
        return (self.x1, self.y1, self.x2, self.y2)

    def to_dict(self) -> Dict:
        """Description: To dict
        Inputs: None
        """
        return {
            "id": self.id,
            "type": self.type,
            "x1": self.x1,
            "y1": self.y1,
            "x2": self.x2,
            "y2": self.y2,
        }


@dataclass(frozen=True)
class PencilElement:
    id: int
    points: Tuple[PencilPoint, ...]
    size: float = config.DEFAULT_PEN_SIZE
    type: str = "pencil"

    def visible_points(self) -> List[PencilPoint]:
        """Description: Points not flagged by the eraser
        Inputs: None
        """
        return [point for point in self.points if not point.is_erased]

    def to_dict(self) -> Dict:
        """Description: To dict
        Inputs: None
        """
        return {
            "id": self.id,
            "type": self.type,
            "points": [point.to_dict() for point in self.points],
            "size": self.size,
        }


@dataclass(frozen=True)
class TextElement:
    id: int
    x1: float
    y1: float
    x2: float
    y2: float
    text: str = ""
    type: str = "text"

    @property
    def coordinates(self) -> Bounds:
        return (self.x1, self.y1, self.x2, self.y2)

    def to_dict(self) -> Dict:
        """Description: To dict
        Inputs: None
        """
        return {
            "id": self.id,
            "type": self.type,
            "x1": self.x1,
            "y1": self.y1,
            "x2": self.x2,
            "y2": self.y2,
            "text": self.text,
        }


Element = Union[BoundedElement, PencilElement, TextElement]


# Update commands, one per kind of edit.


@dataclass(frozen=True)
class SetCorners:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class AppendPoint:
    x: float
    y: float


@dataclass(frozen=True)
class MovePoints:
    points: Tuple[Point, ...]


@dataclass(frozen=True)
class EraseNear:
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class SetText:
    text: str
    width: float
    height: float


UpdateCommand = Union[SetCorners, AppendPoint, MovePoints, EraseNear, SetText]


def check_type(type_tag: object) -> str:
    """Description: Validate an element type tag
    Inputs: type_tag: object
    """
    if type_tag not in ELEMENT_TYPES:
        raise UnrecognizedTypeError(type_tag)
    return str(type_tag)


def create_element(
    id: int,
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    type: str,
    pen_size: float = config.DEFAULT_PEN_SIZE,
) -> Element:
    """Description: Build a new element of the given variant
    Inputs: id: int, x1: float, y1: float, x2: float, y2: float, type: str, pen_size: float
    """
    if type in BOUNDED_TYPES:
        return BoundedElement(id=id, type=type, x1=x1, y1=y1, x2=x2, y2=y2)
    if type == "pencil":
        return PencilElement(id=id, points=(PencilPoint(x1, y1),), size=pen_size)
    if type == "text":
        return TextElement(id=id, x1=x1, y1=y1, x2=x2, y2=y2)
    raise UnrecognizedTypeError(type)


def apply_update(element: Element, command: UpdateCommand) -> Element:
    """Description: Return a copy of the element with the command applied
    Inputs: element: Element, command: UpdateCommand
    """
    check_type(element.type)
    if isinstance(command, SetCorners):
        if isinstance(element, (BoundedElement, TextElement)):
            return replace(element, x1=command.x1, y1=command.y1, x2=command.x2, y2=command.y2)
    elif isinstance(command, SetText):
        if isinstance(element, TextElement):
            return replace(
                element,
                text=command.text,
                x2=element.x1 + command.width,
                y2=element.y1 + command.height,
            )
    elif isinstance(element, PencilElement):
        if isinstance(command, AppendPoint):
            return replace(element, points=element.points + (PencilPoint(command.x, command.y),))
        if isinstance(command, MovePoints):
            if len(command.points) != len(element.points):
                raise ValueError(
                    f"pencil {element.id} has {len(element.points)} points, got {len(command.points)}"
                )
            moved = tuple(
                PencilPoint(x, y, old.is_erased) for (x, y), old in zip(command.points, element.points)
            )
            return replace(element, points=moved)
        if isinstance(command, EraseNear):
            erased = tuple(
                PencilPoint(p.x, p.y, True)
                if not p.is_erased and is_point_near_eraser(p.x, p.y, command.x, command.y, command.radius)
                else p
                for p in element.points
            )
            return replace(element, points=erased)
    raise UnsupportedUpdateError(element, command)


def element_from_dict(payload: Dict) -> Element:
    """Description: From dict
    Inputs: payload: Dict
    """
    type_tag = check_type(payload.get("type"))
    if type_tag in BOUNDED_TYPES:
        return BoundedElement(
            id=int(payload["id"]),
            type=type_tag,
            x1=payload["x1"],
            y1=payload["y1"],
            x2=payload["x2"],
            y2=payload["y2"],
        )
    if type_tag == "pencil":
        points = tuple(
            PencilPoint(p["x"], p["y"], bool(p.get("is_erased", False))) for p in payload.get("points", [])
        )
        return PencilElement(id=int(payload["id"]), points=points, size=payload.get("size", config.DEFAULT_PEN_SIZE))
    return TextElement(
        id=int(payload["id"]),
        x1=payload["x1"],
        y1=payload["y1"],
        x2=payload["x2"],
        y2=payload["y2"],
        text=payload.get("text", ""),
    )


def element_bounds(element: Element) -> Optional[Bounds]:
    """Description: Axis-aligned (min_x, min_y, max_x, max_y) of an element
    Inputs: element: Element
    """
    check_type(element.type)
    if isinstance(element, PencilElement):
        points = element.visible_points()
        if not points:
            return None
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return (min(xs), min(ys), max(xs), max(ys))
    x1, y1, x2, y2 = element.coordinates
    return (min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))


def calculate_bounds_for_elements(
    elements: Iterable[Element], padding: float = config.REGION_PADDING
) -> Optional[Bounds]:
    """Description: Padded union of element bounds, None when nothing has extent
    Inputs: elements: Iterable[Element], padding: float
    """
    boxes = [b for b in (element_bounds(e) for e in elements) if b is not None]
    if not boxes:
        return None
    return (
        min(b[0] for b in boxes) - padding,
        min(b[1] for b in boxes) - padding,
        max(b[2] for b in boxes) + padding,
        max(b[3] for b in boxes) + padding,
    )


@dataclass
class Document:
    """Element collection keyed by id.

    Ids come from a counter that only grows, so an id is never reused and
    never depends on where an element sits in the collection. Iteration
    follows creation order.
    """

    elements_by_id: Dict[int, Element] = field(default_factory=dict)
    next_id: int = 0

    @classmethod
    def from_elements(cls, elements: Iterable[Element]) -> "Document":
        """Description: From elements
        Inputs: cls, elements: Iterable[Element]
        """
        document = cls()
        for element in elements:
            document.add(element)
        return document

    @property
    def elements(self) -> List[Element]:
        return list(self.elements_by_id.values())

    def __iter__(self) -> Iterator[Element]:
        return iter(list(self.elements_by_id.values()))

    def __len__(self) -> int:
        return len(self.elements_by_id)

    def __contains__(self, element_id: object) -> bool:
        return element_id in self.elements_by_id

    def new_id(self) -> int:
        """Description: Reserve the next element id
        Inputs: None
        """
        element_id = self.next_id
        self.next_id += 1
        return element_id

    def get(self, element_id: int) -> Optional[Element]:
        return self.elements_by_id.get(element_id)

    def add(self, element: Element) -> None:
        """Description: Add a new element
        Inputs: element: Element
        """
        check_type(element.type)
        if element.id in self.elements_by_id:
            raise KeyError(f"element {element.id} already exists")
        self.elements_by_id[element.id] = element
        self.next_id = max(self.next_id, element.id + 1)

    def replace(self, element: Element) -> None:
        """Description: Swap in a new version of an existing element
        Inputs: element: Element
        """
        if element.id not in self.elements_by_id:
            raise KeyError(f"element {element.id} does not exist")
        self.elements_by_id[element.id] = element

    def update(self, element_id: int, command: UpdateCommand) -> Element:
        """Description: Apply an update command to the element with this id
        Inputs: element_id: int, command: UpdateCommand
        """
        element = self.elements_by_id.get(element_id)
        if element is None:
            raise KeyError(f"element {element_id} does not exist")
        updated = apply_update(element, command)
        self.elements_by_id[element_id] = updated
        return updated

    def remove(self, element_id: int) -> Optional[Element]:
        return self.elements_by_id.pop(element_id, None)

    def copy(self) -> "Document":
        # Elements are frozen, a shallow copy of the mapping is a full snapshot.
        return Document(elements_by_id=dict(self.elements_by_id), next_id=self.next_id)

    def to_dict(self) -> Dict:
        """Description: To dict
        Inputs: None
        """
        return {
            "next_id": self.next_id,
            "elements": [element.to_dict() for element in self.elements_by_id.values()],
        }

    @classmethod
    def from_dict(cls, payload: Dict) -> "Document":
        """Description: From dict
        Inputs: cls, payload: Dict
        """
        document = cls.from_elements(element_from_dict(item) for item in payload.get("elements", []))
        document.next_id = max(document.next_id, int(payload.get("next_id", 0)))
        return document
