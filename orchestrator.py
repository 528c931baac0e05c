# Pointer/keyboard state machine that turns input into element edits and history commits.

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Callable, Iterable, List, Optional, Set, Tuple

import config
from adjust import adjustment_required, canonicalize_coordinates, compute_resized_coordinates
from history import History
from hit_test import Hit, cursor_for_handle, locate_element_at
from idle_timer import IdleTimer
from model import (
    AppendPoint,
    BoundedElement,
    Document,
    Element,
    EraseNear,
    MovePoints,
    PencilElement,
    SetCorners,
    SetText,
    TextElement,
    create_element,
)
from viewport import Viewport

logger = logging.getLogger(__name__)

TOOLS = ("selection", "line", "rectangle", "pencil", "text", "eraser", "capture")
ACTIONS = ("none", "panning", "drawing", "moving", "resizing", "erasing", "writing")

MIDDLE_BUTTON = 2
PAN_KEY = "space"

TextMeasurer = Callable[[str], Tuple[float, float]]


def default_text_extent(text: str) -> Tuple[float, float]:
    """Description: Rough text extent when no font metrics are available
    Inputs: text: str
    """
    lines = text.split("\n") or [""]
    width = max(len(line) for line in lines) * config.TEXT_CHAR_WIDTH
    return (float(width), float(len(lines) * config.TEXT_LINE_HEIGHT))


@dataclass
class SelectionContext:
    element_id: int
    position: str = "inside"
    offset_x: float = 0.0
    offset_y: float = 0.0
    x_offsets: List[float] = field(default_factory=list)
    y_offsets: List[float] = field(default_factory=list)
    start: Tuple[float, float] = (0.0, 0.0)


class InteractionOrchestrator:
    def __init__(
        self,
        history: Optional[History[Document]] = None,
        viewport: Optional[Viewport] = None,
        measure_text: TextMeasurer = default_text_extent,
        idle_timer: Optional[IdleTimer] = None,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        """Description: Init
        Inputs: history: Optional[History[Document]], viewport: Optional[Viewport], measure_text: TextMeasurer, idle_timer: Optional[IdleTimer], on_change: Optional[Callable[[], None]]
        """
        self.history: History[Document] = history if history is not None else History(Document())
        self.viewport = viewport if viewport is not None else Viewport()
        self.measure_text = measure_text
        self.idle_timer = idle_timer
        self.on_change = on_change

        self.tool = config.DEFAULT_TOOL
        self.action = "none"
        self.pen_size = config.DEFAULT_PEN_SIZE
        self.eraser_size = config.DEFAULT_ERASER_SIZE
        self.cursor = "default"
        self.pressed_keys: Set[str] = set()
        self.selection: Optional[SelectionContext] = None
        self.capture_area: Optional[BoundedElement] = None

        self._pan_start: Optional[Tuple[float, float]] = None
        self._erase_committed = False

    @property
    def document(self) -> Document:
        return self.history.current()

    @property
    def selected_element(self):
        if self.selection is None:
            return None
        return self.document.get(self.selection.element_id)

    def set_tool(self, tool: str) -> None:
        """Description: Set tool
        Inputs: tool: str
        """
        if tool not in TOOLS:
            raise ValueError(f"Unknown tool: {tool}")
        self.tool = tool
        self.cursor = "default"

    def key_down(self, key: str) -> None:
        self.pressed_keys.add(key)

    def key_up(self, key: str) -> None:
        self.pressed_keys.discard(key)

    def undo(self) -> bool:
        if self.action == "writing":
            return False
        moved = self.history.undo()
        if moved:
            logger.debug("Undo to snapshot %d", self.history.cursor)
            self._notify_changed()
        return moved

    def redo(self) -> bool:
        if self.action == "writing":
            return False
        moved = self.history.redo()
        if moved:
            logger.debug("Redo to snapshot %d", self.history.cursor)
            self._notify_changed()
        return moved

    def zoom(self, delta: float, anchor: Tuple[float, float] = (0.0, 0.0)) -> bool:
        changed = self.viewport.zoom_by(delta, anchor)
        if changed:
            self._notify_changed()
        return changed

    # Pointer events, coordinates already in document space.

    def pointer_down(self, x: float, y: float, button: int = 1) -> None:
        """Description: Pointer down
        Inputs: x: float, y: float, button: int
        """
        if self.action == "writing":
            return

        if button == MIDDLE_BUTTON or PAN_KEY in self.pressed_keys:
            self.action = "panning"
            self._pan_start = (x, y)
            return

        self._reset_idle_timer()

        if self.tool == "eraser":
            self.action = "erasing"
            self._erase_committed = False
            self._erase_at(x, y)
            return

        if self.tool == "selection":
            self._begin_selection(x, y)
            return

        document = self.document.copy()
        element = create_element(document.new_id(), x, y, x, y, self.tool, self.pen_size)
        document.add(element)
        self._commit(document)
        self.selection = SelectionContext(element_id=element.id, start=(x, y))
        if self.tool == "capture":
            self.capture_area = element
        self.action = "writing" if self.tool == "text" else "drawing"

    def pointer_move(self, x: float, y: float) -> None:
        """Description: Pointer move
        Inputs: x: float, y: float
        """
        if self.action == "panning":
            if self._pan_start is not None:
                self.viewport.pan_by(x - self._pan_start[0], y - self._pan_start[1])
                self._notify_changed()
            return

        if self.action == "erasing":
            self._erase_at(x, y)
            return

        if self.tool == "selection":
            hit = self._locate(x, y, self.document)
            self.cursor = cursor_for_handle(hit.position) if hit else "default"

        if self.action == "drawing":
            self._reset_idle_timer()
            self._update_drawing(x, y)
        elif self.action == "moving":
            self._update_moving(x, y)
        elif self.action == "resizing":
            self._update_resizing(x, y)

    def pointer_up(self, x: float, y: float) -> None:
        """Description: Pointer up
        Inputs: x: float, y: float
        """
        if self.action == "panning":
            self.action = "none"
            self._pan_start = None
            return

        selection = self.selection
        element = self.selected_element
        if selection is not None and element is not None:
            if (
                isinstance(element, TextElement)
                and self.action == "moving"
                and (x, y) == selection.start
            ):
                # A click on text without dragging reopens it for editing.
                self.action = "writing"
                return

            if self.action in ("drawing", "resizing") and adjustment_required(element.type):
                settled = canonicalize_coordinates(element)
                if settled != element:
                    document = self.document.copy()
                    document.replace(settled)
                    self._commit(document, overwrite=True)

        if self.action == "drawing":
            logger.info("Finished %s element", element.type if element is not None else "unknown")
        if self.action == "writing":
            return

        self.action = "none"
        self.selection = None
        self._erase_committed = False
        self.capture_area = None

    def finish_writing(self, text: str) -> None:
        """Description: Store the typed text and leave writing mode, called when the text entry loses focus
        Inputs: text: str
        """
        element = self.selected_element
        self.action = "none"
        self.selection = None
        if not isinstance(element, TextElement):
            return
        width, height = self.measure_text(text)
        document = self.document.copy()
        document.update(element.id, SetText(text, width, height))
        self._commit(document, overwrite=True)

    # Internals.

    def _begin_selection(self, x: float, y: float) -> None:
        hit = self._locate(x, y, self.document)
        if hit is None:
            return
        element = hit.element
        if isinstance(element, PencilElement):
            self.selection = SelectionContext(
                element_id=element.id,
                position=hit.position,
                x_offsets=[x - p.x for p in element.points],
                y_offsets=[y - p.y for p in element.points],
                start=(x, y),
            )
        else:
            self.selection = SelectionContext(
                element_id=element.id,
                position=hit.position,
                offset_x=x - element.x1,
                offset_y=y - element.y1,
                start=(x, y),
            )
        # Fresh snapshot so the following overwrite drags form one undo step.
        self._commit(self.document.copy())
        self.action = "moving" if hit.position == "inside" else "resizing"

    def _update_drawing(self, x: float, y: float) -> None:
        element = self.selected_element
        if element is None:
            return
        document = self.document.copy()
        if isinstance(element, PencilElement):
            updated = document.update(element.id, AppendPoint(x, y))
        else:
            updated = document.update(element.id, SetCorners(element.x1, element.y1, x, y))
        if updated.type == "capture":
            self.capture_area = updated
        self._commit(document, overwrite=True)

    def _update_moving(self, x: float, y: float) -> None:
        selection = self.selection
        element = self.selected_element
        if selection is None or element is None:
            return
        document = self.document.copy()
        if isinstance(element, PencilElement):
            points = tuple(
                (x - dx, y - dy) for dx, dy in zip(selection.x_offsets, selection.y_offsets)
            )
            document.update(element.id, MovePoints(points))
        else:
            width = element.x2 - element.x1
            height = element.y2 - element.y1
            new_x1 = x - selection.offset_x
            new_y1 = y - selection.offset_y
            document.update(element.id, SetCorners(new_x1, new_y1, new_x1 + width, new_y1 + height))
        self._commit(document, overwrite=True)

    def _update_resizing(self, x: float, y: float) -> None:
        selection = self.selection
        element = self.selected_element
        if selection is None or not isinstance(element, BoundedElement):
            return
        coordinates = compute_resized_coordinates(x, y, selection.position, element.coordinates)
        if coordinates is None:
            return
        document = self.document.copy()
        document.update(element.id, SetCorners(*coordinates))
        self._commit(document, overwrite=True)

    def _erase_at(self, x: float, y: float) -> None:
        document = self.document.copy()
        changed = False
        shapes = []
        for element in document:
            if isinstance(element, PencilElement):
                erased = document.update(element.id, EraseNear(x, y, self.eraser_size))
                changed = changed or erased != element
            else:
                shapes.append(element)
        hit = self._locate(x, y, shapes)
        if hit is not None:
            document.remove(hit.element.id)
            logger.debug("Erased %s element %d", hit.element.type, hit.element.id)
            changed = True
        if not changed:
            return
        self._commit(document, overwrite=self._erase_committed)
        self._erase_committed = True

    def _locate(self, x: float, y: float, elements: Iterable[Element]) -> Optional[Hit]:
        # Tolerances are screen pixels, so they widen in document units as the view zooms out.
        zoom = self.viewport.zoom
        return locate_element_at(
            x,
            y,
            elements,
            tolerance=config.NEAR_POINT_TOLERANCE / zoom,
            pencil_tolerance=config.PENCIL_TOLERANCE / zoom,
        )

    def _commit(self, document: Document, overwrite: bool = False) -> None:
        self.history.commit(document, overwrite=overwrite)
        self._notify_changed()

    def _reset_idle_timer(self) -> None:
        if self.idle_timer is not None:
            self.idle_timer.reset()

    def _notify_changed(self) -> None:
        if self.on_change:
            self.on_change()
