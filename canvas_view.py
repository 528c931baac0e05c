from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

import tkinter as tk
import tkinter.font as tkfont

import config
from model import BoundedElement, Element, PencilElement, TextElement, UnrecognizedTypeError
from orchestrator import InteractionOrchestrator
from regions import Region
from renderer import visible_runs

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class CanvasView:
    def __init__(
        self,
        master: tk.Widget,
        orchestrator: InteractionOrchestrator,
        on_changed: Optional[Callable[[], None]] = None,
    ) -> None:
        """Description: Init
        Inputs: master: tk.Widget, orchestrator: InteractionOrchestrator, on_changed: Optional[Callable[[], None]]
        """
        self.orchestrator = orchestrator
        self.canvas = tk.Canvas(master, bg=config.THEME["bg"], highlightthickness=0)
        self.regions: List[Region] = []
        self._on_changed = on_changed

        self._text_font = tkfont.Font(family=config.TEXT_FONT[0], size=-config.TEXT_FONT[1])
        self._text_editor: Optional[tk.Text] = None
        self._text_window: Optional[int] = None

        orchestrator.measure_text = self.measure_text
        orchestrator.on_change = self.draw

        self._bindings: List[Tuple[str, str]] = []
        self._bind("<Configure>", lambda _event: self.draw())
        self._bind("<ButtonPress-1>", self._on_press)
        self._bind("<B1-Motion>", self._on_drag)
        self._bind("<ButtonRelease-1>", self._on_release)
        self._bind("<ButtonPress-2>", self._on_press)
        self._bind("<B2-Motion>", self._on_drag)
        self._bind("<ButtonRelease-2>", self._on_release)
        self._bind("<Motion>", self._on_hover)
        self._bind("<MouseWheel>", self._on_mouse_wheel)
        self._bind("<Button-4>", self._on_mouse_wheel)
        self._bind("<Button-5>", self._on_mouse_wheel)
        self._bind("<KeyPress-space>", self._on_space_press)
        self._bind("<KeyRelease-space>", self._on_space_release)
        self.canvas.focus_set()

    def destroy(self) -> None:
        """Description: Drop event bindings and the text editor
        Inputs: None
        """
        for sequence, func_id in self._bindings:
            self.canvas.unbind(sequence, func_id)
        self._bindings.clear()
        self._close_text_editor()
        self.orchestrator.on_change = None

    def set_tool(self, tool: str) -> None:
        """Description: Set tool
        Inputs: tool: str
        """
        self.orchestrator.set_tool(tool)
        self._apply_cursor()

    def set_regions(self, regions: List[Region]) -> None:
        self.regions = list(regions)
        self.draw()

    def measure_text(self, text: str) -> Tuple[float, float]:
        """Description: Text extent in document units using the canvas font
        Inputs: text: str
        """
        lines = text.split("\n")
        width = max(self._text_font.measure(line) for line in lines)
        height = self._text_font.metrics("linespace") * len(lines)
        return (float(width), float(height))

    def draw(self) -> None:
        """Description: Draw
        Inputs: None
        """
        self.canvas.delete("shape")
        self.canvas.delete("region")
        editing_id = None
        if self.orchestrator.action == "writing" and self.orchestrator.selection is not None:
            editing_id = self.orchestrator.selection.element_id
        capture = self.orchestrator.capture_area
        for element in self.orchestrator.document:
            if element.id == editing_id:
                continue
            if capture is not None and element.id == capture.id:
                continue
            try:
                self._draw_element(element)
            except UnrecognizedTypeError:
                logger.exception("Skipping element %s", element.id)
        self._draw_regions()
        self._draw_active_capture()
        self._sync_text_editor()
        if self._on_changed:
            self._on_changed()

    def _to_screen(self, x: float, y: float) -> Point:
        return self.orchestrator.viewport.document_to_screen((x, y))

    def _draw_element(self, element: Element) -> None:
        """Description: Draw one element on the live canvas
        Inputs: element: Element
        """
        zoom = self.orchestrator.viewport.zoom
        if element.type == "line" and isinstance(element, BoundedElement):
            p1 = self._to_screen(element.x1, element.y1)
            p2 = self._to_screen(element.x2, element.y2)
            self.canvas.create_line(
                p1[0], p1[1], p2[0], p2[1],
                fill=config.INK_COLOR,
                width=config.SHAPE_STROKE_WIDTH * zoom,
                tags="shape",
            )
        elif element.type == "rectangle" and isinstance(element, BoundedElement):
            p1 = self._to_screen(element.x1, element.y1)
            p2 = self._to_screen(element.x2, element.y2)
            self.canvas.create_rectangle(
                p1[0], p1[1], p2[0], p2[1],
                outline=config.INK_COLOR,
                width=config.SHAPE_STROKE_WIDTH * zoom,
                tags="shape",
            )
        elif element.type == "pencil" and isinstance(element, PencilElement):
            for run in visible_runs(element):
                if len(run) < 2:
                    continue
                coords: List[float] = []
                for x, y in run:
                    coords.extend(self._to_screen(x, y))
                self.canvas.create_line(
                    coords,
                    fill=config.INK_COLOR,
                    width=max(1.0, element.size * zoom),
                    capstyle=tk.ROUND,
                    joinstyle=tk.ROUND,
                    smooth=True,
                    tags="shape",
                )
        elif element.type == "text" and isinstance(element, TextElement):
            p = self._to_screen(element.x1, element.y1)
            size = max(1, int(config.TEXT_FONT[1] * zoom))
            self.canvas.create_text(
                p[0], p[1],
                text=element.text,
                fill=config.INK_COLOR,
                anchor="nw",
                font=(config.TEXT_FONT[0], -size),
                tags="shape",
            )
        elif element.type == "capture" and isinstance(element, BoundedElement):
            p1 = self._to_screen(element.x1, element.y1)
            p2 = self._to_screen(element.x2, element.y2)
            self.canvas.create_rectangle(
                p1[0], p1[1], p2[0], p2[1],
                outline=config.INK_COLOR,
                dash=config.CAPTURE_DASH,
                width=config.CAPTURE_STROKE_WIDTH,
                tags="shape",
            )
        else:
            raise UnrecognizedTypeError(element.type)

    def _draw_active_capture(self) -> None:
        capture = self.orchestrator.capture_area
        if capture is None:
            return
        p1 = self._to_screen(capture.x1, capture.y1)
        p2 = self._to_screen(capture.x2, capture.y2)
        self.canvas.create_rectangle(
            p1[0], p1[1], p2[0], p2[1],
            outline=config.ACTIVE_CAPTURE_COLOR,
            dash=config.CAPTURE_DASH,
            width=config.CAPTURE_STROKE_WIDTH,
            tags="shape",
        )

    def _draw_regions(self) -> None:
        for region in self.regions:
            x1, y1, x2, y2 = region.bounds
            p1 = self._to_screen(x1, y1)
            p2 = self._to_screen(x2, y2)
            self.canvas.create_rectangle(
                p1[0], p1[1], p2[0], p2[1],
                outline=config.REGION_COLOR,
                dash=config.REGION_DASH,
                width=1,
                tags="region",
            )
            self.canvas.create_text(
                p1[0] + 5, p1[1] + 5,
                text=f"#{region.id}",
                fill=config.REGION_COLOR,
                anchor="nw",
                font=config.REGION_LABEL_FONT,
                tags="region",
            )

    # Text editing overlay.

    def _sync_text_editor(self) -> None:
        element = self.orchestrator.selected_element
        writing = self.orchestrator.action == "writing" and isinstance(element, TextElement)
        if not writing:
            self._close_text_editor()
            return
        p = self._to_screen(element.x1, element.y1)
        if self._text_editor is not None and self._text_window is not None:
            self.canvas.coords(self._text_window, p[0], p[1])
            return
        size = max(1, int(config.TEXT_FONT[1] * self.orchestrator.viewport.zoom))
        editor = tk.Text(
            self.canvas,
            width=24,
            height=1,
            bd=0,
            highlightthickness=0,
            bg=config.THEME["panel_alt"],
            fg=config.INK_COLOR,
            insertbackground=config.INK_COLOR,
            font=(config.TEXT_FONT[0], -size),
            wrap="none",
        )
        editor.insert("1.0", element.text)
        editor.bind("<FocusOut>", self._on_text_blur)
        editor.bind("<Escape>", lambda _event: self.canvas.focus_set())
        self._text_editor = editor
        self._text_window = self.canvas.create_window(p[0], p[1], window=editor, anchor="nw")
        # Focus after the press that opened the editor has been handled.
        self.canvas.after_idle(editor.focus_set)

    def _on_text_blur(self, _event: tk.Event) -> None:
        """Description: Commit typed text when the editor loses focus
        Inputs: _event: tk.Event
        """
        if self._text_editor is None:
            return
        text = self._text_editor.get("1.0", "end-1c")
        self._close_text_editor()
        self.orchestrator.finish_writing(text)
        self.draw()

    def _close_text_editor(self) -> None:
        if self._text_window is not None:
            self.canvas.delete(self._text_window)
            self._text_window = None
        if self._text_editor is not None:
            editor = self._text_editor
            self._text_editor = None
            editor.destroy()

    # Event plumbing.

    def _bind(self, sequence: str, handler: Callable[[tk.Event], None]) -> None:
        func_id = self.canvas.bind(sequence, handler, add="+")
        self._bindings.append((sequence, func_id))

    def _event_point(self, event: tk.Event) -> Point:
        return self.orchestrator.viewport.screen_to_document((event.x, event.y))

    def _on_press(self, event: tk.Event) -> None:
        """Description: On press
        Inputs: event: tk.Event
        """
        if self._text_editor is not None:
            # Clicking the canvas blurs the editor, which commits the text.
            self.canvas.focus_set()
            return
        self.canvas.focus_set()
        x, y = self._event_point(event)
        self.orchestrator.pointer_down(x, y, button=event.num)
        self.draw()

    def _on_drag(self, event: tk.Event) -> None:
        """Description: On drag
        Inputs: event: tk.Event
        """
        x, y = self._event_point(event)
        self.orchestrator.pointer_move(x, y)
        self._apply_cursor()

    def _on_release(self, event: tk.Event) -> None:
        """Description: On release
        Inputs: event: tk.Event
        """
        x, y = self._event_point(event)
        self.orchestrator.pointer_up(x, y)
        self.draw()

    def _on_hover(self, event: tk.Event) -> None:
        if self.orchestrator.action != "none":
            return
        x, y = self._event_point(event)
        self.orchestrator.pointer_move(x, y)
        self._apply_cursor()

    def _on_mouse_wheel(self, event: tk.Event) -> None:
        """Description: Ctrl+wheel zooms at the pointer, plain wheel pans vertically
        Inputs: event: tk.Event
        """
        if event.num == 4:
            steps = 1
        elif event.num == 5:
            steps = -1
        else:
            steps = 1 if event.delta > 0 else -1
        if event.state & 0x0004:
            self.orchestrator.zoom(steps * config.ZOOM_STEP, (event.x, event.y))
        else:
            zoom = self.orchestrator.viewport.zoom
            self.orchestrator.viewport.pan_by(0, steps * 40 / zoom)
            self.draw()

    def _on_space_press(self, _event: tk.Event) -> None:
        self.orchestrator.key_down("space")

    def _on_space_release(self, _event: tk.Event) -> None:
        self.orchestrator.key_up("space")

    def _apply_cursor(self) -> None:
        cursor = self.orchestrator.cursor if self.orchestrator.tool == "selection" else "default"
        self.canvas.configure(cursor=config.CURSORS.get(cursor, config.CURSORS["default"]))
