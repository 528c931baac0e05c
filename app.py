from __future__ import annotations

import logging
import tkinter as tk
from tkinter import messagebox

import config
from canvas_view import CanvasView
from history import History
from idle_timer import IdleTimer
from model import Document
from orchestrator import InteractionOrchestrator
from regions import detect_element_regions
from viewport import Viewport

logger = logging.getLogger(__name__)


class InkboardApp:
    def __init__(self) -> None:
        self.root = tk.Tk()
        self.root.title(config.WINDOW_TITLE)
        self.root.configure(bg=config.THEME["bg"])
        self.root.geometry(config.WINDOW_GEOMETRY)

        self.idle_timer = IdleTimer(self.root.after, self.root.after_cancel, self._on_idle)
        self.orchestrator = InteractionOrchestrator(
            history=History(Document()),
            viewport=Viewport(),
            idle_timer=self.idle_timer,
        )

        self._build_menu()
        self._build_layout()
        self._bind_shortcuts()
        self.root.protocol("WM_DELETE_WINDOW", self.close)

        self._set_tool(config.DEFAULT_TOOL)
        self.canvas_view.draw()

    def run(self) -> None:
        self.root.mainloop()

    def close(self) -> None:
        self.idle_timer.cancel()
        self.canvas_view.destroy()
        self.root.destroy()

    def _build_menu(self) -> None:
        menu = tk.Menu(self.root)
        self.root.config(menu=menu)

        edit_menu = tk.Menu(menu, tearoff=0)
        edit_menu.add_command(label="Undo", command=self.undo, accelerator="Ctrl+Z")
        edit_menu.add_command(label="Redo", command=self.redo, accelerator="Ctrl+Shift+Z")
        menu.add_cascade(label="Edit", menu=edit_menu)

        view_menu = tk.Menu(menu, tearoff=0)
        view_menu.add_command(label="Zoom In", command=self.zoom_in)
        view_menu.add_command(label="Zoom Out", command=self.zoom_out)
        view_menu.add_command(label="Reset Zoom", command=self.reset_zoom)
        menu.add_cascade(label="View", menu=view_menu)

        regions_menu = tk.Menu(menu, tearoff=0)
        regions_menu.add_command(label="Detect Regions", command=self.detect_regions, accelerator="Ctrl+D")
        regions_menu.add_command(label="Clear Regions", command=self.clear_regions)
        menu.add_cascade(label="Regions", menu=regions_menu)

        help_menu = tk.Menu(menu, tearoff=0)
        help_menu.add_command(label="About", command=self.show_about)
        menu.add_cascade(label="Help", menu=help_menu)

    def _build_layout(self) -> None:
        self._build_status_bar()

        self.main_frame = tk.Frame(self.root, bg=config.THEME["bg"])
        self.main_frame.pack(fill=tk.BOTH, expand=True)

        self.main_frame.columnconfigure(0, weight=0)
        self.main_frame.columnconfigure(1, weight=1)
        self.main_frame.rowconfigure(0, weight=1)

        self.toolbar_frame = tk.Frame(self.main_frame, bg=config.THEME["panel"], padx=10, pady=10)
        self.toolbar_frame.grid(row=0, column=0, sticky="ns")

        self.canvas_frame = tk.Frame(self.main_frame, bg=config.THEME["bg"], padx=8, pady=8)
        self.canvas_frame.grid(row=0, column=1, sticky="nsew")
        self.canvas_frame.rowconfigure(0, weight=1)
        self.canvas_frame.columnconfigure(0, weight=1)

        self.canvas_view = CanvasView(self.canvas_frame, self.orchestrator, on_changed=self._update_status)
        self.canvas_view.canvas.grid(row=0, column=0, sticky="nsew")

        self._build_toolbar()

    def _build_toolbar(self) -> None:
        header = tk.Label(self.toolbar_frame, text="Tools", bg=config.THEME["panel"], fg=config.THEME["text"], font=("Segoe UI", 12, "bold"))
        header.pack(anchor="w", pady=(0, 10))

        self.tool_buttons: dict[str, tk.Button] = {}
        for label, tool in config.TOOLS:
            button = tk.Button(
                self.toolbar_frame,
                text=label,
                command=lambda t=tool: self._set_tool(t),
                bg=config.THEME["panel_alt"],
                fg=config.THEME["text"],
                activebackground=config.THEME["accent"],
                activeforeground=config.THEME["text"],
                relief=tk.FLAT,
                width=10,
            )
            button.pack(fill=tk.X, pady=2)
            self.tool_buttons[tool] = button

        size_label = tk.Label(self.toolbar_frame, text="Pen size", bg=config.THEME["panel"], fg=config.THEME["muted"])
        size_label.pack(anchor="w", pady=(12, 0))
        self.pen_size_var = tk.IntVar(value=config.DEFAULT_PEN_SIZE)
        pen_scale = tk.Scale(
            self.toolbar_frame,
            from_=config.PEN_SIZE_MIN,
            to=config.PEN_SIZE_MAX,
            orient=tk.HORIZONTAL,
            variable=self.pen_size_var,
            command=lambda _value: self._sync_pen_size(),
            bg=config.THEME["panel"],
            fg=config.THEME["text"],
            highlightthickness=0,
        )
        pen_scale.pack(fill=tk.X)

        eraser_label = tk.Label(self.toolbar_frame, text="Eraser size", bg=config.THEME["panel"], fg=config.THEME["muted"])
        eraser_label.pack(anchor="w", pady=(8, 0))
        self.eraser_size_var = tk.IntVar(value=config.DEFAULT_ERASER_SIZE)
        eraser_scale = tk.Scale(
            self.toolbar_frame,
            from_=1,
            to=50,
            orient=tk.HORIZONTAL,
            variable=self.eraser_size_var,
            command=lambda _value: self._sync_eraser_size(),
            bg=config.THEME["panel"],
            fg=config.THEME["text"],
            highlightthickness=0,
        )
        eraser_scale.pack(fill=tk.X)

        actions = [
            ("Undo", self.undo),
            ("Redo", self.redo),
            ("Detect Regions", self.detect_regions),
        ]
        for label, command in actions:
            tk.Button(
                self.toolbar_frame,
                text=label,
                command=command,
                bg=config.THEME["panel_alt"],
                fg=config.THEME["text"],
                relief=tk.FLAT,
            ).pack(fill=tk.X, pady=(8, 0))

    def _build_status_bar(self) -> None:
        self.status_var = tk.StringVar()
        status = tk.Label(self.root, textvariable=self.status_var, anchor="w", bg=config.THEME["panel"], fg=config.THEME["muted"], padx=8)
        status.pack(fill=tk.X, side=tk.BOTTOM)

    def _bind_shortcuts(self) -> None:
        self.root.bind_all("<Control-z>", self._on_undo_shortcut)
        self.root.bind_all("<Control-Z>", self._on_redo_shortcut)
        self.root.bind_all("<Control-Shift-z>", self._on_redo_shortcut)
        self.root.bind_all("<Control-d>", self._on_detect_shortcut)
        self.root.bind_all("<Control-plus>", lambda _event: self.zoom_in())
        self.root.bind_all("<Control-minus>", lambda _event: self.zoom_out())

    def _text_input_focused(self) -> bool:
        widget = self.root.focus_get()
        return isinstance(widget, (tk.Entry, tk.Text))

    def _on_undo_shortcut(self, _event: tk.Event) -> None:
        if self._text_input_focused():
            return
        self.undo()

    def _on_redo_shortcut(self, _event: tk.Event) -> None:
        if self._text_input_focused():
            return
        self.redo()

    def _on_detect_shortcut(self, _event: tk.Event) -> None:
        if self._text_input_focused():
            return
        self.detect_regions()

    def _set_tool(self, tool: str) -> None:
        self.canvas_view.set_tool(tool)
        for name, button in self.tool_buttons.items():
            button.configure(bg=config.THEME["accent"] if name == tool else config.THEME["panel_alt"])
        self._update_status()

    def _sync_pen_size(self) -> None:
        self.orchestrator.pen_size = int(self.pen_size_var.get())

    def _sync_eraser_size(self) -> None:
        self.orchestrator.eraser_size = int(self.eraser_size_var.get())

    def undo(self) -> None:
        self.orchestrator.undo()

    def redo(self) -> None:
        self.orchestrator.redo()

    def _canvas_center(self) -> tuple[float, float]:
        canvas = self.canvas_view.canvas
        return (canvas.winfo_width() / 2, canvas.winfo_height() / 2)

    def zoom_in(self) -> None:
        self.orchestrator.zoom(config.ZOOM_STEP, self._canvas_center())

    def zoom_out(self) -> None:
        self.orchestrator.zoom(-config.ZOOM_STEP, self._canvas_center())

    def reset_zoom(self) -> None:
        self.orchestrator.viewport.reset_zoom(self._canvas_center())
        self.canvas_view.draw()

    def detect_regions(self) -> None:
        regions = detect_element_regions(self.orchestrator.document)
        self.canvas_view.set_regions(regions)
        logger.info("Showing %d regions", len(regions))

    def clear_regions(self) -> None:
        self.canvas_view.set_regions([])

    def _on_idle(self) -> None:
        if config.DETECT_ON_IDLE and self.orchestrator.action == "none":
            self.detect_regions()

    def _update_status(self) -> None:
        history = self.orchestrator.history
        self.status_var.set(
            f"Tool: {self.orchestrator.tool}   "
            f"Zoom: {round(self.orchestrator.viewport.zoom * 100)}%   "
            f"Elements: {len(self.orchestrator.document)}   "
            f"History: {history.cursor + 1}/{len(history)}   "
            f"Regions: {len(self.canvas_view.regions)}"
        )

    def show_about(self) -> None:
        messagebox.showinfo("About", "Inkboard\nFreehand drawing surface with ink region detection.")


def run_app() -> None:
    app = InkboardApp()
    app.run()
