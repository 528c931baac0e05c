# Configuration values for the Inkboard drawing surface.

WINDOW_TITLE = "Inkboard"
WINDOW_GEOMETRY = "1400x900"

TOOLS = [
    ("Select", "selection"),
    ("Line", "line"),
    ("Rect", "rectangle"),
    ("Pencil", "pencil"),
    ("Text", "text"),
    ("Eraser", "eraser"),
    ("Capture", "capture"),
]

DEFAULT_TOOL = "rectangle"

THEME = {
    "bg": "#1F2125",
    "panel": "#262A30",
    "panel_alt": "#2F343C",
    "text": "#E6E6E6",
    "muted": "#9AA0A6",
    "accent": "#0A84FF",
    "accent_alt": "#64D2FF",
    "danger": "#FF4D4D",
    "grid": "#323741",
}

INK_COLOR = "#E6E6E6"
RASTER_INK_COLOR = "#000000"
CAPTURE_DASH = (5, 5)
REGION_COLOR = "#0099FF"
REGION_DASH = (5, 5)
REGION_LABEL_FONT = ("Segoe UI", 12)

SHAPE_STROKE_WIDTH = 2
CAPTURE_STROKE_WIDTH = 1
ACTIVE_CAPTURE_COLOR = THEME["accent_alt"]

DEFAULT_PEN_SIZE = 3
PEN_SIZE_MIN = 1
PEN_SIZE_MAX = 20
DEFAULT_ERASER_SIZE = 10

# Hit testing, in screen pixels; divided by the zoom before use.
NEAR_POINT_TOLERANCE = 5
SEGMENT_TOLERANCE = 1
PENCIL_TOLERANCE = 5

TEXT_FONT = ("sans-serif", 24)
TEXT_LINE_HEIGHT = 24
TEXT_CHAR_WIDTH = 12

ZOOM_MIN = 0.1
ZOOM_MAX = 2.0
ZOOM_STEP = 0.1

IDLE_TIMEOUT_MS = 2000
DETECT_ON_IDLE = True

MIN_REGION_SIZE = 100
GROUPING_DISTANCE = 80
REGION_PADDING = 20

# Cursor tags from hit testing mapped to Tk cursor names.
CURSORS = {
    "nwse-resize": "bottom_right_corner",
    "nesw-resize": "bottom_left_corner",
    "move": "fleur",
    "default": "arrow",
}

LOG_LEVEL = "INFO"
LOG_LEVEL_ENV = "INKBOARD_LOG_LEVEL"
