import pytest

from hit_test import cursor_for_handle, locate_element_at, position_within
from model import BoundedElement, PencilElement, PencilPoint, TextElement, UnrecognizedTypeError, create_element


@pytest.fixture
def rectangle():
    return create_element(0, 10, 10, 110, 60, "rectangle")


@pytest.mark.parametrize(
    "point, expected",
    [
        ((10, 10), "tl"),
        ((110, 10), "tr"),
        ((10, 60), "bl"),
        ((110, 60), "br"),
        ((13, 12), "tl"),
        ((60, 35), "inside"),
        ((60, 80), None),
    ],
)
def test_rectangle_positions(rectangle, point, expected):
    assert position_within(point[0], point[1], rectangle) == expected


def test_capture_behaves_like_rectangle():
    capture = create_element(0, 0, 0, 40, 40, "capture")
    assert position_within(0, 0, capture) == "tl"
    assert position_within(20, 20, capture) == "inside"


def test_line_positions():
    line = create_element(0, 0, 0, 100, 0, "line")
    assert position_within(2, 1, line) == "start"
    assert position_within(98, -2, line) == "end"
    assert position_within(50, 0, line) == "inside"
    assert position_within(50, 10, line) is None


def test_pencil_uses_looser_tolerance():
    pencil = PencilElement(
        id=0,
        points=(PencilPoint(0, 0), PencilPoint(50, 0), PencilPoint(50, 50)),
    )
    assert position_within(25, 2, pencil) == "inside"
    assert position_within(52, 25, pencil) == "inside"
    assert position_within(25, 30, pencil) is None


def test_single_point_pencil_is_never_hit():
    pencil = PencilElement(id=0, points=(PencilPoint(0, 0),))
    assert position_within(0, 0, pencil) is None


def test_text_hits_only_inside_its_box():
    text = TextElement(id=0, x1=10, y1=10, x2=60, y2=34, text="hi")
    assert position_within(30, 20, text) == "inside"
    assert position_within(70, 20, text) is None


def test_unknown_type_is_rejected():
    with pytest.raises(UnrecognizedTypeError):
        position_within(0, 0, BoundedElement(id=0, type="ellipse", x1=0, y1=0, x2=1, y2=1))


def test_locate_returns_earliest_created(rectangle):
    later = create_element(1, 0, 0, 200, 200, "rectangle")
    hit = locate_element_at(60, 35, [rectangle, later])
    assert hit.element.id == 0
    assert hit.position == "inside"


def test_locate_misses_far_points(rectangle):
    assert locate_element_at(210, 160, [rectangle]) is None
    assert locate_element_at(0, 0, []) is None


@pytest.mark.parametrize(
    "position, cursor",
    [
        ("tl", "nwse-resize"),
        ("br", "nwse-resize"),
        ("start", "nwse-resize"),
        ("end", "nwse-resize"),
        ("tr", "nesw-resize"),
        ("bl", "nesw-resize"),
        ("inside", "move"),
    ],
)
def test_cursor_for_handle(position, cursor):
    assert cursor_for_handle(position) == cursor


def test_tolerances_can_be_widened():
    rectangle = create_element(0, 10, 10, 110, 60, "rectangle")
    assert position_within(118, 68, rectangle) is None
    assert position_within(118, 68, rectangle, tolerance=10) == "br"

    pencil = PencilElement(id=1, points=(PencilPoint(0, 0), PencilPoint(100, 0)))
    assert locate_element_at(50, 20, [pencil]) is None
    hit = locate_element_at(50, 20, [pencil], pencil_tolerance=10)
    assert hit is not None and hit.position == "inside"


def test_capture_dragged_backwards_still_contains_its_interior():
    capture = create_element(0, 100, 100, 10, 10, "capture")
    assert position_within(50, 50, capture) == "inside"
    assert position_within(100, 100, capture) == "tl"
    assert position_within(150, 150, capture) is None
