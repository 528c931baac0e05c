import pytest
from PIL import Image, ImageDraw

from model import BoundedElement, PencilElement, PencilPoint, UnrecognizedTypeError, create_element
from regions import detect_element_regions
from renderer import color_to_rgba, rasterize_elements, render_element, visible_runs


def test_color_to_rgba():
    assert color_to_rgba("#000000") == (0, 0, 0, 255)
    assert color_to_rgba("#0099FF") == (0, 153, 255, 255)


def test_nothing_to_rasterize():
    assert rasterize_elements([]) is None
    assert rasterize_elements([create_element(0, 0, 0, 50, 50, "capture")]) is None


def test_rectangle_outline_is_opaque_and_inside_is_clear():
    raster = rasterize_elements([create_element(0, 50, 50, 150, 100, "rectangle")], padding=20)
    assert raster.origin == (30, 30)
    assert raster.size == (141, 91)
    alpha = raster.alpha
    # Document (50, 75) is on the left edge, (100, 75) is the middle.
    assert alpha[45, 20] > 0
    assert alpha[45, 70] == 0


def test_capture_can_be_included():
    raster = rasterize_elements([create_element(0, 0, 0, 50, 50, "capture")], include_capture=True)
    assert raster is not None
    assert raster.alpha.max() > 0


def test_visible_runs_split_on_erased_points():
    pencil = PencilElement(
        id=0,
        points=(
            PencilPoint(0, 0),
            PencilPoint(1, 0),
            PencilPoint(2, 0, True),
            PencilPoint(3, 0),
            PencilPoint(4, 0),
        ),
    )
    assert visible_runs(pencil) == [[(0, 0), (1, 0)], [(3, 0), (4, 0)]]


def test_erased_pencil_leaves_no_ink():
    pencil = PencilElement(
        id=0,
        points=(PencilPoint(0, 0), PencilPoint(40, 0, True), PencilPoint(80, 0)),
        size=4,
    )
    # Only single points survive, and single points are not drawn.
    image = Image.new("RGBA", (120, 40), (0, 0, 0, 0))
    render_element(ImageDraw.Draw(image), pencil, origin=(-20, -20))
    assert image.getchannel("A").getbbox() is None


def test_unknown_type_cannot_be_drawn():
    image = Image.new("RGBA", (10, 10), (0, 0, 0, 0))
    with pytest.raises(UnrecognizedTypeError):
        render_element(ImageDraw.Draw(image), BoundedElement(id=0, type="star", x1=0, y1=0, x2=5, y2=5))


def test_element_regions_follow_the_drawing():
    apart = [
        create_element(0, 0, 0, 60, 60, "rectangle"),
        create_element(1, 400, 0, 460, 60, "rectangle"),
    ]
    regions = detect_element_regions(apart)
    assert len(regions) == 2
    assert [region.elements for region in regions] == [[0], [1]]
    assert regions[0].bounds == (0, 0, 60, 60)

    close = [
        create_element(0, 0, 0, 60, 60, "rectangle"),
        create_element(1, 90, 0, 150, 60, "rectangle"),
    ]
    regions = detect_element_regions(close)
    assert len(regions) == 1
    assert regions[0].elements == [0, 1]


def test_element_regions_of_empty_drawing():
    assert detect_element_regions([]) == []
