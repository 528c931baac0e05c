import pytest

import config
from viewport import Viewport


def test_screen_and_document_are_inverse():
    viewport = Viewport(pan_x=12, pan_y=-7, zoom=1.5)
    screen = viewport.document_to_screen((40, 25))
    assert viewport.screen_to_document(screen) == pytest.approx((40, 25))


def test_pan_moves_drawing_by_document_delta():
    viewport = Viewport(zoom=2.0)
    viewport.pan_by(10, 5)
    assert viewport.document_to_screen((0, 0)) == (20, 10)


def test_zoom_keeps_anchor_in_place():
    viewport = Viewport(pan_x=3, pan_y=4)
    before = viewport.screen_to_document((100, 80))
    assert viewport.zoom_by(0.5, anchor=(100, 80))
    assert viewport.zoom == 1.5
    assert viewport.screen_to_document((100, 80)) == pytest.approx(before)


def test_zoom_is_clamped():
    viewport = Viewport(zoom=config.ZOOM_MAX)
    assert not viewport.zoom_by(0.1)
    viewport.zoom_by(-10)
    assert viewport.zoom == config.ZOOM_MIN


def test_reset_zoom():
    viewport = Viewport(zoom=0.4)
    viewport.reset_zoom()
    assert viewport.zoom == 1.0
