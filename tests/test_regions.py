import numpy as np
import pytest
from PIL import Image

from model import create_element
from regions import attach_elements, detect_regions, region_distance


def _canvas(width=400, height=60):
    return np.zeros((height, width), dtype=np.uint8)


def _blob(alpha, x, y, width=10, height=15, value=255):
    alpha[y:y + height, x:x + width] = value
    return alpha


def test_far_apart_blobs_stay_separate():
    alpha = _blob(_blob(_canvas(), 0, 0), 210, 0)
    regions = detect_regions(alpha)
    assert len(regions) == 2
    assert [region.id for region in regions] == [1, 2]
    assert regions[0].bounds == (0, 0, 9, 14)
    assert regions[1].bounds == (210, 0, 219, 14)
    assert len(regions[0].points) == 150


def test_close_blobs_merge():
    alpha = _blob(_blob(_canvas(), 0, 0), 59, 0)
    regions = detect_regions(alpha)
    assert len(regions) == 1
    assert regions[0].bounds == (0, 0, 68, 14)
    assert len(regions[0].points) == 300


def test_small_blob_is_noise():
    alpha = _blob(_canvas(), 0, 0, width=5, height=10)
    assert detect_regions(alpha) == []


def test_small_blob_does_not_join_a_large_one():
    alpha = _blob(_blob(_canvas(), 0, 0), 20, 0, width=5, height=10)
    regions = detect_regions(alpha)
    assert len(regions) == 1
    assert regions[0].bounds == (0, 0, 9, 14)


def test_merging_is_transitive():
    alpha = _canvas()
    for x in (0, 89, 178):
        _blob(alpha, x, 0)
    assert region_distance((0, 0, 9, 14), (178, 0, 187, 14)) > 80
    regions = detect_regions(alpha)
    assert len(regions) == 1
    assert regions[0].bounds == (0, 0, 187, 14)


def test_diagonal_pixels_are_connected():
    alpha = _canvas(150, 150)
    for i in range(120):
        alpha[i, i] = 255
    regions = detect_regions(alpha, grouping_distance=0)
    assert len(regions) == 1
    assert len(regions[0].points) == 120


def test_transparent_and_empty_rasters_have_no_regions():
    assert detect_regions(_canvas()) == []
    assert detect_regions(np.zeros((0, 0), dtype=np.uint8)) == []


def test_large_blob_does_not_recurse():
    alpha = _blob(_canvas(400, 400), 0, 0, width=400, height=400)
    regions = detect_regions(alpha)
    assert len(regions) == 1
    assert len(regions[0].points) == 160000


def test_origin_shifts_into_document_space():
    alpha = _blob(_canvas(), 0, 0)
    region = detect_regions(alpha, origin=(100, -50))[0]
    assert region.bounds == (100, -50, 109, -36)
    assert (100, -50) in region.points


def test_rgba_array_and_image_sources():
    rgba = np.zeros((60, 400, 4), dtype=np.uint8)
    rgba[0:15, 0:10, 3] = 128
    assert len(detect_regions(rgba)) == 1
    assert len(detect_regions(Image.fromarray(rgba))) == 1


def test_image_without_alpha_is_rejected():
    with pytest.raises(ValueError):
        detect_regions(Image.new("RGB", (10, 10)))


def test_tunables_are_validated():
    with pytest.raises(ValueError):
        detect_regions(_canvas(), min_region_size=0)
    with pytest.raises(ValueError):
        detect_regions(_canvas(), grouping_distance=-1)


def test_region_distance():
    assert region_distance((0, 0, 10, 10), (5, 5, 20, 20)) == 0
    assert region_distance((0, 0, 10, 10), (13, 14, 20, 20)) == 5
    assert region_distance((0, 0, 10, 10), (0, 30, 10, 40)) == 20


def test_detected_regions_start_without_elements():
    alpha = _blob(_canvas(), 0, 0)
    assert detect_regions(alpha)[0].elements == []


def test_attach_elements_by_overlapping_bounds():
    alpha = _blob(_blob(_canvas(), 0, 0), 210, 0)
    regions = detect_regions(alpha)
    elements = [
        create_element(0, 2, 2, 8, 8, "rectangle"),
        create_element(1, 212, 2, 300, 8, "line"),
        create_element(2, 100, 40, 120, 50, "rectangle"),
    ]
    attach_elements(regions, elements)
    assert regions[0].elements == [0]
    assert regions[1].elements == [1]
