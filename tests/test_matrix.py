"""Tests for image fit matrices."""

import pytest
from PySide6.QtCore import QRectF
from PySide6.QtGui import QTransform

from shapedview.core.errors import InvalidConfigurationError
from shapedview.core.matrix import ImageMatrix, ScaleType, compute_matrix

SQUARE = QRectF(0, 0, 100, 100)


def test_center_crop_landscape_into_square():
    m = compute_matrix(200, 100, SQUARE, ScaleType.CENTER_CROP)
    assert m == ImageMatrix(1.0, 1.0, -50.0, 0.0)

    mapped = m.map_rect(200, 100)
    assert mapped.contains(SQUARE)
    assert mapped.height() == pytest.approx(SQUARE.height())


def test_center_crop_covers_wide_destination():
    dest = QRectF(0, 0, 300, 100)
    m = compute_matrix(200, 100, dest, ScaleType.CENTER_CROP)
    mapped = m.map_rect(200, 100)
    assert m.scale_x == pytest.approx(1.5)
    assert mapped.width() == pytest.approx(300)
    assert mapped.contains(dest)


def test_center_crop_portrait_uses_inverted_comparison():
    m = compute_matrix(100, 200, SQUARE, ScaleType.CENTER_CROP)
    assert m.scale_x == pytest.approx(0.5)
    assert m.dx == pytest.approx(25)
    assert m.dy == pytest.approx(0)


def test_center_crop_square_image_scales_by_height():
    # Not landscape, and the destination is relatively wider: the inverted
    # comparison picks the height axis, leaving side bars
    m = compute_matrix(50, 50, QRectF(0, 0, 100, 50), ScaleType.CENTER_CROP)
    assert m == ImageMatrix(1.0, 1.0, 25.0, 0.0)


def test_center_crop_square_image_into_tall_destination():
    m = compute_matrix(50, 50, QRectF(0, 0, 50, 100), ScaleType.CENTER_CROP)
    assert m == ImageMatrix(1.0, 1.0, 0.0, 25.0)


@pytest.mark.parametrize("slack_type,dx", [
    (ScaleType.FIT_START, 0.0),
    (ScaleType.FIT_CENTER, 25.0),
    (ScaleType.FIT_END, 50.0),
])
def test_fit_policies_letterbox(slack_type, dx):
    m = compute_matrix(50, 50, QRectF(0, 0, 100, 50), slack_type)
    assert m == ImageMatrix(1.0, 1.0, dx, 0.0)


def test_fit_center_downscales():
    m = compute_matrix(400, 200, SQUARE, ScaleType.FIT_CENTER)
    assert m.scale_x == pytest.approx(0.25)
    assert m.dy == pytest.approx(25)
    assert SQUARE.contains(m.map_rect(400, 200))


def test_fit_xy_stretches():
    m = compute_matrix(200, 50, SQUARE, ScaleType.FIT_XY)
    assert m == ImageMatrix(0.5, 2.0, 0.0, 0.0)


def test_center_does_not_scale():
    m = compute_matrix(40, 60, SQUARE, ScaleType.CENTER)
    assert m == ImageMatrix(1.0, 1.0, 30.0, 20.0)


def test_center_inside_never_enlarges():
    m = compute_matrix(40, 60, SQUARE, ScaleType.CENTER_INSIDE)
    assert m == ImageMatrix(1.0, 1.0, 30.0, 20.0)


def test_center_inside_shrinks_large_images():
    m = compute_matrix(400, 200, SQUARE, ScaleType.CENTER_INSIDE)
    assert m.scale_x == pytest.approx(0.25)
    assert SQUARE.contains(m.map_rect(400, 200))


def test_translation_includes_destination_origin():
    dest = QRectF(15, 20, 100, 100)
    m = compute_matrix(200, 100, dest, ScaleType.CENTER_CROP)
    assert m.dx == pytest.approx(-35)
    assert m.dy == pytest.approx(20)


def test_matrix_policy_uses_caller_transform():
    transform = QTransform(2, 0, 0, 3, 7, 9)
    m = compute_matrix(10, 10, QRectF(5, 5, 50, 50), ScaleType.MATRIX, transform)
    assert m == ImageMatrix(2.0, 3.0, 7.0, 9.0)


def test_matrix_policy_defaults_to_identity():
    m = compute_matrix(10, 10, SQUARE, ScaleType.MATRIX)
    assert m == ImageMatrix()


def test_compute_matrix_is_pure():
    first = compute_matrix(300, 120, SQUARE, ScaleType.CENTER_CROP)
    second = compute_matrix(300, 120, SQUARE, ScaleType.CENTER_CROP)
    assert first == second


def test_zero_destination_does_not_raise():
    m = compute_matrix(200, 100, QRectF(0, 0, 0, 0), ScaleType.CENTER_CROP)
    assert m == ImageMatrix(0.0, 0.0, 0.0, 0.0)


def test_to_transform_round_trips_components():
    m = ImageMatrix(0.5, 0.25, 3.0, 4.0)
    assert ImageMatrix.from_transform(m.to_transform()) == m


@pytest.mark.parametrize("name,expected", [
    ("center_crop", ScaleType.CENTER_CROP),
    ("FIT-XY", ScaleType.FIT_XY),
    (" center_inside ", ScaleType.CENTER_INSIDE),
])
def test_scale_type_from_name(name, expected):
    assert ScaleType.from_name(name) == expected


def test_scale_type_from_unknown_name():
    with pytest.raises(InvalidConfigurationError):
        ScaleType.from_name("stretch")
