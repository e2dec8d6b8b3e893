"""Tests for shadow blurring."""

import pytest
from PySide6.QtGui import QColor, QImage, QPainterPath

from conftest import solid_image
from shapedview.core.shadow import LAYER_FORMAT, blur_image, blur_radius_to_sigma, create_shape_layer


def test_sigma_conversion():
    assert blur_radius_to_sigma(0) == 0.0
    assert blur_radius_to_sigma(-3) == 0.0
    assert blur_radius_to_sigma(10) == pytest.approx(6.2735)


def test_blur_keeps_size_and_format():
    blurred = blur_image(solid_image(31, 17), 4)
    assert (blurred.width(), blurred.height()) == (31, 17)
    assert blurred.format() == LAYER_FORMAT


def test_blur_spreads_alpha():
    image = QImage(21, 21, LAYER_FORMAT)
    image.fill(QColor(0, 0, 0, 0))
    image.setPixelColor(10, 10, QColor(0, 0, 0, 255))

    blurred = blur_image(image, 3)
    assert blurred.pixelColor(12, 10).alpha() > 0
    assert blurred.pixelColor(10, 10).alpha() < 255


def test_zero_radius_returns_copy():
    image = solid_image(5, 5)
    copy = blur_image(image, 0)
    assert copy.pixelColor(2, 2) == QColor(255, 0, 0)


def test_empty_image():
    assert blur_image(QImage(), 5).isNull()


def test_shape_layer(qapp):
    path = QPainterPath()
    path.addRect(0, 0, 5, 5)
    layer = create_shape_layer(path, QColor("#00ff00"), 10, 10)
    assert layer.pixelColor(2, 2) == QColor(0, 255, 0)
    assert layer.pixelColor(8, 8).alpha() == 0
