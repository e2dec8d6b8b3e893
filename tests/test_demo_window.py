"""Tests for the demo window and application helpers."""

import json

from shapedview.app import load_image
from shapedview.core.renderer import ShapeKind
from shapedview.services.config_service import ConfigService
from shapedview.ui.demo_window import DemoWindow, create_sample_image


def test_sample_image():
    image = create_sample_image(64, 32)
    assert (image.width(), image.height()) == (64, 32)
    assert image.pixelColor(0, 0) != image.pixelColor(63, 31)


def test_window_uses_config(qapp, tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"style": {"border_size": 5}, "demo": {"shape": "circle"}}))
    window = DemoWindow(ConfigService(path))
    assert window.view.shape == ShapeKind.CIRCLE
    assert window.view.border_size == 5.0
    assert window.view.has_image()
    window.close()


def test_unknown_shape_falls_back(qapp, tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"demo": {"shape": "hexagon"}}))
    window = DemoWindow(ConfigService(path))
    assert window.view.shape == ShapeKind.ROUND_RECT
    window.close()


def test_select_shape_updates_force_square(qapp):
    window = DemoWindow()
    window.select_shape(ShapeKind.SQUARE)
    assert window.view.force_square
    window.select_shape(ShapeKind.OVAL)
    assert not window.view.force_square
    window.close()


def test_sliders_drive_view(qapp):
    window = DemoWindow()
    window._sliders["border"].setValue(7)
    window._sliders["width"].setValue(300)
    assert window.view.border_size == 7.0
    assert window.view.width() == 300
    window.close()


def test_load_image(tmp_path):
    assert load_image("") is None
    assert load_image(str(tmp_path / "missing.png")) is None

    path = tmp_path / "sample.png"
    create_sample_image(20, 10).save(str(path))
    image = load_image(str(path))
    assert image.width() == 20
