"""
Drop shadow rendering.

The shadow of a shape is its outline filled with the shadow colour,
Gaussian-blurred and shifted down by half the shadow size. Blurring runs
in OpenCV on a numpy view of a premultiplied RGBA layer, so transparent
pixels do not darken the blurred edge.
"""

import math

import cv2
import numpy as np
from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QColor, QImage, QPainter, QPainterPath

from shapedview.services.logging_service import get_logger

logger = get_logger(__name__)

LAYER_FORMAT = QImage.Format.Format_RGBA8888_Premultiplied

# Blur radius to Gaussian sigma, as used by Skia for paint shadow layers
BLUR_SIGMA_SCALE = 0.57735
BLUR_SIGMA_BIAS = 0.5


def blur_radius_to_sigma(radius: float) -> float:
    """Convert a shadow blur radius to a Gaussian sigma (0 for no blur)."""
    if radius <= 0:
        return 0.0
    return BLUR_SIGMA_SCALE * radius + BLUR_SIGMA_BIAS


def blur_image(image: QImage, radius: float) -> QImage:
    """
    Return a Gaussian-blurred copy of image.

    Args:
        image: Source layer, any format.
        radius: Blur radius in pixels. 0 or less returns an unblurred copy.
    """
    width = image.width()
    height = image.height()

    if width == 0 or height == 0:
        return QImage()

    if image.format() != LAYER_FORMAT:
        image = image.convertToFormat(LAYER_FORMAT)

    sigma = blur_radius_to_sigma(radius)
    if sigma == 0.0:
        return image.copy()

    ptr = image.constBits()
    arr = np.frombuffer(ptr, np.uint8).reshape((height, image.bytesPerLine() // 4, 4))
    arr = np.ascontiguousarray(arr[:, :width, :])

    # ksize (0, 0) lets OpenCV derive the kernel from sigma
    blurred = cv2.GaussianBlur(arr, (0, 0), sigmaX=sigma, sigmaY=sigma)

    return QImage(
        blurred.data, width, height, width * 4, LAYER_FORMAT
    ).copy()


def create_shape_layer(path: QPainterPath, color: QColor, width: int, height: int) -> QImage:
    """Fill path with color on a transparent layer of the given size."""
    layer = QImage(width, height, LAYER_FORMAT)
    layer.fill(Qt.GlobalColor.transparent)

    painter = QPainter(layer)
    try:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.fillPath(path, color)
    finally:
        painter.end()

    return layer


def paint_shadow(
    painter: QPainter,
    path: QPainterPath,
    color: QColor,
    shadow_size: float,
    width: float,
    height: float,
) -> None:
    """
    Paint a drop shadow for path, then the path itself in the shadow colour.

    Args:
        painter: Active painter on the widget or target image.
        path: Shadow outline.
        color: Shadow colour.
        shadow_size: Blur radius; the shadow is offset by half of it.
        width: Width of the target surface.
        height: Height of the target surface.
    """
    layer_w = int(math.ceil(width))
    layer_h = int(math.ceil(height))
    if layer_w <= 0 or layer_h <= 0:
        return

    layer = create_shape_layer(path, color, layer_w, layer_h)
    blurred = blur_image(layer, shadow_size)

    painter.drawImage(QPointF(0.0, shadow_size / 2), blurred)
    painter.fillPath(path, color)
