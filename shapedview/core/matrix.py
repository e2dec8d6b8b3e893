"""
Image fit matrices.

compute_matrix() maps an image of any pixel size onto a destination rect
(usually Bounds.image_rect) under one of the ScaleType policies and returns
the scale + translate as an ImageMatrix.

Divisions follow IEEE rules instead of raising: a zero-sized destination
or image yields inf/nan components, never ZeroDivisionError.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from PySide6.QtCore import QPointF, QRectF
from PySide6.QtGui import QTransform

from shapedview.core.errors import InvalidConfigurationError
from shapedview.services.logging_service import get_logger

logger = get_logger(__name__)


class ScaleType(Enum):
    """How an image is resized or moved to match the destination rect."""
    MATRIX = "matrix"
    FIT_XY = "fit_xy"
    FIT_START = "fit_start"
    FIT_CENTER = "fit_center"
    FIT_END = "fit_end"
    CENTER = "center"
    CENTER_CROP = "center_crop"
    CENTER_INSIDE = "center_inside"

    @classmethod
    def from_name(cls, name: str) -> "ScaleType":
        """
        Parse a configuration name such as "center_crop" or "CENTER-CROP".

        Raises:
            InvalidConfigurationError: If name is not a scale type.
        """
        key = name.strip().lower().replace("-", "_")
        for scale_type in cls:
            if scale_type.value == key:
                return scale_type
        raise InvalidConfigurationError(f"'{name}' is not a scale type.")


@dataclass(frozen=True)
class ImageMatrix:
    """A scale followed by a translation."""
    scale_x: float = 1.0
    scale_y: float = 1.0
    dx: float = 0.0
    dy: float = 0.0

    @classmethod
    def from_transform(cls, transform: QTransform) -> "ImageMatrix":
        """Keep the scale and translation parts of a QTransform."""
        return cls(transform.m11(), transform.m22(), transform.dx(), transform.dy())

    def to_transform(self) -> QTransform:
        return QTransform(self.scale_x, 0.0, 0.0, self.scale_y, self.dx, self.dy)

    def map_rect(self, width: float, height: float) -> QRectF:
        """Where an image of the given size lands after this matrix."""
        return QRectF(
            QPointF(self.dx, self.dy),
            QPointF(self.dx + width * self.scale_x, self.dy + height * self.scale_y),
        )


def _divide(numerator: float, denominator: float) -> float:
    """Float division with IEEE results for a zero denominator."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _needs_scale_by_width(
    image_width: float,
    image_height: float,
    dest_ratio: float,
    image_ratio: float,
) -> bool:
    """
    Decide the scaled axis for center-crop.

    A landscape image scales by width when the destination is relatively
    wider than the image. Any other image uses the inverted comparison.
    """
    if image_width > image_height:
        return dest_ratio > image_ratio
    return not dest_ratio > image_ratio


def _center_crop(iw: float, ih: float, dw: float, dh: float) -> ImageMatrix:
    dest_ratio = _divide(dw, dh)
    image_ratio = _divide(iw, ih)

    if _needs_scale_by_width(iw, ih, dest_ratio, image_ratio):
        scale = _divide(dw, iw)
        dx = 0.0
        dy = (dh - ih * scale) * 0.5
    else:
        scale = _divide(dh, ih)
        dx = (dw - iw * scale) * 0.5
        dy = 0.0

    return ImageMatrix(scale, scale, dx, dy)


def _center_inside(iw: float, ih: float, dw: float, dh: float) -> ImageMatrix:
    if iw <= dw and ih <= dh:
        scale = 1.0
    else:
        scale = min(_divide(dw, iw), _divide(dh, ih))

    dx = (dw - iw * scale) * 0.5
    dy = (dh - ih * scale) * 0.5
    return ImageMatrix(scale, scale, dx, dy)


def _fit(iw: float, ih: float, dw: float, dh: float, slack_share: float) -> ImageMatrix:
    """Letterbox fit; slack_share is 0 for start, 0.5 for center, 1 for end."""
    scale = min(_divide(dw, iw), _divide(dh, ih))
    dx = (dw - iw * scale) * slack_share
    dy = (dh - ih * scale) * slack_share
    return ImageMatrix(scale, scale, dx, dy)


def compute_matrix(
    image_width: int,
    image_height: int,
    dest_rect: QRectF,
    scale_type: ScaleType = ScaleType.CENTER_CROP,
    matrix: Optional[QTransform] = None,
) -> ImageMatrix:
    """
    Compute the matrix that draws an image into dest_rect.

    Args:
        image_width: Image width in pixels (>= 1).
        image_height: Image height in pixels (>= 1).
        dest_rect: Destination rect, already inset by padding/border/shadow.
        scale_type: Fit policy.
        matrix: Transform used as-is for ScaleType.MATRIX (identity if None).

    Returns:
        The scale and translation. Translation includes dest_rect's origin.
    """
    if scale_type == ScaleType.MATRIX:
        return ImageMatrix.from_transform(matrix if matrix is not None else QTransform())

    iw = float(image_width)
    ih = float(image_height)
    dw = dest_rect.width()
    dh = dest_rect.height()

    if scale_type == ScaleType.FIT_XY:
        result = ImageMatrix(_divide(dw, iw), _divide(dh, ih), 0.0, 0.0)
    elif scale_type == ScaleType.CENTER:
        result = ImageMatrix(1.0, 1.0, (dw - iw) * 0.5, (dh - ih) * 0.5)
    elif scale_type == ScaleType.CENTER_CROP:
        result = _center_crop(iw, ih, dw, dh)
    elif scale_type == ScaleType.CENTER_INSIDE:
        result = _center_inside(iw, ih, dw, dh)
    elif scale_type == ScaleType.FIT_START:
        result = _fit(iw, ih, dw, dh, 0.0)
    elif scale_type == ScaleType.FIT_CENTER:
        result = _fit(iw, ih, dw, dh, 0.5)
    elif scale_type == ScaleType.FIT_END:
        result = _fit(iw, ih, dw, dh, 1.0)
    else:
        raise InvalidConfigurationError(f"Unknown scale type: {scale_type}")

    logger.debug(
        f"{scale_type.value} matrix for {image_width}x{image_height} -> "
        f"{dw}x{dh}: {result}"
    )

    return ImageMatrix(
        result.scale_x,
        result.scale_y,
        result.dx + dest_rect.left(),
        result.dy + dest_rect.top(),
    )
