"""
Shape rendering for shaped image widgets.

ShapeRenderer ties the geometry engine together for one shape kind:

1. compute_bounds() derives the shadow, border and image rects
2. build_outlines() turns them into outlines for the shape kind
3. compute_image_matrix() fits the image into the image rect
4. paint() draws shadow, border and image, in that order

A renderer is configured once (ShapeKind + ShapeStyle) and repaints from
scratch on every call. Nothing geometric is cached between frames.
"""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QImage, QPainter, QTransform

from shapedview.core.bounds import Bounds, Padding, compute_bounds
from shapedview.core.errors import InvalidConfigurationError
from shapedview.core.formulas import FormulaBase, create_formula
from shapedview.core.matrix import ImageMatrix, ScaleType, compute_matrix
from shapedview.core.paths import (
    CornerSet,
    OutlinePath,
    circle_path,
    cut_corner_rect_path,
    formula_path,
    oval_path,
    rect_path,
    round_rect_path,
)
from shapedview.core.shadow import paint_shadow
from shapedview.services.logging_service import get_logger

DEFAULT_BORDER_COLOR = "#444444"
DEFAULT_SHADOW_COLOR = "#888888"
DEFAULT_CORNER_SIZE = 16.0


class ShapeKind(Enum):
    """The outline a widget clips its image to."""
    OVAL = "oval"
    CIRCLE = "circle"
    RECTANGLE = "rectangle"
    SQUARE = "square"
    ROUND_RECT = "round_rect"
    CUT_CORNER_RECT = "cut_corner_rect"
    FORMULA = "formula"

    @classmethod
    def from_name(cls, name: str) -> "ShapeKind":
        """
        Parse a configuration name such as "round_rect".

        Raises:
            InvalidConfigurationError: If name is not a shape kind.
        """
        key = name.strip().lower().replace("-", "_")
        for kind in cls:
            if kind.value == key:
                return kind
        raise InvalidConfigurationError(f"'{name}' is not a shape kind.")

    @property
    def default_force_square(self) -> bool:
        """Circle and square widgets keep equal width and height."""
        return self in (ShapeKind.CIRCLE, ShapeKind.SQUARE)


@dataclass
class ShapeStyle:
    """
    Resolved styling of a shaped widget.

    Sizes are device pixels. corner_radii applies to ROUND_RECT, cut_sizes
    to CUT_CORNER_RECT and formula to FORMULA; the other kinds ignore them.
    """
    border_size: float = 0.0
    border_color: QColor = field(default_factory=lambda: QColor(DEFAULT_BORDER_COLOR))
    border_enabled: bool = True
    shadow_size: float = 0.0
    shadow_color: QColor = field(default_factory=lambda: QColor(DEFAULT_SHADOW_COLOR))
    shadow_enabled: bool = True
    padding: Padding = field(default_factory=Padding)
    scale_type: ScaleType = ScaleType.CENTER_CROP
    image_matrix: Optional[QTransform] = None
    center_crop_only: bool = False
    corner_radii: CornerSet = field(default_factory=lambda: CornerSet.uniform(DEFAULT_CORNER_SIZE))
    cut_sizes: CornerSet = field(default_factory=lambda: CornerSet.uniform(DEFAULT_CORNER_SIZE))
    formula: Optional[FormulaBase] = None
    aspect_ratio: float = 0.0

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ShapeStyle":
        """
        Build a style from the "style" section of the configuration.

        Raises:
            InvalidConfigurationError: For an unknown scale type name.
            FormulaLookupError: For an unknown formula name.
        """
        formula = None
        formula_name = config.get("formula")
        if formula_name:
            formula = create_formula(formula_name)
            if "curvature" in config and hasattr(formula, "curvature"):
                formula.curvature = float(config["curvature"])

        style = cls(
            border_size=float(config.get("border_size", 0.0)),
            border_color=QColor(config.get("border_color", DEFAULT_BORDER_COLOR)),
            border_enabled=bool(config.get("border_enabled", True)),
            shadow_size=float(config.get("shadow_size", 0.0)),
            shadow_color=QColor(config.get("shadow_color", DEFAULT_SHADOW_COLOR)),
            shadow_enabled=bool(config.get("shadow_enabled", True)),
            scale_type=ScaleType.from_name(config.get("scale_type", "center_crop")),
            corner_radii=CornerSet.uniform(float(config.get("corner_radius", DEFAULT_CORNER_SIZE))),
            cut_sizes=CornerSet.uniform(float(config.get("cut_size", DEFAULT_CORNER_SIZE))),
            formula=formula,
        )
        style.validate()
        return style

    def validate(self) -> None:
        """
        Reject settings that cannot be rendered.

        Raises:
            InvalidConfigurationError: If the scale type is not allowed.
        """
        if self.center_crop_only and self.scale_type != ScaleType.CENTER_CROP:
            raise InvalidConfigurationError(
                f"Scale type has to be center crop, got {self.scale_type.value}."
            )

    def clone(self) -> "ShapeStyle":
        """Create a copy of this style. The formula instance is shared."""
        return replace(
            self,
            border_color=QColor(self.border_color),
            shadow_color=QColor(self.shadow_color),
            image_matrix=QTransform(self.image_matrix) if self.image_matrix is not None else None,
        )

    @property
    def shadow_visible(self) -> bool:
        return self.shadow_enabled and self.shadow_size > 0

    @property
    def border_visible(self) -> bool:
        return self.border_enabled and self.border_size > 0


@dataclass
class ShapeOutlines:
    """Outlines of one frame. A layer that is not drawn is None."""
    shadow: Optional[OutlinePath] = None
    border: Optional[OutlinePath] = None
    image: Optional[OutlinePath] = None


class ShapeRenderer:
    """
    Draws an image clipped to a shape, with optional border and shadow.

    Args:
        shape: The outline kind.
        style: Styling; validated immediately.
        force_square: Keep width == height. Defaults to the kind's default.
    """

    def __init__(
        self,
        shape: ShapeKind = ShapeKind.OVAL,
        style: Optional[ShapeStyle] = None,
        force_square: Optional[bool] = None,
    ) -> None:
        self._logger = get_logger(__name__)
        self._shape = shape
        self._style = style or ShapeStyle()
        self._style.validate()
        # None follows the shape kind
        self._force_square: Optional[bool] = force_square

    # ─── Configuration ────────────────────────────────────────────────────

    @property
    def shape(self) -> ShapeKind:
        return self._shape

    @shape.setter
    def shape(self, value: ShapeKind) -> None:
        self._shape = value

    @property
    def style(self) -> ShapeStyle:
        return self._style

    @style.setter
    def style(self, value: ShapeStyle) -> None:
        value.validate()
        self._style = value

    @property
    def force_square(self) -> bool:
        """Keep width == height. Defaults to the shape kind's default."""
        if self._force_square is None:
            return self._shape.default_force_square
        return self._force_square

    @force_square.setter
    def force_square(self, value: Optional[bool]) -> None:
        self._force_square = value

    def set_scale_type(self, scale_type: ScaleType, matrix: Optional[QTransform] = None) -> None:
        """
        Change the fit policy.

        Raises:
            InvalidConfigurationError: If the style only allows center crop.
                The previous scale type is kept.
        """
        candidate = replace(self._style, scale_type=scale_type, image_matrix=matrix)
        try:
            candidate.validate()
        except InvalidConfigurationError:
            self._logger.warning(f"Rejected scale type {scale_type.value} for {self._shape.value}")
            raise
        self._style = candidate

    # ─── Geometry ─────────────────────────────────────────────────────────

    def compute_bounds(self, width: float, height: float) -> Bounds:
        """Bounds triplet for a widget of the given size."""
        style = self._style
        return compute_bounds(
            width,
            height,
            style.padding,
            style.border_size,
            style.border_enabled,
            style.shadow_size,
            style.shadow_enabled,
        )

    def layer_corners(self, corners: CornerSet) -> Tuple[CornerSet, CornerSet, CornerSet]:
        """
        Per-layer corner values as (shadow, border, image).

        The border grows every corner by the border size; the shadow follows
        the border when it is enabled and the image otherwise.
        """
        style = self._style
        if style.border_enabled:
            border = corners.expanded(style.border_size)
            return border, border, corners
        return corners, corners.expanded(style.border_size), corners

    def _outline(self, rect: QRectF, corners: Optional[CornerSet]) -> Optional[OutlinePath]:
        shape = self._shape
        if shape == ShapeKind.OVAL:
            return oval_path(rect)
        if shape == ShapeKind.CIRCLE:
            return circle_path(rect)
        if shape in (ShapeKind.RECTANGLE, ShapeKind.SQUARE):
            return rect_path(rect)
        if shape == ShapeKind.ROUND_RECT:
            return round_rect_path(rect, corners)
        if shape == ShapeKind.CUT_CORNER_RECT:
            return cut_corner_rect_path(rect, corners)
        if shape == ShapeKind.FORMULA:
            if self._style.formula is None:
                return None
            return formula_path(self._style.formula, rect)
        raise InvalidConfigurationError(f"Unknown shape kind: {shape}")

    def build_outlines(self, bounds: Bounds) -> ShapeOutlines:
        """Build the outlines of every visible layer for one frame."""
        style = self._style

        if self._shape == ShapeKind.ROUND_RECT:
            shadow_c, border_c, image_c = self.layer_corners(style.corner_radii)
        elif self._shape == ShapeKind.CUT_CORNER_RECT:
            shadow_c, border_c, image_c = self.layer_corners(style.cut_sizes)
        else:
            shadow_c = border_c = image_c = None

        outlines = ShapeOutlines()
        if style.shadow_visible:
            outlines.shadow = self._outline(bounds.shadow_rect, shadow_c)
        if style.border_visible:
            outlines.border = self._outline(bounds.border_rect, border_c)
        outlines.image = self._outline(bounds.image_rect, image_c)
        return outlines

    def compute_image_matrix(self, image_width: int, image_height: int, bounds: Bounds) -> ImageMatrix:
        """Fit matrix of an image into the image rect of bounds."""
        return compute_matrix(
            image_width,
            image_height,
            bounds.image_rect,
            self._style.scale_type,
            self._style.image_matrix,
        )

    # ─── Painting ─────────────────────────────────────────────────────────

    def paint(
        self,
        painter: QPainter,
        width: float,
        height: float,
        image: Optional[QImage] = None,
    ) -> None:
        """
        Paint shadow, border and image for a widget of the given size.

        Degenerate sizes and a missing image skip the affected layers.
        """
        style = self._style
        bounds = self.compute_bounds(width, height)
        outlines = self.build_outlines(bounds)

        painter.save()
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
            painter.setPen(Qt.PenStyle.NoPen)

            if outlines.shadow is not None:
                paint_shadow(
                    painter,
                    outlines.shadow.to_painter_path(),
                    style.shadow_color,
                    style.shadow_size,
                    width,
                    height,
                )

            if outlines.border is not None:
                painter.fillPath(outlines.border.to_painter_path(), style.border_color)

            if outlines.image is not None and image is not None and not image.isNull():
                self._paint_image(painter, outlines.image, image, bounds, width, height)
        finally:
            painter.restore()

    def _paint_image(
        self,
        painter: QPainter,
        outline: OutlinePath,
        image: QImage,
        bounds: Bounds,
        width: float,
        height: float,
    ) -> None:
        """Draw image through its fit matrix, masked by the image outline."""
        if bounds.usable_width <= 0 or bounds.usable_height <= 0:
            self._logger.debug("Image rect is empty, skipping image layer")
            return

        matrix = self.compute_image_matrix(image.width(), image.height(), bounds)
        components = (matrix.scale_x, matrix.scale_y, matrix.dx, matrix.dy)
        if not all(math.isfinite(c) for c in components):
            self._logger.debug(f"Degenerate image matrix {matrix}, skipping image layer")
            return

        layer_w = int(math.ceil(width))
        layer_h = int(math.ceil(height))
        path = outline.to_painter_path()

        # Pixels outside the transformed image stay transparent
        layer = QImage(layer_w, layer_h, QImage.Format.Format_ARGB32_Premultiplied)
        layer.fill(Qt.GlobalColor.transparent)

        mask = QImage(layer_w, layer_h, QImage.Format.Format_ARGB32_Premultiplied)
        mask.fill(Qt.GlobalColor.transparent)
        mask_painter = QPainter(mask)
        try:
            mask_painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            mask_painter.fillPath(path, QColor(0, 0, 0))
        finally:
            mask_painter.end()

        layer_painter = QPainter(layer)
        try:
            layer_painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            layer_painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
            layer_painter.setTransform(matrix.to_transform())
            layer_painter.drawImage(QPointF(0.0, 0.0), image)
            layer_painter.resetTransform()
            layer_painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_DestinationIn)
            layer_painter.drawImage(QPointF(0.0, 0.0), mask)
        finally:
            layer_painter.end()

        painter.drawImage(QPointF(0.0, 0.0), layer)

    def render_to_image(self, width: int, height: int, image: Optional[QImage] = None) -> QImage:
        """
        Render the shape offscreen.

        Returns:
            A width x height ARGB32 premultiplied image on a transparent
            background, or a null QImage for a non-positive size.
        """
        if width <= 0 or height <= 0:
            return QImage()

        result = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
        result.fill(Qt.GlobalColor.transparent)

        painter = QPainter(result)
        try:
            self.paint(painter, width, height, image)
        finally:
            painter.end()

        return result
