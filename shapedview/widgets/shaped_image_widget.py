"""
Shaped image widget for PySide6.

ShapedImageWidget displays an image clipped to a ShapeKind outline, with an
optional border and drop shadow. It owns a ShapeRenderer and forwards its
size to it on every paint; every setter schedules a relayout and repaint.

Usage:
    widget = ShapedImageWidget(ShapeKind.ROUND_RECT)
    widget.set_image(QImage("photo.jpg"))
    widget.set_corner_radii(8, 12, 16, 24)
    widget.border_size = 4
"""

from typing import Optional, Sequence, Tuple, Union

from PySide6.QtCore import QSize, Signal
from PySide6.QtGui import QColor, QImage, QPainter, QPixmap, QTransform
from PySide6.QtWidgets import QSizePolicy, QWidget

from shapedview.core.bounds import Bounds, Padding, measure_view_size, parse_aspect_ratio
from shapedview.core.errors import InvalidConfigurationError
from shapedview.core.formulas import FormulaBase
from shapedview.core.matrix import ScaleType
from shapedview.core.paths import CornerSet
from shapedview.core.renderer import ShapeKind, ShapeRenderer, ShapeStyle
from shapedview.services.logging_service import get_logger

ImageSource = Union[QImage, QPixmap]

DEFAULT_SIZE_HINT = 160


def _corner_set(values: Tuple) -> CornerSet:
    """Accept (value,), (tl, tr, br, bl) or (sequence,) as corner arguments."""
    if len(values) == 1:
        value = values[0]
        if isinstance(value, CornerSet):
            return value
        if isinstance(value, (int, float)):
            return CornerSet.uniform(float(value))
        return CornerSet.from_values(value)
    return CornerSet.from_values(values)


class ShapedImageWidget(QWidget):
    """
    Widget that draws an image inside a shaped outline.

    Signals:
        image_changed: Emitted when a different image is set or cleared.
        style_changed: Emitted after any styling property changes.
    """

    image_changed = Signal()
    style_changed = Signal()

    def __init__(
        self,
        shape: ShapeKind = ShapeKind.OVAL,
        style: Optional[ShapeStyle] = None,
        force_square: Optional[bool] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._logger = get_logger(__name__)
        self._renderer = ShapeRenderer(shape, style, force_square)

        # Single-slot cache keyed on the identity of the last source
        self._image_source: Optional[ImageSource] = None
        self._image: Optional[QImage] = None

        self._setup_widget()

    def _setup_widget(self) -> None:
        """Configure widget properties."""
        policy = QSizePolicy(QSizePolicy.Policy.Preferred, QSizePolicy.Policy.Preferred)
        policy.setHeightForWidth(self.hasHeightForWidth())
        self.setSizePolicy(policy)

    def _relayout(self) -> None:
        policy = self.sizePolicy()
        policy.setHeightForWidth(self.hasHeightForWidth())
        self.setSizePolicy(policy)
        self.updateGeometry()
        self.update()
        self.style_changed.emit()

    # ─── Image Management ─────────────────────────────────────────────────

    def set_image(self, image: Optional[ImageSource]) -> None:
        """
        Set the image to display.

        The conversion to QImage is skipped when the same object is set again.
        """
        if image is None:
            self.clear_image()
            return

        if image is self._image_source:
            return

        self._image_source = image
        self._image = image.toImage() if isinstance(image, QPixmap) else image
        self.image_changed.emit()
        self.update()

        self._logger.info(f"Image set: {self._image.width()}x{self._image.height()}")

    def clear_image(self) -> None:
        """Clear the current image."""
        if self._image_source is None:
            return
        self._image_source = None
        self._image = None
        self.image_changed.emit()
        self.update()
        self._logger.debug("Image cleared")

    @property
    def image(self) -> Optional[QImage]:
        return self._image

    def has_image(self) -> bool:
        return self._image is not None

    # ─── Shape ────────────────────────────────────────────────────────────

    @property
    def renderer(self) -> ShapeRenderer:
        return self._renderer

    @property
    def shape(self) -> ShapeKind:
        return self._renderer.shape

    @shape.setter
    def shape(self, value: ShapeKind) -> None:
        self._renderer.shape = value
        self._relayout()

    @property
    def style(self) -> ShapeStyle:
        return self._renderer.style

    @style.setter
    def style(self, value: ShapeStyle) -> None:
        self._renderer.style = value
        self._relayout()

    @property
    def force_square(self) -> bool:
        return self._renderer.force_square

    @force_square.setter
    def force_square(self, value: Optional[bool]) -> None:
        """Override squareness; None follows the shape kind again."""
        self._renderer.force_square = value
        self._relayout()

    # ─── Border ───────────────────────────────────────────────────────────

    @property
    def border_size(self) -> float:
        return self.style.border_size

    @border_size.setter
    def border_size(self, value: float) -> None:
        self.style.border_size = float(value)
        self._relayout()

    @property
    def border_color(self) -> QColor:
        return self.style.border_color

    @border_color.setter
    def border_color(self, value: QColor) -> None:
        self.style.border_color = QColor(value)
        self._relayout()

    @property
    def border_enabled(self) -> bool:
        return self.style.border_enabled

    @border_enabled.setter
    def border_enabled(self, value: bool) -> None:
        self.style.border_enabled = value
        self._relayout()

    # ─── Shadow ───────────────────────────────────────────────────────────

    @property
    def shadow_size(self) -> float:
        return self.style.shadow_size

    @shadow_size.setter
    def shadow_size(self, value: float) -> None:
        self.style.shadow_size = float(value)
        self._relayout()

    @property
    def shadow_color(self) -> QColor:
        return self.style.shadow_color

    @shadow_color.setter
    def shadow_color(self, value: QColor) -> None:
        self.style.shadow_color = QColor(value)
        self._relayout()

    @property
    def shadow_enabled(self) -> bool:
        return self.style.shadow_enabled

    @shadow_enabled.setter
    def shadow_enabled(self, value: bool) -> None:
        self.style.shadow_enabled = value
        self._relayout()

    # ─── Geometry Settings ────────────────────────────────────────────────

    @property
    def padding(self) -> Padding:
        return self.style.padding

    def set_padding(self, left: float, top: Optional[float] = None,
                    right: Optional[float] = None, bottom: Optional[float] = None) -> None:
        """Set padding on all sides, or per side when four values are given."""
        if top is None and right is None and bottom is None:
            self.style.padding = Padding.uniform(float(left))
        else:
            self.style.padding = Padding(float(left), float(top), float(right), float(bottom))
        self._relayout()

    @property
    def scale_type(self) -> ScaleType:
        return self.style.scale_type

    def set_scale_type(self, scale_type: ScaleType, matrix: Optional[QTransform] = None) -> None:
        """
        Set how the image is fitted into the shape.

        Raises:
            InvalidConfigurationError: If the style only allows center crop.
        """
        self._renderer.set_scale_type(scale_type, matrix)
        self._relayout()

    def set_corner_radii(self, *radii: Union[float, Sequence[float], CornerSet]) -> None:
        """
        Set round-rect corner radii.

        Accepts a single radius, four radii (top-left, top-right,
        bottom-right, bottom-left) or one sequence of four.

        Raises:
            InvalidConfigurationError: If the number of values is wrong.
        """
        self.style.corner_radii = _corner_set(radii)
        self._relayout()

    def set_cut_sizes(self, *sizes: Union[float, Sequence[float], CornerSet]) -> None:
        """Set cut-corner sizes; same arguments as set_corner_radii()."""
        self.style.cut_sizes = _corner_set(sizes)
        self._relayout()

    @property
    def formula(self) -> Optional[FormulaBase]:
        return self.style.formula

    @formula.setter
    def formula(self, value: Optional[FormulaBase]) -> None:
        self.style.formula = value
        self._relayout()

    # ─── Aspect Ratio ─────────────────────────────────────────────────────

    @property
    def aspect_ratio(self) -> float:
        return self.style.aspect_ratio

    def set_aspect_ratio(self, ratio: Union[str, float, Tuple[float, float]]) -> None:
        """
        Keep width / height at ratio. Ignored by force-square shapes.

        Accepts a number, a (width, height) pair or a "width:height" string.

        Raises:
            InvalidConfigurationError: For a malformed ratio string.
        """
        try:
            self.style.aspect_ratio = parse_aspect_ratio(ratio)
        except InvalidConfigurationError as e:
            self._logger.warning(f"Rejected aspect ratio: {e}")
            raise
        self._relayout()

    def clear_aspect_ratio(self) -> None:
        """Stop keeping an aspect ratio."""
        self.style.aspect_ratio = 0.0
        self._relayout()

    # ─── Measurement ──────────────────────────────────────────────────────

    def measured_size(self) -> Tuple[int, int]:
        """The size the shape is drawn at within the current widget size."""
        return measure_view_size(
            self.width(),
            self.height(),
            self.force_square,
            self.aspect_ratio,
            width_exact=True,
        )

    def current_bounds(self) -> Bounds:
        """Bounds triplet for the current measured size."""
        width, height = self.measured_size()
        return self._renderer.compute_bounds(width, height)

    def hasHeightForWidth(self) -> bool:
        return self.force_square or self.aspect_ratio != 0.0

    def heightForWidth(self, width: int) -> int:
        if self.force_square:
            return width
        if self.aspect_ratio != 0.0:
            return int(width / self.aspect_ratio)
        return super().heightForWidth(width)

    def sizeHint(self) -> QSize:
        width = DEFAULT_SIZE_HINT
        if self.hasHeightForWidth():
            return QSize(width, self.heightForWidth(width))
        return QSize(width, width)

    # ─── Rendering ────────────────────────────────────────────────────────

    def render_to_image(self) -> QImage:
        """Render the shaped image at the current measured size."""
        width, height = self.measured_size()
        return self._renderer.render_to_image(width, height, self._image)

    def paintEvent(self, event) -> None:
        """Paint shadow, border and image."""
        width, height = self.measured_size()
        painter = QPainter(self)
        try:
            self._renderer.paint(painter, width, height, self._image)
        finally:
            painter.end()
