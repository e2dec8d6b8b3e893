"""
Demo window for ShapedView.

Shows one ShapedImageWidget with controls to switch the shape kind and to
change its width, height, padding, border size and shadow size live.
"""

from typing import Dict, Optional

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QColor, QImage, QLinearGradient, QPainter
from PySide6.QtWidgets import (
    QButtonGroup,
    QFormLayout,
    QHBoxLayout,
    QMainWindow,
    QRadioButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from shapedview.core.errors import ShapedViewError
from shapedview.core.renderer import ShapeKind, ShapeStyle
from shapedview.services.config_service import ConfigService
from shapedview.services.logging_service import get_logger
from shapedview.widgets.shaped_image_widget import ShapedImageWidget

SHAPE_LABELS: Dict[ShapeKind, str] = {
    ShapeKind.OVAL: "Oval",
    ShapeKind.CIRCLE: "Circle",
    ShapeKind.RECTANGLE: "Rectangle",
    ShapeKind.SQUARE: "Square",
    ShapeKind.ROUND_RECT: "Round rect",
    ShapeKind.CUT_CORNER_RECT: "Cut corner",
    ShapeKind.FORMULA: "Formula",
}

DEFAULT_VIEW_SIZE = 240
MAX_VIEW_SIZE = 480
MAX_DECORATION_SIZE = 48


def create_sample_image(width: int = 640, height: int = 400) -> QImage:
    """Generate a diagonal gradient image for when no image file is given."""
    image = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
    gradient = QLinearGradient(QPointF(0, 0), QPointF(width, height))
    gradient.setColorAt(0.0, QColor(255, 94, 98))
    gradient.setColorAt(0.5, QColor(255, 195, 113))
    gradient.setColorAt(1.0, QColor(73, 160, 255))

    painter = QPainter(image)
    try:
        painter.fillRect(image.rect(), gradient)
    finally:
        painter.end()
    return image


class DemoWindow(QMainWindow):
    """Interactive playground for the shaped image widget."""

    def __init__(
        self,
        config_service: Optional[ConfigService] = None,
        image: Optional[QImage] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._logger = get_logger(__name__)
        self._config = config_service
        self._sliders: Dict[str, QSlider] = {}

        style = ShapeStyle()
        shape = ShapeKind.ROUND_RECT
        if self._config is not None:
            style = ShapeStyle.from_config(self._config.style)
            try:
                shape = ShapeKind.from_name(self._config.demo_shape)
            except ShapedViewError as e:
                self._logger.warning(f"{e} Falling back to round rect.")

        self._view = ShapedImageWidget(shape, style)
        self._view.set_image(image if image is not None else create_sample_image())

        self._setup_window()
        self._setup_central_widget(shape)
        self._apply_view_size()

        self._logger.info("DemoWindow initialized")

    @property
    def view(self) -> ShapedImageWidget:
        return self._view

    def _setup_window(self) -> None:
        """Configure main window properties."""
        self.setWindowTitle("ShapedView Demo")
        self.setMinimumSize(800, 560)

    def _setup_central_widget(self, initial_shape: ShapeKind) -> None:
        """Build the preview area and the control panel."""
        central = QWidget(self)
        layout = QHBoxLayout(central)

        preview = QWidget(central)
        preview_layout = QVBoxLayout(preview)
        preview_layout.addWidget(self._view, alignment=Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(preview, stretch=1)

        controls = QWidget(central)
        controls_layout = QVBoxLayout(controls)

        # ─── Shape selector ───────────────────────────────────────────
        self._shape_group = QButtonGroup(self)
        for index, (kind, label) in enumerate(SHAPE_LABELS.items()):
            button = QRadioButton(label, controls)
            button.setChecked(kind == initial_shape)
            self._shape_group.addButton(button, index)
            controls_layout.addWidget(button)
        self._shape_group.idClicked.connect(self._on_shape_selected)

        # ─── Size sliders ─────────────────────────────────────────────
        form = QFormLayout()
        self._add_slider(form, "width", "Width", 0, MAX_VIEW_SIZE, DEFAULT_VIEW_SIZE)
        self._add_slider(form, "height", "Height", 0, MAX_VIEW_SIZE, DEFAULT_VIEW_SIZE)
        self._add_slider(form, "padding", "Padding", 0, MAX_DECORATION_SIZE, 0)
        self._add_slider(form, "border", "Border", 0, MAX_DECORATION_SIZE, int(self._view.border_size))
        self._add_slider(form, "shadow", "Shadow", 0, MAX_DECORATION_SIZE, int(self._view.shadow_size))
        controls_layout.addLayout(form)
        controls_layout.addStretch(1)

        layout.addWidget(controls)
        self.setCentralWidget(central)

    def _add_slider(self, form: QFormLayout, key: str, label: str,
                    minimum: int, maximum: int, value: int) -> None:
        slider = QSlider(Qt.Orientation.Horizontal, self)
        slider.setRange(minimum, maximum)
        slider.setValue(value)
        slider.valueChanged.connect(lambda v, k=key: self._on_slider_changed(k, v))
        self._sliders[key] = slider
        form.addRow(label, slider)

    # ─── Handlers ─────────────────────────────────────────────────────────

    def select_shape(self, kind: ShapeKind) -> None:
        """Switch the preview to another shape kind."""
        self._view.shape = kind
        self._apply_view_size()
        self._logger.debug(f"Demo shape: {kind.value}")

    def _on_shape_selected(self, index: int) -> None:
        self.select_shape(list(SHAPE_LABELS)[index])

    def _on_slider_changed(self, key: str, value: int) -> None:
        if key in ("width", "height"):
            self._apply_view_size()
        elif key == "padding":
            self._view.set_padding(value)
        elif key == "border":
            self._view.border_size = value
        elif key == "shadow":
            self._view.shadow_size = value

    def _apply_view_size(self) -> None:
        width = self._sliders["width"].value()
        height = self._sliders["height"].value()
        self._view.setFixedSize(width, height)
