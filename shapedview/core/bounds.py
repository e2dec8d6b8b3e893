"""
Bounds calculation for shaped image widgets.

A shaped widget draws up to three nested outlines: the shadow, the border
and the image itself. This module derives the rectangles for all three from
the widget size, its padding and the border/shadow settings, and measures
the widget size itself (square shapes, aspect ratios).

Rects are built from their edges and never normalized, so oversized insets
produce rects with negative width/height instead of flipping.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from PySide6.QtCore import QPointF, QRectF

from shapedview.core.errors import InvalidConfigurationError
from shapedview.services.logging_service import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Padding:
    """Padding of the widget in device pixels."""
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Padding":
        return cls(value, value, value, value)

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom


@dataclass(frozen=True)
class Bounds:
    """
    The bounds triplet of one render pass.

    shadow_rect and border_rect share the same inset; they are only
    meaningful when the matching layer is enabled. image_rect is always
    valid and is also the destination rect of the image fit matrix.
    """
    shadow_rect: QRectF
    border_rect: QRectF
    image_rect: QRectF
    shadow_adjust: float = 0.0
    border_adjust: float = 0.0

    @property
    def usable_width(self) -> float:
        """Width the image is drawn at."""
        return self.image_rect.width()

    @property
    def usable_height(self) -> float:
        """Height the image is drawn at."""
        return self.image_rect.height()


def inset_rect(
    width: float,
    height: float,
    left: float,
    top: float,
    right: float,
    bottom: float,
) -> QRectF:
    """Return the rect (0, 0, width, height) shrunk by the given edge insets."""
    return QRectF(
        QPointF(left, top),
        QPointF(width - right, height - bottom),
    )


def compute_bounds(
    view_width: float,
    view_height: float,
    padding: Optional[Padding] = None,
    border_width: float = 0.0,
    border_enabled: bool = False,
    shadow_width: float = 0.0,
    shadow_enabled: bool = False,
) -> Bounds:
    """
    Compute the shadow, border and image rects of a widget.

    Args:
        view_width: Widget width in pixels.
        view_height: Widget height in pixels.
        padding: Widget padding, or None for no padding.
        border_width: Border stroke size.
        border_enabled: Whether the border layer is drawn.
        shadow_width: Shadow size.
        shadow_enabled: Whether the shadow layer is drawn.

    Returns:
        A new Bounds. Nothing is cached; call again whenever an input changes.
    """
    padding = padding or Padding()

    shadow_adjust = shadow_width if shadow_enabled else 0.0
    border_adjust = border_width if border_enabled else 0.0
    adjust_sum = shadow_adjust + border_adjust

    # Border sits at the shadow's inset; stroke and shadow offset separate them
    outer = inset_rect(
        view_width,
        view_height,
        padding.left + shadow_adjust,
        padding.top + shadow_adjust,
        padding.right + shadow_adjust,
        padding.bottom + shadow_adjust,
    )

    image_rect = inset_rect(
        view_width,
        view_height,
        padding.left + adjust_sum,
        padding.top + adjust_sum,
        padding.right + adjust_sum,
        padding.bottom + adjust_sum,
    )

    logger.debug(
        f"Bounds for {view_width}x{view_height}: image={image_rect.getCoords()} "
        f"shadow={shadow_adjust} border={border_adjust}"
    )

    return Bounds(
        shadow_rect=QRectF(outer),
        border_rect=QRectF(outer),
        image_rect=image_rect,
        shadow_adjust=shadow_adjust,
        border_adjust=border_adjust,
    )


# ─── Measurement ──────────────────────────────────────────────────────────────

def parse_aspect_ratio(value: Union[None, str, float, Tuple[float, float]]) -> float:
    """
    Convert an aspect ratio setting to a single width / height number.

    Accepts None, a number, a (width, height) pair, or a "width:height"
    string. Blank values and pairs containing 0 disable the ratio (0.0).

    Raises:
        InvalidConfigurationError: If a string is not in "number:number" form.
    """
    if value is None:
        return 0.0

    if isinstance(value, (int, float)):
        return float(value)

    if isinstance(value, tuple):
        if len(value) != 2:
            raise InvalidConfigurationError(
                f"Aspect ratio pair should have 2 items, got {len(value)}."
            )
        first, second = (float(v) for v in value)
        if first == 0.0 or second == 0.0:
            return 0.0
        return first / second

    text = value.strip()
    if not text:
        return 0.0

    if ":" not in text or text.startswith(":") or text.endswith(":"):
        raise InvalidConfigurationError(
            f"'{value}' is illegal format. Aspect ratio should be 'number:number' format."
        )

    parts = text.split(":")
    numbers = []
    for part in parts[:2]:
        try:
            numbers.append(float(part))
        except ValueError:
            raise InvalidConfigurationError(
                f"'{part}' is not a number. Aspect ratio should consist of numbers."
            ) from None

    if numbers[0] == 0.0 or numbers[1] == 0.0:
        return 0.0
    return numbers[0] / numbers[1]


def measure_view_size(
    width: int,
    height: int,
    force_square: bool = False,
    aspect_ratio: float = 0.0,
    width_exact: bool = False,
    height_exact: bool = False,
) -> Tuple[int, int]:
    """
    Measure the widget size from the space offered by the layout.

    Args:
        width: Offered width.
        height: Offered height.
        force_square: Square shapes take min(width, height) on both axes.
        aspect_ratio: width / height ratio to keep, 0 to ignore.
        width_exact: The offered width is fixed by the layout.
        height_exact: The offered height is fixed by the layout.

    Returns:
        (width, height) truncated to whole pixels.
    """
    if force_square:
        side = min(width, height)
        return side, side

    if aspect_ratio == 0.0:
        return width, height

    if width == 0:
        return int(height * aspect_ratio), height
    if height == 0:
        return width, int(width / aspect_ratio)

    if width_exact:
        return width, int(width / aspect_ratio)
    if height_exact:
        return int(height * aspect_ratio), height
    return width, int(width / aspect_ratio)
