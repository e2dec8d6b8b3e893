"""
Outline builders for shaped image widgets.

Every builder returns an OutlinePath: the ordered move/line/quad/close
commands of one closed outline. OutlinePath converts to a QPainterPath for
drawing and keeps the commands around so callers (and tests) can inspect
the exact geometry.

Builders:
- rect_path: plain rectangle
- oval_path / circle_path: ellipse primitives
- round_rect_path: rectangle with 4 independent quadratic corners
- cut_corner_rect_path: rectangle with 4 independent diagonal chamfers
- formula_path: 360-gon sampled from a FormulaBase

Corner values are not validated. Negative values or values larger than half
a side produce overlapping or self-intersecting outlines.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Sequence, Tuple

from PySide6.QtCore import QPointF, QRectF
from PySide6.QtGui import QPainterPath

from shapedview.core.errors import InvalidConfigurationError
from shapedview.core.formulas import FormulaBase

# Degrees between two formula samples
FORMULA_STEP_DEGREES = 1
FORMULA_SAMPLE_COUNT = 360


@dataclass(frozen=True)
class CornerSet:
    """
    Four per-corner magnitudes, clockwise from the top-left.

    Used for round-rect radii and for cut-corner sizes.
    """
    top_left: float = 0.0
    top_right: float = 0.0
    bottom_right: float = 0.0
    bottom_left: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "CornerSet":
        return cls(value, value, value, value)

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "CornerSet":
        """
        Build from a sequence ordered top-left, top-right, bottom-right, bottom-left.

        Raises:
            InvalidConfigurationError: If values does not have exactly 4 items.
        """
        if len(values) != 4:
            raise InvalidConfigurationError(
                f"Corner values should be a sequence of 4 items, got {len(values)}."
            )
        return cls(*(float(v) for v in values))

    def expanded(self, amount: float) -> "CornerSet":
        """Return a copy with amount added to every corner."""
        return CornerSet(
            self.top_left + amount,
            self.top_right + amount,
            self.bottom_right + amount,
            self.bottom_left + amount,
        )

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.top_left, self.top_right, self.bottom_right, self.bottom_left)


class PathOp(Enum):
    """Kinds of outline commands."""
    MOVE = auto()
    LINE = auto()
    QUAD = auto()     # points: (control, end)
    ELLIPSE = auto()  # points: (top-left, bottom-right) of the bounding rect
    CLOSE = auto()


@dataclass(frozen=True)
class PathCommand:
    op: PathOp
    points: Tuple[QPointF, ...] = ()

    @property
    def end(self) -> QPointF:
        """The point the pen is at after this command."""
        return self.points[-1]


class OutlinePath:
    """
    A recorded closed outline.

    Mirrors the QPainterPath building API (move_to, line_to, quad_to,
    close) and replays the commands in to_painter_path().
    """

    def __init__(self) -> None:
        self._commands: List[PathCommand] = []

    def move_to(self, x: float, y: float) -> "OutlinePath":
        self._commands.append(PathCommand(PathOp.MOVE, (QPointF(x, y),)))
        return self

    def line_to(self, x: float, y: float) -> "OutlinePath":
        self._commands.append(PathCommand(PathOp.LINE, (QPointF(x, y),)))
        return self

    def quad_to(self, cx: float, cy: float, x: float, y: float) -> "OutlinePath":
        self._commands.append(
            PathCommand(PathOp.QUAD, (QPointF(cx, cy), QPointF(x, y)))
        )
        return self

    def add_ellipse(self, rect: QRectF) -> "OutlinePath":
        self._commands.append(
            PathCommand(PathOp.ELLIPSE, (rect.topLeft(), rect.bottomRight()))
        )
        return self

    def close(self) -> "OutlinePath":
        self._commands.append(PathCommand(PathOp.CLOSE))
        return self

    @property
    def commands(self) -> List[PathCommand]:
        return list(self._commands)

    @property
    def is_empty(self) -> bool:
        return not self._commands

    def vertices(self) -> List[QPointF]:
        """End points of every move/line/quad command, in order."""
        return [
            cmd.end for cmd in self._commands
            if cmd.op in (PathOp.MOVE, PathOp.LINE, PathOp.QUAD)
        ]

    def to_painter_path(self) -> QPainterPath:
        """Replay the commands into a new QPainterPath."""
        path = QPainterPath()
        for cmd in self._commands:
            if cmd.op == PathOp.MOVE:
                path.moveTo(cmd.points[0])
            elif cmd.op == PathOp.LINE:
                path.lineTo(cmd.points[0])
            elif cmd.op == PathOp.QUAD:
                path.quadTo(cmd.points[0], cmd.points[1])
            elif cmd.op == PathOp.ELLIPSE:
                path.addEllipse(QRectF(cmd.points[0], cmd.points[1]))
            elif cmd.op == PathOp.CLOSE:
                path.closeSubpath()
        return path

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[PathCommand]:
        return iter(self._commands)


# ─── Primitive Shapes ─────────────────────────────────────────────────────────

def rect_path(rect: QRectF) -> OutlinePath:
    """Plain rectangle, clockwise from the top-left corner."""
    path = OutlinePath()
    path.move_to(rect.left(), rect.top())
    path.line_to(rect.right(), rect.top())
    path.line_to(rect.right(), rect.bottom())
    path.line_to(rect.left(), rect.bottom())
    path.line_to(rect.left(), rect.top())
    return path.close()


def oval_path(rect: QRectF) -> OutlinePath:
    """Ellipse inscribed in rect."""
    return OutlinePath().add_ellipse(rect)


def circle_path(rect: QRectF) -> OutlinePath:
    """Circle centred in rect with radius rect.width() / 2."""
    center = rect.center()
    radius = rect.width() / 2
    circle = QRectF(
        QPointF(center.x() - radius, center.y() - radius),
        QPointF(center.x() + radius, center.y() + radius),
    )
    return OutlinePath().add_ellipse(circle)


# ─── Cornered Shapes ──────────────────────────────────────────────────────────

def round_rect_path(rect: QRectF, radii: CornerSet) -> OutlinePath:
    """
    Rectangle with an independent quadratic arc on each corner.

    Starts on the left edge just below the top-left corner and walks
    clockwise. A radius of 0 collapses that corner to a right angle.
    """
    left, top = rect.left(), rect.top()
    right, bottom = rect.right(), rect.bottom()
    tl, tr, br, bl = radii.as_tuple()

    path = OutlinePath()
    path.move_to(left, top + tl)
    path.quad_to(left, top, left + tl, top)
    path.line_to(right - tr, top)
    path.quad_to(right, top, right, top + tr)
    path.line_to(right, bottom - br)
    path.quad_to(right, bottom, right - br, bottom)
    path.line_to(left + bl, bottom)
    path.quad_to(left, bottom, left, bottom - bl)
    path.line_to(left, top + tl)
    return path.close()


def cut_corner_rect_path(rect: QRectF, cuts: CornerSet) -> OutlinePath:
    """
    Rectangle with an independent diagonal chamfer on each corner.

    Same start point and direction as round_rect_path(), straight lines only.
    """
    left, top = rect.left(), rect.top()
    right, bottom = rect.right(), rect.bottom()
    tl, tr, br, bl = cuts.as_tuple()

    path = OutlinePath()
    path.move_to(left, top + tl)
    path.line_to(left + tl, top)
    path.line_to(right - tr, top)
    path.line_to(right, top + tr)
    path.line_to(right, bottom - br)
    path.line_to(right - br, bottom)
    path.line_to(left + bl, bottom)
    path.line_to(left, bottom - bl)
    path.line_to(left, top + tl)
    return path.close()


# ─── Formula Shapes ───────────────────────────────────────────────────────────

def formula_path(formula: FormulaBase, rect: QRectF) -> OutlinePath:
    """
    Sample formula around rect at a fixed 1 degree step.

    The outline is a 360-gon approximation; there is no adaptive
    refinement. The formula's rect and angle are left at the last sample.
    """
    formula.rect = rect

    path = OutlinePath()
    start = formula.point_at(0)
    path.move_to(start.x(), start.y())

    for degree in range(FORMULA_STEP_DEGREES, FORMULA_SAMPLE_COUNT + 1, FORMULA_STEP_DEGREES):
        point = formula.point_at(degree)
        path.line_to(point.x(), point.y())

    return path.close()
