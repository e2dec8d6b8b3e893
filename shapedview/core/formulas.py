"""
Parametric shape formulas.

A formula describes a closed outline as a point moving around a bounding
rect. The path builder sets ``rect`` once, then steps ``angle`` through
0..360 degrees and reads ``x``/``y`` at each step.

Predefined formulas:
- EllipseFormula: ellipse inscribed in the rect, 0 degrees at 12 o'clock.
- SuperEllipseFormula: |x/a|^n + |y/b|^n = 1, 0 degrees at 3 o'clock.

The two formulas start at different positions. Code that mixes them must not
assume a shared angle convention.

Custom formulas subclass FormulaBase and may be registered by name so that
widgets can be configured from strings (see create_formula()).
"""

import math
from abc import ABC, abstractmethod
from typing import Callable, Dict, List

from PySide6.QtCore import QPointF, QRectF

from shapedview.core.errors import FormulaLookupError
from shapedview.services.logging_service import get_logger

logger = get_logger(__name__)

DEFAULT_CURVATURE = 3.0


def sgn(value: float) -> int:
    """Return 1 when value is positive, -1 when negative and 0 otherwise."""
    if value > 0.0:
        return 1
    if value < 0.0:
        return -1
    return 0


class FormulaBase(ABC):
    """
    Base class for all shape formulas.

    Holds the mutable sampling state (current angle and rect). A formula
    instance is not safe to share between concurrent path builds.
    """

    def __init__(self) -> None:
        self._angle: float = 0.0
        self._rect: QRectF = QRectF()

    @property
    def angle(self) -> float:
        """Current angle in degrees, always in [0, 360)."""
        return self._angle

    @angle.setter
    def angle(self, value: float) -> None:
        angle = float(value) % 360.0
        # Tiny negative inputs round up to exactly 360.0
        self._angle = 0.0 if angle >= 360.0 else angle

    @property
    def rect(self) -> QRectF:
        """The rectangular bounds of the shape being sampled."""
        return self._rect

    @rect.setter
    def rect(self, value: QRectF) -> None:
        self._rect = QRectF(value)

    # Derived from rect

    @property
    def cx(self) -> float:
        return self._rect.center().x()

    @property
    def cy(self) -> float:
        return self._rect.center().y()

    @property
    def rh(self) -> float:
        """Horizontal radius."""
        return self._rect.width() / 2

    @property
    def rv(self) -> float:
        """Vertical radius."""
        return self._rect.height() / 2

    @property
    def radian(self) -> float:
        return math.radians(self._angle)

    @property
    @abstractmethod
    def x(self) -> float:
        """X position at the current angle."""
        pass

    @property
    @abstractmethod
    def y(self) -> float:
        """Y position at the current angle."""
        pass

    def point(self) -> QPointF:
        """Position at the current angle."""
        return QPointF(self.x, self.y)

    def point_at(self, angle: float) -> QPointF:
        """Move to angle and return the position there."""
        self.angle = angle
        return self.point()


class EllipseFormula(FormulaBase):
    """
    A formula for drawing an ellipse.

    x(t) = rh * sin t + cx
    y(t) = rv * cos t + cy
    """

    @property
    def x(self) -> float:
        return self.rh * math.sin(self.radian) + self.cx

    @property
    def y(self) -> float:
        return self.rv * math.cos(self.radian) + self.cy


class SuperEllipseFormula(FormulaBase):
    """
    A formula for drawing a superellipse.

    - n is the curvature: 2 gives an ellipse, 1 a diamond, large values
      approach the rect, values between 0 and 1 give an astroid-like star.
    - x(t) = sgn(cos t) * |cos t|^(2/n) * rh + cx
    - y(t) = sgn(sin t) * |sin t|^(2/n) * rv + cy

    A zero cosine/sine contributes exactly 0, whatever the exponent.
    """

    def __init__(self, curvature: float = DEFAULT_CURVATURE) -> None:
        super().__init__()
        self.curvature = float(curvature)

    @property
    def exponent(self) -> float:
        return 2.0 / self.curvature

    def _term(self, w: float) -> float:
        sign = sgn(w)
        if sign == 0:
            return 0.0
        return sign * abs(w) ** self.exponent

    @property
    def x(self) -> float:
        return self._term(math.cos(self.radian)) * self.rh + self.cx

    @property
    def y(self) -> float:
        return self._term(math.sin(self.radian)) * self.rv + self.cy

    def __repr__(self) -> str:
        return f"SuperEllipseFormula(curvature={self.curvature})"


# ─── Registry ─────────────────────────────────────────────────────────────────

FormulaFactory = Callable[..., FormulaBase]

_FORMULA_FACTORIES: Dict[str, FormulaFactory] = {
    "EllipseFormula": EllipseFormula,
    "SuperEllipseFormula": SuperEllipseFormula,
}


def register_formula(name: str, factory: FormulaFactory) -> None:
    """
    Register a formula factory under a name.

    Args:
        name: The name used in configuration (e.g. "SquircleFormula").
        factory: Callable returning a new FormulaBase instance.
    """
    if not name or not name.strip():
        raise ValueError("Formula name must not be blank.")
    if name in _FORMULA_FACTORIES:
        logger.warning(f"Replacing registered formula '{name}'")
    _FORMULA_FACTORIES[name] = factory


def unregister_formula(name: str) -> None:
    """Remove a registered formula. Unknown names are ignored."""
    _FORMULA_FACTORIES.pop(name, None)


def available_formulas() -> List[str]:
    """Return the registered formula names, sorted."""
    return sorted(_FORMULA_FACTORIES)


def create_formula(name: str, **kwargs) -> FormulaBase:
    """
    Factory function to create formulas by name.

    Args:
        name: A registered formula name.
        **kwargs: Passed to the factory (e.g. curvature=4.0).

    Returns:
        A new formula instance.

    Raises:
        FormulaLookupError: If the name is unknown or the factory does not
            produce a FormulaBase.
    """
    factory = _FORMULA_FACTORIES.get(name.strip() if name else name)
    if factory is None:
        logger.error(f"Unknown shape formula: {name!r}")
        raise FormulaLookupError(
            f"Cannot create formula {name!r}. Known formulas: {', '.join(available_formulas())}"
        )

    try:
        formula = factory(**kwargs)
    except TypeError as e:
        raise FormulaLookupError(f"Cannot create formula {name!r}: {e}") from e

    if not isinstance(formula, FormulaBase):
        raise FormulaLookupError(f"{name!r} is not a kind of formula.")

    logger.debug(f"Created formula {name!r} with {kwargs}")
    return formula
