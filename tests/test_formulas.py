"""Tests for parametric shape formulas and the formula registry."""

import math

import pytest
from PySide6.QtCore import QRectF

from shapedview.core.errors import FormulaLookupError
from shapedview.core.formulas import (
    EllipseFormula,
    FormulaBase,
    SuperEllipseFormula,
    available_formulas,
    create_formula,
    register_formula,
    sgn,
    unregister_formula,
)

RECT = QRectF(10, 20, 200, 100)  # center (110, 70), rh 100, rv 50


def sample(formula, angle):
    formula.angle = angle
    return formula.x, formula.y


@pytest.mark.parametrize("value,expected", [
    (0, 0), (359, 359), (360, 0), (361, 1), (720, 0), (-90, 270), (45.5, 45.5), (-1e-20, 0),
])
def test_angle_wraps(value, expected):
    formula = EllipseFormula()
    formula.angle = value
    assert formula.angle == pytest.approx(expected)


def test_rect_is_copied():
    formula = EllipseFormula()
    rect = QRectF(0, 0, 10, 10)
    formula.rect = rect
    rect.setWidth(50)
    assert formula.rect.width() == 10


def test_ellipse_starts_at_top_convention():
    formula = EllipseFormula()
    formula.rect = RECT
    x0, y0 = sample(formula, 0)
    assert x0 == pytest.approx(110)
    assert y0 == pytest.approx(120)


def test_ellipse_opposite_points_symmetric_about_center():
    formula = EllipseFormula()
    formula.rect = RECT
    x0, y0 = sample(formula, 0)
    x180, y180 = sample(formula, 180)
    assert (x0 + x180) / 2 == pytest.approx(110)
    assert (y0 + y180) / 2 == pytest.approx(70)


def test_ellipse_quarter_turn():
    formula = EllipseFormula()
    formula.rect = RECT
    x90, y90 = sample(formula, 90)
    assert x90 == pytest.approx(210)
    assert y90 == pytest.approx(70)


def test_superellipse_starts_at_right_center():
    formula = SuperEllipseFormula(3)
    formula.rect = RECT
    assert sample(formula, 0) == (pytest.approx(210), pytest.approx(70))
    assert sample(formula, 90) == (pytest.approx(110), pytest.approx(120))


@pytest.mark.parametrize("curvature", [0.1, 0.5, 1, 2, 3, 5, 50, 1000])
def test_superellipse_never_nan(curvature):
    formula = SuperEllipseFormula(curvature)
    formula.rect = RECT
    for angle in range(360):
        x, y = sample(formula, angle)
        assert not math.isnan(x)
        assert not math.isnan(y)


def test_superellipse_zero_terms_are_exact():
    formula = SuperEllipseFormula(3)
    formula.rect = QRectF(-1, -1, 2, 2)
    # sin(0) is exactly 0, so y must be exactly the center
    assert sample(formula, 0)[1] == 0.0


def test_superellipse_n2_matches_ellipse():
    ellipse = EllipseFormula()
    superellipse = SuperEllipseFormula(2)
    ellipse.rect = RECT
    superellipse.rect = RECT
    for angle in range(360):
        sx, sy = sample(superellipse, angle)
        # Same curve; the ellipse is parameterised from 12 o'clock
        ex, ey = sample(ellipse, (90 - angle) % 360)
        assert sx == pytest.approx(ex, abs=1e-9)
        assert sy == pytest.approx(ey, abs=1e-9)


def test_superellipse_n1_is_diamond():
    formula = SuperEllipseFormula(1)
    formula.rect = QRectF(-1, -1, 2, 2)
    for angle in range(360):
        x, y = sample(formula, angle)
        assert abs(x) + abs(y) == pytest.approx(1.0)


def test_superellipse_points_on_curve():
    n = 4.0
    formula = SuperEllipseFormula(n)
    formula.rect = RECT
    for angle in range(0, 360, 7):
        x, y = sample(formula, angle)
        value = abs((x - 110) / 100) ** n + abs((y - 70) / 50) ** n
        assert value == pytest.approx(1.0)


def test_sgn():
    assert sgn(-0.5) == -1
    assert sgn(0.0) == 0
    assert sgn(2.0) == 1


def test_create_predefined_formulas():
    assert isinstance(create_formula("EllipseFormula"), EllipseFormula)
    formula = create_formula("SuperEllipseFormula", curvature=4.0)
    assert isinstance(formula, SuperEllipseFormula)
    assert formula.curvature == 4.0
    assert create_formula("SuperEllipseFormula").curvature == 3.0


def test_unknown_formula_fails_fast():
    with pytest.raises(FormulaLookupError):
        create_formula("NoSuchFormula")


def test_factory_arguments_are_checked():
    with pytest.raises(FormulaLookupError):
        create_formula("EllipseFormula", curvature=2)


class _Diamond(FormulaBase):
    @property
    def x(self):
        return self.cx

    @property
    def y(self):
        return self.cy


def test_register_custom_formula():
    register_formula("TestDiamond", _Diamond)
    try:
        assert "TestDiamond" in available_formulas()
        assert isinstance(create_formula("TestDiamond"), _Diamond)
    finally:
        unregister_formula("TestDiamond")
    assert "TestDiamond" not in available_formulas()


def test_factory_must_return_formula():
    register_formula("NotAFormula", lambda: object())
    try:
        with pytest.raises(FormulaLookupError):
            create_formula("NotAFormula")
    finally:
        unregister_formula("NotAFormula")


@pytest.mark.parametrize("value", [-1e-20, -1e-300, -5e-324, 360.0 - 1e-14, 1e18])
def test_angle_stays_in_range(value):
    formula = EllipseFormula()
    formula.angle = value
    assert 0.0 <= formula.angle < 360.0


def test_point_at_moves_angle():
    formula = SuperEllipseFormula(3)
    formula.rect = RECT
    point = formula.point_at(450)
    assert formula.angle == 90
    assert (point.x(), point.y()) == (pytest.approx(110), pytest.approx(120))
    assert formula.point() == point
