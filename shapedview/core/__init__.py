"""
Shape geometry and image fitting engine.

- bounds: shadow/border/image rects and widget measurement
- formulas: parametric outline formulas and their registry
- paths: outline builders (round-rect, cut-corner, formula, ...)
- matrix: image fit matrices for every ScaleType
- shadow: blurred drop shadows
- renderer: ShapeRenderer, which sequences all of the above
"""

from shapedview.core.bounds import Bounds, Padding, compute_bounds, measure_view_size, parse_aspect_ratio
from shapedview.core.errors import FormulaLookupError, InvalidConfigurationError, ShapedViewError
from shapedview.core.formulas import (
    EllipseFormula,
    FormulaBase,
    SuperEllipseFormula,
    available_formulas,
    create_formula,
    register_formula,
)
from shapedview.core.matrix import ImageMatrix, ScaleType, compute_matrix
from shapedview.core.paths import (
    CornerSet,
    OutlinePath,
    cut_corner_rect_path,
    formula_path,
    round_rect_path,
)
from shapedview.core.renderer import ShapeKind, ShapeRenderer, ShapeStyle

__all__ = [
    "Bounds",
    "CornerSet",
    "EllipseFormula",
    "FormulaBase",
    "FormulaLookupError",
    "ImageMatrix",
    "InvalidConfigurationError",
    "OutlinePath",
    "Padding",
    "ScaleType",
    "ShapeKind",
    "ShapeRenderer",
    "ShapeStyle",
    "ShapedViewError",
    "SuperEllipseFormula",
    "available_formulas",
    "compute_bounds",
    "compute_matrix",
    "create_formula",
    "cut_corner_rect_path",
    "formula_path",
    "measure_view_size",
    "parse_aspect_ratio",
    "register_formula",
    "round_rect_path",
]
