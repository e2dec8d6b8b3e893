"""
Exception types raised by the ShapedView geometry engine.

Only configuration problems raise. Degenerate geometry (empty rects,
zero-sized images) propagates as inf/nan through the arithmetic instead.
"""


class ShapedViewError(Exception):
    """Base class for all ShapedView errors."""


class InvalidConfigurationError(ShapedViewError, ValueError):
    """A style or widget setting was rejected when it was applied."""


class FormulaLookupError(ShapedViewError, LookupError):
    """A shape formula name could not be resolved to a formula instance."""
