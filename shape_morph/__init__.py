"""Path segment calculators for editing and morphing vector shapes."""

from shape_morph.calculators import (
    BezierCalculator,
    Calculator,
    LineCalculator,
    PointCalculator,
    create_calculator,
)
from shape_morph.errors import (
    CalculatorError,
    InvalidCommandError,
    InvalidConversionError,
    MorphError,
)
from shape_morph.morph import interpolate, interpolate_commands

__all__ = [
    "BezierCalculator",
    "Calculator",
    "CalculatorError",
    "InvalidCommandError",
    "InvalidConversionError",
    "LineCalculator",
    "MorphError",
    "PointCalculator",
    "create_calculator",
    "interpolate",
    "interpolate_commands",
]
