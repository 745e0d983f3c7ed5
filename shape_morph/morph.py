"""Frame interpolation between two end states of a path command."""

from __future__ import annotations

import logging

from shape_morph.calculators import (
    BezierCalculator,
    Calculator,
    LineCalculator,
    PointCalculator,
)
from shape_morph.errors import MorphError
from shape_morph.types import clamp_value, lerp_point

logger = logging.getLogger(__name__)


def _same_variant(start: Calculator, end: Calculator) -> bool:
    match start, end:
        case (PointCalculator(), PointCalculator()):
            return True
        case (LineCalculator(), LineCalculator()):
            return True
        case (BezierCalculator(), BezierCalculator()):
            return len(start.points) == len(end.points)
        case _:
            return False


def interpolate(start: Calculator, end: Calculator, fraction: float) -> Calculator:
    """Interpolate the control points of two compatible segments.

    Both segments must have the same command kind and point count. Callers
    usually get there by splitting and converting with the calculators first.

    Args:
        start: Segment at fraction 0
        end: Segment at fraction 1
        fraction: Animation progress, clamped to [0, 1]

    Returns:
        A new calculator carrying the start segment's id
    """
    if start.svg_char != end.svg_char or not _same_variant(start, end):
        raise MorphError(
            f"Cannot morph {type(start).__name__} {start.svg_char.value} "
            f"into {type(end).__name__} {end.svg_char.value}"
        )
    fraction = clamp_value(fraction, 0.0, 1.0)
    points = [lerp_point(a, b, fraction) for a, b in zip(start.points, end.points, strict=True)]
    return type(start)(start.id, start.svg_char, tuple(points))


def interpolate_commands(
    starts: list[Calculator], ends: list[Calculator], fraction: float
) -> list[Calculator]:
    """Interpolate a whole path, command by command."""
    if len(starts) != len(ends):
        raise MorphError(f"Paths have {len(starts)} and {len(ends)} commands")
    logger.debug("Interpolating %d commands at %.3f", len(starts), fraction)
    return [interpolate(s, e, fraction) for s, e in zip(starts, ends, strict=True)]
