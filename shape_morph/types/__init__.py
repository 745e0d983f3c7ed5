"""Type definitions for shape_morph.

- geometry: value types (Point, BoundingBox, Line, ProjectionResult, SvgChar)
- commands: persisted path commands and their builder
"""

from shape_morph.types.commands import POINT_COUNTS, CommandBuilder, PathCommand
from shape_morph.types.geometry import (
    BoundingBox,
    Line,
    Point,
    ProjectionResult,
    Range,
    SvgChar,
    clamp_value,
    distance,
    format_number,
    lerp,
    lerp_point,
)

__all__ = [
    # Geometry
    "BoundingBox",
    "Line",
    "Point",
    "ProjectionResult",
    "Range",
    "SvgChar",
    "clamp_value",
    "distance",
    "format_number",
    "lerp",
    "lerp_point",
    # Commands
    "CommandBuilder",
    "POINT_COUNTS",
    "PathCommand",
]
