"""Core geometry types."""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict


class Point(BaseModel):
    """A 2D point.

    Equality is exact float comparison. Callers deduplicating points must not
    expect two nearly-equal points to compare equal.
    """

    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def __str__(self) -> str:
        return f"{format_number(self.x)},{format_number(self.y)}"


class Range(BaseModel):
    """A closed interval [min, max]."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float

    def contains(self, value: float, tolerance: float = 0.0) -> bool:
        return self.min - tolerance <= value <= self.max + tolerance


class BoundingBox(BaseModel):
    """An axis-aligned bounding box."""

    model_config = ConfigDict(frozen=True)

    x: Range
    y: Range

    @classmethod
    def from_points(cls, points: list[Point]) -> "BoundingBox":
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(x=Range(min=min(xs), max=max(xs)), y=Range(min=min(ys), max=max(ys)))

    def contains(self, point: Point, tolerance: float = 0.0) -> bool:
        """Check whether a point lies inside or on the box."""
        return self.x.contains(point.x, tolerance) and self.y.contains(point.y, tolerance)


class Line(BaseModel):
    """A straight segment, also used as an intersection query."""

    model_config = ConfigDict(frozen=True)

    p1: Point
    p2: Point


class ProjectionResult(BaseModel):
    """Nearest point on a segment to a query point."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    t: float  # Curve parameter in [0, 1]
    d: float  # Distance to the query point


class SvgChar(str, Enum):
    """Path command kinds."""

    MOVE = "M"
    LINE = "L"
    QUADRATIC = "Q"
    CUBIC = "C"
    CLOSE_PATH = "Z"
    ARC = "A"


def format_number(value: float, precision: int = 6) -> str:
    """Format a coordinate for path data, dropping trailing zeros."""
    text = f"{value:.{precision}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def distance(p1: Point, p2: Point) -> float:
    """Calculate Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between two values.

    Written as a weighted sum so that t=0 and t=1 return a and b exactly.
    """
    return (1 - t) * a + t * b


def lerp_point(p1: Point, p2: Point, t: float) -> Point:
    """Linearly interpolate between two points."""
    return Point(x=lerp(p1.x, p2.x, t), y=lerp(p1.y, p2.y, t))


def clamp_value(value: float, low: float, high: float) -> float:
    """Clamp a value to a range [low, high]."""
    return max(low, min(high, value))
