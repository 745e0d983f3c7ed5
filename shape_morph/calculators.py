"""Path segment calculators.

A calculator holds the geometry of one path command and answers measurement,
subdivision, projection and conversion queries about it. There are exactly
three variants:

- PointCalculator: a zero-length segment (one point)
- LineCalculator: a straight segment (two points)
- BezierCalculator: a quadratic (three points) or cubic (four points) curve

Calculators are immutable. Every operation returns a plain value or a new
calculator. Arc length and bounding box are computed on first use and cached
on the instance.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from functools import cached_property
from typing import Any, TypeAlias

import numpy as np
from numpy.typing import NDArray

from shape_morph import bezier
from shape_morph.config import settings
from shape_morph.errors import CalculatorError, InvalidCommandError, InvalidConversionError
from shape_morph.types import (
    BoundingBox,
    CommandBuilder,
    Line,
    PathCommand,
    Point,
    ProjectionResult,
    Range,
    SvgChar,
    clamp_value,
    distance,
    lerp_point,
)

logger = logging.getLogger(__name__)


def _coerce_svg_char(svg_char: Any) -> SvgChar:
    """Validate a conversion target."""
    if svg_char is None:
        raise InvalidConversionError("Attempt to convert to an undefined command kind")
    try:
        return SvgChar(svg_char)
    except ValueError as e:
        raise InvalidConversionError(f"Unknown command kind: {svg_char!r}") from e


def _check_points(points: tuple[Point, ...], allowed: tuple[int, ...], name: str) -> None:
    if len(points) not in allowed:
        counts = " or ".join(map(str, allowed))
        raise CalculatorError(f"{name} takes {counts} points, got {len(points)}")


def _elevated_line_points(p1: Point, p2: Point, svg_char: SvgChar) -> list[Point]:
    """Points of a straight segment expressed as the given command kind."""
    match svg_char:
        case SvgChar.LINE | SvgChar.CLOSE_PATH:
            return [p1, p2]
        case SvgChar.QUADRATIC:
            return [p1, lerp_point(p1, p2, 0.5), p2]
        case SvgChar.CUBIC:
            return [p1, lerp_point(p1, p2, 1 / 3), lerp_point(p1, p2, 2 / 3), p2]
        case _:
            raise InvalidCommandError(f"Invalid command type: {svg_char.value}")


@dataclass(frozen=True)
class PointCalculator:
    """A degenerate segment: a single point with zero length."""

    id: str
    svg_char: SvgChar
    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "svg_char", SvgChar(self.svg_char))
        object.__setattr__(self, "points", tuple(self.points))
        _check_points(self.points, (1,), "PointCalculator")

    @property
    def point(self) -> Point:
        return self.points[0]

    def get_point_at(self, t: float) -> Point:
        return self.point

    def get_path_length(self) -> float:
        return 0.0

    def project(self, point: Point) -> ProjectionResult:
        p = self.point
        return ProjectionResult(x=p.x, y=p.y, t=0.0, d=distance(point, p))

    def split(self, t1: float, t2: float) -> Calculator:
        return replace(self)

    def convert(self, svg_char: SvgChar) -> Calculator:
        target = _coerce_svg_char(svg_char)
        raise InvalidConversionError(f"Cannot convert a point segment to {target.value}")

    def find_time_by_distance(self, distance_ratio: float) -> float:
        return distance_ratio

    def to_command(self) -> PathCommand:
        match self.svg_char:
            case SvgChar.MOVE:
                points = [self.point]
            case SvgChar.ARC:
                raise InvalidCommandError(f"Invalid command type: {self.svg_char.value}")
            case _:
                points = _elevated_line_points(self.point, self.point, self.svg_char)
        return CommandBuilder(self.svg_char, points).set_id(self.id).build()

    def get_bounding_box(self) -> BoundingBox:
        return BoundingBox.from_points([self.point])

    def intersects(self, line: Line) -> list[float]:
        raise CalculatorError("Intersection is undefined for a point segment")


@dataclass(frozen=True)
class LineCalculator:
    """A straight segment between two points."""

    id: str
    svg_char: SvgChar
    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "svg_char", SvgChar(self.svg_char))
        object.__setattr__(self, "points", tuple(self.points))
        _check_points(self.points, (2,), "LineCalculator")

    @property
    def p1(self) -> Point:
        return self.points[0]

    @property
    def p2(self) -> Point:
        return self.points[1]

    def get_point_at(self, t: float) -> Point:
        return lerp_point(self.p1, self.p2, t)

    @cached_property
    def _length(self) -> float:
        return distance(self.p1, self.p2)

    def get_path_length(self) -> float:
        return self._length

    def project(self, point: Point) -> ProjectionResult:
        dx = self.p2.x - self.p1.x
        dy = self.p2.y - self.p1.y
        length_sq = dx * dx + dy * dy
        if length_sq == 0:
            t = 0.0
        else:
            t = ((point.x - self.p1.x) * dx + (point.y - self.p1.y) * dy) / length_sq
            t = clamp_value(t, 0.0, 1.0)
        closest = self.get_point_at(t)
        return ProjectionResult(x=closest.x, y=closest.y, t=t, d=distance(point, closest))

    def split(self, t1: float, t2: float) -> Calculator:
        if t1 == t2:
            return PointCalculator(self.id, self.svg_char, (self.get_point_at(t1),))
        return LineCalculator(
            self.id, self.svg_char, (self.get_point_at(t1), self.get_point_at(t2))
        )

    def convert(self, svg_char: SvgChar) -> Calculator:
        target = _coerce_svg_char(svg_char)
        match target:
            case SvgChar.LINE | SvgChar.CLOSE_PATH:
                return LineCalculator(self.id, target, self.points)
            case SvgChar.QUADRATIC | SvgChar.CUBIC:
                points = _elevated_line_points(self.p1, self.p2, target)
                return BezierCalculator(self.id, target, tuple(points))
            case _:
                raise InvalidConversionError(f"Cannot convert a line segment to {target.value}")

    def find_time_by_distance(self, distance_ratio: float) -> float:
        # Arc length grows linearly with t on a straight segment
        return distance_ratio

    def to_command(self) -> PathCommand:
        points = _elevated_line_points(self.p1, self.p2, self.svg_char)
        return CommandBuilder(self.svg_char, points).set_id(self.id).build()

    @cached_property
    def _bounding_box(self) -> BoundingBox:
        return BoundingBox.from_points(list(self.points))

    def get_bounding_box(self) -> BoundingBox:
        return self._bounding_box

    def intersects(self, line: Line) -> list[float]:
        """Parameter on this segment where it crosses the given segment, if any."""
        dx = self.p2.x - self.p1.x
        dy = self.p2.y - self.p1.y
        ex = line.p2.x - line.p1.x
        ey = line.p2.y - line.p1.y
        denom = dx * ey - dy * ex
        if denom == 0:
            # Parallel or degenerate
            return []
        qx = line.p1.x - self.p1.x
        qy = line.p1.y - self.p1.y
        t = (qx * ey - qy * ex) / denom
        u = (qx * dy - qy * dx) / denom
        if 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0:
            return [t]
        return []


@dataclass(frozen=True)
class BezierCalculator:
    """A quadratic or cubic Bezier curve."""

    id: str
    svg_char: SvgChar
    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "svg_char", SvgChar(self.svg_char))
        object.__setattr__(self, "points", tuple(self.points))
        _check_points(self.points, (3, 4), "BezierCalculator")

    @cached_property
    def _control(self) -> NDArray[np.float64]:
        return bezier.to_array(self.points)

    def get_point_at(self, t: float) -> Point:
        x, y = bezier.evaluate(self._control, t)
        return Point(x=float(x), y=float(y))

    @cached_property
    def _length(self) -> float:
        return bezier.arc_length(self._control, settings.arc_length_samples)

    def get_path_length(self) -> float:
        return self._length

    def project(self, point: Point) -> ProjectionResult:
        t, closest, d = bezier.project(
            self._control, np.array([point.x, point.y]), settings.projection_lut_steps
        )
        return ProjectionResult(x=float(closest[0]), y=float(closest[1]), t=t, d=d)

    def split(self, t1: float, t2: float) -> Calculator:
        if t1 == t2:
            return PointCalculator(self.id, self.svg_char, (self.get_point_at(t1),))
        points = bezier.to_points(bezier.subdivide(self._control, t1, t2))
        return _narrow(self.id, self.svg_char, points)

    def convert(self, svg_char: SvgChar) -> Calculator:
        target = _coerce_svg_char(svg_char)
        if target == self.svg_char:
            return BezierCalculator(self.id, target, self.points)
        if self.svg_char == SvgChar.QUADRATIC and target == SvgChar.CUBIC and len(self.points) == 3:
            qcp0, qcp1, qcp2 = self.points
            ccp1 = Point(
                x=qcp0.x + (2 / 3) * (qcp1.x - qcp0.x),
                y=qcp0.y + (2 / 3) * (qcp1.y - qcp0.y),
            )
            ccp2 = Point(
                x=qcp2.x + (2 / 3) * (qcp1.x - qcp2.x),
                y=qcp2.y + (2 / 3) * (qcp1.y - qcp2.y),
            )
            return BezierCalculator(self.id, target, (qcp0, ccp1, ccp2, qcp2))
        # Relabel only; to_command rejects a kind that no longer fits the points
        return BezierCalculator(self.id, target, self.points)

    def find_time_by_distance(self, distance_ratio: float) -> float:
        """Find t such that the arc length up to t is distance_ratio of the total.

        Binary bias search: split at t, compare the two halves' lengths and
        move t by a halving step toward balancing them. Degenerate curves may
        never balance; in that case a warning is logged and the input ratio
        is returned unchanged.
        """
        if distance_ratio == 0 or distance_ratio == 1:
            return distance_ratio

        epsilon = settings.find_time_epsilon
        max_depth = settings.find_time_max_depth
        samples = settings.arc_length_samples
        low_to_high = distance_ratio / (1 - distance_ratio)

        t = distance_ratio
        step = -2
        while step > max_depth:
            low = bezier.arc_length(bezier.subdivide(self._control, 0.0, t), samples)
            high = bezier.arc_length(bezier.subdivide(self._control, t, 1.0), samples)
            diff = low - low_to_high * high
            if abs(diff) < epsilon:
                break
            # Jump half the previous t-distance in the direction of the bias
            step -= 1
            t += (-1 if diff > 0 else 1) * math.pow(2, step)

        if step == max_depth:
            logger.warning(
                "Could not find the time for distance ratio %s on %s %s",
                distance_ratio,
                self.svg_char.value,
                " ".join(str(p) for p in self.points),
                extra={"svg_char": self.svg_char.value, "command_id": self.id},
            )
            return distance_ratio
        return t

    def to_command(self) -> PathCommand:
        if self.svg_char not in (SvgChar.QUADRATIC, SvgChar.CUBIC):
            raise InvalidCommandError(f"Invalid command type: {self.svg_char.value}")
        return CommandBuilder(self.svg_char, list(self.points)).set_id(self.id).build()

    @cached_property
    def _bounding_box(self) -> BoundingBox:
        min_x, min_y, max_x, max_y = bezier.bounds(self._control)
        return BoundingBox(x=Range(min=min_x, max=max_x), y=Range(min=min_y, max=max_y))

    def get_bounding_box(self) -> BoundingBox:
        return self._bounding_box

    def intersects(self, line: Line) -> list[float]:
        """Curve parameters where the curve crosses the given segment."""
        return bezier.line_intersections(
            self._control,
            np.array([line.p1.x, line.p1.y]),
            np.array([line.p2.x, line.p2.y]),
        )


Calculator: TypeAlias = PointCalculator | LineCalculator | BezierCalculator


def _narrow(command_id: str, svg_char: SvgChar, points: list[Point]) -> Calculator:
    """Pick the smallest variant that represents the given control points."""
    match len(set(points)):
        case 2:
            return LineCalculator(command_id, svg_char, (points[0], points[-1]))
        case _:
            return BezierCalculator(command_id, svg_char, tuple(points))


def create_calculator(command_id: str, svg_char: SvgChar, points: list[Point]) -> Calculator:
    """Create the calculator for a path command.

    M commands become points, L and Z lines, Q and C curves.
    """
    svg_char = SvgChar(svg_char)
    match svg_char:
        case SvgChar.MOVE:
            return PointCalculator(command_id, svg_char, (points[-1],))
        case SvgChar.LINE | SvgChar.CLOSE_PATH:
            return LineCalculator(command_id, svg_char, tuple(points))
        case SvgChar.QUADRATIC | SvgChar.CUBIC:
            return BezierCalculator(command_id, svg_char, tuple(points))
        case _:
            raise CalculatorError(f"No calculator for command type: {svg_char.value}")
