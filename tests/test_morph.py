"""Tests for frame interpolation between path end states."""

import pytest

from shape_morph.calculators import BezierCalculator, LineCalculator, PointCalculator
from shape_morph.errors import MorphError
from shape_morph.morph import interpolate, interpolate_commands
from shape_morph.types import Point, SvgChar


def pts(*coords: tuple[float, float]) -> tuple[Point, ...]:
    return tuple(Point(x=x, y=y) for x, y in coords)


class TestInterpolate:
    def test_line_midway(self) -> None:
        start = LineCalculator("a", SvgChar.LINE, pts((0, 0), (10, 0)))
        end = LineCalculator("b", SvgChar.LINE, pts((0, 10), (10, 20)))
        frame = interpolate(start, end, 0.5)
        assert isinstance(frame, LineCalculator)
        assert frame.id == "a"
        assert frame.points == pts((0, 5), (10, 10))

    def test_endpoints_reproduce_end_states(self) -> None:
        start = BezierCalculator("a", SvgChar.CUBIC, pts((0, 0), (0, 1), (1, 1), (1, 0)))
        end = BezierCalculator("b", SvgChar.CUBIC, pts((5, 5), (3, 9), (7, 2), (0.1, 0.7)))
        assert interpolate(start, end, 0).points == start.points
        assert interpolate(start, end, 1).points == end.points

    def test_fraction_is_clamped(self) -> None:
        start = PointCalculator("a", SvgChar.MOVE, pts((0, 0)))
        end = PointCalculator("b", SvgChar.MOVE, pts((4, 4)))
        assert interpolate(start, end, 2.5).points == pts((4, 4))
        assert interpolate(start, end, -1).points == pts((0, 0))

    def test_demoted_line_keeps_its_kind(self) -> None:
        start = LineCalculator("a", SvgChar.CUBIC, pts((0, 0), (2, 2)))
        end = LineCalculator("b", SvgChar.CUBIC, pts((2, 2), (4, 0)))
        frame = interpolate(start, end, 0.5)
        assert isinstance(frame, LineCalculator)
        assert frame.svg_char == SvgChar.CUBIC

    def test_different_kinds_fail(self) -> None:
        quad = BezierCalculator("a", SvgChar.QUADRATIC, pts((0, 0), (1, 2), (2, 0)))
        cubic = quad.convert(SvgChar.CUBIC)
        with pytest.raises(MorphError):
            interpolate(quad, cubic, 0.5)

    def test_different_variants_fail(self) -> None:
        line = LineCalculator("a", SvgChar.CUBIC, pts((0, 0), (2, 2)))
        cubic = BezierCalculator("b", SvgChar.CUBIC, pts((0, 0), (0, 1), (1, 1), (1, 0)))
        with pytest.raises(MorphError, match="LineCalculator"):
            interpolate(line, cubic, 0.5)

    def test_converted_quadratic_morphs_into_cubic(self) -> None:
        quad = BezierCalculator("a", SvgChar.QUADRATIC, pts((0, 0), (1, 2), (2, 0)))
        cubic = BezierCalculator("b", SvgChar.CUBIC, pts((0, 0), (0, 1), (2, 1), (2, 0)))
        frame = interpolate(quad.convert(SvgChar.CUBIC), cubic, 0.5)
        assert frame.points[0] == Point(x=0, y=0)
        assert frame.points[-1] == Point(x=2, y=0)


class TestInterpolateCommands:
    def test_whole_path(self) -> None:
        starts = [
            PointCalculator("m", SvgChar.MOVE, pts((0, 0))),
            LineCalculator("l", SvgChar.LINE, pts((0, 0), (10, 0))),
        ]
        ends = [
            PointCalculator("m", SvgChar.MOVE, pts((10, 10))),
            LineCalculator("l", SvgChar.LINE, pts((10, 10), (20, 10))),
        ]
        frames = interpolate_commands(starts, ends, 0.5)
        assert [f.to_command().to_path_string() for f in frames] == ["M 5,5", "L 15,5"]

    def test_length_mismatch(self) -> None:
        start = [PointCalculator("m", SvgChar.MOVE, pts((0, 0)))]
        with pytest.raises(MorphError, match="1 and 0"):
            interpolate_commands(start, [], 0.5)
