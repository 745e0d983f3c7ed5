"""Path command records produced from calculators."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from shape_morph.errors import InvalidCommandError
from shape_morph.types.geometry import Point, SvgChar

# Number of points each command kind carries, including the pen position
# the command starts from.
POINT_COUNTS: dict[SvgChar, int] = {
    SvgChar.MOVE: 1,
    SvgChar.LINE: 2,
    SvgChar.QUADRATIC: 3,
    SvgChar.CUBIC: 4,
    SvgChar.CLOSE_PATH: 2,
}


class PathCommand(BaseModel):
    """A single persisted path command.

    For every kind except M the first point is the implied start position and
    is not written out by to_path_string().
    """

    model_config = ConfigDict(frozen=True)

    id: str
    svg_char: SvgChar
    points: tuple[Point, ...]

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]

    def to_path_string(self) -> str:
        """Serialize as SVG d / Android pathData syntax."""
        if self.svg_char == SvgChar.CLOSE_PATH:
            return "Z"
        args = self.points if self.svg_char == SvgChar.MOVE else self.points[1:]
        return f"{self.svg_char.value} " + " ".join(str(p) for p in args)


class CommandBuilder:
    """Builds a PathCommand, validating the point count for its kind."""

    def __init__(self, svg_char: SvgChar, points: list[Point]) -> None:
        self._svg_char = svg_char
        self._points = list(points)
        self._id = ""

    def set_id(self, command_id: str) -> CommandBuilder:
        self._id = command_id
        return self

    def build(self) -> PathCommand:
        expected = POINT_COUNTS.get(self._svg_char)
        if expected is None:
            raise InvalidCommandError(f"Invalid command type: {self._svg_char.value}")
        if len(self._points) != expected:
            raise InvalidCommandError(
                f"Command {self._svg_char.value} needs {expected} points, "
                f"got {len(self._points)}"
            )
        return PathCommand(id=self._id, svg_char=self._svg_char, points=tuple(self._points))
