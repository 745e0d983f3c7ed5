"""CLI for inspecting path segments.

Points are given as x,y pairs. Use -- before negative coordinates.

Usage:
    shape-morph measure C 0,0 0,1 1,1 1,0
    shape-morph split Q 0,0 1,2 2,0 --t1 0.25 --t2 0.75
    shape-morph convert Q C 0,0 1,2 2,0
    shape-morph find-time C 0,0 0,1 1,1 1,0 --ratio 0.5
    shape-morph project L 0,0 10,0 --at 5,5
"""

from __future__ import annotations

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from shape_morph.calculators import Calculator, create_calculator
from shape_morph.errors import CalculatorError
from shape_morph.logging_config import setup_cli_logging
from shape_morph.types import Point, SvgChar, format_number

app = typer.Typer(
    name="shape-morph",
    help="Measure, split and convert path segments",
    add_completion=False,
)
console = Console()

POINTS_HELP = "Control points as x,y pairs"


@app.callback()
def main() -> None:
    """Path segment calculators."""
    setup_cli_logging()


def _parse_point(text: str) -> Point:
    try:
        x, y = (float(v) for v in text.split(","))
    except ValueError as e:
        raise typer.BadParameter(f"Expected x,y but got {text!r}") from e
    return Point(x=x, y=y)


def _build(kind: SvgChar, points: list[str]) -> Calculator:
    """Create a calculator, exiting with an error message on bad input."""
    try:
        return create_calculator("cli", kind, [_parse_point(p) for p in points])
    except (CalculatorError, IndexError) as e:
        console.print(f"[red]Invalid segment: {e}[/red]")
        raise typer.Exit(1) from e


def _describe(calc: Calculator, title: str) -> Table:
    bbox = calc.get_bounding_box()
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Variant", type(calc).__name__)
    table.add_row("Kind", calc.svg_char.value)
    table.add_row("Points", " ".join(str(p) for p in calc.points))
    table.add_row("Length", format_number(calc.get_path_length()))
    table.add_row(
        "Bounding box",
        f"x [{format_number(bbox.x.min)}, {format_number(bbox.x.max)}] "
        f"y [{format_number(bbox.y.min)}, {format_number(bbox.y.max)}]",
    )
    try:
        table.add_row("Command", calc.to_command().to_path_string())
    except CalculatorError as e:
        table.add_row("Command", f"[yellow]{e}[/yellow]")
    return table


@app.command("measure")
def measure(
    kind: SvgChar = typer.Argument(..., help="Command kind (M, L, Q, C, Z)"),
    points: list[str] = typer.Argument(..., help=POINTS_HELP),
) -> None:
    """Show length, bounding box and path command of a segment."""
    calc = _build(kind, points)
    console.print(_describe(calc, "Segment"))


@app.command("split")
def split(
    kind: SvgChar = typer.Argument(..., help="Command kind (M, L, Q, C, Z)"),
    points: list[str] = typer.Argument(..., help=POINTS_HELP),
    t1: float = typer.Option(0.0, "--t1", help="Start parameter"),
    t2: float = typer.Option(1.0, "--t2", help="End parameter"),
) -> None:
    """Cut out the piece of a segment between two parameters."""
    if not (0 <= t1 <= 1 and 0 <= t2 <= 1):
        console.print("[red]Parameters must be within [0, 1][/red]")
        raise typer.Exit(1)
    calc = _build(kind, points)
    console.print(_describe(calc.split(t1, t2), f"Split [{t1}, {t2}]"))


@app.command("convert")
def convert(
    kind: SvgChar = typer.Argument(..., help="Command kind (M, L, Q, C, Z)"),
    target: SvgChar = typer.Argument(..., help="Target command kind"),
    points: list[str] = typer.Argument(..., help=POINTS_HELP),
) -> None:
    """Convert a segment to another command kind."""
    calc = _build(kind, points)
    try:
        converted = calc.convert(target)
    except CalculatorError as e:
        console.print(f"[red]Conversion failed: {e}[/red]")
        raise typer.Exit(1) from e
    console.print(_describe(converted, f"Converted to {target.value}"))


@app.command("find-time")
def find_time(
    kind: SvgChar = typer.Argument(..., help="Command kind (M, L, Q, C, Z)"),
    points: list[str] = typer.Argument(..., help=POINTS_HELP),
    ratio: float = typer.Option(0.5, "--ratio", "-r", help="Fraction of arc length"),
) -> None:
    """Find the parameter at a fraction of the segment's arc length."""
    if not 0 <= ratio <= 1:
        console.print("[red]Ratio must be within [0, 1][/red]")
        raise typer.Exit(1)
    calc = _build(kind, points)
    t = calc.find_time_by_distance(ratio)
    console.print(f"t = [green]{format_number(t)}[/green] at {calc.get_point_at(t)}")


@app.command("project")
def project(
    kind: SvgChar = typer.Argument(..., help="Command kind (M, L, Q, C, Z)"),
    points: list[str] = typer.Argument(..., help=POINTS_HELP),
    at: str = typer.Option(..., "--at", help="Query point as x,y"),
) -> None:
    """Find the closest point on a segment to a query point."""
    calc = _build(kind, points)
    result = calc.project(_parse_point(at))
    console.print(
        f"closest {format_number(result.x)},{format_number(result.y)} "
        f"t = [green]{format_number(result.t)}[/green] "
        f"d = [green]{format_number(result.d)}[/green]"
    )


if __name__ == "__main__":
    app()
