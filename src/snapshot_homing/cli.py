"""CLI entry point for the snapshot homing model."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from snapshot_homing.core.errors import HomingError
from snapshot_homing.core.geometry import GridPoint
from snapshot_homing.metrics.evaluation import save_metrics
from snapshot_homing.metrics.logging import FieldLogWriter
from snapshot_homing.modules.bee import Bee
from snapshot_homing.modules.homing import HomingEngine
from snapshot_homing.modules.image_builder import build_image
from snapshot_homing.scenarios.definitions import get_world, list_worlds
from snapshot_homing.scenarios.field import VectorFieldDriver
from snapshot_homing.utils.config import (
    DEFAULT_HOME,
    DEFAULT_OUTPUT_PATH,
    POSITIONING_WEIGHT,
    TURNING_SIGN,
    HomingConfig,
)
from snapshot_homing.utils.logging import LogLevel, create_session_logger, set_logger
from snapshot_homing.visualize import FieldRenderer

app = typer.Typer(
    name="snapshot-homing",
    help="Snapshot homing: insect-style visual navigation on a grid",
    add_completion=False,
)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _make_bee(world_name: str, home_x: int, home_y: int, weight: float, turning_sign: int) -> Bee:
    try:
        world = get_world(world_name)
        config = HomingConfig(positioning_weight=weight, turning_sign=turning_sign)
        return Bee(world, GridPoint(home_x, home_y), HomingEngine(config))
    except (ValueError, HomingError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def run(
    output: Path = typer.Option(
        Path(DEFAULT_OUTPUT_PATH),
        "--output",
        "-o",
        help="Path of the PNG to write",
    ),
    run_dir: Optional[Path] = typer.Option(
        None,
        "--run-dir",
        "-r",
        help="Directory for field.jsonl, metrics.json and session logs",
    ),
    world_name: str = typer.Option(
        "three_circles",
        "--world",
        "-w",
        help="Named world to use",
    ),
    home_x: int = typer.Option(DEFAULT_HOME[0], "--home-x", help="Home x coordinate"),
    home_y: int = typer.Option(DEFAULT_HOME[1], "--home-y", help="Home y coordinate"),
    weight: float = typer.Option(
        POSITIONING_WEIGHT,
        "--weight",
        help="Weight of the positioning vector",
    ),
    turning_sign: int = typer.Option(
        TURNING_SIGN,
        "--turning-sign",
        help="+1 or -1, mirrors the turning convention",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress the summary"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Generate the homing vector field and render it as PNG.

    Examples:

        snapshot-homing run --output homing.png

        snapshot-homing run --run-dir runs --weight 2.0
    """
    setup_logging(verbose)
    bee = _make_bee(world_name, home_x, home_y, weight, turning_sign)

    session = None
    session_dir: Path | None = None
    if run_dir is not None:
        run_id = datetime.now().strftime("%Y%m%d_%H%M%S")
        try:
            session = create_session_logger(
                session_id=run_id,
                runs_dir=run_dir,
                console_output=verbose,
                level=LogLevel.DEBUG if verbose else LogLevel.INFO,
            )
        except OSError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
        session_dir = session.session_dir

    try:
        vector_field = VectorFieldDriver(bee).generate()
        FieldRenderer().render(vector_field, bee.world, output)

        if session_dir is not None:
            with FieldLogWriter(session_dir / "field.jsonl") as writer:
                writer.write_field(vector_field)
            save_metrics(vector_field.metrics, session_dir)
    except OSError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    finally:
        if session is not None:
            session.close()
            set_logger(None)

    if not quiet:
        m = vector_field.metrics
        typer.echo(f"World: {bee.world.name}, home {bee.home_position}")
        typer.echo(
            f"Cells: {m.total_cells} (corrected {m.corrected_cells}, "
            f"at home {m.at_home_cells}, cancelled {m.cancelled_cells}, skipped {m.skipped_cells})"
        )
        typer.echo(f"Average angular error: {m.mean_angular_error_deg:.2f} deg")
        typer.echo(f"Image: {output}")
        if session_dir is not None:
            typer.echo(f"Run: {session_dir}")


@app.command()
def query(
    x: int = typer.Argument(..., help="Bee x coordinate"),
    y: int = typer.Argument(..., help="Bee y coordinate"),
    world_name: str = typer.Option("three_circles", "--world", "-w", help="Named world to use"),
    home_x: int = typer.Option(DEFAULT_HOME[0], "--home-x", help="Home x coordinate"),
    home_y: int = typer.Option(DEFAULT_HOME[1], "--home-y", help="Home y coordinate"),
    weight: float = typer.Option(POSITIONING_WEIGHT, "--weight", help="Weight of the positioning vector"),
    turning_sign: int = typer.Option(TURNING_SIGN, "--turning-sign", help="+1 or -1"),
) -> None:
    """Print the homing vector at one position."""
    bee = _make_bee(world_name, home_x, home_y, weight, turning_sign)
    bee.move_to(GridPoint(x, y))
    try:
        result = bee.home_result()
    except HomingError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    v = result.vector
    typer.echo(f"position=({x}, {y}) status={result.status.value}")
    typer.echo(f"vector=({v.x:.6f}, {v.y:.6f}) heading={math.degrees(v.angle()):.2f} deg")


@app.command()
def image(
    x: int = typer.Argument(..., help="Viewpoint x coordinate"),
    y: int = typer.Argument(..., help="Viewpoint y coordinate"),
    world_name: str = typer.Option("three_circles", "--world", "-w", help="Named world to use"),
) -> None:
    """Print the segments seen from one viewpoint."""
    try:
        world = get_world(world_name)
        img = build_image(GridPoint(x, y), world.obstacles)
    except (ValueError, HomingError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    table = Table(title=f"Image at ({x}, {y})")
    table.add_column("color")
    table.add_column("bisector [deg]", justify="right")
    table.add_column("width [deg]", justify="right")
    for segment in img.segments:
        table.add_row(
            segment.color.value,
            f"{math.degrees(segment.bisector):.2f}",
            f"{math.degrees(segment.width):.2f}",
        )
    console.print(table)
    console.print(f"total width: {math.degrees(img.total_width):.2f} deg")


@app.command()
def worlds() -> None:
    """List available worlds."""
    for name in list_worlds():
        world = get_world(name)
        typer.echo(f"{name}: {len(world.obstacles)} obstacles, grid {world.grid.width}x{world.grid.height}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
