"""CLI application entry point for penpath.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import structlog
import typer

from penpath import __version__
from penpath.cli.output import (
    console,
    print_bounds,
    print_effects,
    print_error,
    print_header,
    print_path_data,
    print_path_info,
    print_polygon,
    print_stats,
    print_step,
    print_success,
)
from penpath.config import LoggingConfig, PenPathSettings, SamplingConfig
from penpath.core import PenTool, accurate_bounds, sample_path, to_path_data
from penpath.domain import BezierPath, Effect
from penpath.exceptions import (
    DocumentFormatError,
    DocumentLoadError,
    DocumentSaveError,
    PenPathError,
)
from penpath.io import (
    AddShape,
    EditRequest,
    effect_to_dict,
    load_event_script,
    load_path,
    save_path,
    write_svg,
)
from penpath.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="penpath",
    help="Inspect Bezier path documents and replay pen tool sessions.",
    add_completion=False,
    no_args_is_help=True,
)

PrecisionOption = Annotated[
    int,
    typer.Option(
        "--precision",
        "-p",
        help="Decimal places in path data (0-10)",
        min=0,
        max=10,
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]penpath[/bold blue] v{__version__}")
        raise typer.Exit()


def _settings(ctx: typer.Context) -> PenPathSettings:
    if isinstance(ctx.obj, dict) and "settings" in ctx.obj:
        return ctx.obj["settings"]
    return PenPathSettings()


def _quiet(ctx: typer.Context) -> bool:
    return bool(isinstance(ctx.obj, dict) and ctx.obj.get("quiet"))


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Inspect Bezier path documents and replay pen tool sessions."""
    if log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        print_error(
            f"Invalid log level: {log_level}",
            details="Valid values: DEBUG, INFO, WARNING, ERROR",
        )
        raise typer.Exit(code=1)

    settings = PenPathSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level.upper(),
        ),
    )
    configure_logging(
        log_file=log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
        write_file=log_file is not None,
    )
    ctx.obj = {"settings": settings, "quiet": quiet}


def _load(path_json: Path) -> BezierPath:
    """Load a path document, reporting failures like the other commands."""
    try:
        return load_path(path_json)
    except DocumentLoadError as e:
        print_error(f"Could not load document: {e.reason}")
        raise typer.Exit(code=1) from e
    except DocumentFormatError as e:
        print_error(f"Invalid path document: {e.details}")
        raise typer.Exit(code=1) from e


@app.command()
def render(
    ctx: typer.Context,
    path_json: Annotated[
        Path,
        typer.Argument(
            help="Path document (JSON)",
            show_default=False,
        ),
    ],
    precision: PrecisionOption = 3,
    svg: Annotated[
        Path | None,
        typer.Option(
            "--svg",
            help="Also write an SVG preview to this file",
        ),
    ] = None,
    stroke: Annotated[
        str,
        typer.Option(
            "--stroke",
            help="SVG stroke colour",
        ),
    ] = "#000000",
    stroke_width: Annotated[
        float,
        typer.Option(
            "--stroke-width",
            help="SVG stroke width",
            min=0.0,
        ),
    ] = 2.0,
) -> None:
    """Print the SVG path data and accurate bounds of a path document.

    Example:
        penpath render curve.json --svg curve.svg
    """
    quiet = _quiet(ctx)
    path = _load(path_json)

    if not quiet:
        print_header(__version__)
        print_step("Path")
        print_path_info(path, str(path_json))

    print_path_data(to_path_data(path.points, path.is_closed, precision))
    if not quiet:
        print_bounds(accurate_bounds(path.points, path.is_closed), precision)

    if svg is not None:
        try:
            write_svg(path, svg, stroke=stroke, stroke_width=stroke_width, precision=precision)
        except DocumentSaveError as e:
            print_error(f"Could not save SVG: {e.reason}")
            raise typer.Exit(code=1) from e
        if not quiet:
            print_success("SVG written", str(svg))


@app.command()
def flatten(
    ctx: typer.Context,
    path_json: Annotated[
        Path,
        typer.Argument(
            help="Path document (JSON)",
            show_default=False,
        ),
    ],
    max_segment_length: Annotated[
        float,
        typer.Option(
            "--max-segment-length",
            "-l",
            help="Target distance between samples",
            min=0.01,
        ),
    ] = 8.0,
    min_samples: Annotated[
        int,
        typer.Option(
            "--min-samples",
            "-n",
            help="Minimum sample intervals per segment",
            min=1,
        ),
    ] = 2,
    precision: PrecisionOption = 3,
) -> None:
    """Print the polygon approximation of a path document.

    Example:
        penpath flatten curve.json -l 4
    """
    path = _load(path_json)
    sampling = SamplingConfig(max_segment_length=max_segment_length, min_samples=min_samples)

    if not _quiet(ctx):
        print_header(__version__)
        print_step("Flattening")
        print_path_info(path, str(path_json))

    polygon = sample_path(path.points, path.is_closed, sampling.max_segment_length, sampling.min_samples)
    print_polygon(polygon, precision)


@app.command()
def replay(
    ctx: typer.Context,
    script_json: Annotated[
        Path,
        typer.Argument(
            help="Event script (JSON)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the resulting path document to this file",
        ),
    ] = None,
    svg: Annotated[
        Path | None,
        typer.Option(
            "--svg",
            help="Write an SVG preview of the resulting path",
        ),
    ] = None,
    precision: PrecisionOption = 3,
    no_segment_drag: Annotated[
        bool,
        typer.Option(
            "--no-segment-drag",
            help="Disable pulling segments while editing",
        ),
    ] = False,
    show_effects: Annotated[
        bool,
        typer.Option(
            "--effects",
            help="List every effect the tool produced",
        ),
    ] = False,
) -> None:
    """Replay an event script through the pen tool and print the result.

    Example:
        penpath replay session.json -o result.json
    """
    quiet = _quiet(ctx)
    settings = _settings(ctx)
    if no_segment_drag:
        settings = settings.model_copy(
            update={"editor": settings.editor.model_copy(update={"enable_segment_drag": False})}
        )

    try:
        steps = load_event_script(script_json)
    except DocumentLoadError as e:
        print_error(f"Could not load script: {e.reason}")
        raise typer.Exit(code=1) from e
    except DocumentFormatError as e:
        print_error(f"Invalid event script: {e.details}")
        raise typer.Exit(code=1) from e

    if not quiet:
        print_header(__version__)
        print_step(f"Replaying {len(steps)} steps")

    tool = PenTool(settings=settings, logger=structlog.get_logger("penpath.replay"))
    effects: list[Effect] = []
    try:
        for step in steps:
            if isinstance(step, AddShape):
                tool.add_shape(step.path)
            elif isinstance(step, EditRequest):
                effects.extend(tool.begin_editing(step.shape_id))
            else:
                effects.extend(tool.dispatch(step))
            effects.extend(tool.fire_reselects())
    except PenPathError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if tool.selected and tool.selected[-1] in tool.shapes:
        result = tool.shapes[tool.selected[-1]]
    elif tool.shapes:
        result = list(tool.shapes.values())[-1]
    else:
        result = None

    if not quiet:
        print_stats(tool.stats)
    if show_effects:
        if not quiet:
            print_step("Effects")
        print_effects([effect_to_dict(e) for e in effects])

    if result is None:
        console.print("\n  No shape left after replay")
        return

    if not quiet:
        print_step("Result")
        print_path_info(result)
    print_path_data(to_path_data(result.points, result.is_closed, precision))

    try:
        if output is not None:
            save_path(result, output)
            if not quiet:
                print_success("Path written", str(output))
        if svg is not None:
            write_svg(result, svg, precision=precision)
            if not quiet:
                print_success("SVG written", str(svg))
    except DocumentSaveError as e:
        print_error(f"Could not save output: {e.reason}")
        raise typer.Exit(code=1) from e


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
