"""CLI application entry point for slicegeom.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from slicegeom import __version__
from slicegeom.cli.output import (
    console,
    create_progress,
    print_cancellation_summary,
    print_error,
    print_file_info,
    print_header,
    print_layer_table,
    print_processing_info,
    print_step,
    print_success,
)
from slicegeom.config import (
    CleanupConfig,
    LoggingConfig,
    ProcessingConfig,
    SliceGeomSettings,
)
from slicegeom.core import LayerProcessor
from slicegeom.domain import ContourSet, Layer, mm2int
from slicegeom.exceptions import (
    LayerLoadError,
    LayerSaveError,
    ProcessingCancelledError,
    SliceGeomError,
)
from slicegeom.io import LayerReader, LayerWriter, write_debug_html

app = typer.Typer(
    name="slicegeom",
    help="Clean up sliced layer contours and split them into outline+holes parts.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]slicegeom[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
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
    """slicegeom command group."""


def _load_layers(input_path: Path) -> list[Layer]:
    if not input_path.exists():
        print_error(
            f"Input file not found: {input_path}",
            details=f"The file '{input_path}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_path.is_file():
        print_error(
            f"Input path is not a file: {input_path}",
            details="Please provide a path to a JSON layer file.",
        )
        raise typer.Exit(code=1)

    reader = LayerReader(input_path)
    return reader.read_all()


@app.command()
def clean(
    input_path: Annotated[
        Path,
        typer.Argument(
            help="Path to input layer file (JSON)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-parts.json)",
        ),
    ] = None,
    min_area: Annotated[
        float,
        typer.Option(
            "--min-area",
            help="Drop contours smaller than this area (mm²)",
            min=0.0,
        ),
    ] = 0.0,
    smooth: Annotated[
        float,
        typer.Option(
            "--smooth",
            help="Remove points on edges shorter than this (mm, 0 disables)",
            min=0.0,
        ),
    ] = 0.0,
    simplify: Annotated[
        float,
        typer.Option(
            "--simplify",
            help="Maximum simplification deviation (mm, 0 disables)",
            min=0.0,
        ),
    ] = 0.01,
    union_all: Annotated[
        bool,
        typer.Option(
            "--union-all",
            help="Merge overlapping contours instead of applying even-odd",
        ),
    ] = False,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    debug_html: Annotated[
        Path | None,
        typer.Option(
            "--debug-html",
            help="Write an HTML/SVG view of the first processed layer",
        ),
    ] = None,
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
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Clean every layer of a layer file and split it into parts.

    Example:
        slicegeom clean model.layers.json --min-area 0.1 --smooth 0.05

    This will create model.layers-parts.json with each layer's parts,
    outline first followed by its holes.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = SliceGeomSettings(
        cleanup=CleanupConfig(
            smooth_remove_length=mm2int(smooth),
            simplify_error_distance=mm2int(simplify),
            min_area_mm2=min_area,
            union_all=union_all,
        ),
        processing=ProcessingConfig(
            max_workers=workers,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    output_path = output if output is not None else LayerWriter.get_parts_path(input_path)

    try:
        if not quiet:
            print_step("Loading layers")

        layers = _load_layers(input_path)

        if not quiet:
            print_file_info(
                path=str(input_path),
                layer_count=len(layers),
                contour_count=sum(len(layer.contours) for layer in layers),
            )
            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Processing")
            print_processing_info(actual_workers, is_auto=(workers is None))

        processor = LayerProcessor(settings)

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task(
                        f"Processing {len(layers)} layers",
                        total=len(layers),
                    )

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    results, stats = processor.process(
                        layers,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                results, stats = processor.process(layers, max_workers=workers)
        except ProcessingCancelledError as e:
            if not quiet:
                print_cancellation_summary(
                    processed=e.processed_count,
                    cancelled=e.pending_count,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        LayerWriter(output_path).save_parts(results)

        if debug_html is not None and results:
            first = ContourSet()
            for part in results[0].parts:
                first.add(part)
            write_debug_html(first, debug_html, dot_the_vertices=verbose)

        if not quiet:
            print_success(
                output_path=str(output_path),
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                parts=stats.parts_created,
                contours_in=stats.contours_in,
                contours_out=stats.contours_out,
                errors=stats.error_count,
                avg_time_ms=stats.avg_layer_time_ms,
                min_time_ms=stats.min_layer_time_ms,
                max_time_ms=stats.max_layer_time_ms,
            )

        if stats.error_count > 0:
            failed = ", ".join(str(z) for z, _ in sorted(stats.errors))
            print_error(
                f"{stats.error_count} layer(s) failed and are missing from {output_path}",
                details=f"Failed layers (z): {failed}",
            )
            raise typer.Exit(code=1)

    except LayerLoadError as e:
        print_error(f"Could not load layers: {e.reason}")
        raise typer.Exit(code=1)
    except LayerSaveError as e:
        print_error(f"Could not save output: {e.reason}")
        raise typer.Exit(code=1)
    except SliceGeomError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def info(
    input_path: Annotated[
        Path,
        typer.Argument(
            help="Path to input layer file (JSON)",
            show_default=False,
        ),
    ],
) -> None:
    """Print contour count, area, perimeter and bounds for every layer."""
    try:
        layers = _load_layers(input_path)
    except SliceGeomError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_file_info(
        path=str(input_path),
        layer_count=len(layers),
        contour_count=sum(len(layer.contours) for layer in layers),
    )
    console.print()
    print_layer_table(layers)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
