"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from slicegeom.domain import Layer, int2mm

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for layer processing.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]slicegeom[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_file_info(path: str, layer_count: int, contour_count: int) -> None:
    """Print layer file information.

    Args:
        path: Path to the layer file
        layer_count: Number of layers in the file
        contour_count: Total number of contours across layers
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(path)
    console.print(line)
    console.print(f"  {layer_count:,} layers {SYM_DOT} {contour_count:,} contours")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_processing_info(workers: int, is_auto: bool = False) -> None:
    """Print processing configuration.

    Args:
        workers: Number of parallel workers
        is_auto: Whether the count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel")


def print_layer_table(layers: list[Layer]) -> None:
    """Print per-layer measurements.

    Args:
        layers: Layers to summarize
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("z (mm)", justify="right")
    table.add_column("contours", justify="right")
    table.add_column("area (mm²)", justify="right")
    table.add_column("perimeter (mm)", justify="right")
    table.add_column("bounds (mm)")

    for layer in layers:
        contours = layer.contours
        if len(contours) == 0:
            bounds = "-"
        else:
            lo = contours.bounding_min()
            hi = contours.bounding_max()
            bounds = (
                f"({int2mm(lo.x):.2f}, {int2mm(lo.y):.2f}) – "
                f"({int2mm(hi.x):.2f}, {int2mm(hi.y):.2f})"
            )
        table.add_row(
            f"{int2mm(layer.z):.3f}",
            str(len(contours)),
            f"{int2mm(int2mm(abs(contours.total_area()))):.3f}",
            f"{int2mm(contours.total_perimeter_length()):.2f}",
            bounds,
        )

    console.print(table)


def print_success(
    output_path: str,
    total_time_s: float,
    processed: int,
    parts: int,
    contours_in: int,
    contours_out: int,
    errors: int,
    avg_time_ms: float | None = None,
    min_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        total_time_s: Total processing time in seconds
        processed: Number of layers processed
        parts: Total number of parts produced
        contours_in: Contours before cleanup
        contours_out: Contours after cleanup and decomposition
        errors: Number of errors encountered
        avg_time_ms: Average processing time per layer in milliseconds
        min_time_ms: Minimum processing time per layer in milliseconds
        max_time_ms: Maximum processing time per layer in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} layers {SYM_DOT} {parts} parts {SYM_DOT} "
        f"{contours_in} → {contours_out} contours {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        timing_str = f"{avg_time_ms:.1f}ms avg"
        if min_time_ms is not None and max_time_ms is not None:
            timing_str += f" ({min_time_ms:.1f}–{max_time_ms:.1f}ms range)"
        console.print(f"  {timing_str}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of layers successfully processed before cancellation
        cancelled: Number of pending tasks that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} layers completed {SYM_DOT} {cancelled} tasks cancelled")
    console.print("  No output file created")
