#!/usr/bin/env python
"""
Compute the rating trace for a spreadsheet of attempts and display it.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from rating_service.core.data import load_observations
from rating_service.core.data_models import RatingTrace
from rating_service.core.exceptions import (
    InvalidObservationError,
    RatingStepError,
)
from rating_service.rating import RatingConfig, track_ratings
from rating_service.rating.config import (
    DEFAULT_INITIAL_PRIOR,
    DEFAULT_LOWER_BOUND,
    DEFAULT_SIGMA,
    DEFAULT_STEP,
    DEFAULT_UPPER_BOUND,
)
from rating_service.reporting import plot_rating_trace, trace_to_dataframe

SUPPORTED_SUFFIXES = {".xlsx", ".xls", ".csv"}

console = Console(force_terminal=True, legacy_windows=True)
app = typer.Typer()


def print_trace_table(trace: RatingTrace) -> None:
    """Pretty-print one row per attempt, ratings to 2 decimal places."""
    table = Table(title="Ratings Tracker")
    table.add_column("index", justify="right", style="dim")
    table.add_column("Correctness", justify="right")
    table.add_column("Difficulty", justify="right")
    table.add_column("Time", justify="right")
    table.add_column("Rating", justify="right", style="bold")

    for point in trace:
        table.add_row(
            str(point.index + 1),
            str(point.observation.correct),
            f"{point.observation.difficulty:g}",
            f"{point.observation.response_time:g}",
            f"{point.rating:.2f}",
        )

    console.print(table)


def save_outputs(
    trace: RatingTrace,
    output_path: Path | None,
    plot_path: Path | None,
) -> None:
    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        trace_to_dataframe(trace).to_csv(output_path, index=False)
        console.print(f"Ratings saved: [cyan]{output_path}[/cyan]")
    if plot_path is not None:
        plot_path.parent.mkdir(parents=True, exist_ok=True)
        fig = plot_rating_trace(trace)
        fig.savefig(plot_path)
        console.print(f"Chart saved: [cyan]{plot_path}[/cyan]")


@app.command()
def main(
    input_path: Path = typer.Argument(
        ...,
        help="Spreadsheet of attempts (columns: x, b, T)",
    ),
    initial_prior: float = typer.Option(
        DEFAULT_INITIAL_PRIOR,
        help="Rating before the first attempt",
    ),
    sigma: float = typer.Option(
        DEFAULT_SIGMA,
        help="Spread of the prior penalty",
    ),
    lower_bound: float = typer.Option(
        DEFAULT_LOWER_BOUND,
        help="Lowest candidate rating",
    ),
    upper_bound: float = typer.Option(
        DEFAULT_UPPER_BOUND,
        help="Highest candidate rating",
    ),
    step: float = typer.Option(
        DEFAULT_STEP,
        help="Spacing between candidate ratings",
    ),
    output_path: Path | None = typer.Option(
        None,
        "-o",
        "--output",
        help="Write the rating table to this CSV file",
    ),
    plot_path: Path | None = typer.Option(
        None,
        "--plot",
        help="Write a rating-vs-attempt chart to this image file",
    ),
) -> None:
    """Track ratings across the attempts in a spreadsheet."""

    # Validate input
    if not input_path.exists():
        console.print(f"[red]File not found: {input_path}[/red]")
        raise typer.Exit(1)
    if input_path.suffix.lower() not in SUPPORTED_SUFFIXES:
        console.print(
            f"[red]Unsupported file type, expected one of "
            f"{sorted(SUPPORTED_SUFFIXES)}[/red]"
        )
        raise typer.Exit(1)

    try:
        config = RatingConfig(
            initial_prior=initial_prior,
            sigma=sigma,
            lower_bound=lower_bound,
            upper_bound=upper_bound,
            step=step,
        )
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1) from e

    # Load data
    console.print("[dim]Loading attempts...[/dim]")
    try:
        observations = load_observations(input_path)
    except InvalidObservationError as e:
        console.print(f"[red]Error loading spreadsheet: {e}[/red]")
        raise typer.Exit(1) from e

    console.print(
        Panel(
            f"[bold]Track Ratings[/bold]\n\n"
            f"Input: [cyan]{input_path}[/cyan]\n"
            f"Attempts: [cyan]{len(observations)}[/cyan]\n"
            f"Initial prior: [cyan]{config.initial_prior}[/cyan]\n"
            f"Sigma: [cyan]{config.sigma}[/cyan]\n"
            f"Grid: [cyan][{config.lower_bound}, {config.upper_bound}] "
            f"step {config.step}[/cyan]",
            title="Configuration",
        )
    )

    try:
        trace = track_ratings(observations, config)
    except RatingStepError as e:
        if len(e.partial_trace) > 0:
            print_trace_table(e.partial_trace)
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    print_trace_table(trace)
    save_outputs(trace, output_path, plot_path)

    final = trace.final_rating
    final_str = f"{final:.2f}" if final is not None else "-"
    console.print(
        Panel(
            f"[bold green]Final rating: {final_str}[/bold green]",
            title="Done",
        )
    )


if __name__ == "__main__":
    app()
