#!/usr/bin/env python
"""
Print category probabilities, expected score and information for a GPCM2
item over a grid of ability values.
"""

import logging

import numpy as np
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from irt_models.irt import GPCM2Model, compute_item_curves

logger = logging.getLogger("scripts.item_curves")

console = Console(force_terminal=True, legacy_windows=True)
app = typer.Typer()


def build_curves_table(model: GPCM2Model, theta: np.ndarray) -> Table:
    """Tabulate item curves, one row per theta value."""
    curves = compute_item_curves(model, theta)

    table = Table(title="Item Curves")
    table.add_column("theta", justify="right", style="cyan")
    for category in range(model.min_category, model.max_category + 1):
        table.add_column(f"P({category})", justify="right")
    table.add_column("E(X)", justify="right", style="green")
    table.add_column("I(theta)", justify="right", style="magenta")

    for i, theta_value in enumerate(curves.theta):
        row = [f"{theta_value:.2f}"]
        row.extend(f"{p:.4f}" for p in curves.probabilities[i])
        row.append(f"{curves.expected_value[i]:.4f}")
        row.append(f"{curves.information[i]:.4f}")
        table.add_row(*row)
    return table


@app.command()
def main(
    discrimination: float = typer.Option(
        ..., "-a", "--discrimination", help="Discrimination parameter (a)"
    ),
    difficulty: float = typer.Option(
        ..., "-b", "--difficulty", help="Difficulty parameter (b)"
    ),
    threshold: list[float] = typer.Option(
        ...,
        "-t",
        "--threshold",
        help="Threshold parameter, repeat once per step",
    ),
    scaling_constant: float | None = typer.Option(
        None,
        "-D",
        "--scaling-constant",
        help="Scaling constant D (defaults to the configured value)",
    ),
    theta_min: float = typer.Option(-3.0, help="Smallest theta value"),
    theta_max: float = typer.Option(3.0, help="Largest theta value"),
    n_points: int = typer.Option(7, help="Number of theta values"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
) -> None:
    """Print item curves for one GPCM2 item."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if n_points < 1 or theta_max < theta_min:
        console.print(
            "[red]Need n_points >= 1 and theta_max >= theta_min[/red]"
        )
        raise typer.Exit(1)

    try:
        model = GPCM2Model(
            discrimination=discrimination,
            difficulty=difficulty,
            thresholds=threshold,
            scaling_constant=scaling_constant,
        )
    except ValidationError as e:
        console.print(f"[red]Invalid item parameters: {e}[/red]")
        raise typer.Exit(1) from e

    logger.info("Evaluating item %s", model)
    console.print(
        Panel(
            f"[bold]GPCM2 Item[/bold]\n\n"
            f"Discrimination: [cyan]{model.discrimination}[/cyan]\n"
            f"Difficulty: [cyan]{model.difficulty}[/cyan]\n"
            f"Thresholds: [cyan]{list(model.thresholds)}[/cyan]\n"
            f"Steps: [cyan]{list(model.step_parameters)}[/cyan]\n"
            f"D: [cyan]{model.scaling_constant}[/cyan]",
            title="Configuration",
        )
    )

    theta = np.linspace(theta_min, theta_max, n_points)
    console.print(build_curves_table(model, theta))


if __name__ == "__main__":
    app()
