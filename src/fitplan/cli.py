"""CLI interface using Typer."""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from fitplan.config import Settings, get_settings
from fitplan.data.library_loader import load_library, save_plan
from fitplan.export.formatters import JSONFormatter, format_plan
from fitplan.plans import (
    EmptyLibraryError,
    NutritionTarget,
    PlanGenerator,
    TemplatePlan,
    calculate_totals,
)
from fitplan.profiles.body_calc import calculate_targets, targets_to_dict

app = typer.Typer(
    help="Generate meal plans from templates that hit calorie and protein targets",
    no_args_is_help=True,
)
console = Console()

OUTPUT_FORMATS = ("table", "json", "markdown")


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict, file=None) -> None:
    """Output JSON response to stdout or file."""
    json_str = json.dumps(response, indent=2)
    if file:
        file.write(json_str)
    else:
        print(json_str)


def load_settings() -> Settings:
    """Return the global settings, exiting with a message if config.yaml is invalid."""
    try:
        return get_settings()
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)


def resolve_library(library_path: Optional[Path]) -> dict[str, TemplatePlan]:
    """Load the template library from the given path or the configured one.

    Raises typer.Exit(1) with a friendly message if no library is available.
    """
    path = library_path or load_settings().library.path
    if path is None:
        console.print("[red]No library given and none configured.[/red]")
        console.print("Pass a library file or set [cyan]library.path[/cyan] in ~/.fitplan/config.yaml")
        raise typer.Exit(1)

    try:
        _, library = load_library(path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Could not load library: {e}[/red]")
        raise typer.Exit(1)
    return library


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log each adjustment phase"
    ),
) -> None:
    """Personal meal plan generation from template plans."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# ============================================================================
# Commands
# ============================================================================


@app.command()
def generate(
    library_path: Optional[Path] = typer.Argument(
        None, help="Library YAML with foods and template plans"
    ),
    calories: float = typer.Option(..., "--calories", "-c", help="Daily calorie target"),
    protein: float = typer.Option(..., "--protein", "-p", help="Daily protein target (g)"),
    count: int = typer.Option(1, "--count", "-n", min=1, help="Number of plans to generate"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for template rotation"),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output format: table, json, markdown"
    ),
    show_phases: bool = typer.Option(False, "--phases", help="Show per-phase report"),
    save: Optional[Path] = typer.Option(None, "--save", help="Save the last plan to this YAML file"),
    name: Optional[str] = typer.Option(None, "--name", help="Name to save the plan under"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Generate plans by adjusting rotated templates toward the targets."""
    try:
        target = NutritionTarget(calories=calories, protein=protein)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    settings = load_settings()
    output_format = output or settings.defaults.output_format
    if output_format not in OUTPUT_FORMATS:
        console.print(f"[red]Unknown output format: {output_format}[/red]")
        raise typer.Exit(1)

    library = resolve_library(library_path)
    if seed is None:
        seed = settings.defaults.seed

    generator = PlanGenerator(config=settings.adjustment, rng=random.Random(seed))
    try:
        plans = [generator.generate(library, target) for _ in range(count)]
    except EmptyLibraryError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if save is not None:
        plan = plans[-1]
        if name:
            plan.name = name
        save_plan(plan, save)

    if json_output:
        formatter = JSONFormatter()
        output_json({
            "success": True,
            "command": "generate",
            "data": {
                "plans": [formatter.to_dict(p) for p in plans],
                "saved_to": str(save) if save else None,
            },
            "human_summary": f"Generated {len(plans)} plan(s) from {len(library)} template(s)",
        })
        return

    for plan in plans:
        formatted = format_plan(plan, output_format, console, show_phases)
        if formatted:
            console.print(formatted)
    if save is not None:
        console.print(f"[green]Plan '{plans[-1].name}' saved to {save}[/green]")


@app.command()
def templates(
    library_path: Optional[Path] = typer.Argument(
        None, help="Library YAML with foods and template plans"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List template plans with their baseline totals."""
    library = resolve_library(library_path)
    rows = [(name, calculate_totals(plan)) for name, plan in sorted(library.items())]

    if json_output:
        output_json({
            "success": True,
            "command": "templates",
            "data": {
                "templates": [
                    {
                        "name": name,
                        "calories": round(totals.calories, 1),
                        "protein": round(totals.protein, 1),
                        "carbs": round(totals.carbs, 1),
                        "fat": round(totals.fat, 1),
                    }
                    for name, totals in rows
                ],
            },
            "human_summary": f"{len(rows)} template(s)",
        })
        return

    table = Table(title="Template Plans")
    table.add_column("Name", style="cyan")
    table.add_column("kcal", justify="right")
    table.add_column("Protein", justify="right")
    table.add_column("Carbs", justify="right")
    table.add_column("Fat", justify="right")
    for name, totals in rows:
        table.add_row(
            name,
            f"{totals.calories:.0f}",
            f"{totals.protein:.1f}",
            f"{totals.carbs:.1f}",
            f"{totals.fat:.1f}",
        )
    console.print(table)


@app.command()
def targets(
    age: int = typer.Option(..., "--age", help="Age in years"),
    sex: str = typer.Option(..., "--sex", help="male or female"),
    height: float = typer.Option(..., "--height", help="Height in cm"),
    weight: float = typer.Option(..., "--weight", help="Weight in kg"),
    goal: str = typer.Option(
        "maintenance", "--goal", help="weight_loss, maintenance or muscle_gain"
    ),
    activity: str = typer.Option(
        "sedentary",
        "--activity",
        help="sedentary, lightly_active, moderately_active, very_active, extra_active",
    ),
    custom_calories: Optional[float] = typer.Option(
        None, "--custom-calories", help="Override the calculated calorie target"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Calculate daily calorie and protein targets from body metrics."""
    try:
        result = calculate_targets(
            age=age,
            sex=sex,
            height_cm=height,
            weight_kg=weight,
            goal=goal,
            activity_level=activity,
            custom_calories=custom_calories,
        )
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if json_output:
        output_json({
            "success": True,
            "command": "targets",
            "data": targets_to_dict(result),
            "human_summary": f"{result.calories:.0f} kcal, {result.protein:.0f} g protein",
        })
    else:
        console.print(result.summary())


if __name__ == "__main__":
    app()
