"""Output formatters for generated plans."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fitplan.plans.models import GeneratedPlan, MealSlot
from fitplan.plans.nutrients import meal_totals


class TableFormatter:
    """Format plans as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def format(self, plan: GeneratedPlan, show_phases: bool = False) -> None:
        """Print formatted tables to console.

        Args:
            plan: Generated plan to format
            show_phases: Also print the per-phase report
        """
        status_color = "green" if plan.converged else "yellow"
        status = "CONVERGED" if plan.converged else "APPROXIMATE"
        header_lines = [
            f"[bold]GENERATED PLAN[/bold] - {datetime.now().strftime('%Y-%m-%d %H:%M')}",
            f"Name: {plan.name}",
        ]
        if plan.template_name != plan.name:
            header_lines.append(f"Template: {plan.template_name}")
        header_lines.append(f"Status: [{status_color}]{status}[/{status_color}]")

        self.console.print(Panel("\n".join(header_lines), title="Meal Plan"))

        food_table = Table(title="Daily Portions")
        food_table.add_column("Meal", style="magenta")
        food_table.add_column("Food", style="cyan", max_width=40)
        food_table.add_column("Grams", justify="right")
        food_table.add_column("kcal", justify="right")
        food_table.add_column("Protein", justify="right")
        food_table.add_column("Carbs", justify="right")
        food_table.add_column("Fat", justify="right")

        subtotals = meal_totals(plan)
        for slot in MealSlot:
            entries = plan.meals.get(slot, [])
            if not entries:
                continue
            for entry in entries:
                scale = entry.grams / 100
                food_table.add_row(
                    slot.value,
                    entry.food.name[:40],
                    f"{entry.grams:.1f}",
                    f"{entry.food.calories * scale:.0f}",
                    f"{entry.food.protein * scale:.1f}",
                    f"{entry.food.carbohydrates * scale:.1f}",
                    f"{entry.food.fat * scale:.1f}",
                )
            meal = subtotals[slot]
            food_table.add_row(
                "",
                f"[dim]{slot.value} total[/dim]",
                "",
                f"[dim]{meal.calories:.0f}[/dim]",
                f"[dim]{meal.protein:.1f}[/dim]",
                f"[dim]{meal.carbs:.1f}[/dim]",
                f"[dim]{meal.fat:.1f}[/dim]",
                end_section=True,
            )

        food_table.add_row(
            "[bold]TOTAL[/bold]",
            "",
            "",
            f"[bold]{plan.totals.calories:.0f}[/bold]",
            f"[bold]{plan.totals.protein:.1f}[/bold]",
            f"[bold]{plan.totals.carbs:.1f}[/bold]",
            f"[bold]{plan.totals.fat:.1f}[/bold]",
            style="bold",
        )
        self.console.print(food_table)

        target_table = Table(title="Targets")
        target_table.add_column("Nutrient")
        target_table.add_column("Amount", justify="right")
        target_table.add_column("Target", justify="right")
        target_table.add_column("Diff", justify="right")
        for label, amount, target, unit in (
            ("Calories", plan.totals.calories, plan.target.calories, "kcal"),
            ("Protein", plan.totals.protein, plan.target.protein, "g"),
        ):
            target_table.add_row(
                label,
                f"{amount:.1f} {unit}",
                f"{target:.1f} {unit}",
                f"{amount - target:+.1f}",
            )
        self.console.print(target_table)

        if show_phases:
            phase_table = Table(title="Adjustment Phases")
            phase_table.add_column("Phase")
            phase_table.add_column("Iterations", justify="right")
            phase_table.add_column("kcal", justify="right")
            phase_table.add_column("Protein", justify="right")
            phase_table.add_column("Status", justify="center")
            for report in plan.phases:
                phase_table.add_row(
                    report.phase,
                    str(report.iterations),
                    f"{report.calories:.1f}",
                    f"{report.protein:.1f}",
                    "[green]OK[/green]" if report.converged else "[yellow]cap[/yellow]",
                )
            self.console.print(phase_table)


class JSONFormatter:
    """Format plans as JSON for programmatic use."""

    def to_dict(self, plan: GeneratedPlan) -> dict:
        return {
            "timestamp": datetime.now().isoformat(),
            "name": plan.name,
            "template": plan.template_name,
            "converged": plan.converged,
            "target": {
                "calories": plan.target.calories,
                "protein": plan.target.protein,
            },
            "meals": {
                slot.value: [
                    {
                        "food": entry.food.name,
                        "grams": round(entry.grams, 1),
                        "calories": round(entry.calories, 1),
                        "protein": round(entry.protein, 1),
                    }
                    for entry in plan.meals.get(slot, [])
                ]
                for slot in MealSlot
            },
            "totals": {
                "calories": round(plan.totals.calories, 1),
                "protein": round(plan.totals.protein, 1),
                "carbs": round(plan.totals.carbs, 1),
                "fat": round(plan.totals.fat, 1),
            },
            "phases": [
                {
                    "phase": p.phase,
                    "iterations": p.iterations,
                    "converged": p.converged,
                    "calories": round(p.calories, 1),
                    "protein": round(p.protein, 1),
                }
                for p in plan.phases
            ],
        }

    def format(self, plan: GeneratedPlan) -> str:
        """Return JSON string."""
        return json.dumps(self.to_dict(plan), indent=2)


class MarkdownFormatter:
    """Format plans as Markdown for sharing or documentation."""

    def format(self, plan: GeneratedPlan, show_phases: bool = False) -> str:
        """Return Markdown string.

        Args:
            plan: Generated plan to format
            show_phases: Append the per-phase report

        Returns:
            Markdown string
        """
        lines = [f"# {plan.name}", ""]
        if plan.template_name != plan.name:
            lines.append(f"**Template:** {plan.template_name}")
        lines.append(f"**Calories:** {plan.totals.calories:.0f} / {plan.target.calories:.0f} kcal")
        lines.append(f"**Protein:** {plan.totals.protein:.1f} / {plan.target.protein:.1f} g")

        for slot in MealSlot:
            entries = plan.meals.get(slot, [])
            if not entries:
                continue
            lines.extend(
                [
                    "",
                    f"## {slot.value.capitalize()}",
                    "",
                    "| Food | Amount | kcal | Protein |",
                    "|------|--------|------|---------|",
                ]
            )
            for entry in entries:
                lines.append(
                    f"| {entry.food.name} | {entry.grams:.0f}g | "
                    f"{entry.calories:.0f} | {entry.protein:.1f}g |"
                )

        if show_phases:
            lines.extend(
                [
                    "",
                    "## Adjustment Phases",
                    "",
                    "| Phase | Iterations | kcal | Protein |",
                    "|-------|------------|------|---------|",
                ]
            )
            for report in plan.phases:
                status = "" if report.converged else " (!)"
                lines.append(
                    f"| {report.phase}{status} | {report.iterations} | "
                    f"{report.calories:.1f} | {report.protein:.1f} |"
                )

        return "\n".join(lines)


def format_plan(
    plan: GeneratedPlan,
    output_format: str = "table",
    console: Optional[Console] = None,
    show_phases: bool = False,
) -> Optional[str]:
    """Format a generated plan in the specified format.

    Args:
        plan: Plan to format
        output_format: One of 'table', 'json', 'markdown'
        console: Rich console (for table format)
        show_phases: Include phase reports (table and markdown formats)

    Returns:
        Formatted string for json/markdown, None for table (prints directly)
    """
    if output_format == "table":
        TableFormatter(console).format(plan, show_phases=show_phases)
        return None
    elif output_format == "json":
        return JSONFormatter().format(plan)
    elif output_format == "markdown":
        return MarkdownFormatter().format(plan, show_phases=show_phases)
    else:
        raise ValueError(f"Unknown output format: {output_format}")
