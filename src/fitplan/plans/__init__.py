"""Template-based plan generation.

A template plan is copied and its portion sizes are rescaled and
re-composed until the day's calories and protein approach a target.

Key properties:
- Templates are visited in shuffled cycles, each once per cycle
- Portions never go negative and templates are never mutated
- Every phase is iteration-capped; missing a target is reported, not raised
"""

from __future__ import annotations

from fitplan.plans.generator import PlanGenerator, generate_plan
from fitplan.plans.models import (
    FoodRecord,
    GeneratedPlan,
    MealSlot,
    NutrientTotals,
    NutritionTarget,
    PhaseReport,
    PortionEntry,
    RunningTotals,
    TemplatePlan,
)
from fitplan.plans.nutrients import calculate_totals, meal_totals
from fitplan.plans.rotation import EmptyLibraryError, PlanRotator

__all__ = [
    "EmptyLibraryError",
    "FoodRecord",
    "GeneratedPlan",
    "MealSlot",
    "NutrientTotals",
    "NutritionTarget",
    "PhaseReport",
    "PlanGenerator",
    "PlanRotator",
    "PortionEntry",
    "RunningTotals",
    "TemplatePlan",
    "calculate_totals",
    "generate_plan",
    "meal_totals",
]
