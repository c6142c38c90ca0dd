"""Nutrient totals for plans, meals and portion lists."""

from __future__ import annotations

from typing import Iterable, Union

from fitplan.plans.models import (
    GeneratedPlan,
    MealSlot,
    NutrientTotals,
    PortionEntry,
    RunningTotals,
    TemplatePlan,
)

PlanLike = Union[TemplatePlan, GeneratedPlan]


def calculate_totals(entries: Union[PlanLike, Iterable[PortionEntry]]) -> NutrientTotals:
    """Sum macros over a plan (every slot) or any iterable of portions.

    Each macro contributes ``food.macro * grams / 100``.

    Args:
        entries: A template/generated plan or an iterable of PortionEntry

    Returns:
        NutrientTotals for the given portions.
    """
    if isinstance(entries, (TemplatePlan, GeneratedPlan)):
        entries = entries.iter_entries()

    totals = NutrientTotals()
    for entry in entries:
        scale = entry.grams / 100
        totals.calories += entry.food.calories * scale
        totals.protein += entry.food.protein * scale
        totals.carbs += entry.food.carbohydrates * scale
        totals.fat += entry.food.fat * scale
    return totals


def running_totals(plan: PlanLike) -> RunningTotals:
    """Calories and protein of a plan, as tracked by the adjustment phases."""
    totals = calculate_totals(plan)
    return RunningTotals(calories=totals.calories, protein=totals.protein)


def meal_totals(plan: PlanLike) -> dict[MealSlot, NutrientTotals]:
    """Per-slot subtotals in slot order, for slots present in the plan."""
    return {
        slot: calculate_totals(plan.meals[slot])
        for slot in MealSlot
        if slot in plan.meals
    }
