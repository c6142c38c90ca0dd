"""Portion adjustment phases.

Each phase mutates the grams of a working plan in place and returns the
updated running totals together with a PhaseReport. Totals are passed in
and handed back explicitly; no phase reads another phase's state.

Scan order for every phase is meal slot order (breakfast, snack1, lunch,
snack2, dinner), then the stored order of portions within a slot.

Every loop is capped at ``max_iterations``. Hitting the cap is not an
error: the phase returns whatever totals it reached and reports
``converged=False``.
"""

from __future__ import annotations

import logging
from typing import Callable

from fitplan.config.settings import (
    FILLER_STEP,
    FINE_STEP,
    MAX_ITERATIONS,
    PROTEIN_STEP,
    PROTEIN_THRESHOLD,
)
from fitplan.plans.models import (
    NutritionTarget,
    PhaseReport,
    PortionEntry,
    RunningTotals,
    TemplatePlan,
)
from fitplan.plans.nutrients import running_totals

logger = logging.getLogger(__name__)


def _report(
    phase: str,
    iterations: int,
    converged: bool,
    totals: RunningTotals,
) -> PhaseReport:
    report = PhaseReport(
        phase=phase,
        iterations=iterations,
        converged=converged,
        calories=totals.calories,
        protein=totals.protein,
    )
    if not converged:
        logger.debug(
            "%s stopped after %d iterations without reaching target "
            "(%.1f kcal, %.1f g protein)",
            phase, iterations, totals.calories, totals.protein,
        )
    return report


def scale_toward(
    plan: TemplatePlan,
    totals: RunningTotals,
    target_calories: float,
    max_iterations: int = MAX_ITERATIONS,
    reducing: bool = True,
) -> tuple[RunningTotals, PhaseReport]:
    """Scale every portion by ``target / current`` until calories cross the target.

    One multiplicative factor is applied to all portions at once, so a single
    iteration normally suffices. A plan with zero or negative calories has no
    finite factor; those iterations are skipped without scaling.

    Args:
        plan: Working plan, mutated in place
        totals: Running totals before the phase
        target_calories: Calorie target
        max_iterations: Iteration cap
        reducing: Shrink while above target if True, grow while below if False

    Returns:
        (updated totals, phase report)
    """
    phase = "scale_down" if reducing else "scale_up"

    def outside(calories: float) -> bool:
        return calories > target_calories if reducing else calories < target_calories

    iterations = 0
    while outside(totals.calories) and iterations < max_iterations:
        iterations += 1
        if totals.calories <= 0:
            continue

        factor = target_calories / totals.calories
        for entry in plan.iter_entries():
            entry.grams = max(0.0, entry.grams * factor)
        totals = running_totals(plan)

    return totals, _report(phase, iterations, not outside(totals.calories), totals)


def balance_protein(
    plan: TemplatePlan,
    totals: RunningTotals,
    target_protein: float,
    max_iterations: int = MAX_ITERATIONS,
    increasing: bool = True,
    *,
    threshold: float = PROTEIN_THRESHOLD,
    step: float = PROTEIN_STEP,
    phase: str = "",
) -> tuple[RunningTotals, PhaseReport]:
    """Move protein toward its target in fixed steps on protein-dense portions.

    A portion is eligible when its food has more than ``threshold`` grams of
    protein per 100g. Each eligible portion gets ``+step`` (or ``-step``)
    grams and the totals are updated; the phase returns as soon as the
    target is met, so it can overshoot by one step. When decreasing, a
    portion that would drop to 0g is left untouched.

    Args:
        plan: Working plan, mutated in place
        totals: Running totals before the phase
        target_protein: Protein target in grams
        max_iterations: Cap on full sweeps over the plan
        increasing: Raise protein if True, lower it if False
        threshold: Protein per 100g above which a food is eligible
        step: Grams changed per eligible portion
        phase: Report name, defaults to protein_increase/protein_decrease

    Returns:
        (updated totals, phase report)
    """
    phase = phase or ("protein_increase" if increasing else "protein_decrease")
    delta = step if increasing else -step

    def reached(current: RunningTotals) -> bool:
        if increasing:
            return current.protein >= target_protein
        return current.protein <= target_protein

    iterations = 0
    while not reached(totals) and iterations < max_iterations:
        for entry in plan.iter_entries():
            if entry.food.protein <= threshold:
                continue

            new_grams = max(0.0, entry.grams + delta)
            if not increasing and new_grams == 0.0:
                continue

            totals = totals.shifted(entry.food, delta)
            entry.grams = new_grams
            if reached(totals):
                return totals, _report(phase, iterations, True, totals)
        iterations += 1

    return totals, _report(phase, iterations, reached(totals), totals)


def _fill(
    plan: TemplatePlan,
    totals: RunningTotals,
    target_calories: float,
    max_iterations: int,
    step: float,
    eligible: Callable[[PortionEntry], bool],
    phase: str,
) -> tuple[RunningTotals, PhaseReport]:
    iterations = 0
    while totals.calories < target_calories and iterations < max_iterations:
        for entry in plan.iter_entries():
            if not eligible(entry):
                continue

            entry.grams += step
            totals = totals.shifted(entry.food, step)
            if totals.calories >= target_calories:
                break
        iterations += 1

    return totals, _report(phase, iterations, totals.calories >= target_calories, totals)


def fill_calories(
    plan: TemplatePlan,
    totals: RunningTotals,
    target_calories: float,
    max_iterations: int = MAX_ITERATIONS,
    *,
    step: float = FILLER_STEP,
) -> tuple[RunningTotals, PhaseReport]:
    """Raise calories by growing portions of foods not tagged "protein".

    Foods carrying the "protein" category label are never touched here, so
    protein intake stays roughly where the protein phases left it. Note the
    category label is independent of the protein-per-100g threshold.

    Args:
        plan: Working plan, mutated in place
        totals: Running totals before the phase
        target_calories: Calorie target
        max_iterations: Cap on full sweeps over the plan
        step: Grams added per eligible portion

    Returns:
        (updated totals, phase report)
    """
    return _fill(
        plan,
        totals,
        target_calories,
        max_iterations,
        step,
        lambda entry: not entry.food.is_protein_tagged,
        "calorie_fill",
    )


def reconcile(
    plan: TemplatePlan,
    totals: RunningTotals,
    target: NutritionTarget,
    max_iterations: int = MAX_ITERATIONS,
    *,
    threshold: float = PROTEIN_THRESHOLD,
    protein_step: float = PROTEIN_STEP,
    fine_step: float = FINE_STEP,
) -> tuple[RunningTotals, list[PhaseReport]]:
    """Final tightening pass run after the main phases.

    1. If over the calorie target, scale every portion once by
       ``target / current`` and subtract each portion's exact change.
    2. Lower protein again on protein-dense portions.
    3. Add ``fine_step`` grams to low-protein portions until calories reach
       the target.

    Returns:
        (updated totals, one report per step)
    """
    reports: list[PhaseReport] = []

    over = totals.calories > target.calories
    if over:
        factor = target.calories / totals.calories
        for entry in plan.iter_entries():
            previous = entry.grams
            entry.grams = max(0.0, entry.grams * factor)
            totals = totals.shifted(entry.food, entry.grams - previous)
    reports.append(_report("final_scale_down", 1 if over else 0, True, totals))

    totals, report = balance_protein(
        plan,
        totals,
        target.protein,
        max_iterations,
        increasing=False,
        threshold=threshold,
        step=protein_step,
        phase="final_protein_decrease",
    )
    reports.append(report)

    totals, report = _fill(
        plan,
        totals,
        target.calories,
        max_iterations,
        fine_step,
        lambda entry: entry.food.protein < threshold,
        "final_fill",
    )
    reports.append(report)

    return totals, reports
