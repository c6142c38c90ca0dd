"""Turn a rotated template into a plan that approximates a daily target.

Phases run once, in a fixed order:

1. scale portions down if the template is over the calorie target
2. raise protein on protein-dense foods if below the protein target
3. lower protein on protein-dense foods if above the protein target
4. top calories back up with foods not tagged "protein"
5. reconcile: one more scale-down, protein decrease and a 1g fine fill

Calories are right-sized first so later phases work on a sensible base,
protein is corrected in both directions, then calories are refilled
without touching protein foods. The result is approximate: any phase may
stop at its iteration cap, and the final totals say how close it got.
"""

from __future__ import annotations

import logging
import random
from typing import Mapping, Optional

from fitplan.config.settings import AdjustmentConfig
from fitplan.plans.adjust import (
    balance_protein,
    fill_calories,
    reconcile,
    scale_toward,
)
from fitplan.plans.models import (
    GeneratedPlan,
    NutritionTarget,
    PhaseReport,
    TemplatePlan,
)
from fitplan.plans.nutrients import calculate_totals, running_totals
from fitplan.plans.rotation import EmptyLibraryError, PlanRotator

logger = logging.getLogger(__name__)


class PlanGenerator:
    """Generates adjusted plans from a template library.

    One generator is one rotation session: successive ``generate`` calls
    walk the shuffled library so every template is used once per cycle.

    Args:
        config: Adjustment policy (thresholds, step sizes, iteration cap)
        rotator: Template rotator. If None, one is created from ``rng``.
        rng: Random source for a new rotator; ignored if ``rotator`` is given.
    """

    def __init__(
        self,
        config: Optional[AdjustmentConfig] = None,
        rotator: Optional[PlanRotator] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or AdjustmentConfig()
        self.rotator = rotator or PlanRotator(rng)

    def generate(
        self,
        library: Mapping[str, TemplatePlan],
        target: NutritionTarget,
    ) -> GeneratedPlan:
        """Generate the next plan in the rotation.

        Args:
            library: Template name -> TemplatePlan. Never mutated.
            target: Daily calorie and protein target

        Returns:
            GeneratedPlan named after its template.

        Raises:
            EmptyLibraryError: If the library has no templates.
        """
        if not library:
            raise EmptyLibraryError("No template plans available")

        template = self.rotator.next(library)
        return self.adjust(template, target)

    def adjust(self, template: TemplatePlan, target: NutritionTarget) -> GeneratedPlan:
        """Run every adjustment phase on a copy of ``template``."""
        cfg = self.config
        plan = template.copy()
        phases: list[PhaseReport] = []

        totals = running_totals(plan)
        logger.debug(
            "Adjusting '%s' from %.1f kcal / %.1f g protein toward %.1f kcal / %.1f g",
            template.name, totals.calories, totals.protein, target.calories, target.protein,
        )

        totals, report = scale_toward(
            plan, totals, target.calories, cfg.max_iterations, reducing=True
        )
        phases.append(report)

        for increasing in (True, False):
            totals, report = balance_protein(
                plan,
                totals,
                target.protein,
                cfg.max_iterations,
                increasing=increasing,
                threshold=cfg.protein_threshold,
                step=cfg.protein_step,
            )
            phases.append(report)

        totals, report = fill_calories(
            plan, totals, target.calories, cfg.max_iterations, step=cfg.filler_step
        )
        phases.append(report)

        totals, reports = reconcile(
            plan,
            totals,
            target,
            cfg.max_iterations,
            threshold=cfg.protein_threshold,
            protein_step=cfg.protein_step,
            fine_step=cfg.fine_step,
        )
        phases.extend(reports)

        result = GeneratedPlan(
            name=template.name,
            template_name=template.name,
            meals=plan.meals,
            target=target,
            totals=calculate_totals(plan),
            tracked=totals,
            phases=phases,
        )
        logger.debug(
            "Generated '%s': %.1f kcal / %.1f g protein",
            result.name, result.totals.calories, result.totals.protein,
        )
        return result


def generate_plan(
    library: Mapping[str, TemplatePlan],
    calories: float,
    protein: float,
    *,
    rng: Optional[random.Random] = None,
    config: Optional[AdjustmentConfig] = None,
) -> GeneratedPlan:
    """Generate a single plan with a fresh rotation.

    Example:
        >>> plan = generate_plan(library, calories=2200, protein=140, rng=random.Random(7))
        >>> print(f"{plan.name}: {plan.totals.calories:.0f} kcal")
    """
    generator = PlanGenerator(config=config, rng=rng)
    return generator.generate(library, NutritionTarget(calories=calories, protein=protein))
