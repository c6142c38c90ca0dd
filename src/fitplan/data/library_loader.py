"""Load a food catalog and template plans from a YAML library file.

Library format::

    foods:
      Oats:
        calories: 380
        protein: 13
        carbohydrates: 67
        fat: 7
        portion: 40
        categories: [grain]
    plans:
      CuttingA:
        breakfast:
          - {food: Oats, grams: 200}
        lunch: []

Plan meal keys must be meal slot names (breakfast, snack1, lunch, snack2,
dinner). Every food a plan references must be in ``foods``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml

from fitplan.plans.models import (
    FoodRecord,
    GeneratedPlan,
    MealSlot,
    PortionEntry,
    TemplatePlan,
)

FoodCatalog = dict[str, FoodRecord]
TemplateLibrary = dict[str, TemplatePlan]


def parse_foods(data: dict[str, Any]) -> FoodCatalog:
    """Build the food catalog from the ``foods`` mapping.

    Raises:
        ValueError: If a food is missing calories or protein.
    """
    catalog: FoodCatalog = {}
    for name, spec in (data or {}).items():
        spec = spec or {}
        missing = [key for key in ("calories", "protein") if key not in spec]
        if missing:
            raise ValueError(f"Food '{name}' is missing {', '.join(missing)}")

        categories = spec.get("categories") or []
        if isinstance(categories, str):
            categories = categories.split(";")

        catalog[str(name)] = FoodRecord(
            name=str(name),
            calories=int(spec["calories"]),
            protein=float(spec["protein"]),
            carbohydrates=float(spec.get("carbohydrates", 0)),
            fat=float(spec.get("fat", 0)),
            portion=float(spec.get("portion", 0)),
            categories=frozenset(c.strip().lower() for c in categories if c.strip()),
        )
    return catalog


def parse_plans(data: dict[str, Any], catalog: FoodCatalog) -> TemplateLibrary:
    """Build the template library from the ``plans`` mapping.

    Raises:
        ValueError: On unknown meal slots, unknown foods or negative grams.
    """
    library: TemplateLibrary = {}
    for plan_name, meals_data in (data or {}).items():
        meals: dict[MealSlot, list[PortionEntry]] = {}
        for slot_name, items in (meals_data or {}).items():
            slot = MealSlot.parse(str(slot_name))
            entries: list[PortionEntry] = []
            for item in items or []:
                food_name = item.get("food")
                if food_name not in catalog:
                    raise ValueError(
                        f"Plan '{plan_name}' references unknown food '{food_name}'"
                    )
                grams = float(item.get("grams", catalog[food_name].portion))
                if grams < 0:
                    raise ValueError(
                        f"Plan '{plan_name}' has negative grams for '{food_name}'"
                    )
                entries.append(PortionEntry(catalog[food_name], grams))
            meals[slot] = entries

        # Every plan carries every slot, possibly empty
        library[str(plan_name)] = TemplatePlan(
            name=str(plan_name),
            meals={slot: meals.get(slot, []) for slot in MealSlot},
        )
    return library


def load_library(path: Path) -> tuple[FoodCatalog, TemplateLibrary]:
    """Read a library YAML file.

    Args:
        path: Path to the library file

    Returns:
        (food catalog, template library)
    """
    if not path.exists():
        raise FileNotFoundError(f"Library file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    catalog = parse_foods(data.get("foods", {}))
    library = parse_plans(data.get("plans", {}), catalog)
    return catalog, library


def food_to_dict(food: FoodRecord) -> dict[str, Any]:
    """Render a food in the library ``foods`` shape."""
    return {
        "calories": food.calories,
        "protein": food.protein,
        "carbohydrates": food.carbohydrates,
        "fat": food.fat,
        "portion": food.portion,
        "categories": sorted(food.categories),
    }


def plan_to_dict(plan: TemplatePlan | GeneratedPlan) -> dict[str, list[dict]]:
    """Render a plan's meals in the library ``plans`` shape."""
    return {
        slot.value: [
            {"food": entry.food.name, "grams": round(entry.grams, 1)}
            for entry in plan.meals.get(slot, [])
        ]
        for slot in MealSlot
    }


def save_plan(
    plan: TemplatePlan | GeneratedPlan,
    path: Path,
    name: Optional[str] = None,
) -> None:
    """Add or replace a plan in a library YAML file.

    Foods the plan uses are added to the file's ``foods`` mapping if missing,
    so the file loads with ``load_library`` on its own.

    Args:
        plan: Plan to write
        path: Target YAML file; created if missing
        name: Name to store the plan under (defaults to ``plan.name``)
    """
    data: dict[str, Any] = {}
    if path.exists():
        with open(path) as f:
            data = yaml.safe_load(f) or {}

    foods = data["foods"] = data.get("foods") or {}
    for entry in plan.iter_entries():
        foods.setdefault(entry.food.name, food_to_dict(entry.food))
    plans = data["plans"] = data.get("plans") or {}
    plans[name or plan.name] = plan_to_dict(plan)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
