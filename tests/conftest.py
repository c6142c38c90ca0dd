"""Pytest fixtures for fitplan tests."""

from __future__ import annotations

import pytest
import yaml

from fitplan.plans.models import FoodRecord, MealSlot, PortionEntry, TemplatePlan

# name, kcal, protein, carbs, fat, portion, categories (per 100g)
FOODS = [
    ("Oats", 380, 13.0, 67.0, 7.0, 40, ["grain"]),
    ("Chicken breast", 165, 31.0, 0.0, 3.6, 150, ["protein", "meat"]),
    ("Brown rice", 123, 2.7, 26.0, 1.0, 150, ["grain"]),
    ("Broccoli", 34, 2.8, 7.0, 0.4, 100, ["vegetable"]),
    ("Eggs", 143, 13.0, 0.7, 10.0, 100, ["protein"]),
    ("Olive oil", 884, 0.0, 0.0, 100.0, 10, ["fat"]),
    ("Greek yogurt", 59, 10.0, 3.6, 0.4, 170, ["dairy"]),
    ("Tuna", 132, 28.0, 0.0, 1.0, 120, ["protein", "fish"]),
    ("Almonds", 579, 21.0, 22.0, 50.0, 30, ["nuts"]),
]

PLANS = {
    "CuttingA": {
        "breakfast": [("Oats", 60), ("Greek yogurt", 170)],
        "snack1": [("Almonds", 20)],
        "lunch": [("Chicken breast", 150), ("Brown rice", 150), ("Broccoli", 100)],
        "snack2": [("Greek yogurt", 150)],
        "dinner": [("Tuna", 120), ("Brown rice", 100), ("Olive oil", 10)],
    },
    "BulkingB": {
        "breakfast": [("Oats", 120), ("Eggs", 150)],
        "snack1": [("Almonds", 50)],
        "lunch": [("Chicken breast", 250), ("Brown rice", 300)],
        "snack2": [("Greek yogurt", 250), ("Oats", 50)],
        "dinner": [("Tuna", 200), ("Brown rice", 250), ("Olive oil", 20)],
    },
    "Maintenance": {
        "breakfast": [("Eggs", 100), ("Oats", 80)],
        "snack1": [],
        "lunch": [("Tuna", 150), ("Broccoli", 200), ("Olive oil", 10)],
        "snack2": [("Almonds", 30)],
        "dinner": [("Chicken breast", 180), ("Brown rice", 200)],
    },
    "Vegetarian": {
        "breakfast": [("Greek yogurt", 200), ("Oats", 70)],
        "snack1": [("Almonds", 25)],
        "lunch": [("Eggs", 150), ("Broccoli", 150), ("Brown rice", 150)],
        "snack2": [],
        "dinner": [("Brown rice", 200), ("Broccoli", 200), ("Olive oil", 15)],
    },
}


@pytest.fixture
def catalog() -> dict[str, FoodRecord]:
    """Sample food catalog."""
    return {
        name: FoodRecord(
            name=name,
            calories=kcal,
            protein=protein,
            carbohydrates=carbs,
            fat=fat,
            portion=portion,
            categories=frozenset(categories),
        )
        for name, kcal, protein, carbs, fat, portion, categories in FOODS
    }


@pytest.fixture
def library(catalog) -> dict[str, TemplatePlan]:
    """Sample template library built from the catalog."""
    return {
        plan_name: TemplatePlan(
            name=plan_name,
            meals={
                MealSlot(slot): [PortionEntry(catalog[food], grams) for food, grams in items]
                for slot, items in meals.items()
            },
        )
        for plan_name, meals in PLANS.items()
    }


@pytest.fixture
def rice() -> FoodRecord:
    """100 kcal, 2g protein per 100g; not protein-dense."""
    return FoodRecord(name="Rice", calories=100, protein=2.0, carbohydrates=22.0, fat=0.5)


@pytest.fixture
def chicken() -> FoodRecord:
    """200 kcal, 25g protein per 100g; protein-dense and tagged protein."""
    return FoodRecord(
        name="Chicken",
        calories=200,
        protein=25.0,
        fat=8.0,
        categories=frozenset({"protein"}),
    )


@pytest.fixture
def simple_plan(rice, chicken) -> TemplatePlan:
    """Rice 100g at breakfast, chicken 100g at lunch: 300 kcal, 27g protein."""
    return TemplatePlan(
        name="Simple",
        meals={
            MealSlot.BREAKFAST: [PortionEntry(rice, 100.0)],
            MealSlot.LUNCH: [PortionEntry(chicken, 100.0)],
        },
    )


@pytest.fixture
def library_file(tmp_path):
    """Write the sample library to a YAML file and return its path."""
    data = {
        "foods": {
            name: {
                "calories": kcal,
                "protein": protein,
                "carbohydrates": carbs,
                "fat": fat,
                "portion": portion,
                "categories": categories,
            }
            for name, kcal, protein, carbs, fat, portion, categories in FOODS
        },
        "plans": {
            plan_name: {
                slot: [{"food": food, "grams": grams} for food, grams in items]
                for slot, items in meals.items()
            }
            for plan_name, meals in PLANS.items()
        },
    }
    path = tmp_path / "library.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f, sort_keys=False)
    return path
