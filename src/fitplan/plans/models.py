"""Data models for template plans and generated plans.

A template plan is an author-defined day of meals: for each meal slot, an
ordered list of (food, grams) portions. Generation copies a template and
rewrites the grams so the day's totals approach a calorie and protein target.
Only the grams of a portion ever change; food records are shared and
immutable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional


class MealSlot(Enum):
    """Fixed daily meal slots.

    Declaration order is the display order and the order in which every
    adjustment phase scans a plan.
    """

    BREAKFAST = "breakfast"
    SNACK1 = "snack1"
    LUNCH = "lunch"
    SNACK2 = "snack2"
    DINNER = "dinner"

    @classmethod
    def parse(cls, value: str) -> "MealSlot":
        """Parse a slot name case-insensitively (e.g. "Breakfast")."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = [s.value for s in cls]
            raise ValueError(f"Unknown meal slot '{value}', expected one of {valid}") from None


@dataclass(frozen=True)
class FoodRecord:
    """A catalog food with macros per 100g.

    Attributes:
        name: Unique food name
        calories: kcal per 100g
        protein: Protein grams per 100g
        carbohydrates: Carbohydrate grams per 100g
        fat: Fat grams per 100g
        portion: Default portion size in grams (informational only)
        categories: Lower-case category labels, e.g. {"protein", "dairy"}
    """

    name: str
    calories: int
    protein: float
    carbohydrates: float = 0.0
    fat: float = 0.0
    portion: float = 0.0
    categories: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_protein_tagged(self) -> bool:
        return "protein" in self.categories


@dataclass
class PortionEntry:
    """A food and the grams of it eaten in one meal."""

    food: FoodRecord
    grams: float

    @property
    def calories(self) -> float:
        return self.food.calories * self.grams / 100

    @property
    def protein(self) -> float:
        return self.food.protein * self.grams / 100


@dataclass
class TemplatePlan:
    """A named day of meals.

    Attributes:
        name: Unique plan name
        meals: Meal slot -> ordered portions for that meal
    """

    name: str
    meals: dict[MealSlot, list[PortionEntry]] = field(default_factory=dict)

    def iter_entries(self) -> Iterator[PortionEntry]:
        """Yield every portion in slot order, then stored order."""
        for slot in MealSlot:
            yield from self.meals.get(slot, ())

    def copy(self) -> "TemplatePlan":
        """Return a copy whose portions can be mutated independently."""
        return TemplatePlan(
            name=self.name,
            meals={
                slot: [PortionEntry(e.food, e.grams) for e in entries]
                for slot, entries in self.meals.items()
            },
        )


@dataclass(frozen=True)
class NutritionTarget:
    """Daily calorie and protein targets for plan generation."""

    calories: float
    protein: float

    def __post_init__(self) -> None:
        if self.calories <= 0:
            raise ValueError(f"calories must be positive, got {self.calories}")
        if self.protein <= 0:
            raise ValueError(f"protein must be positive, got {self.protein}")


@dataclass
class NutrientTotals:
    """Summed macros for a plan, meal, or any group of portions."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    def __add__(self, other: "NutrientTotals") -> "NutrientTotals":
        return NutrientTotals(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
        )


@dataclass(frozen=True)
class RunningTotals:
    """Calories and protein tracked between adjustment phases."""

    calories: float
    protein: float

    def shifted(self, food: FoodRecord, grams_delta: float) -> "RunningTotals":
        """Return the totals after changing a portion of ``food`` by ``grams_delta``."""
        return RunningTotals(
            calories=self.calories + food.calories * grams_delta / 100,
            protein=self.protein + food.protein * grams_delta / 100,
        )


@dataclass
class PhaseReport:
    """Outcome of one adjustment phase.

    Attributes:
        phase: Phase name (e.g. "scale_down", "protein_increase")
        iterations: Completed loop iterations
        converged: Whether the phase reached its target
        calories: Running calories after the phase
        protein: Running protein after the phase
    """

    phase: str
    iterations: int
    converged: bool
    calories: float
    protein: float


@dataclass
class GeneratedPlan:
    """A template copy whose portions were adjusted toward a target.

    Attributes:
        name: Display name, initially the template's name; callers may rename
        template_name: Name of the template the plan was derived from
        meals: Adjusted portions per meal slot
        target: Target the plan was adjusted toward
        totals: Totals recomputed from the final portions
        tracked: Totals as tracked incrementally by the phases
        phases: Report for each phase, in run order
    """

    name: str
    template_name: str
    meals: dict[MealSlot, list[PortionEntry]]
    target: NutritionTarget
    totals: NutrientTotals
    tracked: Optional[RunningTotals] = None
    phases: list[PhaseReport] = field(default_factory=list)

    def iter_entries(self) -> Iterator[PortionEntry]:
        for slot in MealSlot:
            yield from self.meals.get(slot, ())

    @property
    def converged(self) -> bool:
        return all(p.converged for p in self.phases)
