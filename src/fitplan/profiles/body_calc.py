"""Daily calorie and protein targets from body metrics and a fitness goal.

Uses the Mifflin-St Jeor equation for BMR, scaled by an activity factor,
then shifted by a fixed surplus or deficit for the goal. Protein is set
per kilogram of body weight. The result is handed to plan generation as a
plain NutritionTarget, so nothing downstream holds on to the profile.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fitplan.plans.models import NutritionTarget


class Sex(Enum):
    """Biological sex for BMR calculation."""
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(Enum):
    """Activity level multipliers for daily energy expenditure."""
    SEDENTARY = "sedentary"                  # Little or no exercise
    LIGHTLY_ACTIVE = "lightly_active"        # Light exercise 1-3 days/week
    MODERATELY_ACTIVE = "moderately_active"  # Moderate exercise 3-5 days/week
    VERY_ACTIVE = "very_active"              # Hard exercise 6-7 days/week
    EXTRA_ACTIVE = "extra_active"            # Very hard exercise, physical job


class FitnessGoal(Enum):
    """Body composition goal."""
    WEIGHT_LOSS = "weight_loss"
    MAINTENANCE = "maintenance"
    MUSCLE_GAIN = "muscle_gain"


ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTRA_ACTIVE: 1.9,
}

# Calories added to maintenance for each goal
GOAL_ADJUSTMENTS = {
    FitnessGoal.WEIGHT_LOSS: -500,
    FitnessGoal.MAINTENANCE: 0,
    FitnessGoal.MUSCLE_GAIN: 500,
}

# Grams of protein per kg of body weight
PROTEIN_PER_KG = {
    FitnessGoal.WEIGHT_LOSS: 1.6,
    FitnessGoal.MAINTENANCE: 1.6,
    FitnessGoal.MUSCLE_GAIN: 2.2,
}


@dataclass
class DailyTargets:
    """Calculated daily targets with the reference values behind them."""

    calories: float
    protein: float

    bmr: float
    maintenance_calories: float
    goal: FitnessGoal
    weight_kg: float
    custom_calories: bool = False

    def to_target(self) -> NutritionTarget:
        """Return the calorie/protein pair consumed by plan generation."""
        return NutritionTarget(calories=self.calories, protein=self.protein)

    def summary(self) -> str:
        """Human-readable summary of targets."""
        source = "custom" if self.custom_calories else self.goal.value
        lines = [
            f"Goal: {self.goal.value}",
            f"BMR: {self.bmr:.0f} kcal/day",
            f"Maintenance: {self.maintenance_calories:.0f} kcal/day",
            f"Target: {self.calories:.0f} kcal/day ({source})",
            f"Protein: {self.protein:.0f} g/day",
        ]
        return "\n".join(lines)


def calculate_bmr(
    age: int,
    sex: Sex,
    height_cm: float,
    weight_kg: float,
) -> float:
    """Calculate Basal Metabolic Rate using Mifflin-St Jeor equation.

    Args:
        age: Age in years
        sex: Biological sex
        height_cm: Height in centimetres
        weight_kg: Weight in kilograms

    Returns:
        BMR in calories per day
    """
    base = (10 * weight_kg) + (6.25 * height_cm) - (5 * age)
    return base + 5 if sex == Sex.MALE else base - 161


def calculate_daily_calories(bmr: float, activity_level: ActivityLevel) -> float:
    """Maintenance calories for a BMR at the given activity level."""
    return bmr * ACTIVITY_MULTIPLIERS[activity_level]


def calculate_targets(
    age: int,
    sex: str,
    height_cm: float,
    weight_kg: float,
    goal: str = "maintenance",
    activity_level: str = "sedentary",
    custom_calories: Optional[float] = None,
) -> DailyTargets:
    """Calculate calorie and protein targets.

    Args:
        age: Age in years
        sex: "male" or "female"
        height_cm: Height in centimetres
        weight_kg: Weight in kilograms
        goal: "weight_loss", "maintenance" or "muscle_gain"
        activity_level: "sedentary", "lightly_active", "moderately_active",
            "very_active" or "extra_active"
        custom_calories: Use this calorie target instead of the calculated one

    Returns:
        DailyTargets

    Raises:
        ValueError: On unknown enum strings or non-positive body metrics.
    """
    if weight_kg <= 0 or height_cm <= 0 or age <= 0:
        raise ValueError("age, height and weight must be positive")

    sex_enum = Sex(sex.lower())
    goal_enum = FitnessGoal(goal.lower())
    activity_enum = ActivityLevel(activity_level.lower())

    bmr = calculate_bmr(age, sex_enum, height_cm, weight_kg)
    maintenance = calculate_daily_calories(bmr, activity_enum)

    if custom_calories is not None:
        calories = custom_calories
    else:
        calories = maintenance + GOAL_ADJUSTMENTS[goal_enum]

    return DailyTargets(
        calories=calories,
        protein=weight_kg * PROTEIN_PER_KG[goal_enum],
        bmr=bmr,
        maintenance_calories=maintenance,
        goal=goal_enum,
        weight_kg=weight_kg,
        custom_calories=custom_calories is not None,
    )


def targets_to_dict(targets: DailyTargets) -> dict:
    """Convert DailyTargets to dict for JSON output."""
    return {
        "calories": round(targets.calories, 1),
        "protein": round(targets.protein, 1),
        "reference": {
            "bmr": round(targets.bmr, 1),
            "maintenance_calories": round(targets.maintenance_calories, 1),
            "custom_calories": targets.custom_calories,
        },
        "goal": targets.goal.value,
        "weight_kg": targets.weight_kg,
    }
