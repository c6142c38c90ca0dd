"""Tests for body metric target calculation."""

import pytest

from fitplan.profiles.body_calc import (
    ActivityLevel,
    FitnessGoal,
    Sex,
    calculate_bmr,
    calculate_daily_calories,
    calculate_targets,
    targets_to_dict,
)


class TestBMR:
    """Tests for the Mifflin-St Jeor BMR."""

    def test_male(self):
        assert calculate_bmr(30, Sex.MALE, 180, 80) == pytest.approx(1780)

    def test_female(self):
        assert calculate_bmr(25, Sex.FEMALE, 165, 60) == pytest.approx(1345.25)

    def test_activity_multiplier(self):
        assert calculate_daily_calories(1780, ActivityLevel.SEDENTARY) == pytest.approx(2136)
        assert calculate_daily_calories(1000, ActivityLevel.EXTRA_ACTIVE) == pytest.approx(1900)


class TestCalculateTargets:
    """Tests for calculate_targets."""

    def test_maintenance(self):
        targets = calculate_targets(30, "male", 180, 80)

        assert targets.goal == FitnessGoal.MAINTENANCE
        assert targets.bmr == pytest.approx(1780)
        assert targets.calories == pytest.approx(2136)
        assert targets.protein == pytest.approx(128)

    def test_weight_loss_deficit(self):
        targets = calculate_targets(30, "male", 180, 80, goal="weight_loss")
        assert targets.calories == pytest.approx(1636)
        assert targets.protein == pytest.approx(128)

    def test_muscle_gain_surplus(self):
        targets = calculate_targets(30, "Male", 180, 80, goal="MUSCLE_GAIN")
        assert targets.calories == pytest.approx(2636)
        assert targets.protein == pytest.approx(176)

    def test_custom_calories_override(self):
        """Custom calories replace the goal-adjusted value only."""
        targets = calculate_targets(30, "male", 180, 80, goal="weight_loss", custom_calories=1800)

        assert targets.calories == 1800
        assert targets.maintenance_calories == pytest.approx(2136)
        assert targets.custom_calories
        assert "custom" in targets.summary()

    def test_to_target(self):
        target = calculate_targets(25, "female", 165, 60, activity_level="moderately_active").to_target()
        assert target.calories == pytest.approx(1345.25 * 1.55)
        assert target.protein == pytest.approx(96)

    def test_invalid_sex(self):
        with pytest.raises(ValueError):
            calculate_targets(30, "robot", 180, 80)

    def test_non_positive_weight(self):
        with pytest.raises(ValueError):
            calculate_targets(30, "male", 180, 0)

    def test_to_dict(self):
        data = targets_to_dict(calculate_targets(30, "male", 180, 80))
        assert data["calories"] == 2136
        assert data["reference"]["bmr"] == 1780
        assert data["goal"] == "maintenance"
