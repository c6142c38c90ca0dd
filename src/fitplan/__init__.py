"""Meal plan generation from template plans."""

__version__ = "0.1.0"
