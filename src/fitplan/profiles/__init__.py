"""Target calculation from body metrics."""

from __future__ import annotations

from fitplan.profiles.body_calc import DailyTargets, calculate_targets

__all__ = ["DailyTargets", "calculate_targets"]
