"""Tests for template rotation."""

from __future__ import annotations

import random

import pytest

from fitplan.plans.rotation import EmptyLibraryError, PlanRotator


class TestPlanRotator:
    """Tests for PlanRotator."""

    def test_cycle_covers_every_template_once(self, library):
        """One full cycle returns each template exactly once."""
        rotator = PlanRotator(random.Random(1))
        names = [rotator.next(library).name for _ in range(len(library))]

        assert sorted(names) == sorted(library)

    def test_reshuffles_after_cycle(self, library):
        """The second cycle again covers the whole library."""
        rotator = PlanRotator(random.Random(2))
        for _ in range(len(library)):
            rotator.next(library)

        second = [rotator.next(library).name for _ in range(len(library))]
        assert sorted(second) == sorted(library)

    def test_seeded_order_is_reproducible(self, library):
        """The cycle order is the seeded shuffle of the sorted names."""
        expected = sorted(library)
        random.Random(42).shuffle(expected)

        rotator = PlanRotator(random.Random(42))
        names = [rotator.next(library).name for _ in range(len(library))]

        assert names == expected
        assert rotator.order == expected

    def test_returns_library_objects(self, library):
        """The rotator hands back the template itself, not a copy."""
        rotator = PlanRotator(random.Random(0))
        template = rotator.next(library)
        assert template is library[template.name]

    def test_empty_library_raises(self):
        """Nothing to rotate over."""
        rotator = PlanRotator(random.Random(0))
        with pytest.raises(EmptyLibraryError):
            rotator.next({})
        assert rotator.order == []
        assert rotator.cursor == 0

    def test_removed_template_triggers_reshuffle(self, library):
        """A name missing from the library is never returned."""
        rotator = PlanRotator(random.Random(5))
        first = rotator.next(library)

        remaining = {name: plan for name, plan in library.items() if name != rotator.order[1]}
        second = rotator.next(remaining)

        assert second.name in remaining
        assert first.name in library

    def test_reset_starts_new_cycle(self, library):
        """After reset the next call reshuffles."""
        rotator = PlanRotator(random.Random(3))
        rotator.next(library)
        rotator.reset()

        assert rotator.cursor == 0
        names = [rotator.next(library).name for _ in range(len(library))]
        assert sorted(names) == sorted(library)
