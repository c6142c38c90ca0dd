"""Shuffled, exhaustive rotation over a template library.

Repeated generation requests should not keep returning the same template.
The rotator shuffles the library's names and walks the permutation; once
every name has been handed out it reshuffles. Within a cycle each template
appears exactly once.
"""

from __future__ import annotations

import logging
import random
import threading
from typing import Mapping, Optional

from fitplan.plans.models import TemplatePlan

logger = logging.getLogger(__name__)


class EmptyLibraryError(ValueError):
    """Raised when there is no template to generate a plan from."""


class PlanRotator:
    """Hands out templates in shuffled cycles.

    Args:
        rng: Random source used for shuffling. Pass a seeded
            ``random.Random`` to pin the rotation order.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self._order: list[str] = []
        self._cursor = 0
        self._lock = threading.Lock()

    @property
    def order(self) -> list[str]:
        """Current permutation of template names."""
        return list(self._order)

    @property
    def cursor(self) -> int:
        return self._cursor

    def reset(self) -> None:
        """Drop the current cycle; the next call reshuffles."""
        with self._lock:
            self._order = []
            self._cursor = 0

    def next(self, library: Mapping[str, TemplatePlan]) -> TemplatePlan:
        """Return the next template of the current cycle.

        Args:
            library: Template name -> TemplatePlan

        Returns:
            The selected TemplatePlan (not a copy).

        Raises:
            EmptyLibraryError: If the library has no templates.
        """
        if not library:
            raise EmptyLibraryError("No template plans available")

        with self._lock:
            while True:
                if self._cursor >= len(self._order):
                    self._shuffle(library)

                name = self._order[self._cursor]
                self._cursor += 1
                if name in library:
                    return library[name]

                # Library shrank since the last shuffle.
                logger.debug("Template '%s' no longer in library, reshuffling", name)
                self._order = []

    def _shuffle(self, library: Mapping[str, TemplatePlan]) -> None:
        self._order = sorted(library)
        self.rng.shuffle(self._order)
        self._cursor = 0
        logger.debug("New rotation cycle over %d templates", len(self._order))
