"""Food catalog and template library loading."""

from __future__ import annotations

from fitplan.data.library_loader import load_library, save_plan

__all__ = ["load_library", "save_plan"]
