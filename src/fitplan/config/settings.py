"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

# Foods above this many grams of protein per 100g are protein-dense
PROTEIN_THRESHOLD = 15.0
# Grams added/removed per protein-dense portion per step
PROTEIN_STEP = 10.0
# Grams added per non-protein portion while topping up calories
FILLER_STEP = 10.0
# Grams added per low-protein portion in the final fill
FINE_STEP = 1.0
MAX_ITERATIONS = 1000


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".fitplan"


@dataclass
class AdjustmentConfig:
    """Tunable policy for the portion adjustment phases."""

    protein_threshold: float = PROTEIN_THRESHOLD  # g protein per 100g
    protein_step: float = PROTEIN_STEP  # grams
    filler_step: float = FILLER_STEP  # grams
    fine_step: float = FINE_STEP  # grams
    max_iterations: int = MAX_ITERATIONS  # per phase

    def __post_init__(self) -> None:
        for name in ("protein_step", "filler_step", "fine_step"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.protein_threshold < 0:
            raise ValueError(
                f"protein_threshold must be non-negative, got {self.protein_threshold}"
            )
        if self.max_iterations < 0:
            raise ValueError(
                f"max_iterations must be non-negative, got {self.max_iterations}"
            )


@dataclass
class LibraryConfig:
    """Where the food catalog and template plans live."""

    path: Optional[Path] = None


@dataclass
class DefaultsConfig:
    """Default values for various operations."""

    output_format: str = "table"  # "table", "json" or "markdown"
    seed: Optional[int] = None


@dataclass
class Settings:
    """Main application settings."""

    adjustment: AdjustmentConfig = field(default_factory=AdjustmentConfig)
    library: LibraryConfig = field(default_factory=LibraryConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.fitplan/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        # Parse adjustment policy
        if "adjustment" in data:
            adj_data = data["adjustment"] or {}
            values = {
                key: float(adj_data[key])
                for key in ("protein_threshold", "protein_step", "filler_step", "fine_step")
                if key in adj_data
            }
            if "max_iterations" in adj_data:
                values["max_iterations"] = int(adj_data["max_iterations"])
            settings.adjustment = AdjustmentConfig(**values)

        # Parse library location
        if "library" in data:
            lib_data = data["library"] or {}
            if lib_data.get("path"):
                settings.library.path = Path(lib_data["path"]).expanduser()

        # Parse defaults
        if "defaults" in data:
            def_data = data["defaults"] or {}
            if "output_format" in def_data:
                settings.defaults.output_format = def_data["output_format"]
            if "seed" in def_data:
                seed = def_data["seed"]
                settings.defaults.seed = int(seed) if seed is not None else None

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.fitplan/config.yaml
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "adjustment": {
                "protein_threshold": self.adjustment.protein_threshold,
                "protein_step": self.adjustment.protein_step,
                "filler_step": self.adjustment.filler_step,
                "fine_step": self.adjustment.fine_step,
                "max_iterations": self.adjustment.max_iterations,
            },
            "library": {
                "path": str(self.library.path) if self.library.path else None,
            },
            "defaults": {
                "output_format": self.defaults.output_format,
                "seed": self.defaults.seed,
            },
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load()
    return _settings
