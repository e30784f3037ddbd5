"""Configuration for the S2 runner.

Simple two-level config: a name plus nested dicts for cells/glob/loop.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

MAX_LEVEL = 30  # deepest S2 subdivision level


@dataclass
class Config:
    """Runner configuration.

    Attributes:
        name: Config name
        cells: Covering parameters (level, max_cells)
        glob: Composite identifier parsing parameters
        loop: Command loop behavior (keep_going, verbose)
    """

    name: str = "default"

    # Covering config (passed to s2sphere.RegionCoverer)
    cells: Dict[str, Any] = field(default_factory=lambda: {
        "level": 16,
        "max_cells": 8,
    })

    glob: Dict[str, Any] = field(default_factory=lambda: {
        "allow_overlapping_amount": False,
    })

    loop: Dict[str, Any] = field(default_factory=lambda: {
        "keep_going": False,
        "verbose": False,
    })

    def __post_init__(self):
        if not 0 <= self.level <= MAX_LEVEL:
            raise ValueError(f"cells.level must be between 0 and {MAX_LEVEL}, got {self.level}")
        if self.max_cells < 1:
            raise ValueError(f"cells.max_cells must be at least 1, got {self.max_cells}")

    @property
    def level(self) -> int:
        """Return the fixed covering level (min level == max level)."""
        return int(self.cells.get("level", 16))

    @property
    def max_cells(self) -> int:
        return int(self.cells.get("max_cells", 8))

    @property
    def allow_overlapping_amount(self) -> bool:
        """Return whether the amount slice may overlap the cell id prefix."""
        return bool(self.glob.get("allow_overlapping_amount", False))

    @property
    def keep_going(self) -> bool:
        """Return whether the loop reports errors and continues."""
        return bool(self.loop.get("keep_going", False))

    @property
    def verbose(self) -> bool:
        return bool(self.loop.get("verbose", False))

    def override(self, **kwargs: Any) -> "Config":
        """Return a copy with CLI overrides applied; None values are ignored.

        Recognized keys: level, max_cells, allow_overlapping_amount,
        keep_going, verbose.
        """
        sections = {
            "level": "cells",
            "max_cells": "cells",
            "allow_overlapping_amount": "glob",
            "keep_going": "loop",
            "verbose": "loop",
        }
        data = self.to_dict()
        for key, value in kwargs.items():
            if key not in sections:
                raise ValueError(f"Unknown config override: {key}")
            if value is not None:
                data[sections[key]][key] = value
        return Config.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        defaults = cls()
        return cls(
            name=data.get("name", "default"),
            cells={**defaults.cells, **(data.get("cells") or {})},
            glob={**defaults.glob, **(data.get("glob") or {})},
            loop={**defaults.loop, **(data.get("loop") or {})},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "name": self.name,
            "cells": dict(self.cells),
            "glob": dict(self.glob),
            "loop": dict(self.loop),
        }

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    def save_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file with blank lines between sections."""
        d = self.to_dict()
        with open(path, "w") as f:
            f.write(f"name: {d['name']}\n")

            for key in ["cells", "glob", "loop"]:
                f.write(f"\n{key}:\n")
                content = yaml.dump(d[key], default_flow_style=False, sort_keys=False)
                for line in content.strip().split('\n'):
                    f.write(f"  {line}\n")


def load_config(path: str | Path | None = None) -> Config:
    """Load a config from ``path``, or the defaults when no path is given."""
    if path is None:
        return Config()
    return Config.from_yaml(path)
