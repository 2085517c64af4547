"""Config — load scenario parameters from YAML files.

A scenario fixes the colony layout, the bee stats, the wave schedule and
(optionally) a scripted opening of deployments for headless runs.  All of
it lives in YAML and is parsed into typed dataclasses here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass
class WaveConfig:
    """A batch of bees released at the end of ``turn``."""

    turn: int
    count: int


@dataclass
class DeploymentConfig:
    """An ant placed before the first turn.

    Attributes:
        unit: Defender type name, e.g. ``"thrower"``.
        at: ``"row,col"`` coordinate string.
        boost: Optional boost name applied right after placement.
    """

    unit: str
    at: str
    boost: str | None = None


@dataclass
class ScenarioConfig:
    """Top-level scenario configuration.

    Attributes:
        seed: RNG seed for reproducible matches.
        starting_food: Food available before the first turn.
        tunnel_count: Number of tunnels leading to the queen.
        tunnel_length: Locations per tunnel.
        flood_period: Every n-th tunnel step is water (0 = none).
        attacker_armor: Armor of each bee.
        attacker_damage: Sting damage of each bee.
        max_turns: Turn cap for headless runs.
        waves: Wave schedule.
        deployments: Opening placements for headless runs.
    """

    seed: int = 42
    starting_food: int = 10
    tunnel_count: int = 3
    tunnel_length: int = 8
    flood_period: int = 0
    attacker_armor: int = 3
    attacker_damage: int = 1
    max_turns: int = 100
    waves: list[WaveConfig] = field(default_factory=list)
    deployments: list[DeploymentConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScenarioConfig:
        """Build a config from already-parsed YAML data."""
        return cls(
            seed=data.get("seed", cls.seed),
            starting_food=data.get("starting_food", cls.starting_food),
            tunnel_count=data.get("tunnel_count", cls.tunnel_count),
            tunnel_length=data.get("tunnel_length", cls.tunnel_length),
            flood_period=data.get("flood_period", cls.flood_period),
            attacker_armor=data.get("attacker_armor", cls.attacker_armor),
            attacker_damage=data.get("attacker_damage", cls.attacker_damage),
            max_turns=data.get("max_turns", cls.max_turns),
            waves=[
                WaveConfig(turn=int(w["turn"]), count=int(w["count"]))
                for w in data.get("waves") or []
            ],
            deployments=[
                DeploymentConfig(
                    unit=str(d["unit"]),
                    at=str(d["at"]),
                    boost=d.get("boost"),
                )
                for d in data.get("deployments") or []
            ],
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> ScenarioConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML scenario file.

        Returns:
            A populated ScenarioConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)
