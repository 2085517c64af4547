"""Shared fixtures for the Antsiege test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from antsiege.colony.colony import Colony
from antsiege.hive.spawner import Spawner
from antsiege.simulation.config import ScenarioConfig
from antsiege.simulation.engine import Match


class ScriptedRng:
    """Stand-in random source that replays fixed draws.

    ``random()`` pops from ``rolls`` and ``integers(n)`` pops from
    ``picks``, mirroring the two draws the engine makes.
    """

    def __init__(
        self,
        rolls: list[float] | None = None,
        picks: list[int] | None = None,
    ) -> None:
        self.rolls = list(rolls or [])
        self.picks = list(picks or [])

    def random(self) -> float:
        return self.rolls.pop(0)

    def integers(self, high: int) -> int:
        pick = self.picks.pop(0)
        assert 0 <= pick < high
        return pick


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def colony(rng: Generator) -> Colony:
    """Two dry tunnels of length 6 with plenty of food."""
    return Colony(food=50, tunnel_count=2, tunnel_length=6, rng=rng)


@pytest.fixture
def spawner(rng: Generator) -> Spawner:
    """A hive producing 1-armor, 1-damage bees."""
    return Spawner(attacker_armor=1, attacker_damage=1, rng=rng)


@pytest.fixture
def small_match(colony: Colony, spawner: Spawner) -> Match:
    return Match(colony=colony, spawner=spawner)


@pytest.fixture
def default_config() -> ScenarioConfig:
    """Default scenario config (no YAML file needed)."""
    return ScenarioConfig()


@pytest.fixture
def scripted() -> type[ScriptedRng]:
    """Factory for random sources with pre-chosen draws."""
    return ScriptedRng
