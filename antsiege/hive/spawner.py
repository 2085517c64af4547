"""Spawner — the hive that releases scheduled waves of bees.

The spawner is itself a Location: scheduled bees wait inside it until
their turn comes, then each one is dropped at a randomly chosen tunnel
entrance of the colony.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from antsiege.hive.bee import Bee
from antsiege.world.location import Location

if TYPE_CHECKING:
    from numpy.random import Generator

    from antsiege.colony.colony import Colony

logger = logging.getLogger(__name__)


class Spawner(Location):
    """Holds the wave schedule and injects bees into the tunnels.

    Attributes:
        attacker_armor: Armor given to every scheduled bee.
        attacker_damage: Sting damage of every scheduled bee.
        waves: Bees to release, keyed by turn number.
        rng: Random source used to pick entrances.
    """

    def __init__(
        self,
        attacker_armor: int,
        attacker_damage: int,
        rng: Generator | None = None,
    ) -> None:
        super().__init__("Hive")
        self.attacker_armor = attacker_armor
        self.attacker_damage = attacker_damage
        self.waves: dict[int, list[Bee]] = {}
        self.rng = rng if rng is not None else np.random.default_rng()

    @property
    def pending_count(self) -> int:
        """Bees still waiting in the hive."""
        return len(self.attackers)

    def __repr__(self) -> str:
        return f"Spawner(pending={self.pending_count})"

    def schedule_wave(self, turn: int, count: int) -> Spawner:
        """Create ``count`` bees to be released at the end of ``turn``.

        Repeated calls for the same turn add to that turn's wave.

        Returns:
            The spawner itself, so calls can be chained.
        """
        wave = self.waves.setdefault(turn, [])
        for _ in range(count):
            bee = Bee(self.attacker_armor, self.attacker_damage)
            self.add_attacker(bee)
            wave.append(bee)
        return self

    def invade(self, colony: Colony, turn: int) -> list[Bee]:
        """Release the wave scheduled for ``turn`` into the colony.

        Args:
            colony: The colony whose entrances receive the bees.
            turn: Current turn number.

        Returns:
            The bees dispatched, empty if no wave was scheduled.
        """
        wave = self.waves.pop(turn, [])
        entrances = colony.entrances
        for bee in wave:
            self.remove_attacker(bee)
            entrance = entrances[int(self.rng.integers(len(entrances)))]
            entrance.add_attacker(bee)
        if wave:
            logger.info("Turn %d: %d bees invade the colony", turn, len(wave))
        return wave
