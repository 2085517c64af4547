"""Match — the turn loop and the public face of the engine.

Owns the colony, the hive and the turn counter, and advances them in the
fixed per-turn order:

1. Ants act (growers roll, throwers throw, eaters digest)
2. Bees act (sting or advance)
3. Locations act (flooding)
4. The hive releases the wave scheduled for this turn

Callers address cells with ``"row,col"`` strings; every fallible
operation returns a :class:`MatchError` instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from antsiege.colony.ant import Boost, make_defender
from antsiege.colony.colony import Colony
from antsiege.hive.spawner import Spawner
from antsiege.simulation.errors import MatchError

if TYPE_CHECKING:
    from antsiege.simulation.config import ScenarioConfig
    from antsiege.world.location import Location

logger = logging.getLogger(__name__)


def parse_coordinates(text: str) -> tuple[int, int]:
    """Split a ``"row,col"`` string into two integers.

    Only plain ASCII digits are accepted on either side of the comma; signs,
    underscores and surrounding whitespace are rejected.

    Raises:
        ValueError: If the string is not two comma-separated integers.
    """
    parts = text.split(",")
    if len(parts) != 2 or not all(p.isascii() and p.isdigit() for p in parts):
        msg = f"expected 'row,col', got {text!r}"
        raise ValueError(msg)
    return int(parts[0]), int(parts[1])


@dataclass
class Match:
    """Drives one encounter forward turn by turn.

    Attributes:
        colony: The defending colony and its tunnels.
        spawner: The hive holding scheduled waves.
        turn: Number of turns taken so far.
    """

    colony: Colony
    spawner: Spawner
    turn: int = 0

    @classmethod
    def from_config(cls, config: ScenarioConfig) -> Match:
        """Build a colony and hive sharing one seeded random generator.

        Args:
            config: Scenario parameters and wave schedule.

        Returns:
            A fresh match at turn 0.
        """
        rng = np.random.default_rng(config.seed)
        colony = Colony(
            food=config.starting_food,
            tunnel_count=config.tunnel_count,
            tunnel_length=config.tunnel_length,
            flood_period=config.flood_period,
            rng=rng,
        )
        spawner = Spawner(config.attacker_armor, config.attacker_damage, rng=rng)
        for wave in config.waves:
            spawner.schedule_wave(wave.turn, wave.count)
        return cls(colony=colony, spawner=spawner)

    # -- Turn loop ----------------------------------------------------------

    def take_turn(self) -> None:
        """Advance the match by one turn."""
        self.colony.ants_act()
        self.colony.bees_act()
        self.colony.places_act()
        self.spawner.invade(self.colony, self.turn)
        self.turn += 1

    def is_won(self) -> bool | None:
        """Evaluate the match outcome.

        Returns:
            False if any bee has reached the queen, True if no bees are
            left in the tunnels or the hive, otherwise None.
        """
        if self.colony.queen_overrun:
            return False
        if not self.colony.all_attackers() and self.spawner.pending_count == 0:
            return True
        return None

    def run(self, max_turns: int) -> bool | None:
        """Take turns until the match is decided or ``max_turns`` elapse.

        Returns:
            The final :meth:`is_won` result.
        """
        for _ in range(max_turns):
            self.take_turn()
            outcome = self.is_won()
            logger.debug(
                "Turn %d done: food=%d bees=%d hive=%d",
                self.turn,
                self.food,
                len(self.colony.all_attackers()),
                self.spawner_pending_count,
            )
            if outcome is not None:
                return outcome
        return self.is_won()

    # -- Player operations --------------------------------------------------

    def deploy(self, type_name: str, coordinates: str) -> MatchError | None:
        """Deploy a new ant of ``type_name`` at ``coordinates``."""
        defender = make_defender(type_name)
        if defender is None:
            return MatchError.UNKNOWN_UNIT_TYPE
        place = self._location_at(coordinates)
        if place is None:
            return MatchError.ILLEGAL_LOCATION
        return self.colony.deploy(defender, place)

    def remove(self, coordinates: str) -> MatchError | None:
        """Remove the outward-facing ant (the guard, if any) at ``coordinates``."""
        place = self._location_at(coordinates)
        if place is None:
            return MatchError.ILLEGAL_LOCATION
        if self.colony.remove_defender(place) is None:
            return MatchError.NO_DEFENDER_AT_LOCATION
        return None

    def apply_boost(self, boost_name: str, coordinates: str) -> MatchError | None:
        """Give the named boost to the ant at ``coordinates``."""
        place = self._location_at(coordinates)
        if place is None:
            return MatchError.ILLEGAL_LOCATION
        boost = Boost.parse(boost_name)
        if boost is None:
            return MatchError.UNKNOWN_BOOST
        return self.colony.apply_boost(boost, place)

    # -- Read-only views ----------------------------------------------------

    @property
    def grid(self) -> list[list[Location]]:
        return self.colony.grid

    @property
    def food(self) -> int:
        return self.colony.food

    @property
    def spawner_pending_count(self) -> int:
        return self.spawner.pending_count

    def available_boost_names(self) -> list[str]:
        """Names of boosts with at least one use left, inventory order."""
        return [boost.value for boost, n in self.colony.boosts.items() if n > 0]

    def _location_at(self, coordinates: str) -> Location | None:
        try:
            row, col = parse_coordinates(coordinates)
        except ValueError:
            return None
        grid = self.colony.grid
        if not (0 <= row < len(grid) and 0 <= col < len(grid[row])):
            return None
        return grid[row][col]
