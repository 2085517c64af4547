"""Colony — the tunnel grid and everything the ants own.

A Colony builds its tunnels once at construction: every tunnel is a chain
of Locations running from the queen's chamber out to a bee entrance.  It
holds the food counter and boost inventory and runs the three per-turn
phases (ants, bees, flooding) across the whole grid.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from numpy.random import Generator

from antsiege.colony.ant import Boost, Defender, Guard
from antsiege.simulation.errors import MatchError
from antsiege.world.location import Location

if TYPE_CHECKING:
    from antsiege.hive.bee import Bee

logger = logging.getLogger(__name__)


def _default_boosts() -> dict[Boost, int]:
    return {Boost.FLIGHT: 1, Boost.STICK: 1, Boost.FREEZE: 1, Boost.SPRAY: 0}


@dataclass
class Colony:
    """Top-level state for the defending colony.

    Attributes:
        food: Food available for deploying ants.
        tunnel_count: Number of parallel tunnels.
        tunnel_length: Locations per tunnel.
        flood_period: Every ``flood_period``-th step of a tunnel is water;
            0 disables flooding.
        rng: Random source shared with the Growers.
        grid: ``grid[tunnel][step]``, step 0 adjoining the queen.
        entrances: The last location of each tunnel, where bees arrive.
        queen_location: Shared sink every tunnel exits into.
        boosts: Available count per boost.
    """

    food: int
    tunnel_count: int
    tunnel_length: int
    flood_period: int = 0
    rng: Generator = field(default_factory=np.random.default_rng, repr=False)
    grid: list[list[Location]] = field(init=False, repr=False)
    entrances: list[Location] = field(init=False, repr=False)
    queen_location: Location = field(init=False, repr=False)
    boosts: dict[Boost, int] = field(default_factory=_default_boosts)

    def __post_init__(self) -> None:
        """Dig the tunnels, linking each step to its queen-side neighbour."""
        if self.tunnel_count < 1 or self.tunnel_length < 1:
            msg = (
                "a colony needs at least one tunnel of at least one step, "
                f"got {self.tunnel_count}x{self.tunnel_length}"
            )
            raise ValueError(msg)
        self.queen_location = Location("Ant Queen")
        self.grid = []
        self.entrances = []
        for tunnel in range(self.tunnel_count):
            row: list[Location] = []
            previous = self.queen_location
            for step in range(self.tunnel_length):
                is_water = (
                    self.flood_period != 0 and (step + 1) % self.flood_period == 0
                )
                kind = "water" if is_water else "tunnel"
                place = Location(
                    f"{kind}[{tunnel},{step}]",
                    is_water=is_water,
                    exit=previous,
                )
                previous.entrance = place
                row.append(place)
                previous = place
            self.grid.append(row)
            self.entrances.append(row[-1])

    # -- Queries ------------------------------------------------------------

    def all_defenders(self) -> list[Defender]:
        """Outward-facing defender of every occupied location, grid order."""
        return [
            place.defender
            for row in self.grid
            for place in row
            if place.defender is not None
        ]

    def all_attackers(self) -> list[Bee]:
        """Every bee in the tunnels, grid order then arrival order."""
        return [bee for row in self.grid for place in row for bee in place.attackers]

    @property
    def queen_overrun(self) -> bool:
        return len(self.queen_location.attackers) > 0

    # -- Mutations ----------------------------------------------------------

    def add_food(self, amount: int) -> None:
        self.food += amount

    def add_boost(self, boost: Boost) -> None:
        self.boosts[boost] = self.boosts.get(boost, 0) + 1
        logger.info("Found a %s boost!", boost.value)

    def deploy(self, defender: Defender, place: Location) -> MatchError | None:
        """Pay for and place a defender.

        Returns:
            None on success, otherwise the reason the deployment failed.
        """
        if self.food < defender.food_cost:
            return MatchError.INSUFFICIENT_RESOURCES
        if not place.add_defender(defender):
            return MatchError.SLOT_OCCUPIED
        self.food -= defender.food_cost
        logger.info("Deployed %s", defender)
        return None

    def remove_defender(self, place: Location) -> Defender | None:
        """Clear the outward-facing slot of ``place``."""
        removed = place.remove_defender()
        if removed is not None:
            logger.info("Removed %s from %s", removed.name, place.name)
        return removed

    def apply_boost(self, boost: Boost, place: Location) -> MatchError | None:
        """Give one unit of ``boost`` to the outward-facing defender.

        The inventory is decremented only when the boost is applied. A boost
        the defender had not used yet goes back into the inventory.
        """
        if self.boosts.get(boost, 0) < 1:
            return MatchError.BOOST_EXHAUSTED
        defender = place.defender
        if defender is None:
            return MatchError.NO_DEFENDER_AT_LOCATION
        if defender.boost is not None:
            self.boosts[defender.boost] = self.boosts.get(defender.boost, 0) + 1
        defender.set_boost(boost)
        self.boosts[boost] -= 1
        return None

    # -- Turn phases --------------------------------------------------------

    def ants_act(self) -> None:
        """Every visible ant acts once.

        A guard hides the ant it shields from :meth:`all_defenders`, so the
        shielded ant is run explicitly right before its guard.
        """
        for ant in self.all_defenders():
            if isinstance(ant, Guard):
                guarded = ant.guarded
                if guarded is not None:
                    guarded.act(self)
            if ant.location is not None:
                ant.act(self)

    def bees_act(self) -> None:
        for bee in self.all_attackers():
            if bee.location is not None:
                bee.act(self)

    def places_act(self) -> None:
        for row in self.grid:
            for place in row:
                place.act()
