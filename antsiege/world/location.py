"""Location — a single cell of the tunnel network.

Each location holds at most one regular defender plus one guard, and an
ordered list of the bees currently inside it.  Locations are chained:
``exit`` points toward the queen and ``entrance`` points back toward the
tunnel mouth.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from antsiege.colony.ant import Defender
    from antsiege.hive.bee import Bee

logger = logging.getLogger(__name__)


class Location:
    """One node of the tunnel graph.

    Attributes:
        name: Identifier, e.g. ``"tunnel[0,3]"``.
        is_water: Whether the location floods every turn.
        exit: Neighbour toward the queen, or None for a terminal cell.
        entrance: Neighbour toward the tunnel mouth, or None at the mouth.
        occupant: Regular defender in this cell.
        guard: Guard defender shielding the occupant.
        attackers: Bees present, in arrival order.
    """

    def __init__(
        self,
        name: str,
        *,
        is_water: bool = False,
        exit: Location | None = None,
    ) -> None:
        self.name = name
        self.is_water = is_water
        self.exit = exit
        self.entrance: Location | None = None
        self.occupant: Defender | None = None
        self.guard: Defender | None = None
        self.attackers: list[Bee] = []

    # -- Defenders --------------------------------------------------------

    @property
    def defender(self) -> Defender | None:
        """The outward-facing defender: the guard if present, else the occupant."""
        if self.guard is not None:
            return self.guard
        return self.occupant

    @property
    def guarded(self) -> Defender | None:
        """The regular occupant, whether or not a guard shields it."""
        return self.occupant

    def add_defender(self, defender: Defender) -> bool:
        """Place a defender in its slot.

        Args:
            defender: The ant to place.

        Returns:
            True if placed, False if the matching slot is already taken.

        Raises:
            RuntimeError: If the defender is already placed somewhere.
        """
        if defender.location is not None:
            msg = f"{defender} is already placed at {defender.location.name}"
            raise RuntimeError(msg)
        if defender.is_guard:
            if self.guard is not None:
                return False
            self.guard = defender
        else:
            if self.occupant is not None:
                return False
            self.occupant = defender
        defender.location = self
        return True

    def remove_defender(self, defender: Defender | None = None) -> Defender | None:
        """Clear a defender slot.

        With no argument the outward-facing slot is cleared (guard first).
        With a defender, only that defender's own slot is cleared.

        Returns:
            The removed defender, or None if nothing matched.
        """
        if defender is None:
            defender = self.defender
        if defender is None:
            return None
        if defender is self.guard:
            self.guard = None
        elif defender is self.occupant:
            self.occupant = None
        else:
            return None
        defender.location = None
        return defender

    # -- Attackers --------------------------------------------------------

    def add_attacker(self, bee: Bee) -> None:
        if bee not in self.attackers:
            self.attackers.append(bee)
        bee.location = self

    def remove_attacker(self, bee: Bee) -> None:
        if bee in self.attackers:
            self.attackers.remove(bee)
            bee.location = None

    def exit_attacker(self, bee: Bee) -> None:
        """Move a bee one step toward the queen.

        A location without an exit is the end of the line; the bee leaves
        the board entirely.
        """
        self.remove_attacker(bee)
        if self.exit is not None:
            self.exit.add_attacker(bee)
        else:
            logger.info("%s left the tunnels from %s", bee, self.name)

    def closest_attacker(
        self,
        max_distance: int,
        min_distance: int = 0,
    ) -> Bee | None:
        """Return the nearest bee within a band of hop distances.

        Walks from this location through successive ``entrance`` links.
        At each hop ``d`` with ``min_distance <= d <= max_distance`` the
        earliest-arrived bee is returned if the cell holds any.

        Args:
            max_distance: Furthest hop to inspect.
            min_distance: Closest hop that counts.

        Returns:
            The target bee, or None if no cell in range holds one.
        """
        place: Location | None = self
        distance = 0
        while place is not None and distance <= max_distance:
            if distance >= min_distance and place.attackers:
                return place.attackers[0]
            place = place.entrance
            distance += 1
        return None

    # -- Flooding ---------------------------------------------------------

    def act(self) -> None:
        """Resolve flooding: water washes out the guard and non-swimmers."""
        if not self.is_water:
            return
        if self.guard is not None:
            logger.info("%s is washed out of %s", self.guard, self.name)
            self.remove_defender(self.guard)
        if self.occupant is not None and not self.occupant.water_safe:
            logger.info("%s is washed out of %s", self.occupant, self.name)
            self.remove_defender(self.occupant)

    def __repr__(self) -> str:
        return f"Location({self.name!r})"
