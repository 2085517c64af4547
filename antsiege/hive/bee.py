"""Bee — the attacking unit.

A bee is blocked whenever its location holds a defender; blocked bees
sting, unblocked bees fly one step toward the queen.  Status effects from
boosted leaves last for exactly the bee's next action.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from antsiege.colony.unit import Unit

if TYPE_CHECKING:
    from antsiege.colony.ant import Defender
    from antsiege.colony.colony import Colony
    from antsiege.world.location import Location

logger = logging.getLogger(__name__)


class Status(Enum):
    """One-turn debuff applied to a bee."""

    NONE = "none"
    STUCK = "stuck"
    COLD = "cold"


class Bee(Unit):
    """An attacker advancing through the tunnels toward the queen.

    Attributes:
        damage: Armor removed from a defender per sting.
        status: Debuff for the next action; reset after every act.
    """

    name: ClassVar[str] = "Bee"

    def __init__(
        self,
        armor: int,
        damage: int,
        location: Location | None = None,
    ) -> None:
        super().__init__(armor, location)
        self.damage = damage
        self.status = Status.NONE

    @property
    def is_blocked(self) -> bool:
        return self.location is not None and self.location.defender is not None

    def sting(self, defender: Defender) -> bool:
        """Damage a defender; returns True if it expired."""
        logger.info("%s stings %s!", self, defender)
        return defender.reduce_armor(self.damage)

    def act(self, colony: Colony | None = None) -> None:
        """Sting a blocking defender or advance toward the queen."""
        location = self.location
        if location is not None:
            defender = location.defender
            if defender is not None:
                if self.status is not Status.COLD:
                    self.sting(defender)
            elif self.armor > 0 and self.status is not Status.STUCK:
                location.exit_attacker(self)
        self.status = Status.NONE

    def _detach(self, location: Location) -> None:
        location.remove_attacker(self)
