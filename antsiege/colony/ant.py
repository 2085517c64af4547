"""Ant -- the defender variants a player can deploy.

The set of defender types is closed: Grower, Thrower, Scuba, Eater and
Guard.  :data:`DEFENDER_TYPES` maps each lowercase type name to its class
and is the only way the engine constructs defenders from user input.

Behaviour summary:

- **Grower** rolls once per turn and either adds food or finds a boost.
- **Thrower** hits the closest bee within range 3 (5 with a flying leaf);
  sticky and icy leaves also debuff the target.  A bug spray boost turns
  the next action into a suicide blast over its own cell.
- **Scuba** is a Thrower that survives flooding.
- **Eater** swallows a bee in its own cell and digests it over several
  turns; taking damage early makes it cough the bee back up.
- **Guard** does nothing itself but shields the regular occupant.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from antsiege.colony.unit import Unit
from antsiege.hive.bee import Status

if TYPE_CHECKING:
    from antsiege.colony.colony import Colony
    from antsiege.hive.bee import Bee
    from antsiege.world.location import Location

logger = logging.getLogger(__name__)

# -- Constants ---------------------------------------------------------------

_THROW_RANGE = 3
_FLYING_THROW_RANGE = 5
_SPRAY_DAMAGE = 10
_DIGESTION_TURNS = 3  # timer value after which the held bee is destroyed

# Grower roll bands, checked in order against one uniform draw in [0, 1)
_FOOD_BAND = 0.6
_FLIGHT_BAND = 0.7
_STICK_BAND = 0.8
_FREEZE_BAND = 0.9
_SPRAY_BAND = 0.95


class Boost(Enum):
    """Single-use modifiers a Grower can find and a player can apply."""

    FLIGHT = "flight"
    STICK = "stick"
    FREEZE = "freeze"
    SPRAY = "spray"

    @classmethod
    def parse(cls, name: str) -> Boost | None:
        """Look up a boost by value or member name, case-insensitively."""
        key = name.strip().lower()
        for boost in cls:
            if key in (boost.value, boost.name.lower()):
                return boost
        return None


class Defender(Unit):
    """Base class for every ant type.

    Attributes:
        food_cost: Food deducted from the colony on deployment.
        water_safe: Whether the ant survives a flooded location.
        is_guard: Whether the ant occupies the guard slot.
        boost: Currently applied boost, if any.
    """

    name: ClassVar[str] = "Ant"
    food_cost: ClassVar[int] = 0
    water_safe: ClassVar[bool] = False
    is_guard: ClassVar[bool] = False

    def __init__(self, armor: int) -> None:
        super().__init__(armor)
        self.boost: Boost | None = None

    def set_boost(self, boost: Boost) -> None:
        self.boost = boost
        logger.info("%s is given a %s boost", self, boost.value)

    def act(self, colony: Colony) -> None:
        """Most ants have no independent action."""

    def _detach(self, location: Location) -> None:
        location.remove_defender(self)


class Grower(Defender):
    """Produces food or finds boosts with a single roll per turn."""

    name: ClassVar[str] = "Grower"
    food_cost: ClassVar[int] = 1

    def __init__(self) -> None:
        super().__init__(armor=1)

    def act(self, colony: Colony) -> None:
        roll = float(colony.rng.random())
        if roll < _FOOD_BAND:
            colony.add_food(1)
        elif roll < _FLIGHT_BAND:
            colony.add_boost(Boost.FLIGHT)
        elif roll < _STICK_BAND:
            colony.add_boost(Boost.STICK)
        elif roll < _FREEZE_BAND:
            colony.add_boost(Boost.FREEZE)
        elif roll < _SPRAY_BAND:
            colony.add_boost(Boost.SPRAY)


class Thrower(Defender):
    """Throws leaves at the nearest bee up the tunnel.

    Attributes:
        damage: Armor removed from the target per throw.
    """

    name: ClassVar[str] = "Thrower"
    food_cost: ClassVar[int] = 4

    def __init__(self) -> None:
        super().__init__(armor=1)
        self.damage = 1

    def act(self, colony: Colony) -> None:
        if self.location is None:
            return
        if self.boost is Boost.SPRAY:
            self._spray()
        else:
            self._throw()

    def _throw(self) -> None:
        max_range = _FLYING_THROW_RANGE if self.boost is Boost.FLIGHT else _THROW_RANGE
        target = self.location.closest_attacker(max_range)
        if target is None:
            return
        logger.info("%s throws a leaf at %s", self, target)
        target.reduce_armor(self.damage)
        if self.boost is Boost.STICK:
            target.status = Status.STUCK
            logger.info("%s is stuck!", target)
        elif self.boost is Boost.FREEZE:
            target.status = Status.COLD
            logger.info("%s is cold!", target)
        self.boost = None

    def _spray(self) -> None:
        logger.info("%s sprays bug repellant everywhere!", self)
        location = self.location
        target = location.closest_attacker(0)
        while target is not None:
            target.reduce_armor(_SPRAY_DAMAGE)
            target = location.closest_attacker(0)
        self.reduce_armor(_SPRAY_DAMAGE)


class Scuba(Thrower):
    """A Thrower that keeps working in flooded tunnels."""

    name: ClassVar[str] = "Scuba"
    food_cost: ClassVar[int] = 5
    water_safe: ClassVar[bool] = True


class Eater(Defender):
    """Swallows a bee whole and digests it over the following turns.

    The digestion timer runs 0 (hungry) -> 1 (just swallowed) -> 2 -> 3
    -> 4, and on the turn after reaching 4 the bee is gone for good and
    the timer resets.  Damage at timer 1 forces the bee back out and
    skips ahead to 3; dying at timer 1 or 2 releases the bee as well.

    Attributes:
        stomach_contents: The bee being digested, off the board.
        digestion_timer: Position in the digestion cycle.
    """

    name: ClassVar[str] = "Eater"
    food_cost: ClassVar[int] = 4

    def __init__(self) -> None:
        super().__init__(armor=2)
        self.stomach_contents: Bee | None = None
        self.digestion_timer = 0

    @property
    def is_full(self) -> bool:
        return self.stomach_contents is not None

    def act(self, colony: Colony) -> None:
        if self.digestion_timer == 0:
            if self.location is None:
                return
            target = self.location.closest_attacker(0)
            if target is not None:
                logger.info("%s eats %s!", self, target)
                self.location.remove_attacker(target)
                self.stomach_contents = target
                self.digestion_timer = 1
        elif self.digestion_timer > _DIGESTION_TURNS:
            if self.stomach_contents is not None:
                logger.info("%s finishes digesting %s", self, self.stomach_contents)
            self.stomach_contents = None
            self.digestion_timer = 0
        else:
            self.digestion_timer += 1

    def reduce_armor(self, amount: int) -> bool:
        remaining = self.armor - amount
        if remaining > 0:
            if self.digestion_timer == 1:
                self._regurgitate()
                self.digestion_timer = _DIGESTION_TURNS
        elif self.digestion_timer in (1, 2):
            self._regurgitate()
        return super().reduce_armor(amount)

    def _regurgitate(self) -> None:
        eaten = self.stomach_contents
        if eaten is None or self.location is None:
            return
        self.stomach_contents = None
        self.location.add_attacker(eaten)
        logger.info("%s coughs up %s!", self, eaten)


class Guard(Defender):
    """Shields the regular occupant of its location from bee stings."""

    name: ClassVar[str] = "Guard"
    food_cost: ClassVar[int] = 4
    is_guard: ClassVar[bool] = True

    def __init__(self) -> None:
        super().__init__(armor=2)

    @property
    def guarded(self) -> Defender | None:
        """The ant this guard is shielding, if any."""
        if self.location is None:
            return None
        return self.location.guarded


DEFENDER_TYPES: dict[str, type[Defender]] = {
    cls.name.lower(): cls for cls in (Grower, Thrower, Eater, Scuba, Guard)
}


def make_defender(type_name: str) -> Defender | None:
    """Construct a defender from its case-insensitive type name.

    Returns:
        A fresh defender, or None if the name is not a known type.
    """
    cls = DEFENDER_TYPES.get(type_name.strip().lower())
    if cls is None:
        return None
    return cls()
