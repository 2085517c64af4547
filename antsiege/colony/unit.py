"""Unit — shared armor and placement bookkeeping for ants and bees.

Every piece of damage in the engine flows through
:meth:`Unit.reduce_armor`.  When armor runs out the unit detaches itself
from whatever Location holds it; subclasses decide which slot that is.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from antsiege.colony.colony import Colony
    from antsiege.world.location import Location

logger = logging.getLogger(__name__)


class Unit:
    """Base class for anything that occupies a Location.

    Attributes:
        name: Display name of the unit type.
        armor: Remaining armor; the unit expires at zero or below.
        location: Location currently holding the unit, or None when the
            unit is off the board.
    """

    name: ClassVar[str] = "Unit"

    def __init__(self, armor: int, location: Location | None = None) -> None:
        self.armor = armor
        self.location = location

    def reduce_armor(self, amount: int) -> bool:
        """Apply damage and remove the unit from the board if it expires.

        Args:
            amount: Armor to subtract.

        Returns:
            True if the unit ran out of armor, False if it is still active.
        """
        self.armor -= amount
        if self.armor <= 0:
            logger.info("%s ran out of armor and expired", self)
            self.expire()
            return True
        return False

    def expire(self) -> None:
        """Detach from the current Location.  A no-op once off the board."""
        if self.location is not None:
            self._detach(self.location)

    def _detach(self, location: Location) -> None:
        raise NotImplementedError

    def act(self, colony: Colony) -> None:
        """Perform this unit's behaviour for the current phase."""
        raise NotImplementedError

    def __str__(self) -> str:
        where = self.location.name if self.location is not None else ""
        return f"{self.name}({where})"
