"""Dice rolling for the Sagas of the Demonspawn ruleset.

The ruleset only ever needs six-sided dice: the sum of two dice for to-hit,
initiative, death saves and spell checks, a single die for the Healing Stone
and the poison needle, and 2d6 x 8 for characteristic generation.

Every engine function takes a Roller explicitly. One roller instance is
created per play session and injected; there is no module-level generator,
so a seeded session replays identically.
"""

from __future__ import annotations

import random
from typing import Protocol, runtime_checkable

from saga_demonspawn.core.config import get_settings
from saga_demonspawn.core.constants import CHARACTERISTIC_MULTIPLIER
from saga_demonspawn.core.logging import get_logger


logger = get_logger(__name__)


@runtime_checkable
class Roller(Protocol):
    """Capability for producing dice rolls.

    Implementations advance internal generator state on every call and are
    not safe for concurrent use.
    """

    def roll_2d6(self) -> int:
        """Roll two six-sided dice and return the sum (2-12)."""
        ...

    def roll_1d6(self) -> int:
        """Roll one six-sided die (1-6)."""
        ...

    def roll_characteristic(self) -> int:
        """Roll 2d6 x 8 for a characteristic (16-96)."""
        ...

    def set_seed(self, seed: int) -> None:
        """Reseed the generator for a reproducible sequence."""
        ...


class _BaseRoller:
    """Shared roll logic over a ``random.Random`` compatible generator.

    ``log_rolls`` left as None follows ``RulesSettings.log_rolls``.
    """

    def __init__(
        self,
        rng: random.Random,
        *,
        seed: int | None = None,
        log_rolls: bool | None = None,
    ) -> None:
        self._rng = rng
        self._seed = seed
        self._log_rolls = get_settings().rules.log_rolls if log_rolls is None else log_rolls

    @property
    def seed(self) -> int | None:
        """Seed of the current sequence, None when drawing from OS entropy."""
        return self._seed

    @property
    def log_rolls(self) -> bool:
        return self._log_rolls

    def _d6(self) -> int:
        return self._rng.randint(1, 6)

    def roll_2d6(self) -> int:
        first = self._d6()
        second = self._d6()
        if self._log_rolls:
            logger.debug("Dice rolled", expression="2d6", dice=[first, second], total=first + second)
        return first + second

    def roll_1d6(self) -> int:
        value = self._d6()
        if self._log_rolls:
            logger.debug("Dice rolled", expression="1d6", dice=[value], total=value)
        return value

    def roll_characteristic(self) -> int:
        return self.roll_2d6() * CHARACTERISTIC_MULTIPLIER

    def set_seed(self, seed: int) -> None:
        self._rng = random.Random(seed)
        self._seed = seed
        logger.info("Roller reseeded", seed=seed)


class DiceRoller(_BaseRoller):
    """Deterministic roller backed by its own ``random.Random``.

    Two rollers built with the same seed produce identical sequences.
    Without a seed the generator is seeded from OS entropy, which is what a
    normal play session wants.

    Example:
        >>> roller = DiceRoller(seed=42)
        >>> 2 <= roller.roll_2d6() <= 12
        True
    """

    def __init__(self, *, seed: int | None = None, log_rolls: bool | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
            log_rolls: Emit a debug event for every roll. Defaults to the
                ``SAGA_RULES_LOG_ROLLS`` setting.
        """
        super().__init__(random.Random(seed), seed=seed, log_rolls=log_rolls)
        logger.info("DiceRoller initialized", seed=seed)


class SystemRoller(_BaseRoller):
    """Roller drawing from the operating system's entropy source.

    Calling ``set_seed`` switches it to a seeded generator, so it can still
    be pinned for a reproducible session.
    """

    def __init__(self, *, log_rolls: bool | None = None) -> None:
        super().__init__(random.SystemRandom(), log_rolls=log_rolls)
        logger.info("SystemRoller initialized")


__all__ = [
    "Roller",
    "DiceRoller",
    "SystemRoller",
]
