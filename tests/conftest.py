"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Sagas of the Demonspawn rules engine test suite.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

import pytest

from saga_demonspawn.core.config import RulesSettings
from saga_demonspawn.models.character import Character
from saga_demonspawn.models.combat import Enemy


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Scripted Dice
# =============================================================================


class ScriptedRoller:
    """Roller that hands out predetermined results in order.

    ``roll_2d6`` and ``roll_1d6`` both draw from the same queue, so a test
    lists every roll it expects in the order the engine makes them.
    """

    def __init__(self, rolls: Iterable[int] = ()) -> None:
        self._rolls = list(rolls)
        self.calls = 0
        self.seed: int | None = None

    def queue(self, *rolls: int) -> None:
        """Append more results to the end of the script."""
        self._rolls.extend(rolls)

    @property
    def remaining(self) -> int:
        return len(self._rolls)

    def _next(self) -> int:
        if not self._rolls:
            raise AssertionError("ScriptedRoller ran out of rolls")
        self.calls += 1
        return self._rolls.pop(0)

    def roll_2d6(self) -> int:
        return self._next()

    def roll_1d6(self) -> int:
        return self._next()

    def roll_characteristic(self) -> int:
        return self.roll_2d6() * 8

    def set_seed(self, seed: int) -> None:
        self.seed = seed


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from saga_demonspawn.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def rules() -> RulesSettings:
    """Rule toggles as printed in the book."""
    return RulesSettings(spell_effects_reduce_damage=False, log_rolls=False)


@pytest.fixture
def wired_rules() -> RulesSettings:
    """Rule toggles with lingering spell effects reducing damage."""
    return RulesSettings(spell_effects_reduce_damage=True, log_rolls=False)


# =============================================================================
# Dice Fixtures
# =============================================================================


@pytest.fixture
def scripted_roller() -> Callable[..., ScriptedRoller]:
    """Factory for scripted rollers.

    Returns:
        Callable taking the rolls to hand out, in order.
    """

    def _make(*rolls: int) -> ScriptedRoller:
        return ScriptedRoller(rolls)

    return _make


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def hero() -> Character:
    """Fire*Wolf with the reference characteristics (max LP 416).

    STR 64, SPD 56, STA 72, CRG 48, LCK 80, CHM 40, ATT 56.
    """
    return Character.create(64, 56, 72, 48, 80, 40, 56)


@pytest.fixture
def goblin() -> Enemy:
    """A plain Goblin: 150 LP, weapon +5, no armour."""
    return Enemy.create(
        name="Goblin",
        strength=40,
        speed=35,
        stamina=30,
        courage=25,
        luck=20,
        skill=0,
        current_lp=150,
        maximum_lp=150,
        weapon_bonus=5,
        armor_protection=0,
    )


@pytest.fixture
def demonspawn() -> Enemy:
    """A Demonspawn, vulnerable to The Orb."""
    return Enemy.create(
        name="Demonspawn",
        strength=80,
        speed=60,
        stamina=90,
        courage=70,
        luck=50,
        skill=10,
        current_lp=300,
        maximum_lp=300,
        weapon_bonus=15,
        armor_protection=10,
        is_demonspawn=True,
    )
