"""Spell cast validation and the Fundamental Failure Rate.

Running short of POW is not an error. ``validate_cast`` reports it in the
returned CastResult, either offering an LP sacrifice to cover the shortfall
or flagging the cast as unaffordable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from saga_demonspawn.core.constants import FUNDAMENTAL_FAILURE_TARGET, NATURAL_INCLINATION_TARGET
from saga_demonspawn.core.logging import get_logger
from saga_demonspawn.magic.spells import NO_COMBAT_SPELL_NAMES


if TYPE_CHECKING:
    from saga_demonspawn.engine.dice import Roller
    from saga_demonspawn.magic.spells import Spell

logger = get_logger(__name__)


@dataclass
class CastResult:
    """Outcome of validating or performing a cast.

    Attributes:
        success: Validation passed, or the spell survived its FFR roll.
        ffr_failed: The spell fizzled on the Fundamental Failure Rate.
        insufficient_power: Not enough POW and no safe sacrifice possible.
        message: Player-facing description.
        power_spent: POW consumed by the cast.
        requires_sacrifice: The caster must confirm an LP sacrifice first.
        sacrifice_amount: LP to sacrifice for the same amount of POW.
    """

    success: bool = False
    ffr_failed: bool = False
    insufficient_power: bool = False
    message: str = ""
    power_spent: int = 0
    requires_sacrifice: bool = False
    sacrifice_amount: int = 0


def natural_inclination_check(roller: Roller) -> tuple[bool, int]:
    """Roll to see if Fire*Wolf overcomes his aversion to magic (2d6 >= 4).

    Returns:
        Tuple of (success, roll).
    """
    roll = roller.roll_2d6()
    return roll >= NATURAL_INCLINATION_TARGET, roll


def can_afford_spell(current_pow: int, spell_cost: int) -> bool:
    return current_pow >= spell_cost


def calculate_sacrifice_needed(current_pow: int, spell_cost: int) -> int:
    """LP that must be turned into POW to pay for a spell, 0 if affordable."""
    return max(0, spell_cost - current_pow)


def can_sacrifice_lp(current_lp: int, sacrifice_amount: int) -> bool:
    """Whether the sacrifice leaves the caster with at least 1 LP."""
    return current_lp > sacrifice_amount


def fundamental_failure_rate(roller: Roller) -> tuple[bool, int]:
    """Roll the Fundamental Failure Rate; the spell works on 2d6 >= 6.

    Returns:
        Tuple of (success, roll).
    """
    roll = roller.roll_2d6()
    return roll >= FUNDAMENTAL_FAILURE_TARGET, roll


def validate_cast(
    spell: Spell,
    current_pow: int,
    current_lp: int,
    in_combat: bool,
    is_dead: bool,
) -> CastResult:
    """Check whether a spell may be cast right now.

    Checks run in order: life-or-death restriction, combat-only restriction,
    no-combat restriction, then affordability. Nothing is deducted here.

    Args:
        spell: The spell to cast.
        current_pow: Caster's current POW.
        current_lp: Caster's current LP.
        in_combat: Whether a fight is in progress.
        is_dead: Whether the caster's LP is zero or below.

    Returns:
        A CastResult; ``success`` is True only when the spell is affordable
        as is. A shortfall that LP can cover comes back with
        ``requires_sacrifice`` set.
    """
    if spell.death_only and not is_dead:
        return CastResult(message="This spell can only be cast when you are dead")
    if is_dead and not spell.death_only:
        return CastResult(message="Only a resurrection spell can be cast when you are dead")
    if spell.combat_only and not in_combat:
        return CastResult(message="This spell can only be cast during combat")
    if in_combat and not spell.combat_only and spell.name in NO_COMBAT_SPELL_NAMES:
        return CastResult(message="This spell cannot be cast during combat")

    if can_afford_spell(current_pow, spell.power_cost):
        return CastResult(success=True)

    sacrifice = calculate_sacrifice_needed(current_pow, spell.power_cost)
    if not can_sacrifice_lp(current_lp, sacrifice):
        return CastResult(
            insufficient_power=True,
            message=(
                f"Insufficient POWER ({current_pow}/{spell.power_cost}). "
                f"Cannot sacrifice {sacrifice} LP without dying."
            ),
        )

    return CastResult(
        requires_sacrifice=True,
        sacrifice_amount=sacrifice,
        message=(
            f"Insufficient POWER ({current_pow}/{spell.power_cost}). "
            f"Sacrifice {sacrifice} LP for {sacrifice} POW?"
        ),
    )


def perform_cast(spell: Spell, roller: Roller) -> CastResult:
    """Roll the FFR for a cast whose POW has already been paid.

    The cost counts as spent whether or not the spell fizzles.
    """
    success, roll = fundamental_failure_rate(roller)
    if not success:
        logger.info("Spell fizzled", spell=spell.name, ffr_roll=roll)
        return CastResult(
            ffr_failed=True,
            power_spent=spell.power_cost,
            message=(
                f"The spell fizzles and fails! "
                f"(rolled {roll}, needed {FUNDAMENTAL_FAILURE_TARGET}+)"
            ),
        )

    logger.info("Spell cast", spell=spell.name, ffr_roll=roll)
    return CastResult(
        success=True,
        power_spent=spell.power_cost,
        message=f"Spell cast successfully! (FFR roll: {roll})",
    )


__all__ = [
    "CastResult",
    "natural_inclination_check",
    "can_afford_spell",
    "calculate_sacrifice_needed",
    "can_sacrifice_lp",
    "fundamental_failure_rate",
    "validate_cast",
    "perform_cast",
]
