"""Special item rules layered around the base attack.

Doombringer, The Orb and the Healing Stone change how a player action
plays out, but the base to-hit and damage formulas in
``saga_demonspawn.engine.combat`` know nothing about them. The encounter
calls these helpers before and after the base attack.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING

from saga_demonspawn.core.constants import (
    DOOMBRINGER_BLOOD_PRICE,
    HEALING_STONE_HEAL_MULTIPLIER,
    ORB_DAMAGE_MULTIPLIER,
    ORB_THROW_MISS_DAMAGE,
    ORB_THROW_TO_HIT,
)
from saga_demonspawn.core.exceptions import RuleViolationError
from saga_demonspawn.core.logging import get_logger
from saga_demonspawn.models.items import DOOMBRINGER_NAME, HEALING_STONE_NAME, THE_ORB_NAME


if TYPE_CHECKING:
    from saga_demonspawn.engine.combat import AttackResult
    from saga_demonspawn.engine.dice import Roller
    from saga_demonspawn.models.character import Character
    from saga_demonspawn.models.combat import CombatState

logger = get_logger(__name__)


@dataclass(frozen=True)
class OrbThrowResult:
    """Outcome of hurling The Orb.

    Attributes:
        roll: The 2d6 throw roll.
        hit: Whether the roll met the target of 4.
        affected: Whether the target was a Demonspawn at all.
        damage_dealt: LP the enemy actually lost.
        enemy_killed: Whether the enemy was reduced to 0 LP.
    """

    roll: int
    hit: bool
    affected: bool
    damage_dealt: int = 0
    enemy_killed: bool = False


@dataclass(frozen=True)
class HealingStoneResult:
    """Outcome of drawing on the Healing Stone.

    Attributes:
        roll: The 1d6 roll.
        heal_amount: Rolled healing before caps (roll x 10).
        healed: LP actually restored.
        charges_remaining: Charges left afterwards.
    """

    roll: int
    heal_amount: int
    healed: int
    charges_remaining: int


# =============================================================================
# Doombringer
# =============================================================================


def is_doombringer_equipped(player: Character) -> bool:
    return player.equipped_weapon is not None and player.equipped_weapon.name == DOOMBRINGER_NAME


def pay_blood_price(player: Character) -> int:
    """Take Doombringer's 10 LP price for swinging it.

    Returns:
        The player's LP afterwards, which may be zero or below.
    """
    player.modify_lp(-DOOMBRINGER_BLOOD_PRICE)
    logger.debug(f"{DOOMBRINGER_NAME} blood price paid", player_lp=player.current_lp)
    return player.current_lp


def doombringer_heal(player: Character, result: AttackResult, enemy_lp_before: int) -> int:
    """Heal the player by the damage Doombringer just dealt.

    If the hit killed the enemy, healing is capped at the LP the enemy had
    left before the hit. Healing never takes the player past maximum LP.

    Args:
        player: The player character.
        result: The resolved attack, after any Orb doubling.
        enemy_lp_before: Enemy LP immediately before the hit.

    Returns:
        LP actually restored.
    """
    if not result.hit or result.final_damage <= 0:
        return 0

    heal = result.final_damage
    if result.target_lp <= 0:
        heal = min(heal, enemy_lp_before)
    heal = min(heal, player.maximum_lp - player.current_lp)
    if heal <= 0:
        return 0

    player.modify_lp(heal)
    logger.debug(f"{DOOMBRINGER_NAME} healed the player", healed=heal, player_lp=player.current_lp)
    return heal


# =============================================================================
# The Orb
# =============================================================================


def apply_orb_bonus(state: CombatState, player: Character, result: AttackResult) -> AttackResult:
    """Double a hit's damage when The Orb is held against a Demonspawn.

    The extra damage is taken from the enemy here, floored at 0 LP.

    Returns:
        The attack result with doubled final damage and the new enemy LP,
        or the original result when The Orb does not apply.
    """
    enemy = state.enemy
    if not (result.hit and player.orb_equipped and enemy.is_demonspawn):
        return result

    extra = result.final_damage * (ORB_DAMAGE_MULTIPLIER - 1)
    enemy.current_lp = max(0, enemy.current_lp - extra)
    logger.debug(
        f"{THE_ORB_NAME} doubled damage",
        original_damage=result.final_damage,
        doubled_damage=result.final_damage + extra,
        enemy_lp=enemy.current_lp,
    )
    return dataclasses.replace(
        result,
        final_damage=result.final_damage + extra,
        target_lp=enemy.current_lp,
    )


def throw_orb(state: CombatState, player: Character, roller: Roller) -> OrbThrowResult:
    """Hurl The Orb at the enemy, destroying it.

    Against a Demonspawn a roll of 4+ kills outright and anything lower still
    deals 200 damage. Other enemies are unaffected. The Orb is gone either
    way.

    Raises:
        RuleViolationError: If The Orb is not possessed, already destroyed,
            or currently held in hand.
    """
    if not player.orb_possessed or player.orb_destroyed:
        raise RuleViolationError(f"{THE_ORB_NAME} is not available to throw", rule="orb_unavailable")
    if player.orb_equipped:
        raise RuleViolationError(
            f"Unequip {THE_ORB_NAME} before throwing it", rule="orb_equipped"
        )

    enemy = state.enemy
    roll = roller.roll_2d6()
    hit = roll >= ORB_THROW_TO_HIT
    lp_before = enemy.current_lp

    if enemy.is_demonspawn:
        enemy.current_lp = 0 if hit else max(0, enemy.current_lp - ORB_THROW_MISS_DAMAGE)

    player.destroy_orb()

    result = OrbThrowResult(
        roll=roll,
        hit=hit,
        affected=enemy.is_demonspawn,
        damage_dealt=lp_before - enemy.current_lp,
        enemy_killed=enemy.is_demonspawn and enemy.current_lp <= 0,
    )
    logger.info(
        f"{THE_ORB_NAME} thrown",
        roll=roll,
        hit=hit,
        affected=result.affected,
        damage_dealt=result.damage_dealt,
        enemy_lp=enemy.current_lp,
    )
    return result


# =============================================================================
# Healing Stone
# =============================================================================


def invoke_healing_stone(player: Character, roller: Roller) -> HealingStoneResult:
    """Roll 1d6 x 10 and heal from the Healing Stone.

    The stone is checked before rolling so a refused use spends no roll.

    Raises:
        RuleViolationError: If the stone is depleted or LP is already full.
    """
    if player.healing_stone_charges <= 0:
        raise RuleViolationError(f"{HEALING_STONE_NAME} is depleted", rule="healing_stone_depleted")
    if player.current_lp >= player.maximum_lp:
        raise RuleViolationError("Already at full health", rule="full_health")

    roll = roller.roll_1d6()
    heal_amount = roll * HEALING_STONE_HEAL_MULTIPLIER
    healed = player.use_healing_stone(heal_amount)

    logger.info(
        f"{HEALING_STONE_NAME} used",
        roll=roll,
        healed=healed,
        charges_remaining=player.healing_stone_charges,
    )
    return HealingStoneResult(
        roll=roll,
        heal_amount=heal_amount,
        healed=healed,
        charges_remaining=player.healing_stone_charges,
    )


__all__ = [
    "OrbThrowResult",
    "HealingStoneResult",
    "is_doombringer_equipped",
    "pay_blood_price",
    "doombringer_heal",
    "apply_orb_bonus",
    "throw_orb",
    "invoke_healing_stone",
]
