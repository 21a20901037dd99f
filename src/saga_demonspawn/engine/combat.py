"""Combat rules for the Sagas of the Demonspawn ruleset.

The module is split in two layers:

- Pure formulas (initiative, to-hit, damage, armour, endurance, death save)
  that take plain numbers or a roller and never touch game state.
- Orchestration functions that resolve an attack or advance a turn by
  mutating a CombatState and the player Character in place and return a
  result record describing what happened.

Item-specific rules (Doombringer, The Orb) sit on top of this layer in
``saga_demonspawn.engine.items``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from saga_demonspawn.core.constants import (
    BASE_TO_HIT,
    DAMAGE_PER_PIP,
    DEATH_SAVE_MULTIPLIER,
    LUCKY_THRESHOLD,
    MIN_TO_HIT,
    SKILL_PER_TO_HIT_POINT,
    STAMINA_PER_ENDURANCE_ROUND,
    STRENGTH_PER_DAMAGE_STEP,
)
from saga_demonspawn.core.logging import get_logger
from saga_demonspawn.models.combat import CombatState


if TYPE_CHECKING:
    from saga_demonspawn.engine.dice import Roller
    from saga_demonspawn.models.character import Character
    from saga_demonspawn.models.combat import Enemy

logger = get_logger(__name__)


@dataclass(frozen=True)
class AttackResult:
    """Outcome of one attack roll.

    Attributes:
        roll: The 2d6 to-hit roll.
        requirement: Minimum roll needed to hit.
        hit: Whether the attack hit.
        damage_before_armor: Raw damage; 0 on a miss.
        final_damage: Damage after armour; 0 on a miss.
        target_lp: Target's LP after the attack.
    """

    roll: int
    requirement: int
    hit: bool
    damage_before_armor: int = 0
    final_damage: int = 0
    target_lp: int = 0


# =============================================================================
# Pure Formulas
# =============================================================================


def calculate_initiative(player: Character, enemy: Enemy, roller: Roller) -> tuple[int, int, bool]:
    """Roll initiative for both sides.

    Each side rolls 2d6, player first, and adds Speed + Courage + Luck. The
    player strikes first only on a strictly higher total; ties go to the
    enemy.

    Args:
        player: The player character.
        enemy: The opponent.
        roller: Dice source.

    Returns:
        Tuple of (player_initiative, enemy_initiative, player_goes_first).
    """
    player_roll = roller.roll_2d6()
    enemy_roll = roller.roll_2d6()

    player_initiative = player_roll + player.speed + player.courage + player.luck
    enemy_initiative = enemy_roll + enemy.speed + enemy.courage + enemy.luck
    player_first = player_initiative > enemy_initiative

    logger.debug(
        "Initiative rolled",
        player_roll=player_roll,
        enemy_roll=enemy_roll,
        player_initiative=player_initiative,
        enemy_initiative=enemy_initiative,
        player_first=player_first,
    )
    return player_initiative, enemy_initiative, player_first


def calculate_to_hit_requirement(skill: int, luck: int) -> int:
    """Minimum 2d6 roll needed to hit.

    Base 7, minus one per 10 full points of skill, minus one more for luck of
    72 or better, never below 2.
    """
    requirement = BASE_TO_HIT - skill // SKILL_PER_TO_HIT_POINT
    if luck >= LUCKY_THRESHOLD:
        requirement -= 1
    return max(MIN_TO_HIT, requirement)


def calculate_damage(roll: int, strength: int, weapon_bonus: int) -> int:
    """Raw damage of a hit: roll x 5 + (strength // 10) x 5 + weapon bonus."""
    return (
        roll * DAMAGE_PER_PIP
        + (strength // STRENGTH_PER_DAMAGE_STEP) * DAMAGE_PER_PIP
        + weapon_bonus
    )


def apply_armor_reduction(damage: int, armor_protection: int) -> int:
    """Subtract armour from damage, never going below zero."""
    return max(0, damage - armor_protection)


def check_endurance(rounds_since_last_rest: int, endurance_limit: int) -> bool:
    """Whether a combatant has fought long enough that it must rest.

    A limit of zero or less never forces a rest.
    """
    return endurance_limit > 0 and rounds_since_last_rest >= endurance_limit


def execute_death_save(luck: int, roller: Roller) -> tuple[int, bool]:
    """Roll a death save: (2d6 x 10) against Luck, equal counts as success.

    Returns:
        Tuple of (roll, success).
    """
    roll = roller.roll_2d6() * DEATH_SAVE_MULTIPLIER
    return roll, roll <= luck


# =============================================================================
# Combat State Orchestration
# =============================================================================


def start_combat(player: Character, enemy: Enemy, roller: Roller) -> CombatState:
    """Create the combat state for a new encounter and roll initiative.

    Endurance limits are fixed here from each side's Stamina // 10.

    Args:
        player: The player character.
        enemy: The validated opponent; the state takes ownership of it.
        roller: Dice source.

    Returns:
        A fresh, active CombatState in round 1.
    """
    state = CombatState(
        enemy=enemy,
        endurance_limit=player.stamina // STAMINA_PER_ENDURANCE_ROUND,
        enemy_endurance_limit=enemy.stamina // STAMINA_PER_ENDURANCE_ROUND,
    )
    _apply_initiative(state, player, roller)

    logger.info(
        "Combat started",
        enemy=enemy.name,
        player_initiative=state.player_initiative,
        enemy_initiative=state.enemy_initiative,
        player_first=state.player_first_strike,
        endurance_limit=state.endurance_limit,
        enemy_endurance_limit=state.enemy_endurance_limit,
    )
    return state


def _apply_initiative(state: CombatState, player: Character, roller: Roller) -> None:
    player_initiative, enemy_initiative, player_first = calculate_initiative(
        player, state.enemy, roller
    )
    state.player_initiative = player_initiative
    state.enemy_initiative = enemy_initiative
    state.player_first_strike = player_first
    state.player_turn = player_first


def execute_player_attack(state: CombatState, player: Character, roller: Roller) -> AttackResult:
    """Resolve the player's attack against the enemy.

    On a hit the enemy loses the damage after its armour, floored at 0 LP.
    """
    requirement = calculate_to_hit_requirement(player.skill, player.luck)
    roll = roller.roll_2d6()
    enemy = state.enemy

    if roll < requirement:
        logger.debug("Player attack missed", roll=roll, requirement=requirement)
        return AttackResult(roll=roll, requirement=requirement, hit=False, target_lp=enemy.current_lp)

    damage_before_armor = calculate_damage(roll, player.strength, player.weapon_damage_bonus)
    final_damage = apply_armor_reduction(damage_before_armor, enemy.armor_protection)
    enemy.current_lp = max(0, enemy.current_lp - final_damage)

    logger.debug(
        "Player attack hit",
        roll=roll,
        requirement=requirement,
        damage_before_armor=damage_before_armor,
        final_damage=final_damage,
        enemy_lp=enemy.current_lp,
    )
    return AttackResult(
        roll=roll,
        requirement=requirement,
        hit=True,
        damage_before_armor=damage_before_armor,
        final_damage=final_damage,
        target_lp=enemy.current_lp,
    )


def execute_enemy_attack(
    state: CombatState,
    player: Character,
    roller: Roller,
    *,
    spell_effect_reduction: int = 0,
) -> AttackResult:
    """Resolve the enemy's attack against the player.

    The player's armour and shield reduce the damage. Player LP is not
    floored, so a big hit can push it below zero.

    Args:
        state: The live combat state.
        player: The player character.
        roller: Dice source.
        spell_effect_reduction: Extra flat reduction applied after armour,
            used when lingering protective spells are wired into combat.

    Returns:
        The attack outcome.
    """
    enemy = state.enemy
    requirement = calculate_to_hit_requirement(enemy.skill, enemy.luck)
    roll = roller.roll_2d6()

    if roll < requirement:
        logger.debug("Enemy attack missed", roll=roll, requirement=requirement)
        return AttackResult(roll=roll, requirement=requirement, hit=False, target_lp=player.current_lp)

    damage_before_armor = calculate_damage(roll, enemy.strength, enemy.weapon_bonus)
    final_damage = apply_armor_reduction(damage_before_armor, player.armor_protection)
    if spell_effect_reduction:
        final_damage = apply_armor_reduction(final_damage, spell_effect_reduction)
    player.modify_lp(-final_damage)

    logger.debug(
        "Enemy attack hit",
        roll=roll,
        requirement=requirement,
        damage_before_armor=damage_before_armor,
        final_damage=final_damage,
        spell_effect_reduction=spell_effect_reduction,
        player_lp=player.current_lp,
    )
    return AttackResult(
        roll=roll,
        requirement=requirement,
        hit=True,
        damage_before_armor=damage_before_armor,
        final_damage=final_damage,
        target_lp=player.current_lp,
    )


def next_turn(state: CombatState) -> None:
    """Pass the turn to the other side.

    When control returns to whichever side struck first, a new round begins
    and both endurance counters tick.
    """
    state.player_turn = not state.player_turn
    if state.player_turn == state.player_first_strike:
        state.current_round += 1
        state.rounds_since_last_rest += 1
        state.enemy_rounds_since_last_rest += 1
        logger.debug("New round started", round=state.current_round)


def process_rest(state: CombatState) -> None:
    state.rounds_since_last_rest = 0


def process_enemy_rest(state: CombatState) -> None:
    state.enemy_rounds_since_last_rest = 0


def check_victory(state: CombatState) -> bool:
    return state.enemy.current_lp <= 0


def check_defeat(player: Character) -> bool:
    return player.current_lp <= 0


def resolve_combat_victory(player: Character) -> None:
    """Credit the player for a kill: +1 enemies defeated and +1 skill."""
    player.increment_enemies_defeated()
    player.modify_skill(1)
    logger.info(
        "Combat victory resolved",
        skill=player.skill,
        enemies_defeated=player.enemies_defeated,
    )


def attempt_death_save(state: CombatState, player: Character, roller: Roller) -> tuple[int, bool]:
    """Spend the encounter's one death save.

    On success the player returns to full LP and the fight restarts from
    round 1 with fresh endurance and a new initiative roll; the enemy keeps
    its current LP. If the save was already used nothing is rolled.

    Returns:
        Tuple of (roll, success); (0, False) when already used.
    """
    if state.death_save_used:
        return 0, False

    roll, success = execute_death_save(player.luck, roller)
    state.death_save_used = True

    if success:
        player.set_lp(player.maximum_lp)
        state.current_round = 1
        state.rounds_since_last_rest = 0
        state.enemy_rounds_since_last_rest = 0
        _apply_initiative(state, player, roller)

    logger.info("Death save attempted", roll=roll, luck=player.luck, success=success)
    return roll, success


__all__ = [
    "AttackResult",
    "calculate_initiative",
    "calculate_to_hit_requirement",
    "calculate_damage",
    "apply_armor_reduction",
    "check_endurance",
    "execute_death_save",
    "start_combat",
    "execute_player_attack",
    "execute_enemy_attack",
    "next_turn",
    "process_rest",
    "process_enemy_rest",
    "check_victory",
    "check_defeat",
    "resolve_combat_victory",
    "attempt_death_save",
]
