"""Rules engine for Sagas of the Demonspawn combat.

This package provides:
- Dice rolling behind an injectable Roller capability
- Pure combat formulas and the functions that resolve attacks and turns
- Special item rules (Doombringer, The Orb, the Healing Stone)
- The CombatEncounter state machine that runs a whole fight

Example:
    >>> from saga_demonspawn.engine import CombatEncounter, DiceRoller
    >>> encounter = CombatEncounter(hero, goblin, DiceRoller(seed=42))
    >>> encounter.start()
"""

from __future__ import annotations

from saga_demonspawn.engine.combat import (
    AttackResult,
    apply_armor_reduction,
    attempt_death_save,
    calculate_damage,
    calculate_initiative,
    calculate_to_hit_requirement,
    check_defeat,
    check_endurance,
    check_victory,
    execute_death_save,
    execute_enemy_attack,
    execute_player_attack,
    next_turn,
    process_enemy_rest,
    process_rest,
    resolve_combat_victory,
    start_combat,
)
from saga_demonspawn.engine.dice import DiceRoller, Roller, SystemRoller
from saga_demonspawn.engine.encounter import CombatEncounter, TurnResult
from saga_demonspawn.engine.items import (
    HealingStoneResult,
    OrbThrowResult,
    apply_orb_bonus,
    doombringer_heal,
    invoke_healing_stone,
    is_doombringer_equipped,
    pay_blood_price,
    throw_orb,
)


__all__ = [
    # Dice
    "Roller",
    "DiceRoller",
    "SystemRoller",
    # Combat
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
    # Items
    "OrbThrowResult",
    "HealingStoneResult",
    "is_doombringer_equipped",
    "pay_blood_price",
    "doombringer_heal",
    "apply_orb_bonus",
    "throw_orb",
    "invoke_healing_stone",
    # Encounter
    "CombatEncounter",
    "TurnResult",
]
