"""Pydantic V2 models for the Sagas of the Demonspawn companion.

Submodules:
    items: Weapon, armour and shield catalog.
    character: The player character record and its rule-checked mutators.
    combat: Enemy, combat state and encounter phases.

Example:
    >>> from saga_demonspawn.models import Character, Enemy
    >>> hero = Character.create(64, 56, 72, 48, 80, 40, 56)
    >>> hero.maximum_lp
    416
"""

from __future__ import annotations

# =============================================================================
# Items
# =============================================================================
from saga_demonspawn.models.items import (
    ALL_ARMOR,
    ALL_WEAPONS,
    ARMOR_CHAIN,
    ARMOR_LEATHER,
    ARMOR_PLATE,
    DOOMBRINGER_NAME,
    HEALING_STONE_NAME,
    SHIELD_STANDARD,
    STARTING_ARMOR,
    STARTING_WEAPONS,
    THE_ORB_NAME,
    WEAPON_ARROW,
    WEAPON_AXE,
    WEAPON_CLUB,
    WEAPON_DAGGER,
    WEAPON_DOOMBRINGER,
    WEAPON_FLAIL,
    WEAPON_HALBERD,
    WEAPON_LANCE,
    WEAPON_MACE,
    WEAPON_SPEAR,
    WEAPON_SWORD,
    Armor,
    Shield,
    Weapon,
    get_armor_by_name,
    get_weapon_by_name,
)

# =============================================================================
# Character
# =============================================================================
from saga_demonspawn.models.character import Character

# =============================================================================
# Combat
# =============================================================================
from saga_demonspawn.models.combat import CombatPhase, CombatState, Enemy


__all__ = [
    # Items
    "Weapon",
    "Armor",
    "Shield",
    "HEALING_STONE_NAME",
    "DOOMBRINGER_NAME",
    "THE_ORB_NAME",
    "WEAPON_ARROW",
    "WEAPON_AXE",
    "WEAPON_CLUB",
    "WEAPON_DAGGER",
    "WEAPON_FLAIL",
    "WEAPON_HALBERD",
    "WEAPON_LANCE",
    "WEAPON_MACE",
    "WEAPON_SPEAR",
    "WEAPON_SWORD",
    "WEAPON_DOOMBRINGER",
    "ALL_WEAPONS",
    "STARTING_WEAPONS",
    "ARMOR_LEATHER",
    "ARMOR_CHAIN",
    "ARMOR_PLATE",
    "ALL_ARMOR",
    "STARTING_ARMOR",
    "SHIELD_STANDARD",
    "get_weapon_by_name",
    "get_armor_by_name",
    # Character
    "Character",
    # Combat
    "CombatPhase",
    "CombatState",
    "Enemy",
]
