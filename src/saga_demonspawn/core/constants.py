"""Rule constants for the Sagas of the Demonspawn ruleset.

Every number the combat and magic engines depend on lives here so the
formulas read as rules rather than as magic numbers.
"""

from __future__ import annotations

# =============================================================================
# Characteristics
# =============================================================================

CHARACTERISTIC_MIN = 0
"""Lowest value a characteristic may take."""

CHARACTERISTIC_MAX_AT_CREATION = 999
"""Highest value accepted when a character is created."""

CHARACTERISTIC_MULTIPLIER = 8
"""A characteristic roll is 2d6 times this (16-96)."""

CHARACTERISTIC_NAMES = (
    "strength",
    "speed",
    "stamina",
    "courage",
    "luck",
    "charm",
    "attraction",
)
"""Characteristic field names in rolling order."""

# =============================================================================
# Combat
# =============================================================================

BASE_TO_HIT = 7
"""2d6 roll needed to hit before skill and luck modifiers."""

MIN_TO_HIT = 2
"""The to-hit requirement never drops below this."""

SKILL_PER_TO_HIT_POINT = 10
"""Every full 10 points of skill lowers the to-hit requirement by one."""

LUCKY_THRESHOLD = 72
"""Luck at or above this lowers the to-hit requirement by one."""

DAMAGE_PER_PIP = 5
"""Each point of the to-hit roll deals this much damage."""

STRENGTH_PER_DAMAGE_STEP = 10
"""Every full 10 points of strength adds one damage step."""

STAMINA_PER_ENDURANCE_ROUND = 10
"""Endurance limit is stamina divided by this."""

DEATH_SAVE_MULTIPLIER = 10
"""A death save roll is 2d6 times this, compared against luck."""

SHIELD_PROTECTION = 7
"""Shield protection when carried without armour."""

SHIELD_PROTECTION_WITH_ARMOR = 5
"""Shield protection when carried together with armour."""

# =============================================================================
# Special Items
# =============================================================================

HEALING_STONE_MAX_CHARGES = 50
"""Charges held by a full Healing Stone."""

HEALING_STONE_HEAL_MULTIPLIER = 10
"""Healing Stone restores 1d6 times this."""

DOOMBRINGER_BLOOD_PRICE = 10
"""LP Doombringer takes from its wielder before every attack."""

ORB_DAMAGE_MULTIPLIER = 2
"""Damage multiplier when holding The Orb against a Demonspawn."""

ORB_THROW_TO_HIT = 4
"""2d6 roll needed for a thrown Orb to annihilate a Demonspawn."""

ORB_THROW_MISS_DAMAGE = 200
"""Damage dealt to a Demonspawn when the thrown Orb misses."""

# =============================================================================
# Magic
# =============================================================================

NATURAL_INCLINATION_TARGET = 4
"""2d6 roll needed to overcome the aversion to sorcery."""

FUNDAMENTAL_FAILURE_TARGET = 6
"""2d6 roll needed for a paid spell to take effect."""

FIREBALL_DAMAGE = 50
"""Fixed damage dealt by FIREBALL."""

POISON_NEEDLE_KILL_MIN = 4
"""1d6 roll at or above this means the poison needle kills."""

ARMOUR_DAMAGE_REDUCTION = 10
"""Incoming damage reduction recorded by the ARMOUR spell."""

XENOPHOBIA_DAMAGE_REDUCTION = 5
"""Enemy damage reduction recorded by the XENOPHOBIA spell."""
