"""Weapons, armour and the shield of the Demonspawn ruleset.

Items are immutable catalog entries. A character's empty weapon or armour
slot is ``None``; there is no placeholder "no armour" item.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from saga_demonspawn.core.constants import SHIELD_PROTECTION, SHIELD_PROTECTION_WITH_ARMOR


HEALING_STONE_NAME = "Healing Stone"
DOOMBRINGER_NAME = "Doombringer"
THE_ORB_NAME = "The Orb"


class Weapon(BaseModel):
    """A weapon with a flat damage bonus.

    Attributes:
        name: Display name.
        damage_bonus: Added to every damaging hit.
        description: Flavour text and usage notes.
        special: Whether the weapon carries special rules (Doombringer).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    damage_bonus: int = Field(ge=0)
    description: str = ""
    special: bool = False


class Armor(BaseModel):
    """Armour providing flat damage reduction."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    protection: int = Field(ge=0)
    description: str = ""


class Shield(BaseModel):
    """A shield whose protection drops when worn with armour."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    protection: int = Field(ge=0)
    protection_with_armor: int = Field(ge=0)
    description: str = ""

    def protection_for(self, armor: Armor | None) -> int:
        """Protection this shield adds given the armour worn with it."""
        return self.protection if armor is None else self.protection_with_armor


# =============================================================================
# Weapons
# =============================================================================

WEAPON_ARROW = Weapon(name="Arrow", damage_bonus=10, description="Ranged, single use")
WEAPON_AXE = Weapon(name="Axe", damage_bonus=15, description="Standard melee weapon")
WEAPON_CLUB = Weapon(name="Club", damage_bonus=8, description="Basic melee weapon")
WEAPON_DAGGER = Weapon(name="Dagger", damage_bonus=5, description="Light, concealable")
WEAPON_FLAIL = Weapon(name="Flail", damage_bonus=7, description="Standard melee weapon")
WEAPON_HALBERD = Weapon(name="Halberd", damage_bonus=12, description="Two-handed weapon")
WEAPON_LANCE = Weapon(name="Lance", damage_bonus=12, description="Mounted/charge weapon")
WEAPON_MACE = Weapon(name="Mace", damage_bonus=14, description="Heavy melee weapon")
WEAPON_SPEAR = Weapon(name="Spear", damage_bonus=12, description="Can be thrown")
WEAPON_SWORD = Weapon(name="Sword", damage_bonus=10, description="Standard melee weapon")
WEAPON_DOOMBRINGER = Weapon(
    name=DOOMBRINGER_NAME,
    damage_bonus=20,
    description="Cursed blade: -10 LP per attack, heal on hit",
    special=True,
)

ALL_WEAPONS: tuple[Weapon, ...] = (
    WEAPON_ARROW,
    WEAPON_AXE,
    WEAPON_CLUB,
    WEAPON_DAGGER,
    WEAPON_FLAIL,
    WEAPON_HALBERD,
    WEAPON_LANCE,
    WEAPON_MACE,
    WEAPON_SPEAR,
    WEAPON_SWORD,
    WEAPON_DOOMBRINGER,
)

STARTING_WEAPONS: tuple[Weapon, ...] = (WEAPON_SWORD, WEAPON_DAGGER, WEAPON_CLUB)

# =============================================================================
# Armour and Shield
# =============================================================================

ARMOR_LEATHER = Armor(
    name="Leather Armor", protection=5, description="Light armor, no movement penalty"
)
ARMOR_CHAIN = Armor(name="Chain Mail", protection=8, description="Medium armor, no movement penalty")
ARMOR_PLATE = Armor(name="Plate Mail", protection=12, description="Heavy armor, no movement penalty")

ALL_ARMOR: tuple[Armor, ...] = (ARMOR_LEATHER, ARMOR_CHAIN, ARMOR_PLATE)

# None stands for fighting unarmoured.
STARTING_ARMOR: tuple[Armor | None, ...] = (None, ARMOR_LEATHER)

SHIELD_STANDARD = Shield(
    name="Shield",
    protection=SHIELD_PROTECTION,
    protection_with_armor=SHIELD_PROTECTION_WITH_ARMOR,
    description="Protection varies if worn with armor",
)


def get_weapon_by_name(name: str) -> Weapon | None:
    """Find a weapon by exact name.

    Args:
        name: Weapon name, e.g. "Sword".

    Returns:
        The weapon, or None if no weapon has that name.
    """
    return next((weapon for weapon in ALL_WEAPONS if weapon.name == name), None)


def get_armor_by_name(name: str) -> Armor | None:
    """Find armour by exact name, or None if there is none."""
    return next((armor for armor in ALL_ARMOR if armor.name == name), None)


__all__ = [
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
]
