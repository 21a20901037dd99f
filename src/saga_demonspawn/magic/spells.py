"""The ten spells of Fire*Wolf's sorcery.

The catalog is static data in book order. Restrictions are carried as flags
on each spell; ``get_available_spells`` filters the catalog for the current
situation.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class SpellCategory(StrEnum):
    """Broad purpose of a spell."""

    OFFENSIVE = "Offensive"
    DEFENSIVE = "Defensive"
    NAVIGATION = "Navigation"
    TACTICAL = "Tactical"
    RECOVERY = "Recovery"


class Spell(BaseModel):
    """An immutable catalog entry.

    Attributes:
        name: Spell name in capitals, as printed in the book.
        power_cost: POW spent on every cast.
        description: What the spell does.
        category: Broad purpose.
        combat_only: Castable only during combat.
        death_only: Castable only when LP has fallen to zero or below.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    power_cost: int = Field(ge=0)
    description: str
    category: SpellCategory
    combat_only: bool = False
    death_only: bool = False


# Spells that move Fire*Wolf elsewhere and so cannot be cast mid-fight.
NO_COMBAT_SPELL_NAMES: frozenset[str] = frozenset({"CRYPT", "RETRACE"})

SPELLS: tuple[Spell, ...] = (
    Spell(
        name="ARMOUR",
        power_cost=25,
        description="Creates magical armor. Reduces incoming damage by 10 points.",
        category=SpellCategory.DEFENSIVE,
    ),
    Spell(
        name="CRYPT",
        power_cost=150,
        description="Returns you to the Crypts for POWER restoration.",
        category=SpellCategory.NAVIGATION,
    ),
    Spell(
        name="FIREBALL",
        power_cost=15,
        description="Hurls a ball of flame. Deals 50 LP damage to enemy.",
        category=SpellCategory.OFFENSIVE,
        combat_only=True,
    ),
    Spell(
        name="INVISIBILITY",
        power_cost=30,
        description="Renders you invisible. Avoid combat and proceed as if victorious.",
        category=SpellCategory.TACTICAL,
    ),
    Spell(
        name="PARALYSIS",
        power_cost=30,
        description="Paralyzes enemy. Escape combat immediately without victory.",
        category=SpellCategory.TACTICAL,
        combat_only=True,
    ),
    Spell(
        name="POISON NEEDLE",
        power_cost=25,
        description="Shoots poisoned needle. Roll 1d6: 4-6 kills enemy, 1-3 immune.",
        category=SpellCategory.OFFENSIVE,
        combat_only=True,
    ),
    Spell(
        name="RESURRECTION",
        power_cost=50,
        description="Returns to section start when killed. Reroll all stats.",
        category=SpellCategory.RECOVERY,
        death_only=True,
    ),
    Spell(
        name="RETRACE",
        power_cost=20,
        description="Returns to any previously visited section.",
        category=SpellCategory.NAVIGATION,
    ),
    Spell(
        name="TIMEWARP",
        power_cost=10,
        description="Resets section to starting state. Restores all LP.",
        category=SpellCategory.NAVIGATION,
    ),
    Spell(
        name="XENOPHOBIA",
        power_cost=15,
        description="Causes enemy to fear you. Reduces their damage by 5 points.",
        category=SpellCategory.OFFENSIVE,
        combat_only=True,
    ),
)


def get_spell_by_name(name: str) -> Spell | None:
    """Look up a spell by its exact (upper-case) name."""
    return next((spell for spell in SPELLS if spell.name == name), None)


def get_available_spells(in_combat: bool, is_dead: bool) -> list[Spell]:
    """List the spells castable right now, in catalog order.

    A dead character may only cast death-only spells and a living one never
    can. Combat-only spells are dropped outside combat.

    Args:
        in_combat: Whether a fight is in progress.
        is_dead: Whether the character's LP is zero or below.

    Returns:
        The castable spells.
    """
    available = []
    for spell in SPELLS:
        if spell.death_only != is_dead:
            continue
        if spell.combat_only and not in_combat:
            continue
        available.append(spell)
    return available


__all__ = [
    "SpellCategory",
    "Spell",
    "SPELLS",
    "NO_COMBAT_SPELL_NAMES",
    "get_spell_by_name",
    "get_available_spells",
]
