"""What each spell does once it has been cast successfully.

The ``apply_*`` functions only describe the effect. Changing the character
or the fight (restoring POW, damaging the enemy, ending combat) is left to
the caller; see ``saga_demonspawn.magic.session.CastSession``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from saga_demonspawn.core.constants import (
    ARMOUR_DAMAGE_REDUCTION,
    FIREBALL_DAMAGE,
    POISON_NEEDLE_KILL_MIN,
    XENOPHOBIA_DAMAGE_REDUCTION,
)


if TYPE_CHECKING:
    from saga_demonspawn.engine.dice import Roller

CRYPT_DESTINATION = "CRYPT"


@dataclass(frozen=True)
class SpellEffect:
    """Description of a spell's result.

    Attributes:
        success: Whether the spell took effect.
        message: Player-facing narration.
        damage_dealt: LP of damage to deal to the enemy.
        lp_restored: LP restored to the caster.
        combat_ended: Whether the fight ends.
        victory: Whether the ending counts as a win.
        enemy_killed: Whether the enemy dies outright.
        requires_reroll: All characteristics must be rerolled.
        navigate_to: Destination section, if the spell moves the caster.
    """

    success: bool
    message: str
    damage_dealt: int = 0
    lp_restored: int = 0
    combat_ended: bool = False
    victory: bool = False
    enemy_killed: bool = False
    requires_reroll: bool = False
    navigate_to: str = ""


def apply_armour() -> SpellEffect:
    return SpellEffect(
        success=True,
        message=(
            "Magical armor of light surrounds you! "
            f"Incoming damage reduced by {ARMOUR_DAMAGE_REDUCTION} points."
        ),
    )


def apply_crypt() -> SpellEffect:
    """Return to the Crypts; the caller restores POW to maximum."""
    return SpellEffect(
        success=True,
        message="You are transported to the Crypts. Your POWER is fully restored!",
        navigate_to=CRYPT_DESTINATION,
    )


def apply_fireball() -> SpellEffect:
    return SpellEffect(
        success=True,
        message="A ball of flame strikes the enemy!",
        damage_dealt=FIREBALL_DAMAGE,
    )


def apply_invisibility(in_combat: bool) -> SpellEffect:
    """Vanish. In combat this ends the fight as a win."""
    if in_combat:
        return SpellEffect(
            success=True,
            message="You fade from sight. The enemy cannot see you!",
            combat_ended=True,
            victory=True,
        )
    return SpellEffect(success=True, message="You become invisible, avoiding danger ahead.")


def apply_paralysis() -> SpellEffect:
    """Freeze the enemy and escape; no victory credit."""
    return SpellEffect(
        success=True,
        message="The enemy is paralyzed! You escape combat.",
        combat_ended=True,
        victory=False,
    )


def apply_poison_needle(roller: Roller) -> SpellEffect:
    """Roll 1d6: 4-6 kills the enemy, 1-3 means it is immune."""
    roll = roller.roll_1d6()
    if roll >= POISON_NEEDLE_KILL_MIN:
        return SpellEffect(
            success=True,
            message=f"The poisoned needle strikes! (rolled {roll}) The poison is invariably fatal!",
            enemy_killed=True,
        )
    return SpellEffect(
        success=True,
        message=f"The poisoned needle strikes! (rolled {roll}) But the enemy is immune to the poison.",
    )


def apply_resurrection() -> SpellEffect:
    return SpellEffect(
        success=True,
        message="Death is not your fate! You are resurrected at the start of this section.",
        requires_reroll=True,
    )


def apply_retrace(section_name: str) -> SpellEffect:
    return SpellEffect(
        success=True,
        message=f"You trace your steps back to: {section_name}",
        navigate_to=section_name,
    )


def apply_timewarp() -> SpellEffect:
    """Restart the section; the caller restores LP to maximum."""
    return SpellEffect(
        success=True,
        message="Time warps around you! You return to the beginning of this section.",
    )


def apply_xenophobia() -> SpellEffect:
    return SpellEffect(
        success=True,
        message=(
            "The enemy is gripped by fear! "
            f"Their damage is reduced by {XENOPHOBIA_DAMAGE_REDUCTION} points."
        ),
    )


# Effects that need no context beyond the spell itself.
SIMPLE_EFFECTS: dict[str, Callable[[], SpellEffect]] = {
    "ARMOUR": apply_armour,
    "CRYPT": apply_crypt,
    "FIREBALL": apply_fireball,
    "PARALYSIS": apply_paralysis,
    "RESURRECTION": apply_resurrection,
    "TIMEWARP": apply_timewarp,
    "XENOPHOBIA": apply_xenophobia,
}


__all__ = [
    "CRYPT_DESTINATION",
    "SpellEffect",
    "SIMPLE_EFFECTS",
    "apply_armour",
    "apply_crypt",
    "apply_fireball",
    "apply_invisibility",
    "apply_paralysis",
    "apply_poison_needle",
    "apply_resurrection",
    "apply_retrace",
    "apply_timewarp",
    "apply_xenophobia",
]
