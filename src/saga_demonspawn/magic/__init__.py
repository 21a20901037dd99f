"""Fire*Wolf's sorcery: the spell catalog, casting rules and effects.

Example:
    >>> from saga_demonspawn.magic import CastSession
    >>> session = CastSession(hero, roller, encounter)
    >>> result = session.attempt("FIREBALL")
    >>> if result.requires_sacrifice:
    ...     session.confirm_sacrifice()
    >>> outcome = session.cast("FIREBALL")
"""

from __future__ import annotations

from saga_demonspawn.magic.casting import (
    CastResult,
    calculate_sacrifice_needed,
    can_afford_spell,
    can_sacrifice_lp,
    fundamental_failure_rate,
    natural_inclination_check,
    perform_cast,
    validate_cast,
)
from saga_demonspawn.magic.effects import (
    SpellEffect,
    apply_armour,
    apply_crypt,
    apply_fireball,
    apply_invisibility,
    apply_paralysis,
    apply_poison_needle,
    apply_resurrection,
    apply_retrace,
    apply_timewarp,
    apply_xenophobia,
)
from saga_demonspawn.magic.session import CastSession, SpellCastOutcome
from saga_demonspawn.magic.spells import (
    SPELLS,
    Spell,
    SpellCategory,
    get_available_spells,
    get_spell_by_name,
)


__all__ = [
    # Spells
    "SpellCategory",
    "Spell",
    "SPELLS",
    "get_spell_by_name",
    "get_available_spells",
    # Casting
    "CastResult",
    "natural_inclination_check",
    "can_afford_spell",
    "calculate_sacrifice_needed",
    "can_sacrifice_lp",
    "fundamental_failure_rate",
    "validate_cast",
    "perform_cast",
    # Effects
    "SpellEffect",
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
    # Session
    "CastSession",
    "SpellCastOutcome",
]
