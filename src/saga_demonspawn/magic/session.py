"""A casting session: validate, pay, roll and apply a spell.

The session ties the stateless casting rules to a character and, during a
fight, to the running CombatEncounter. One cast runs as follows:

1. ``attempt`` validates the spell. If POW falls short but LP can cover
   it, a sacrifice is offered.
2. ``confirm_sacrifice`` converts LP into POW one for one, or
   ``cancel_sacrifice`` drops the offer.
3. ``cast`` spends the POW, rolls the Fundamental Failure Rate and, if the
   spell holds, applies its effect to the character and the encounter.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING

from saga_demonspawn.core.constants import ARMOUR_DAMAGE_REDUCTION, XENOPHOBIA_DAMAGE_REDUCTION
from saga_demonspawn.core.exceptions import InvalidCombatPhaseError, SpellError
from saga_demonspawn.core.logging import get_logger
from saga_demonspawn.magic.casting import (
    CastResult,
    can_sacrifice_lp,
    natural_inclination_check,
    perform_cast,
    validate_cast,
)
from saga_demonspawn.magic.effects import (
    SIMPLE_EFFECTS,
    SpellEffect,
    apply_invisibility,
    apply_poison_needle,
    apply_retrace,
)
from saga_demonspawn.magic.spells import Spell, get_available_spells, get_spell_by_name
from saga_demonspawn.models.combat import CombatPhase


if TYPE_CHECKING:
    from saga_demonspawn.engine.dice import Roller
    from saga_demonspawn.engine.encounter import CombatEncounter, TurnResult
    from saga_demonspawn.models.character import Character

logger = get_logger(__name__)

DEFAULT_RETRACE_SECTION = "Previous Section"

# Lingering effects recorded on the character, with their magnitude.
LINGERING_EFFECTS: dict[str, int] = {
    "ARMOUR": ARMOUR_DAMAGE_REDUCTION,
    "XENOPHOBIA": XENOPHOBIA_DAMAGE_REDUCTION,
}


@dataclass
class SpellCastOutcome:
    """Everything that came of a call to ``CastSession.cast``.

    Attributes:
        result: Validation or FFR outcome.
        effect: The spell's effect, or None if the cast never took hold.
        turn: The encounter action the spell caused, if any.
    """

    result: CastResult
    effect: SpellEffect | None = None
    turn: TurnResult | None = None

    @property
    def took_effect(self) -> bool:
        return self.effect is not None


class CastSession:
    """Casts spells for one character, optionally inside a fight.

    Attributes:
        character: The caster, mutated in place.
        roller: The session's dice source.
        encounter: The running fight, or None outside combat.
    """

    def __init__(
        self,
        character: Character,
        roller: Roller,
        encounter: CombatEncounter | None = None,
    ) -> None:
        self.character = character
        self.roller = roller
        self.encounter = encounter
        self._pending_sacrifice: tuple[str, int] | None = None

    # =========================================================================
    # Context
    # =========================================================================

    @property
    def in_combat(self) -> bool:
        return (
            self.encounter is not None
            and self.encounter.is_started
            and not self.encounter.is_over
        )

    @property
    def is_dead(self) -> bool:
        return self.character.current_lp <= 0

    @property
    def pending_sacrifice(self) -> int:
        """LP awaiting confirmation, 0 when nothing is pending."""
        return self._pending_sacrifice[1] if self._pending_sacrifice else 0

    def _require_magic(self) -> None:
        if not self.character.magic_unlocked:
            raise SpellError("Magic has not been unlocked yet")

    def _lookup(self, spell_name: str) -> Spell:
        spell = get_spell_by_name(spell_name)
        if spell is None:
            raise SpellError(f"Unknown spell: {spell_name}", spell_name=spell_name)
        return spell

    # =========================================================================
    # Casting Flow
    # =========================================================================

    def available_spells(self) -> list[Spell]:
        """Spells castable in the current situation.

        Raises:
            SpellError: If magic is still locked.
        """
        self._require_magic()
        return get_available_spells(self.in_combat, self.is_dead)

    def natural_check(self) -> tuple[bool, int]:
        """Roll the Natural Inclination Check. Purely informational."""
        success, roll = natural_inclination_check(self.roller)
        logger.info("Natural inclination check", roll=roll, success=success)
        return success, roll

    def attempt(self, spell_name: str) -> CastResult:
        """Validate a spell and remember any sacrifice it needs.

        Raises:
            SpellError: If magic is locked or the spell is unknown.
        """
        self._require_magic()
        spell = self._lookup(spell_name)
        result = validate_cast(
            spell,
            self.character.current_pow,
            self.character.current_lp,
            self.in_combat,
            self.is_dead,
        )
        self._pending_sacrifice = (
            (spell.name, result.sacrifice_amount) if result.requires_sacrifice else None
        )
        logger.debug(
            "Cast attempted",
            spell=spell.name,
            success=result.success,
            requires_sacrifice=result.requires_sacrifice,
            insufficient_power=result.insufficient_power,
        )
        return result

    def confirm_sacrifice(self) -> int:
        """Turn the offered LP into POW, one for one.

        Returns:
            LP sacrificed.

        Raises:
            SpellError: If no sacrifice is pending, or LP has dropped since
                the offer so that paying it would leave the caster below 1 LP.
                The stale offer is withdrawn.
        """
        if self._pending_sacrifice is None:
            raise SpellError("No LP sacrifice is pending")

        spell_name, amount = self._pending_sacrifice
        current_lp = self.character.current_lp
        if not can_sacrifice_lp(current_lp, amount):
            self._pending_sacrifice = None
            raise SpellError(
                f"Sacrificing {amount} LP would leave no life",
                spell_name=spell_name,
                details={"current_lp": current_lp, "sacrifice": amount},
            )

        self.character.modify_lp(-amount)
        self.character.modify_pow(amount)
        self._pending_sacrifice = None

        logger.info("LP sacrificed for POW", spell=spell_name, amount=amount)
        return amount

    def cancel_sacrifice(self) -> None:
        self._pending_sacrifice = None

    def cast(self, spell_name: str, *, section_name: str = DEFAULT_RETRACE_SECTION) -> SpellCastOutcome:
        """Cast a spell and apply its consequences.

        The spell is validated again first; an invalid or unaffordable cast
        spends nothing. Otherwise POW is paid and the Fundamental Failure
        Rate rolled. A fizzle keeps the POW spent and has no effect.

        Args:
            spell_name: Name of the spell, e.g. "FIREBALL".
            section_name: Destination for RETRACE.

        Returns:
            The cast outcome.

        Raises:
            SpellError: If magic is locked or the spell is unknown.
            InvalidCombatPhaseError: If a fight is on but it is not the
                player's turn.
        """
        self._require_magic()
        spell = self._lookup(spell_name)

        validation = validate_cast(
            spell,
            self.character.current_pow,
            self.character.current_lp,
            self.in_combat,
            self.is_dead,
        )
        if not validation.success:
            return SpellCastOutcome(result=validation)

        if self.in_combat and not self.is_dead:
            phase = self.encounter.phase
            if phase != CombatPhase.PLAYER_TURN_WAITING:
                raise InvalidCombatPhaseError(
                    f"Cannot cast {spell.name} during {phase}",
                    current_phase=str(phase),
                    expected_phases=[str(CombatPhase.PLAYER_TURN_WAITING)],
                )

        self._pending_sacrifice = None
        self.character.modify_pow(-spell.power_cost)
        result = perform_cast(spell, self.roller)
        if result.ffr_failed:
            return SpellCastOutcome(result=result)

        effect = self._build_effect(spell, section_name)
        effect, turn = self._apply_effect(spell, effect)
        return SpellCastOutcome(result=result, effect=effect, turn=turn)

    # =========================================================================
    # Effects
    # =========================================================================

    def _build_effect(self, spell: Spell, section_name: str) -> SpellEffect:
        if spell.name == "INVISIBILITY":
            return apply_invisibility(self.in_combat)
        if spell.name == "POISON NEEDLE":
            return apply_poison_needle(self.roller)
        if spell.name == "RETRACE":
            return apply_retrace(section_name)
        return SIMPLE_EFFECTS[spell.name]()

    def _apply_effect(self, spell: Spell, effect: SpellEffect) -> tuple[SpellEffect, TurnResult | None]:
        character = self.character
        turn = None

        if spell.name in LINGERING_EFFECTS:
            character.add_spell_effect(spell.name, LINGERING_EFFECTS[spell.name])
        elif spell.name == "CRYPT":
            character.set_pow(character.maximum_pow)
        elif spell.name in ("TIMEWARP", "RESURRECTION"):
            restored = max(0, character.maximum_lp - character.current_lp)
            character.set_lp(character.maximum_lp)
            effect = dataclasses.replace(effect, lp_restored=restored)

        if self.in_combat and self.encounter is not None:
            if effect.combat_ended:
                turn = self.encounter.end_by_spell(effect.victory, spell_name=spell.name)
            elif effect.requires_reroll:
                # Back to the start of the section; the fight is abandoned.
                turn = self.encounter.end_by_spell(False, spell_name=spell.name)
            elif effect.enemy_killed:
                turn = self.encounter.kill_enemy_by_spell(spell_name=spell.name)
            elif effect.damage_dealt > 0:
                turn = self.encounter.apply_spell_damage(effect.damage_dealt, spell_name=spell.name)

        logger.info(
            "Spell effect applied",
            spell=spell.name,
            damage_dealt=effect.damage_dealt,
            lp_restored=effect.lp_restored,
            combat_ended=effect.combat_ended,
            enemy_killed=effect.enemy_killed,
        )
        return effect, turn


__all__ = [
    "DEFAULT_RETRACE_SECTION",
    "LINGERING_EFFECTS",
    "SpellCastOutcome",
    "CastSession",
]
