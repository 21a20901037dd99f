"""Round-by-round flow of a single combat encounter.

The CombatEncounter drives one fight from initiative to its end. It wraps
the base combat functions with the flow rules a play session needs:

- forced rests when a side runs out of endurance, with the opponent getting
  a free attack
- Doombringer's blood price and healing, and The Orb's damage doubling
- victory credit, the one-time death save and defeat
- fleeing and spell-driven endings

Each public action returns a TurnResult describing what happened and the
phase the encounter moved to. Every narrative line also lands in the
CombatState's combat log.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from saga_demonspawn.core.config import RulesSettings, get_settings
from saga_demonspawn.core.constants import (
    DOOMBRINGER_BLOOD_PRICE,
    HEALING_STONE_MAX_CHARGES,
    ORB_THROW_TO_HIT,
)
from saga_demonspawn.core.exceptions import CombatError, InvalidCombatPhaseError
from saga_demonspawn.core.logging import get_logger
from saga_demonspawn.engine.combat import (
    AttackResult,
    attempt_death_save,
    check_defeat,
    check_endurance,
    check_victory,
    execute_enemy_attack,
    execute_player_attack,
    next_turn,
    process_enemy_rest,
    process_rest,
    resolve_combat_victory,
    start_combat,
)
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
from saga_demonspawn.models.combat import CombatPhase


if TYPE_CHECKING:
    from saga_demonspawn.engine.dice import Roller
    from saga_demonspawn.models.character import Character
    from saga_demonspawn.models.combat import CombatState, Enemy

logger = get_logger(__name__)


# Effects whose recorded magnitude reduces incoming damage when enabled.
PROTECTIVE_SPELL_EFFECTS: tuple[str, ...] = ("ARMOUR", "XENOPHOBIA")


@dataclass
class TurnResult:
    """Result of one encounter action.

    Attributes:
        action: Name of the action taken.
        phase: Phase the encounter is in afterwards.
        round_number: Combat round afterwards.
        player_attack: The player's attack, if one was rolled.
        enemy_attack: The enemy's attack, if one was rolled.
        doombringer_healed: LP Doombringer restored this action.
        orb_throw: Outcome of throwing The Orb.
        healing: Outcome of using the Healing Stone.
        death_save_roll: The death save roll, if one was made.
        death_save_success: Whether the death save succeeded.
        messages: Combat log lines added by this action.
    """

    action: str
    phase: CombatPhase
    round_number: int = 1
    player_attack: AttackResult | None = None
    enemy_attack: AttackResult | None = None
    doombringer_healed: int = 0
    orb_throw: OrbThrowResult | None = None
    healing: HealingStoneResult | None = None
    death_save_roll: int | None = None
    death_save_success: bool | None = None
    messages: list[str] = field(default_factory=list)


class CombatEncounter:
    """State machine for one fight between the player and an enemy.

    Example:
        >>> encounter = CombatEncounter(hero, goblin, DiceRoller(seed=7))
        >>> encounter.start().phase
        <CombatPhase.PLAYER_TURN_WAITING: 'player_turn_waiting'>

    Attributes:
        player: The player character, mutated in place.
        enemy: The opponent, owned by the encounter.
        roller: The session's dice source.
    """

    def __init__(
        self,
        player: Character,
        enemy: Enemy,
        roller: Roller,
        *,
        settings: RulesSettings | None = None,
    ) -> None:
        """Initialize the encounter.

        Args:
            player: The player character.
            enemy: The validated opponent.
            roller: Dice source shared with the rest of the session.
            settings: Rule toggles; defaults to the application settings.
        """
        self.player = player
        self.enemy = enemy
        self.roller = roller
        self._settings = settings or get_settings().rules
        self._state: CombatState | None = None
        self._turn: TurnResult | None = None
        self._turn_callbacks: list[Callable[[TurnResult], None]] = []

        logger.info("CombatEncounter initialized", enemy=enemy.name)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def state(self) -> CombatState:
        """The live combat state.

        Raises:
            CombatError: If the encounter has not been started.
        """
        if self._state is None:
            raise CombatError("Combat has not started")
        return self._state

    @property
    def is_started(self) -> bool:
        return self._state is not None

    @property
    def phase(self) -> CombatPhase | None:
        """Current phase, or None before start()."""
        return self._state.phase if self._state else None

    @property
    def is_over(self) -> bool:
        return self._state is not None and self._state.phase.is_terminal

    @property
    def victory(self) -> bool:
        return self.phase == CombatPhase.VICTORY

    def add_turn_callback(self, callback: Callable[[TurnResult], None]) -> None:
        """Register a callback invoked with every TurnResult.

        Args:
            callback: Function to call with the result of each action.
        """
        self._turn_callbacks.append(callback)

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _require_phase(self, action: str, *phases: CombatPhase) -> CombatState:
        state = self.state
        if state.phase not in phases:
            raise InvalidCombatPhaseError(
                f"Cannot {action} during {state.phase}",
                current_phase=str(state.phase),
                expected_phases=[str(phase) for phase in phases],
                round_number=state.current_round,
            )
        return state

    def _begin(self, action: str) -> TurnResult:
        self._turn = TurnResult(action=action, phase=self.state.phase)
        return self._turn

    def _finish(self, turn: TurnResult) -> TurnResult:
        turn.phase = self.state.phase
        turn.round_number = self.state.current_round
        self._turn = None

        for callback in self._turn_callbacks:
            try:
                callback(turn)
            except Exception:
                logger.exception("Turn callback failed", action=turn.action)
        return turn

    def _log(self, entry: str) -> None:
        self.state.add_log_entry(entry)
        if self._turn is not None:
            self._turn.messages.append(entry)

    def _set_phase(self, phase: CombatPhase) -> None:
        state = self.state
        previous = state.phase
        state.phase = phase
        if phase.is_terminal:
            state.is_active = False
        logger.debug(
            "Combat phase changed",
            previous=str(previous),
            phase=str(phase),
            round=state.current_round,
        )

    def _phase_for_turn(self) -> CombatPhase:
        return CombatPhase.PLAYER_TURN_WAITING if self.state.player_turn else CombatPhase.ENEMY_ACTING

    def _spell_effect_reduction(self) -> int:
        if not self._settings.spell_effects_reduce_damage:
            return 0
        return sum(self.player.get_spell_effect(name) for name in PROTECTIVE_SPELL_EFFECTS)

    def _player_strike(self, turn: TurnResult) -> bool:
        """Roll the player's attack with all item rules applied.

        Returns:
            False if Doombringer's blood price killed the player first.
        """
        state = self.state
        round_number = state.current_round

        doombringer = is_doombringer_equipped(self.player)
        if doombringer:
            pay_blood_price(self.player)
            self._log(f"[R{round_number}] Doombringer thirsts for blood... -{DOOMBRINGER_BLOOD_PRICE} LP")
            self._log(
                f"[R{round_number}] Current LP: {self.player.current_lp}/{self.player.maximum_lp}"
            )
            if self.player.current_lp <= 0:
                self._log("[Defeat] Doombringer has drained your life!")
                self._set_phase(CombatPhase.DEFEAT)
                return False

        enemy_lp_before = state.enemy.current_lp
        result = execute_player_attack(state, self.player, self.roller)

        if not result.hit:
            self._log(f"[R{round_number}] You rolled {result.roll} (need {result.requirement}+) - MISS!")
            turn.player_attack = result
            return True

        self._log(f"[R{round_number}] You rolled {result.roll} (need {result.requirement}+) - HIT!")
        boosted = apply_orb_bonus(state, self.player, result)
        if boosted is not result:
            self._log(
                f"[R{round_number}] The Orb pulses with power! "
                f"Damage doubled: {result.final_damage} -> {boosted.final_damage}"
            )
            result = boosted
        self._log(
            f"[R{round_number}] Enemy takes {result.final_damage} damage "
            f"({result.target_lp} LP remaining)"
        )

        if doombringer:
            healed = doombringer_heal(self.player, result, enemy_lp_before)
            turn.doombringer_healed = healed
            if healed:
                self._log(f"[R{round_number}] Doombringer feeds on pain... +{healed} LP healed!")
            elif result.final_damage > 0:
                self._log(f"[R{round_number}] Doombringer feeds on pain... (already at maximum LP)")

        turn.player_attack = result
        return True

    def _enemy_strike(self, turn: TurnResult) -> None:
        state = self.state
        round_number = state.current_round

        result = execute_enemy_attack(
            state,
            self.player,
            self.roller,
            spell_effect_reduction=self._spell_effect_reduction(),
        )
        if result.hit:
            self._log(
                f"[R{round_number}] Enemy rolled {result.roll} (need {result.requirement}+) - HIT!"
            )
            self._log(
                f"[R{round_number}] Enemy deals {result.final_damage} damage "
                f"({result.target_lp} LP remaining)"
            )
        else:
            self._log(
                f"[R{round_number}] Enemy rolled {result.roll} (need {result.requirement}+) - MISS!"
            )
        turn.enemy_attack = result

    def _resolve_victory(self) -> None:
        self._log(f"[Victory] {self.enemy.name} defeated!")
        resolve_combat_victory(self.player)
        self._log(
            f"[Victory] Skill increased to {self.player.skill}. "
            f"Enemies defeated: {self.player.enemies_defeated}"
        )
        self._set_phase(CombatPhase.VICTORY)

    def _end_of_action(self) -> None:
        """Check for victory, then defeat, then pass the turn."""
        state = self.state
        if check_victory(state):
            self._resolve_victory()
            return

        if check_defeat(self.player):
            if not state.death_save_used:
                self._log(f"[Critical] Your LP dropped to {self.player.current_lp}!")
                self._set_phase(CombatPhase.DEATH_SAVE_OFFERED)
            else:
                self._log("[Defeat] You have been defeated!")
                self._set_phase(CombatPhase.DEFEAT)
            return

        next_turn(state)
        self._set_phase(self._phase_for_turn())

    # =========================================================================
    # Actions
    # =========================================================================

    def start(self) -> TurnResult:
        """Roll initiative and hand the first turn to the winner.

        Raises:
            InvalidCombatPhaseError: If the encounter was already started.
        """
        if self._state is not None:
            raise InvalidCombatPhaseError(
                "Combat has already started",
                current_phase=str(self._state.phase),
            )

        self._state = start_combat(self.player, self.enemy, self.roller)
        turn = self._begin("start")
        self._log(
            f"[Initiative] Player: {self._state.player_initiative}, "
            f"Enemy: {self._state.enemy_initiative}"
        )
        if self._state.player_first_strike:
            self._log("[Initiative] You strike first!")
        else:
            self._log(f"[Initiative] {self.enemy.name} strikes first!")
        self._set_phase(self._phase_for_turn())
        return self._finish(turn)

    def player_attack(self) -> TurnResult:
        """Attack the enemy, or start resting if endurance has run out.

        A player out of endurance does not roll; the encounter moves to
        REST_PENDING_PLAYER and the next enemy_turn() is a free attack.
        """
        state = self._require_phase("attack", CombatPhase.PLAYER_TURN_WAITING)
        turn = self._begin("attack")
        self._set_phase(CombatPhase.PLAYER_ACTING)

        if check_endurance(state.rounds_since_last_rest, state.endurance_limit):
            self._log(f"[Round {state.current_round}] Endurance depleted! Must rest.")
            self._set_phase(CombatPhase.REST_PENDING_PLAYER)
            return self._finish(turn)

        if self._player_strike(turn):
            self._end_of_action()
        return self._finish(turn)

    def use_healing_stone(self) -> TurnResult:
        """Heal 1d6 x 10 from the Healing Stone; the player's turn continues.

        Raises:
            RuleViolationError: If the stone is depleted or LP is full.
        """
        state = self._require_phase("use the Healing Stone", CombatPhase.PLAYER_TURN_WAITING)
        healing = invoke_healing_stone(self.player, self.roller)
        turn = self._begin("healing_stone")
        turn.healing = healing

        self._log(f"[R{state.current_round}] You invoke the Healing Stone... (rolled {healing.roll})")
        self._log(
            f"[R{state.current_round}] +{healing.healed} LP restored! "
            f"(Charges: {healing.charges_remaining}/{HEALING_STONE_MAX_CHARGES})"
        )
        return self._finish(turn)

    def throw_orb(self) -> TurnResult:
        """Hurl The Orb; this uses up the player's turn.

        Raises:
            RuleViolationError: If The Orb cannot be thrown.
        """
        state = self._require_phase("throw The Orb", CombatPhase.PLAYER_TURN_WAITING)
        outcome = throw_orb(state, self.player, self.roller)
        turn = self._begin("throw_orb")
        turn.orb_throw = outcome
        self._set_phase(CombatPhase.PLAYER_ACTING)

        self._log(f"[R{state.current_round}] You hurl The Orb at the enemy!")
        self._log(f"[R{state.current_round}] Rolled {outcome.roll} (need {ORB_THROW_TO_HIT}+)")
        if not outcome.affected:
            self._log("[The Orb] The Orb has no effect on this creature!")
        elif outcome.hit:
            self._log("[The Orb] The Orb strikes true! The Demonspawn is annihilated in brilliant light!")
        else:
            self._log(
                f"[The Orb] The Orb's light sears the Demonspawn! {outcome.damage_dealt} damage dealt! "
                f"({state.enemy.current_lp} LP remaining)"
            )
        self._log("[The Orb] The Orb explodes and is destroyed!")

        self._end_of_action()
        return self._finish(turn)

    def enemy_turn(self) -> TurnResult:
        """Play out the enemy's turn.

        If the player is resting the enemy gets a free attack and the
        player's endurance is restored. If the enemy is out of endurance it
        rests instead and the player gets a free attack. Otherwise the enemy
        attacks normally.
        """
        state = self._require_phase(
            "take the enemy turn",
            CombatPhase.ENEMY_ACTING,
            CombatPhase.REST_PENDING_PLAYER,
        )
        turn = self._begin("enemy_turn")
        round_number = state.current_round

        if state.phase == CombatPhase.REST_PENDING_PLAYER:
            self._log(f"[R{round_number}] Enemy attacks while you rest...")
            self._set_phase(CombatPhase.ENEMY_ACTING)
            self._enemy_strike(turn)
            process_rest(state)
            self._log(f"[R{round_number}] Rested! Endurance restored.")
        elif check_endurance(state.enemy_rounds_since_last_rest, state.enemy_endurance_limit):
            self._log(f"[R{round_number}] Enemy endurance depleted! Enemy must rest.")
            self._set_phase(CombatPhase.REST_PENDING_ENEMY)
            self._log(f"[R{round_number}] You attack while the enemy rests...")
            if not self._player_strike(turn):
                return self._finish(turn)
            process_enemy_rest(state)
            self._log(f"[R{round_number}] Enemy rested! Enemy endurance restored.")
        else:
            self._enemy_strike(turn)

        self._end_of_action()
        return self._finish(turn)

    def attempt_death_save(self) -> TurnResult:
        """Roll the offered death save.

        Success restores full LP, restarts the fight at round 1 and re-rolls
        initiative. Failure is defeat.
        """
        state = self._require_phase("attempt a death save", CombatPhase.DEATH_SAVE_OFFERED)
        turn = self._begin("death_save")
        roll, success = attempt_death_save(state, self.player, self.roller)
        turn.death_save_roll = roll
        turn.death_save_success = success

        if success:
            self._log(f"[Death Save] Rolled {roll} vs Luck {self.player.luck} - SUCCESS!")
            self._log(f"[Death Save] Restored to {self.player.current_lp} LP. Combat restarted!")
            self._log(
                f"[Initiative] Player: {state.player_initiative}, Enemy: {state.enemy_initiative}"
            )
            self._set_phase(self._phase_for_turn())
        else:
            self._log(f"[Death Save] Rolled {roll} vs Luck {self.player.luck} - FAILED!")
            self._set_phase(CombatPhase.DEFEAT)
        return self._finish(turn)

    def flee(self) -> TurnResult:
        """Run from the fight. No victory credit is given."""
        self._require_phase("flee", CombatPhase.PLAYER_TURN_WAITING)
        turn = self._begin("flee")
        self._log("[Fled] You fled from combat!")
        self._set_phase(CombatPhase.FLED)
        return self._finish(turn)

    # =========================================================================
    # Spell Hooks
    # =========================================================================

    def apply_spell_damage(self, damage: int, *, spell_name: str) -> TurnResult:
        """Deal spell damage to the enemy, floored at 0 LP.

        Casting does not use up the player's turn, but killing the enemy
        ends the encounter in victory.
        """
        state = self._require_phase("cast a spell", CombatPhase.PLAYER_TURN_WAITING)
        turn = self._begin(f"spell:{spell_name}")
        state.enemy.current_lp = max(0, state.enemy.current_lp - damage)
        self._log(f"{spell_name} deals {damage} damage to {self.enemy.name}!")
        if check_victory(state):
            self._resolve_victory()
        return self._finish(turn)

    def kill_enemy_by_spell(self, *, spell_name: str) -> TurnResult:
        state = self._require_phase("cast a spell", CombatPhase.PLAYER_TURN_WAITING)
        turn = self._begin(f"spell:{spell_name}")
        state.enemy.current_lp = 0
        self._log(f"{self.enemy.name} is killed by {spell_name}!")
        self._resolve_victory()
        return self._finish(turn)

    def end_by_spell(self, victory: bool, *, spell_name: str) -> TurnResult:
        """End the fight through magic.

        A victorious ending (INVISIBILITY) reaches VICTORY without the kill
        and skill credit; an escape (PARALYSIS) counts as fleeing.
        RESURRECTION may be cast while the death save is on offer and
        abandons the fight as an escape.
        """
        self._require_phase(
            "cast a spell", CombatPhase.PLAYER_TURN_WAITING, CombatPhase.DEATH_SAVE_OFFERED
        )
        turn = self._begin(f"spell:{spell_name}")
        if victory:
            self._log("Combat ended via magic (victory)!")
            self._set_phase(CombatPhase.VICTORY)
        else:
            self._log("Combat ended via magic (escape)!")
            self._set_phase(CombatPhase.FLED)
        return self._finish(turn)


__all__ = [
    "PROTECTIVE_SPELL_EFFECTS",
    "TurnResult",
    "CombatEncounter",
]
