"""Integration tests for combat flow.

Tests complete encounters from character creation through initiative to
resolution, with both scripted and seeded dice.
"""

from __future__ import annotations

import pytest

from saga_demonspawn.core.config import RulesSettings
from saga_demonspawn.engine.combat import (
    apply_armor_reduction,
    calculate_damage,
    calculate_to_hit_requirement,
    next_turn,
    start_combat,
)
from saga_demonspawn.engine.dice import DiceRoller
from saga_demonspawn.engine.encounter import CombatEncounter, TurnResult
from saga_demonspawn.magic.casting import calculate_sacrifice_needed, can_sacrifice_lp
from saga_demonspawn.magic.session import CastSession
from saga_demonspawn.models.character import Character
from saga_demonspawn.models.combat import CombatPhase, Enemy
from saga_demonspawn.models.items import ARMOR_CHAIN, WEAPON_DOOMBRINGER


MAX_ACTIONS = 1000


def _play_out(encounter: CombatEncounter) -> list[TurnResult]:
    """Drive an encounter to its end, always attacking."""
    turns = [encounter.start()]
    while not encounter.is_over:
        assert len(turns) < MAX_ACTIONS, "encounter did not finish"
        phase = encounter.phase
        if phase == CombatPhase.PLAYER_TURN_WAITING:
            turns.append(encounter.player_attack())
        elif phase in (CombatPhase.ENEMY_ACTING, CombatPhase.REST_PENDING_PLAYER):
            turns.append(encounter.enemy_turn())
        elif phase == CombatPhase.DEATH_SAVE_OFFERED:
            turns.append(encounter.attempt_death_save())
        else:
            pytest.fail(f"Unexpected phase {phase}")
    return turns


def _ogre() -> Enemy:
    return Enemy.create("Ogre", 90, 40, 40, 40, 30, 20, 600, 600, 15, 5)


class TestWorkedExamples:
    """The reference numbers from the rulebook."""

    def test_opening_exchange(self, hero: Character, goblin: Enemy, scripted_roller) -> None:
        """Initiative 192 vs 85, then a 9 for 85 damage."""
        roller = scripted_roller(8, 5, 9)

        state = start_combat(hero, goblin, roller)
        assert (state.player_initiative, state.enemy_initiative) == (192, 85)
        assert state.player_turn is True

        encounter_damage = calculate_damage(9, hero.strength, hero.weapon_damage_bonus)
        assert calculate_to_hit_requirement(hero.skill, hero.luck) == 6
        assert encounter_damage == 85
        assert 150 - apply_armor_reduction(encounter_damage, goblin.armor_protection) == 65

    def test_sacrifice_arithmetic(self) -> None:
        """10 POW against a 25 cost needs 15 LP."""
        assert calculate_sacrifice_needed(10, 25) == 15
        assert can_sacrifice_lp(50, 15) is True
        assert can_sacrifice_lp(50, 50) is False

    def test_round_counting(self, hero: Character, goblin: Enemy, scripted_roller) -> None:
        """Two turns complete one round."""
        state = start_combat(hero, goblin, scripted_roller(8, 5))

        next_turn(state)
        next_turn(state)

        assert state.current_round == 2
        assert state.rounds_since_last_rest == 1


class TestScriptedEncounters:
    """Full encounters with scripted dice."""

    def test_goblin_falls_in_two_hits(self, hero: Character, goblin: Enemy, scripted_roller, rules: RulesSettings) -> None:
        """Hit, enemy miss, hit: victory in round 2."""
        encounter = CombatEncounter(hero, goblin, scripted_roller(8, 5, 9, 3, 9), settings=rules)

        turns = _play_out(encounter)

        assert [turn.action for turn in turns] == ["start", "attack", "enemy_turn", "attack"]
        assert turns[-1].phase == CombatPhase.VICTORY
        assert turns[-1].round_number == 2
        assert hero.current_lp == 416
        assert hero.skill == 1
        assert hero.enemies_defeated == 1
        assert encounter.state.combat_log[-1] == "[Victory] Skill increased to 1. Enemies defeated: 1"

    def test_death_save_turns_the_tide(self, goblin: Enemy, scripted_roller, rules: RulesSettings) -> None:
        """A dying hero saves, restarts and wins."""
        hero = Character.create(64, 56, 72, 48, 80, 40, 56)
        hero.set_lp(20)
        roller = scripted_roller(
            8, 5,  # initiative
            2,  # player misses
            8,  # goblin hits for 65
            7,  # death save 70 <= 80
            8, 5,  # new initiative
            12,  # hit for 100
            2,  # goblin misses
            12,  # finishing blow
        )
        encounter = CombatEncounter(hero, goblin, roller, settings=rules)

        turns = _play_out(encounter)

        assert [turn.action for turn in turns] == [
            "start",
            "attack",
            "enemy_turn",
            "death_save",
            "attack",
            "enemy_turn",
            "attack",
        ]
        assert encounter.victory is True
        assert encounter.state.death_save_used is True
        assert hero.current_lp > 0

    def test_doombringer_duel(self, hero: Character, demonspawn: Enemy, scripted_roller, rules: RulesSettings) -> None:
        """Doombringer plus a held Orb against a Demonspawn."""
        hero.equip_weapon(WEAPON_DOOMBRINGER)
        hero.acquire_orb()
        hero.equip_orb()
        hero.set_lp(100)
        encounter = CombatEncounter(hero, demonspawn, scripted_roller(8, 5, 10), settings=rules)
        encounter.start()

        turn = encounter.player_attack()

        # 50 + 30 + 20 = 100, minus 10 armour, doubled to 180.
        assert turn.player_attack is not None
        assert turn.player_attack.final_damage == 180
        assert demonspawn.current_lp == 120
        assert turn.doombringer_healed == 180
        assert hero.current_lp == 270

    def test_spell_then_sword(self, hero: Character, goblin: Enemy, scripted_roller, rules: RulesSettings) -> None:
        """A FIREBALL softens the enemy and the sword finishes it."""
        hero.unlock_magic(40)
        roller = scripted_roller(8, 5, 6, 12)
        encounter = CombatEncounter(hero, goblin, roller, settings=rules)
        encounter.start()
        session = CastSession(hero, roller, encounter)

        outcome = session.cast("FIREBALL")
        assert outcome.turn is not None
        assert goblin.current_lp == 100

        turn = encounter.player_attack()

        assert turn.phase == CombatPhase.VICTORY
        assert hero.current_pow == 25


class TestSeededEncounters:
    """Full encounters driven by the seeded roller."""

    @pytest.mark.parametrize("seed", [1, 7, 42, 1234, 99999])
    def test_fight_always_ends(self, seed: int, rules: RulesSettings) -> None:
        """Every fight reaches a terminal phase with consistent state."""
        hero = Character.roll_new(DiceRoller(seed=seed, log_rolls=False))
        hero.equip_armor(ARMOR_CHAIN)
        enemy = _ogre()
        encounter = CombatEncounter(hero, enemy, DiceRoller(seed=seed, log_rolls=False), settings=rules)

        turns = _play_out(encounter)

        state = encounter.state
        assert state.phase.is_terminal
        assert state.is_active is False
        assert enemy.current_lp >= 0
        assert state.current_round >= 1
        assert state.combat_log == [message for turn in turns for message in turn.messages]
        if encounter.victory:
            assert enemy.current_lp == 0
            assert hero.enemies_defeated == 1
        else:
            assert state.phase == CombatPhase.DEFEAT
            assert hero.current_lp <= 0

    @pytest.mark.parametrize("seed", [3, 2024])
    def test_same_seed_same_fight(self, seed: int, rules: RulesSettings) -> None:
        """A seeded session replays exactly."""
        logs = []
        for _ in range(2):
            roller = DiceRoller(seed=seed, log_rolls=False)
            hero = Character.roll_new(roller)
            encounter = CombatEncounter(hero, _ogre(), roller, settings=rules)
            _play_out(encounter)
            logs.append((encounter.state.combat_log, hero.current_lp, encounter.phase))

        assert logs[0] == logs[1]

    def test_protective_spells_blunt_the_ogre(self, rules: RulesSettings, wired_rules: RulesSettings) -> None:
        """With spell effects wired in, the same fight hurts less."""
        damage_taken = {}
        for label, settings in (("plain", rules), ("wired", wired_rules)):
            hero = Character.create(64, 56, 72, 48, 80, 40, 56)
            hero.add_spell_effect("ARMOUR", 10)
            hero.add_spell_effect("XENOPHOBIA", 5)
            encounter = CombatEncounter(hero, _ogre(), DiceRoller(seed=5, log_rolls=False), settings=settings)
            encounter.start()
            total = 0
            while not encounter.is_over and encounter.state.current_round <= 3:
                if encounter.phase == CombatPhase.PLAYER_TURN_WAITING:
                    encounter.player_attack()
                elif encounter.phase == CombatPhase.DEATH_SAVE_OFFERED:
                    encounter.attempt_death_save()
                else:
                    turn = encounter.enemy_turn()
                    if turn.enemy_attack is not None:
                        total += turn.enemy_attack.final_damage
            damage_taken[label] = total

        assert damage_taken["wired"] <= damage_taken["plain"]
