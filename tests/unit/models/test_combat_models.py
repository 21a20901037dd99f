"""Tests for the Enemy, CombatState and CombatPhase models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from saga_demonspawn.core.exceptions import ValidationError
from saga_demonspawn.models.combat import CombatPhase, CombatState, Enemy
from saga_demonspawn.models.items import (
    ALL_ARMOR,
    ALL_WEAPONS,
    ARMOR_PLATE,
    SHIELD_STANDARD,
    get_armor_by_name,
    get_weapon_by_name,
)


def _enemy_kwargs(**overrides: object) -> dict[str, object]:
    values: dict[str, object] = {
        "name": "Ghoul",
        "strength": 50,
        "speed": 40,
        "stamina": 60,
        "courage": 30,
        "luck": 20,
        "skill": 5,
        "current_lp": 120,
        "maximum_lp": 120,
        "weapon_bonus": 8,
        "armor_protection": 4,
    }
    values.update(overrides)
    return values


class TestEnemyCreate:
    """Tests for Enemy.create validation."""

    def test_valid(self) -> None:
        """Test creating a valid enemy."""
        enemy = Enemy.create(**_enemy_kwargs())  # type: ignore[arg-type]

        assert enemy.name == "Ghoul"
        assert enemy.is_demonspawn is False
        assert enemy.is_defeated is False

    def test_demonspawn_flag(self) -> None:
        """Test creating a Demonspawn."""
        enemy = Enemy.create(**_enemy_kwargs(is_demonspawn=True))  # type: ignore[arg-type]

        assert enemy.is_demonspawn is True

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name(self, name: str) -> None:
        """Blank names are refused."""
        with pytest.raises(ValidationError) as exc_info:
            Enemy.create(**_enemy_kwargs(name=name))  # type: ignore[arg-type]

        assert exc_info.value.details["field_name"] == "name"

    @pytest.mark.parametrize(
        "field",
        ["strength", "speed", "stamina", "courage", "luck", "skill", "current_lp"],
    )
    def test_negative_stat(self, field: str) -> None:
        """Every stat must be zero or more."""
        with pytest.raises(ValidationError) as exc_info:
            Enemy.create(**_enemy_kwargs(**{field: -1}))  # type: ignore[arg-type]

        assert exc_info.value.details["field_name"] == field

    @pytest.mark.parametrize("maximum_lp", [0, -10])
    def test_non_positive_maximum_lp(self, maximum_lp: int) -> None:
        """Test that maximum LP must be positive."""
        with pytest.raises(ValidationError) as exc_info:
            Enemy.create(**_enemy_kwargs(maximum_lp=maximum_lp))  # type: ignore[arg-type]

        assert exc_info.value.details["field_name"] == "maximum_lp"

    @pytest.mark.parametrize("field", ["weapon_bonus", "armor_protection"])
    def test_negative_equipment(self, field: str) -> None:
        """Test that weapon bonus and armour must be zero or more."""
        with pytest.raises(ValidationError) as exc_info:
            Enemy.create(**_enemy_kwargs(**{field: -2}))  # type: ignore[arg-type]

        assert exc_info.value.details["field_name"] == field

    def test_zero_current_lp_is_defeated(self) -> None:
        """An enemy entered at 0 LP is already defeated."""
        enemy = Enemy.create(**_enemy_kwargs(current_lp=0))  # type: ignore[arg-type]

        assert enemy.is_defeated is True

    def test_assignment_validated(self) -> None:
        """Test that LP cannot be assigned below zero."""
        enemy = Enemy.create(**_enemy_kwargs())  # type: ignore[arg-type]

        with pytest.raises(PydanticValidationError):
            enemy.current_lp = -1


class TestCombatState:
    """Tests for the CombatState model."""

    def test_defaults(self, goblin: Enemy) -> None:
        """Test a fresh combat state."""
        state = CombatState(enemy=goblin)

        assert state.phase == CombatPhase.INITIATIVE_ROLLED
        assert state.is_active is True
        assert state.current_round == 1
        assert state.death_save_used is False
        assert state.combat_log == []

    def test_round_must_be_positive(self, goblin: Enemy) -> None:
        """Test that round numbers start at 1."""
        with pytest.raises(PydanticValidationError):
            CombatState(enemy=goblin, current_round=0)

    def test_log_entries(self, goblin: Enemy) -> None:
        """Test appending to the combat log."""
        state = CombatState(enemy=goblin)

        state.add_log_entry("first")
        state.add_log_entry("second")

        assert state.combat_log == ["first", "second"]


class TestCombatPhase:
    """Tests for the CombatPhase enum."""

    @pytest.mark.parametrize(
        ("phase", "terminal"),
        [
            (CombatPhase.PLAYER_TURN_WAITING, False),
            (CombatPhase.DEATH_SAVE_OFFERED, False),
            (CombatPhase.REST_PENDING_PLAYER, False),
            (CombatPhase.VICTORY, True),
            (CombatPhase.DEFEAT, True),
            (CombatPhase.FLED, True),
        ],
    )
    def test_is_terminal(self, phase: CombatPhase, terminal: bool) -> None:
        """Only victory, defeat and fleeing end the encounter."""
        assert phase.is_terminal is terminal

    def test_string_value(self) -> None:
        """Test that phases compare equal to their string values."""
        assert CombatPhase.VICTORY == "victory"


class TestItemCatalog:
    """Tests for the weapon and armour catalog."""

    def test_lookup_by_name(self) -> None:
        """Test finding items by name."""
        assert get_weapon_by_name("Axe") is not None
        assert get_weapon_by_name("Axe").damage_bonus == 15  # type: ignore[union-attr]
        assert get_armor_by_name("Plate Mail") == ARMOR_PLATE
        assert get_weapon_by_name("Banana") is None
        assert get_armor_by_name("Cardboard") is None

    def test_catalog_contents(self) -> None:
        """Every catalogued item has a name and non-negative stats."""
        assert all(weapon.damage_bonus >= 0 for weapon in ALL_WEAPONS)
        assert all(armor.protection > 0 for armor in ALL_ARMOR)

    def test_shield_protection(self) -> None:
        """Test shield protection with and without armour."""
        assert SHIELD_STANDARD.protection_for(None) == 7
        assert SHIELD_STANDARD.protection_for(ARMOR_PLATE) == 5
