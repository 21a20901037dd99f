"""Tests for cast validation and the Fundamental Failure Rate."""

from __future__ import annotations

import pytest

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
from saga_demonspawn.magic.spells import Spell, get_spell_by_name


def _spell(name: str) -> Spell:
    spell = get_spell_by_name(name)
    assert spell is not None
    return spell


class TestRolls:
    """Tests for the magic dice checks."""

    @pytest.mark.parametrize(("roll", "expected"), [(3, False), (4, True), (12, True)])
    def test_natural_inclination(self, roll: int, expected: bool, scripted_roller) -> None:
        """The aversion to magic is overcome on 4 or more."""
        assert natural_inclination_check(scripted_roller(roll)) == (expected, roll)

    @pytest.mark.parametrize(("roll", "expected"), [(2, False), (5, False), (6, True), (12, True)])
    def test_fundamental_failure_rate(self, roll: int, expected: bool, scripted_roller) -> None:
        """A spell works on 6 or more."""
        assert fundamental_failure_rate(scripted_roller(roll)) == (expected, roll)


class TestPowerArithmetic:
    """Tests for affordability and LP sacrifice."""

    def test_can_afford(self) -> None:
        """Test the affordability check."""
        assert can_afford_spell(25, 25) is True
        assert can_afford_spell(24, 25) is False

    def test_sacrifice_needed(self) -> None:
        """Test the shortfall calculation."""
        assert calculate_sacrifice_needed(10, 25) == 15
        assert calculate_sacrifice_needed(30, 25) == 0

    def test_can_sacrifice(self) -> None:
        """A sacrifice must leave at least 1 LP."""
        assert can_sacrifice_lp(50, 15) is True
        assert can_sacrifice_lp(50, 49) is True
        assert can_sacrifice_lp(50, 50) is False


class TestValidateCast:
    """Tests for validate_cast."""

    def test_affordable(self) -> None:
        """Test that an affordable spell validates."""
        result = validate_cast(_spell("ARMOUR"), current_pow=30, current_lp=100, in_combat=False, is_dead=False)

        assert result == CastResult(success=True)

    def test_death_only_while_alive(self) -> None:
        """Test that RESURRECTION needs a dead caster."""
        result = validate_cast(_spell("RESURRECTION"), 100, 100, in_combat=False, is_dead=False)

        assert result.success is False
        assert result.message == "This spell can only be cast when you are dead"

    def test_dead_may_only_resurrect(self) -> None:
        """Test that other spells are refused while dead."""
        result = validate_cast(_spell("TIMEWARP"), 100, -5, in_combat=False, is_dead=True)

        assert result.success is False
        assert result.message == "Only a resurrection spell can be cast when you are dead"

    def test_resurrection_while_dead(self) -> None:
        """Test that RESURRECTION validates for a dead caster."""
        result = validate_cast(_spell("RESURRECTION"), 60, -5, in_combat=True, is_dead=True)

        assert result.success is True

    def test_combat_only_outside_combat(self) -> None:
        """Test that FIREBALL needs a fight."""
        result = validate_cast(_spell("FIREBALL"), 100, 100, in_combat=False, is_dead=False)

        assert result.message == "This spell can only be cast during combat"

    @pytest.mark.parametrize("name", ["CRYPT", "RETRACE"])
    def test_no_combat_spells_in_combat(self, name: str) -> None:
        """Test that travel spells are refused mid-fight."""
        result = validate_cast(_spell(name), 500, 100, in_combat=True, is_dead=False)

        assert result.success is False
        assert result.message == "This spell cannot be cast during combat"

    def test_sacrifice_offered(self) -> None:
        """A shortfall that LP can cover asks for a sacrifice."""
        result = validate_cast(_spell("ARMOUR"), current_pow=10, current_lp=100, in_combat=False, is_dead=False)

        assert result.success is False
        assert result.requires_sacrifice is True
        assert result.sacrifice_amount == 15
        assert result.message == "Insufficient POWER (10/25). Sacrifice 15 LP for 15 POW?"

    def test_insufficient_power(self) -> None:
        """A shortfall that would kill the caster is refused outright."""
        result = validate_cast(_spell("CRYPT"), current_pow=0, current_lp=150, in_combat=False, is_dead=False)

        assert result.insufficient_power is True
        assert result.requires_sacrifice is False
        assert result.message == "Insufficient POWER (0/150). Cannot sacrifice 150 LP without dying."

    def test_nothing_deducted(self) -> None:
        """Validation never reports spent power."""
        result = validate_cast(_spell("ARMOUR"), 30, 100, in_combat=False, is_dead=False)

        assert result.power_spent == 0


class TestPerformCast:
    """Tests for perform_cast."""

    def test_success(self, scripted_roller) -> None:
        """Test a successful FFR roll."""
        result = perform_cast(_spell("FIREBALL"), scripted_roller(8))

        assert result.success is True
        assert result.ffr_failed is False
        assert result.power_spent == 15
        assert result.message == "Spell cast successfully! (FFR roll: 8)"

    def test_fizzle(self, scripted_roller) -> None:
        """A fizzle still spends the power."""
        result = perform_cast(_spell("FIREBALL"), scripted_roller(5))

        assert result.success is False
        assert result.ffr_failed is True
        assert result.power_spent == 15
        assert result.message == "The spell fizzles and fails! (rolled 5, needed 6+)"
