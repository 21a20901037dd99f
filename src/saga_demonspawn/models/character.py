"""Pydantic V2 model of Fire*Wolf, the player character.

The Character is owned by the caller. The rules engine reads it and mutates
it only through the methods defined here, each of which either applies the
whole change or raises and leaves the record untouched.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from saga_demonspawn.core.constants import (
    CHARACTERISTIC_MAX_AT_CREATION,
    CHARACTERISTIC_MIN,
    CHARACTERISTIC_NAMES,
    HEALING_STONE_MAX_CHARGES,
)
from saga_demonspawn.core.exceptions import RuleViolationError, ValidationError
from saga_demonspawn.models.items import SHIELD_STANDARD, WEAPON_SWORD, Armor, Weapon


if TYPE_CHECKING:
    from saga_demonspawn.engine.dice import Roller


class Character(BaseModel):
    """Stats, resources, equipment and progress of the player character.

    Attributes:
        strength: STR, physical power.
        speed: SPD, agility and reaction.
        stamina: STA, endurance; sets how long Fire*Wolf fights before resting.
        courage: CRG, bravery.
        luck: LCK, fortune; drives death saves and the to-hit luck bonus.
        charm: CHM, charisma.
        attraction: ATT, personal magnetism.
        current_lp: Life points; negative means dead.
        maximum_lp: Life point ceiling.
        skill: SKL, combat proficiency, +1 per victory.
        current_pow: Magical power, never negative.
        maximum_pow: Power ceiling.
        magic_unlocked: Whether sorcery is available yet.
        active_spell_effects: Lingering spell effects by name.
        equipped_weapon: Weapon in hand, or None.
        equipped_armor: Armour worn, or None.
        has_shield: Whether the shield is carried.
        healing_stone_charges: Charges left in the Healing Stone (0-50).
        doombringer_possessed: Whether Doombringer has been found.
        orb_possessed: Whether The Orb has been found.
        orb_equipped: Whether The Orb is held in the left hand.
        orb_destroyed: Whether The Orb has been thrown.
        enemies_defeated: Kill count.
        created_at: When the character was created.
        last_updated: When the record was last touched by the caller.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="ignore",
    )

    strength: int = Field(ge=CHARACTERISTIC_MIN)
    speed: int = Field(ge=CHARACTERISTIC_MIN)
    stamina: int = Field(ge=CHARACTERISTIC_MIN)
    courage: int = Field(ge=CHARACTERISTIC_MIN)
    luck: int = Field(ge=CHARACTERISTIC_MIN)
    charm: int = Field(ge=CHARACTERISTIC_MIN)
    attraction: int = Field(ge=CHARACTERISTIC_MIN)

    current_lp: int
    maximum_lp: int = Field(ge=0)
    skill: int = Field(default=0, ge=0)

    current_pow: int = Field(default=0, ge=0)
    maximum_pow: int = Field(default=0, ge=0)
    magic_unlocked: bool = False
    active_spell_effects: dict[str, int] = Field(default_factory=dict)

    equipped_weapon: Weapon | None = WEAPON_SWORD
    equipped_armor: Armor | None = None
    has_shield: bool = False

    healing_stone_charges: int = Field(default=0, ge=0, le=HEALING_STONE_MAX_CHARGES)
    doombringer_possessed: bool = False
    orb_possessed: bool = False
    orb_equipped: bool = False
    orb_destroyed: bool = False

    enemies_defeated: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    last_updated: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def check_orb_state(self) -> Self:
        """Reject impossible combinations of The Orb flags."""
        if self.orb_equipped and self.orb_destroyed:
            raise ValueError("The Orb cannot be both equipped and destroyed")
        if self.orb_equipped and not self.orb_possessed:
            raise ValueError("Cannot equip The Orb when it is not possessed")
        if self.orb_destroyed and not self.orb_possessed:
            raise ValueError("Cannot destroy The Orb when it is not possessed")
        return self

    # =========================================================================
    # Creation
    # =========================================================================

    @classmethod
    def create(
        cls,
        strength: int,
        speed: int,
        stamina: int,
        courage: int,
        luck: int,
        charm: int,
        attraction: int,
    ) -> Character:
        """Create a fresh character from its seven characteristics.

        Maximum LP is the sum of the characteristics and the character
        starts at full LP, with skill and power at zero, a Sword in hand and
        no armour.

        Raises:
            ValidationError: If a characteristic is outside 0-999.
        """
        values = dict(
            zip(
                CHARACTERISTIC_NAMES,
                (strength, speed, stamina, courage, luck, charm, attraction),
                strict=True,
            )
        )
        for name, value in values.items():
            if value < CHARACTERISTIC_MIN:
                raise ValidationError(
                    f"{name.capitalize()} cannot be negative: {value}",
                    field_name=name,
                    invalid_value=value,
                )
            if value > CHARACTERISTIC_MAX_AT_CREATION:
                raise ValidationError(
                    f"{name.capitalize()} exceeds maximum "
                    f"({CHARACTERISTIC_MAX_AT_CREATION}): {value}",
                    field_name=name,
                    invalid_value=value,
                )

        maximum_lp = sum(values.values())
        return cls(**values, current_lp=maximum_lp, maximum_lp=maximum_lp)

    @classmethod
    def roll_new(cls, roller: Roller) -> Character:
        """Create a character by rolling every characteristic (2d6 x 8)."""
        rolled = [roller.roll_characteristic() for _ in CHARACTERISTIC_NAMES]
        return cls.create(*rolled)

    # =========================================================================
    # Characteristics and skill
    # =========================================================================

    def _modify_non_negative(self, field_name: str, delta: int) -> None:
        new_value = getattr(self, field_name) + delta
        if new_value < 0:
            raise RuleViolationError(
                f"{field_name.capitalize()} cannot be negative (would be {new_value})",
                rule="non_negative",
                details={"field_name": field_name, "delta": delta},
            )
        setattr(self, field_name, new_value)

    def modify_strength(self, delta: int) -> None:
        """Change Strength; rejected if the result would be negative."""
        self._modify_non_negative("strength", delta)

    def modify_speed(self, delta: int) -> None:
        self._modify_non_negative("speed", delta)

    def modify_stamina(self, delta: int) -> None:
        self._modify_non_negative("stamina", delta)

    def modify_courage(self, delta: int) -> None:
        self._modify_non_negative("courage", delta)

    def modify_luck(self, delta: int) -> None:
        self._modify_non_negative("luck", delta)

    def modify_charm(self, delta: int) -> None:
        self._modify_non_negative("charm", delta)

    def modify_attraction(self, delta: int) -> None:
        self._modify_non_negative("attraction", delta)

    def modify_skill(self, delta: int) -> None:
        self._modify_non_negative("skill", delta)

    def set_skill(self, value: int) -> None:
        """Set skill directly.

        Raises:
            RuleViolationError: If value is negative.
        """
        if value < 0:
            raise RuleViolationError(f"Skill cannot be negative: {value}", rule="non_negative")
        self.skill = value

    # =========================================================================
    # Life points and power
    # =========================================================================

    def modify_lp(self, delta: int) -> None:
        """Change current LP. May go negative, which means death."""
        self.current_lp += delta

    def set_lp(self, value: int) -> None:
        self.current_lp = value

    def set_max_lp(self, value: int) -> None:
        if value < 0:
            raise RuleViolationError(
                f"Maximum LP cannot be negative: {value}", rule="non_negative"
            )
        self.maximum_lp = value

    def unlock_magic(self, initial_pow: int) -> None:
        """Open up sorcery with a starting power pool.

        Raises:
            RuleViolationError: If initial_pow is negative.
        """
        if initial_pow < 0:
            raise RuleViolationError(
                f"Initial POW cannot be negative: {initial_pow}", rule="non_negative"
            )
        self.magic_unlocked = True
        self.maximum_pow = initial_pow
        self.current_pow = initial_pow

    def modify_pow(self, delta: int) -> None:
        """Change current power, clamping at zero."""
        self.current_pow = max(0, self.current_pow + delta)

    def set_pow(self, value: int) -> None:
        self.current_pow = max(0, value)

    def set_max_pow(self, value: int) -> None:
        if value < 0:
            raise RuleViolationError(
                f"Maximum POW cannot be negative: {value}", rule="non_negative"
            )
        self.maximum_pow = value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_alive(self) -> bool:
        return self.current_lp > 0

    # =========================================================================
    # Equipment
    # =========================================================================

    def equip_weapon(self, weapon: Weapon | None) -> None:
        self.equipped_weapon = weapon

    def equip_armor(self, armor: Armor | None) -> None:
        self.equipped_armor = armor

    def toggle_shield(self) -> None:
        self.has_shield = not self.has_shield

    @computed_field  # type: ignore[prop-decorator]
    @property
    def armor_protection(self) -> int:
        protection = self.equipped_armor.protection if self.equipped_armor else 0
        if self.has_shield:
            protection += SHIELD_STANDARD.protection_for(self.equipped_armor)
        return protection

    @computed_field  # type: ignore[prop-decorator]
    @property
    def weapon_damage_bonus(self) -> int:
        return self.equipped_weapon.damage_bonus if self.equipped_weapon else 0

    # =========================================================================
    # Special items
    # =========================================================================

    def acquire_healing_stone(self) -> None:
        """Receive the Healing Stone fully charged."""
        self.healing_stone_charges = HEALING_STONE_MAX_CHARGES

    def recharge_healing_stone(self) -> None:
        """Refill the Healing Stone.

        Raises:
            RuleViolationError: If the stone is already full.
        """
        if self.healing_stone_charges >= HEALING_STONE_MAX_CHARGES:
            raise RuleViolationError(
                "Healing stone is already fully charged", rule="healing_stone_full"
            )
        self.healing_stone_charges = HEALING_STONE_MAX_CHARGES

    def use_healing_stone(self, heal_amount: int) -> int:
        """Heal from the Healing Stone.

        Healing is capped by the charges left and by maximum LP, but the
        stone always loses the full rolled amount of charges.

        Args:
            heal_amount: The rolled healing amount.

        Returns:
            LP actually restored.

        Raises:
            RuleViolationError: If the stone is depleted or LP is already full.
        """
        if self.healing_stone_charges <= 0:
            raise RuleViolationError("Healing stone is depleted", rule="healing_stone_depleted")
        if self.current_lp >= self.maximum_lp:
            raise RuleViolationError("Already at full health", rule="full_health")

        actual_heal = min(heal_amount, self.healing_stone_charges, self.maximum_lp - self.current_lp)
        self.current_lp += actual_heal
        self.healing_stone_charges = max(0, self.healing_stone_charges - heal_amount)
        return actual_heal

    def acquire_doombringer(self) -> None:
        self.doombringer_possessed = True

    def acquire_orb(self) -> None:
        """Receive The Orb, intact and not yet held."""
        self.orb_equipped = False
        self.orb_destroyed = False
        self.orb_possessed = True

    def equip_orb(self) -> None:
        """Hold The Orb in the left hand.

        Raises:
            RuleViolationError: If The Orb is not possessed or already destroyed.
        """
        if not self.orb_possessed:
            raise RuleViolationError(
                "Cannot equip The Orb when it is not possessed", rule="orb_not_possessed"
            )
        if self.orb_destroyed:
            raise RuleViolationError("The Orb has been destroyed", rule="orb_destroyed")
        self.orb_equipped = True

    def unequip_orb(self) -> None:
        self.orb_equipped = False

    def destroy_orb(self) -> None:
        """Mark The Orb as thrown and gone.

        Raises:
            RuleViolationError: If The Orb is not possessed.
        """
        if not self.orb_possessed:
            raise RuleViolationError(
                "Cannot destroy The Orb when it is not possessed", rule="orb_not_possessed"
            )
        # Unequip first; the two flags may never be set together.
        self.orb_equipped = False
        self.orb_destroyed = True

    # =========================================================================
    # Progress and spell effects
    # =========================================================================

    def increment_enemies_defeated(self) -> None:
        self.enemies_defeated += 1

    def touch(self) -> None:
        """Stamp last_updated, typically just before the record is saved."""
        self.last_updated = datetime.now()

    def add_spell_effect(self, effect_name: str, value: int) -> None:
        self.active_spell_effects[effect_name] = value

    def remove_spell_effect(self, effect_name: str) -> None:
        self.active_spell_effects.pop(effect_name, None)

    def get_spell_effect(self, effect_name: str) -> int:
        """Magnitude of an active effect, or 0 when it is not active."""
        return self.active_spell_effects.get(effect_name, 0)

    def has_spell_effect(self, effect_name: str) -> bool:
        return effect_name in self.active_spell_effects

    def clear_spell_effects(self) -> None:
        self.active_spell_effects = {}


__all__ = ["Character"]
