"""Pydantic V2 schemas for combat encounters.

This module defines the enemy record, the per-encounter combat state and
the phases an encounter moves through.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, computed_field

from saga_demonspawn.core.exceptions import ValidationError


class CombatPhase(StrEnum):
    """Phases of a combat encounter."""

    INITIATIVE_ROLLED = "initiative_rolled"
    PLAYER_TURN_WAITING = "player_turn_waiting"
    PLAYER_ACTING = "player_acting"
    ENEMY_ACTING = "enemy_acting"
    REST_PENDING_PLAYER = "rest_pending_player"
    REST_PENDING_ENEMY = "rest_pending_enemy"
    DEATH_SAVE_OFFERED = "death_save_offered"
    VICTORY = "victory"
    DEFEAT = "defeat"
    FLED = "fled"

    @property
    def is_terminal(self) -> bool:
        """Whether the encounter is over once it reaches this phase."""
        return self in (CombatPhase.VICTORY, CombatPhase.DEFEAT, CombatPhase.FLED)


class Enemy(BaseModel):
    """An opponent entered by hand from the gamebook.

    Attributes:
        name: Display name.
        strength: STR, adds to damage.
        speed: SPD, part of initiative.
        stamina: STA, sets the enemy's endurance limit.
        courage: CRG, part of initiative.
        luck: LCK, part of initiative and the to-hit luck bonus.
        skill: SKL, lowers the to-hit requirement.
        current_lp: Life points; never below zero.
        maximum_lp: Life point ceiling.
        weapon_bonus: Flat damage bonus of the enemy's weapon.
        armor_protection: Flat damage reduction.
        is_demonspawn: Demonspawn are vulnerable to The Orb.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    name: str = Field(min_length=1)
    strength: int = Field(ge=0)
    speed: int = Field(ge=0)
    stamina: int = Field(ge=0)
    courage: int = Field(ge=0)
    luck: int = Field(ge=0)
    skill: int = Field(ge=0)
    current_lp: int = Field(ge=0)
    maximum_lp: int = Field(ge=1)
    weapon_bonus: int = Field(default=0, ge=0)
    armor_protection: int = Field(default=0, ge=0)
    is_demonspawn: bool = False

    @classmethod
    def create(
        cls,
        name: str,
        strength: int,
        speed: int,
        stamina: int,
        courage: int,
        luck: int,
        skill: int,
        current_lp: int,
        maximum_lp: int,
        weapon_bonus: int,
        armor_protection: int,
        is_demonspawn: bool = False,
    ) -> Enemy:
        """Build a validated enemy.

        Raises:
            ValidationError: On an empty name, a negative stat, a
                non-positive maximum LP or a negative weapon bonus or armour.
        """
        if not name or not name.strip():
            raise ValidationError("Enemy name cannot be empty", field_name="name")

        stats = {
            "strength": strength,
            "speed": speed,
            "stamina": stamina,
            "courage": courage,
            "luck": luck,
            "skill": skill,
            "current_lp": current_lp,
        }
        for field_name, value in stats.items():
            if value < 0:
                raise ValidationError(
                    f"Enemy {field_name} cannot be negative: {value}",
                    field_name=field_name,
                    invalid_value=value,
                )

        if maximum_lp <= 0:
            raise ValidationError(
                f"Enemy maximum LP must be positive: {maximum_lp}",
                field_name="maximum_lp",
                invalid_value=maximum_lp,
            )
        if weapon_bonus < 0:
            raise ValidationError(
                f"Enemy weapon bonus cannot be negative: {weapon_bonus}",
                field_name="weapon_bonus",
                invalid_value=weapon_bonus,
            )
        if armor_protection < 0:
            raise ValidationError(
                f"Enemy armor cannot be negative: {armor_protection}",
                field_name="armor_protection",
                invalid_value=armor_protection,
            )

        return cls(
            name=name,
            **stats,
            maximum_lp=maximum_lp,
            weapon_bonus=weapon_bonus,
            armor_protection=armor_protection,
            is_demonspawn=is_demonspawn,
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_defeated(self) -> bool:
        return self.current_lp <= 0


class CombatState(BaseModel):
    """State of one encounter, from initiative to its end.

    A round is one full cycle of both sides' turns, starting with whoever won
    initiative. Endurance counters count completed rounds since each side
    last rested.

    Attributes:
        enemy: The opponent, owned by this encounter.
        phase: Where the encounter currently stands.
        is_active: False once the encounter has ended.
        current_round: Round number, from 1.
        player_turn: Whether the player acts next.
        player_first_strike: Whether the player won initiative.
        death_save_used: The one death save per combat has been spent.
        endurance_limit: Player rounds before a forced rest (STA // 10).
        rounds_since_last_rest: Player rounds fought since resting.
        enemy_endurance_limit: Enemy rounds before a forced rest.
        enemy_rounds_since_last_rest: Enemy rounds fought since resting.
        combat_log: Append-only narrative of the encounter.
        player_initiative: Player's initiative total.
        enemy_initiative: Enemy's initiative total.
        started_at: When the encounter was created.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    enemy: Enemy
    phase: CombatPhase = CombatPhase.INITIATIVE_ROLLED
    is_active: bool = True
    current_round: Annotated[int, Field(ge=1)] = 1
    player_turn: bool = False
    player_first_strike: bool = False
    death_save_used: bool = False
    endurance_limit: Annotated[int, Field(ge=0)] = 0
    rounds_since_last_rest: Annotated[int, Field(ge=0)] = 0
    enemy_endurance_limit: Annotated[int, Field(ge=0)] = 0
    enemy_rounds_since_last_rest: Annotated[int, Field(ge=0)] = 0
    combat_log: list[str] = Field(default_factory=list)
    player_initiative: int = 0
    enemy_initiative: int = 0
    started_at: datetime = Field(default_factory=datetime.now)

    def add_log_entry(self, entry: str) -> None:
        """Append a line to the combat log."""
        self.combat_log.append(entry)


__all__ = [
    "CombatPhase",
    "Enemy",
    "CombatState",
]
