"""Custom exception hierarchy for the Sagas of the Demonspawn companion.

All exceptions inherit from SagaError so the presentation layer can catch
every rules-engine failure at a single boundary while still seeing the
domain-specific context attached to each error.

Resource exhaustion (not enough POW, a spell fizzling, a missed attack) is
never raised: those outcomes are ordinary result values.

Example:
    >>> from saga_demonspawn.core.exceptions import RuleViolationError
    >>> raise RuleViolationError("Strength cannot be negative", rule="non_negative")
"""

from __future__ import annotations

from typing import Any


class SagaError(Exception):
    """Base exception for all rules-engine errors.

    Subclasses take their domain context as keyword arguments and fold it
    into ``details``; context left as None or empty is omitted.

    Attributes:
        message: Human-readable error description.
        details: Context attached to the error, rendered after the message.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = dict(details) if details else {}
        super().__init__(str(self))

    @staticmethod
    def _with_context(details: dict[str, Any] | None, **context: Any) -> dict[str, Any]:
        merged = dict(details) if details else {}
        for key, value in context.items():
            if value is None or value == "" or value == []:
                continue
            merged[key] = value
        return merged

    def __str__(self) -> str:
        if not self.details:
            return self.message
        rendered = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} [{rendered}]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, details={self.details!r})"


# =============================================================================
# Settings and Records
# =============================================================================


class ConfigurationError(SagaError):
    """Raised when application settings are missing or invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=self._with_context(details, config_key=config_key))


class ValidationError(SagaError):
    """Raised when a character, enemy or other record fails construction.

    Values are never clamped silently: an out-of-range characteristic or an
    empty enemy name is rejected with the offending field attached.

    Args:
        message: Human-readable error description.
        field_name: The rejected field.
        invalid_value: The rejected value; kept even when falsy, e.g. 0.
        details: Extra context.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        context = self._with_context(details, field_name=field_name)
        if invalid_value is not None:
            context["invalid_value"] = invalid_value
        super().__init__(message, details=context)


class RuleViolationError(SagaError):
    """Raised when a mutation would break a game rule.

    Examples are lowering a characteristic below zero, recharging a full
    Healing Stone or equipping an Orb that is not possessed. The target
    state is left untouched when this is raised.

    Args:
        message: Human-readable error description.
        rule: Short identifier of the broken rule, e.g. "healing_stone_full".
        details: Extra context.
    """

    def __init__(
        self,
        message: str,
        *,
        rule: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=self._with_context(details, rule=rule))


# =============================================================================
# Combat
# =============================================================================


class GameEngineError(SagaError):
    """Base exception for combat engine errors."""


class CombatError(GameEngineError):
    """Raised when a combat operation cannot be carried out."""

    def __init__(
        self,
        message: str,
        *,
        round_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=self._with_context(details, round_number=round_number))


class InvalidCombatPhaseError(CombatError):
    """Raised when an encounter action is requested in the wrong phase.

    Args:
        message: Human-readable error description.
        current_phase: The phase the encounter is in.
        expected_phases: Phases in which the action is allowed.
        round_number: Combat round at the time of the request.
        details: Extra context.
    """

    def __init__(
        self,
        message: str,
        *,
        current_phase: str | None = None,
        expected_phases: list[str] | None = None,
        round_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            round_number=round_number,
            details=self._with_context(
                details,
                current_phase=current_phase,
                expected_phases=expected_phases,
            ),
        )


# =============================================================================
# Magic
# =============================================================================


class SpellError(SagaError):
    """Raised when a spell is unknown or magic is not available.

    An unaffordable spell is not an error; see CastResult.insufficient_power.
    """

    def __init__(
        self,
        message: str,
        *,
        spell_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=self._with_context(details, spell_name=spell_name))


__all__ = [
    "SagaError",
    "ConfigurationError",
    "ValidationError",
    "RuleViolationError",
    "GameEngineError",
    "CombatError",
    "InvalidCombatPhaseError",
    "SpellError",
]
