"""Sagas of the Demonspawn - companion rules engine.

Tracks Fire*Wolf's characteristics, equipment and magic and adjudicates
fights against enemies entered from the gamebook.

DETERMINISM:
- Every roll comes from an injected Roller; there is no global generator
- A DiceRoller built with a seed replays a whole session identically

Example:
    >>> from saga_demonspawn import Character, CombatEncounter, DiceRoller, Enemy
    >>>
    >>> roller = DiceRoller(seed=42)
    >>> hero = Character.roll_new(roller)
    >>> goblin = Enemy.create("Goblin", 40, 35, 30, 25, 20, 0, 150, 150, 5, 0)
    >>>
    >>> encounter = CombatEncounter(hero, goblin, roller)
    >>> encounter.start()
    >>> while not encounter.is_over:
    ...     ...

Modules:
    core: Configuration, logging, exceptions and rule constants.
    models: Pydantic V2 models (Character, Enemy, CombatState, items).
    engine: Dice, combat formulas, special items and the encounter flow.
    magic: Spell catalog, casting rules, effects and the cast session.
"""

from __future__ import annotations

# Core
from saga_demonspawn.core.config import Settings, get_settings
from saga_demonspawn.core.exceptions import SagaError
from saga_demonspawn.core.logging import configure_logging, get_logger

# Engine
from saga_demonspawn.engine import CombatEncounter, DiceRoller, Roller, SystemRoller, TurnResult

# Magic
from saga_demonspawn.magic import CastSession, SpellCastOutcome

# Models
from saga_demonspawn.models import Character, CombatPhase, CombatState, Enemy


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "SagaError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Character",
    "Enemy",
    "CombatState",
    "CombatPhase",
    # Engine
    "Roller",
    "DiceRoller",
    "SystemRoller",
    "CombatEncounter",
    "TurnResult",
    # Magic
    "CastSession",
    "SpellCastOutcome",
]
