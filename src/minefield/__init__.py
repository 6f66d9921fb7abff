"""
Minefield game core.

Provides the grid model, session state machine and headless drivers
that a front end calls into.
"""
from .cell import (
    Cell,
    Coordinate,
    RevealOutcome,
    RevealResult,
    ToggleFlagResult,
)
from .field import (
    Field,
    FieldConfig,
    FieldInvariantError,
    DEFAULT,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    PRESETS,
)
from .session import Session, TimerState
from .layout import FieldLayout, InputEvent, Rect
from .environment import MinefieldEnv

__all__ = [
    "Cell",
    "Coordinate",
    "RevealOutcome",
    "RevealResult",
    "ToggleFlagResult",
    "Field",
    "FieldConfig",
    "FieldInvariantError",
    "DEFAULT",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "Session",
    "TimerState",
    "FieldLayout",
    "InputEvent",
    "Rect",
    "MinefieldEnv",
]
