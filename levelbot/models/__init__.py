"""Domain models shared by the level system."""

from ._validation import (
    INT32_MAX,
    ModelValidationError,
    ResolutionError,
    ValidationError,
    parse_exp,
)
from .creatures import NOTABLE_CREATURE_TYPES, Creature
from .players import Feedback, FeedbackKind, PlayerSession, player_key

__all__ = [
    "INT32_MAX",
    "NOTABLE_CREATURE_TYPES",
    "Creature",
    "Feedback",
    "FeedbackKind",
    "ModelValidationError",
    "PlayerSession",
    "ResolutionError",
    "ValidationError",
    "parse_exp",
    "player_key",
]
