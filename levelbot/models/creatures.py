"""Creature models reported by the game server when an NPC dies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ._validation import FieldSpec, ModelValidator

# Encounter types that always pay out the top reward tier.
PINKY = -4
EYE_OF_CTHULHU = 4
LOST_GIRL = 195
NYMPH = 196

NOTABLE_CREATURE_TYPES: frozenset[int] = frozenset(
    {PINKY, EYE_OF_CTHULHU, LOST_GIRL, NYMPH}
)

# Creatures at or below this health never pay out (critters, projectiles).
TRIVIAL_HEALTH = 5

NO_INTERACTION = -1


@dataclass(slots=True)
class Creature:
    name: str
    max_health: int
    friendly: bool = False
    boss: bool = False
    from_spawner: bool = False
    type_id: int = 0
    last_interaction: int = NO_INTERACTION

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Creature":
        payload = cls.validator.validate(data)  # type: ignore[attr-defined]
        return cls(**payload)

    @property
    def is_trivial(self) -> bool:
        return self.max_health <= TRIVIAL_HEALTH


class CreatureValidator(ModelValidator):
    model = Creature
    fields = {
        "name": FieldSpec(str, "creature display name"),
        "max_health": FieldSpec(int, "integer maximum health"),
        "friendly": FieldSpec(bool, "boolean", required=False),
        "boss": FieldSpec(bool, "boolean", required=False),
        "from_spawner": FieldSpec(bool, "boolean", required=False),
        "type_id": FieldSpec(int, "integer creature type", required=False),
        "last_interaction": FieldSpec(
            int, "integer session index", required=False
        ),
    }


Creature.validator = CreatureValidator


__all__ = [
    "EYE_OF_CTHULHU",
    "LOST_GIRL",
    "NOTABLE_CREATURE_TYPES",
    "NO_INTERACTION",
    "NYMPH",
    "PINKY",
    "TRIVIAL_HEALTH",
    "Creature",
    "CreatureValidator",
]
