"""Kill rewards: tier selection and crediting the player who landed the kill."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Collection, NamedTuple, Optional

from .game import GameState
from .models import (
    NOTABLE_CREATURE_TYPES,
    Creature,
    Feedback,
    FeedbackKind,
    PlayerSession,
    player_key,
)
from .storage import ExperienceStore

log = logging.getLogger(__name__)


class RewardTier(NamedTuple):
    name: str
    minimum: int
    maximum: int

    def roll(self, rng: random.Random) -> int:
        return rng.randint(self.minimum, self.maximum)


NOTABLE_TIER = RewardTier("notable", 2001, 5000)
MINOR_TIER = RewardTier("minor", 1, 20)
STANDARD_TIER = RewardTier("standard", 500, 1000)
BOSS_TIER = RewardTier("boss", 2001, 5000)
FALLBACK_TIER = RewardTier("fallback", 1, 10)

MINOR_HEALTH_LIMIT = 200
BOSS_HEALTH_THRESHOLD = 5000


class RewardCalculator:
    """Maps a defeated creature's attributes to an EXP reward."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        *,
        notable_types: Collection[int] = NOTABLE_CREATURE_TYPES,
    ) -> None:
        self.rng = rng or random.Random()
        self.notable_types = frozenset(notable_types)

    def select_tier(self, creature: Creature) -> Optional[RewardTier]:
        if creature.type_id in self.notable_types:
            return NOTABLE_TIER
        if creature.max_health < MINOR_HEALTH_LIMIT:
            return MINOR_TIER
        if creature.max_health < BOSS_HEALTH_THRESHOLD:
            return STANDARD_TIER
        if creature.boss or creature.max_health >= BOSS_HEALTH_THRESHOLD:
            return BOSS_TIER
        return None

    def compute_reward(self, creature: Creature) -> int:
        tier = self.select_tier(creature)
        amount = tier.roll(self.rng) if tier is not None else 0
        if amount <= 0:
            amount = FALLBACK_TIER.roll(self.rng)
        return amount


@dataclass(slots=True)
class RewardGrant:
    session: PlayerSession
    key: str
    amount: int
    total: int
    feedback: Feedback


def is_rewardable(creature: Optional[Creature]) -> bool:
    """Return ``True`` when defeating ``creature`` can earn experience."""

    if creature is None or creature.friendly or creature.is_trivial:
        return False
    if creature.from_spawner:
        return False
    return True


class KillEventHandler:
    """Credits the session that landed a kill with its reward."""

    def __init__(
        self,
        store: ExperienceStore,
        calculator: RewardCalculator,
        state: GameState,
    ) -> None:
        self.store = store
        self.calculator = calculator
        self.state = state

    def credited_session(self, creature: Creature) -> Optional[PlayerSession]:
        session = self.state.get_session(creature.last_interaction)
        if session is None or not session.active:
            return None
        return session

    def handle(self, creature: Optional[Creature]) -> Optional[RewardGrant]:
        if creature is None or not is_rewardable(creature):
            return None
        session = self.credited_session(creature)
        if session is None:
            log.debug(
                "No active session %s to credit for %s", creature.last_interaction, creature.name
            )
            return None

        key = player_key(session)
        amount = self.calculator.compute_reward(creature)
        self.store.add_delta(key, amount)
        total = self.store.get(key)
        log.info("Granted %s EXP to %s (%s) for %s", amount, session.name, key, creature.name)
        feedback = Feedback(
            FeedbackKind.SUCCESS,
            f"You gained {amount} EXP from {creature.name}! Total EXP: {total}",
            recipient=session,
        )
        return RewardGrant(
            session=session, key=key, amount=amount, total=total, feedback=feedback
        )


__all__ = [
    "BOSS_TIER",
    "FALLBACK_TIER",
    "MINOR_TIER",
    "NOTABLE_TIER",
    "STANDARD_TIER",
    "KillEventHandler",
    "RewardCalculator",
    "RewardGrant",
    "RewardTier",
    "is_rewardable",
]
