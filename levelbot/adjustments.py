"""Operator commands that inspect or adjust stored experience."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List

from .game import GameState
from .models import (
    Feedback,
    FeedbackKind,
    PlayerSession,
    ValidationError,
    parse_exp,
    player_key,
)
from .storage import ExperienceStore

log = logging.getLogger(__name__)


@dataclass(slots=True)
class AdjustmentResult:
    target: PlayerSession
    key: str
    total: int
    messages: List[Feedback] = field(default_factory=list)

    @property
    def operator_message(self) -> Feedback:
        return next(message for message in self.messages if message.recipient is None)


def _require(value: Any, usage: str) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"Usage: {usage}")


class ExperienceCommands:
    """Validates operator input and applies it to the experience store.

    Permission checks belong to the caller; these methods assume the operator
    may run them. Every failure raises before the store is touched.
    """

    def __init__(self, store: ExperienceStore, state: GameState) -> None:
        self.store = store
        self.state = state

    def my_level(self, session: PlayerSession | None) -> Feedback:
        exp = self.store.get(player_key(session))
        return Feedback(FeedbackKind.INFO, f"Your current EXP: {exp}")

    def set_level(self, operator: str, target_name: str, exp: Any) -> AdjustmentResult:
        _require(target_name, "/setlevel <player> <exp>")
        _require(exp, "/setlevel <player> <exp>")
        amount = parse_exp(exp, allow_zero=True)
        target = self.state.resolve_session(target_name)
        key = player_key(target)

        self.store.upsert(key, amount)
        log.info("%s set %s (%s) EXP to %s", operator, target.name, key, amount)
        return AdjustmentResult(
            target=target,
            key=key,
            total=amount,
            messages=[
                Feedback(FeedbackKind.SUCCESS, f"Set {target.name}'s EXP to {amount}."),
                Feedback(
                    FeedbackKind.INFO,
                    f"{operator} set your EXP to {amount}.",
                    recipient=target,
                ),
            ],
        )

    def add_level(self, operator: str, target_name: str, exp: Any) -> AdjustmentResult:
        _require(target_name, "/addlevel <player> <exp>")
        _require(exp, "/addlevel <player> <exp>")
        amount = parse_exp(exp, allow_zero=False)
        target = self.state.resolve_session(target_name)
        key = player_key(target)

        self.store.add_delta(key, amount)
        total = self.store.get(key)
        log.info("%s added %s EXP to %s (%s)", operator, amount, target.name, key)
        return AdjustmentResult(
            target=target,
            key=key,
            total=total,
            messages=[
                Feedback(
                    FeedbackKind.SUCCESS,
                    f"Added {amount} EXP to {target.name}. Total: {total}",
                ),
                Feedback(
                    FeedbackKind.INFO,
                    f"{operator} added {amount} EXP to you. New total: {total}",
                    recipient=target,
                ),
            ],
        )

    def subtract_level(
        self, operator: str, target_name: str, exp: Any
    ) -> AdjustmentResult:
        _require(target_name, "/minuslevel <player> <exp>")
        _require(exp, "/minuslevel <player> <exp>")
        amount = parse_exp(exp, allow_zero=False)
        target = self.state.resolve_session(target_name)
        key = player_key(target)

        self.store.subtract_delta(key, amount)
        total = self.store.get(key)
        log.info("%s removed %s EXP from %s (%s)", operator, amount, target.name, key)
        return AdjustmentResult(
            target=target,
            key=key,
            total=total,
            messages=[
                Feedback(
                    FeedbackKind.SUCCESS,
                    f"Removed {amount} EXP from {target.name}. Total: {total}",
                ),
                Feedback(
                    FeedbackKind.INFO,
                    f"{operator} removed {amount} EXP from you. New total: {total}",
                    recipient=target,
                ),
            ],
        )

    def reset_level(self, operator: str, target_name: str) -> AdjustmentResult:
        _require(target_name, "/resetlevel <player>")
        target = self.state.resolve_session(target_name)
        key = player_key(target)

        self.store.upsert(key, 0)
        log.info("%s reset %s (%s) EXP", operator, target.name, key)
        return AdjustmentResult(
            target=target,
            key=key,
            total=0,
            messages=[
                Feedback(FeedbackKind.SUCCESS, f"Reset {target.name}'s EXP to 0."),
                Feedback(
                    FeedbackKind.INFO,
                    f"{operator} reset your EXP to 0. :(",
                    recipient=target,
                ),
            ],
        )


__all__ = ["AdjustmentResult", "ExperienceCommands"]
