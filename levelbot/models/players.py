"""Player-session models and identity resolution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

ACCOUNT_KEY_PREFIX = "acc_"
UUID_KEY_PREFIX = "uuid_"


@dataclass(slots=True)
class PlayerSession:
    """A player connected to the game server."""

    index: int
    name: str
    account_id: Optional[int] = None
    uuid: str = ""
    active: bool = True

    @property
    def has_account(self) -> bool:
        return self.account_id is not None


def player_key(session: PlayerSession | None) -> str:
    """Return the storage key for ``session``.

    A logged-in account always takes precedence over the client UUID. Sessions
    without either resolve to the shared ``"uuid_"`` key.
    """

    if session is not None and session.account_id is not None:
        return f"{ACCOUNT_KEY_PREFIX}{session.account_id}"
    uuid = session.uuid if session is not None and session.uuid else ""
    return f"{UUID_KEY_PREFIX}{uuid}"


class FeedbackKind(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(slots=True, frozen=True)
class Feedback:
    """A message for a player; ``recipient=None`` addresses the operator."""

    kind: FeedbackKind
    text: str
    recipient: Optional[PlayerSession] = None


__all__ = [
    "ACCOUNT_KEY_PREFIX",
    "UUID_KEY_PREFIX",
    "Feedback",
    "FeedbackKind",
    "PlayerSession",
    "player_key",
]
