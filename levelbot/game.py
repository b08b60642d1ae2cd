"""In-memory registry of the player sessions connected to the game server."""

from __future__ import annotations

from typing import Dict, List, Optional

from .models import PlayerSession, ResolutionError


class GameState:
    """Active sessions keyed by their server-assigned index."""

    def __init__(self) -> None:
        self.sessions: Dict[int, PlayerSession] = {}

    def register_session(self, session: PlayerSession) -> None:
        self.sessions[session.index] = session

    def remove_session(self, index: int) -> Optional[PlayerSession]:
        """Forget the session at ``index`` when its player disconnects."""

        session = self.sessions.pop(index, None)
        if session is not None:
            session.active = False
        return session

    def get_session(self, index: int) -> Optional[PlayerSession]:
        return self.sessions.get(index)

    def active_sessions(self) -> List[PlayerSession]:
        return [
            session
            for _, session in sorted(self.sessions.items())
            if session.active
        ]

    def session_for_account(self, account_id: int) -> Optional[PlayerSession]:
        for session in self.active_sessions():
            if session.account_id == account_id:
                return session
        return None

    def find_sessions(self, query: str) -> List[PlayerSession]:
        """Resolve ``query`` to active sessions by index or name.

        A numeric query naming an active session index wins outright, then an
        exact (case-insensitive) name match. Otherwise every session whose name
        starts with ``query`` is returned.
        """

        text = query.strip()
        if not text:
            return []
        active = self.active_sessions()
        if text.isdecimal():
            session = self.sessions.get(int(text))
            if session is not None and session.active:
                return [session]
        folded = text.casefold()
        exact = [session for session in active if session.name.casefold() == folded]
        if len(exact) == 1:
            return exact
        return [
            session for session in active if session.name.casefold().startswith(folded)
        ]

    def resolve_session(self, query: str) -> PlayerSession:
        """Return the single session matching ``query``.

        Raises :class:`ResolutionError` when no session or several sessions
        match.
        """

        matches = self.find_sessions(query)
        if len(matches) != 1:
            raise ResolutionError(query, len(matches))
        return matches[0]


__all__ = ["GameState"]
