from __future__ import annotations

import random
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional

from ...engine.game import Game
from ...engine.piece import Color
from ...search.levels import DifficultyLevel


@dataclass
class GameSession:
    """One human-vs-AI game and the opponent settings it was created with.

    ``lock`` serializes every read or mutation of ``game``, including AI
    searches running in the thread pool. ``rng`` feeds this game's searches
    only, so a seeded session replays the same AI choices whatever other
    sessions do.
    """

    game: Game
    level: DifficultyLevel
    ai_color: Color
    rng: random.Random = field(default_factory=random.Random, repr=False)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    @property
    def human_color(self) -> Color:
        return self.ai_color.opponent


class InMemorySessionStore:
    """Thread-safe in-memory game session store.

    Responsibilities:
    - Create new sessions with unique `game_id`s
    - Retrieve existing sessions by `game_id`
    - Delete sessions
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._sessions: Dict[str, GameSession] = {}

    def create(self, session: GameSession) -> str:
        """Store `session` and return its new `game_id`."""
        gid = str(uuid.uuid4())
        with self._lock:
            self._sessions[gid] = session
        return gid

    def get(self, game_id: str) -> Optional[GameSession]:
        with self._lock:
            return self._sessions.get(game_id)

    def delete(self, game_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(game_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
