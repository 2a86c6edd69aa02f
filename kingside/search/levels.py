from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class DifficultyLevel:
    """Search parameters behind a named AI opponent.

    Attributes:
        key (str): Identifier used by callers (``"beginner"``...).
        name (str): Display name.
        elo (str): Approximate playing strength label.
        depth (int): Search depth in plies.
        randomness (float): Probability of playing a uniformly random move.
    """

    key: str
    name: str
    elo: str
    depth: int
    randomness: float


LEVELS: Dict[str, DifficultyLevel] = {
    "beginner": DifficultyLevel("beginner", "Beginner", "~800", depth=1, randomness=0.3),
    "intermediate": DifficultyLevel(
        "intermediate", "Intermediate", "~1200", depth=2, randomness=0.1
    ),
    "advanced": DifficultyLevel("advanced", "Advanced", "~1600", depth=3, randomness=0.0),
}


def get_level(key: str) -> DifficultyLevel:
    """Return the preset called ``key``.

    Raises:
        KeyError: If no preset has that name.
    """
    try:
        return LEVELS[key.lower()]
    except KeyError:
        raise KeyError(f"unknown difficulty level: {key!r}") from None


def list_levels() -> List[DifficultyLevel]:
    return list(LEVELS.values())
