from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from kingside.engine.piece import Color
from kingside.search.levels import LEVELS


ENV_PREFIX = "KINGSIDE_"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the HTTP adapter and CLI.

    Attributes:
        host (str): Interface uvicorn binds to.
        port (int): TCP port uvicorn listens on.
        log_level (str): Root logging level name.
        default_level (str): Difficulty preset for games created without one.
        ai_color (Color): Side the AI plays by default.
        seed (Optional[int]): Seed for the search random source; None means
            nondeterministic play.
    """

    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    default_level: str = "intermediate"
    ai_color: Color = Color.BLACK
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            raise ValueError(f"port out of range: {self.port}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"unknown log level: {self.log_level!r}")
        if self.default_level not in LEVELS:
            raise ValueError(f"unknown difficulty level: {self.default_level!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read settings from ``KINGSIDE_*`` environment variables.

        Raises:
            ValueError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def get(name: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + name)
            return value.strip() if value is not None and value.strip() else None

        port = get("PORT")
        seed = get("SEED")
        ai_color = get("AI_COLOR")
        try:
            return cls(
                host=get("HOST") or defaults.host,
                port=int(port) if port is not None else defaults.port,
                log_level=(get("LOG_LEVEL") or defaults.log_level).upper(),
                default_level=(get("DEFAULT_LEVEL") or defaults.default_level).lower(),
                ai_color=Color(ai_color.lower()) if ai_color is not None else defaults.ai_color,
                seed=int(seed) if seed is not None else None,
            )
        except ValueError as e:
            raise ValueError(f"invalid {ENV_PREFIX}* setting: {e}") from e
