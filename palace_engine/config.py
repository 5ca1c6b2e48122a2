"""Game configuration for the Palace shell."""

from __future__ import annotations

import logging
import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from palace_engine.state import MAX_PLAYERS, MIN_PLAYERS

ENV_PREFIX = "PALACE_"


class GameConfig(BaseModel):
    """Settings for one game."""

    player_count: int = Field(2, ge=MIN_PLAYERS, le=MAX_PLAYERS, description="Number of players")
    seed: int | None = Field(None, description="Random seed for reproducibility")
    log_level: str = Field("WARNING", description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, **overrides: Any) -> GameConfig:
        """Build a config from ``.env``, the environment, then overrides.

        Reads ``PALACE_PLAYERS``, ``PALACE_SEED`` and ``PALACE_LOG_LEVEL``.
        Overrides that are None are ignored.

        Raises:
            pydantic.ValidationError: If a value is out of range.
        """
        load_dotenv()
        values: dict[str, Any] = {}
        env_names = {
            "player_count": "PLAYERS",
            "seed": "SEED",
            "log_level": "LOG_LEVEL",
        }
        for field_name, env_name in env_names.items():
            raw = os.environ.get(ENV_PREFIX + env_name)
            if raw not in (None, ""):
                values[field_name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
