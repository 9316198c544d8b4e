"""Settings for a game of chess in the hub. Defaults can be overridden with environment variables."""

import os
from typing import Optional, Self

from pydantic import BaseModel, Field

from src.core.shared_types import Color, GameMode


class GameConfig(BaseModel):
    default_mode: GameMode = GameMode.CPU
    cpu_color: Color = Color.BLACK
    # seed the CPU's random source to replay the exact same games
    cpu_seed: Optional[int] = None
    # NOTE: only advisory. The engine is synchronous, it is the UI that waits before asking for the CPU move.
    cpu_delay_ms: int = Field(default=500, ge=0)

    @classmethod
    def from_env(cls) -> Self:
        """CHESS_DEFAULT_MODE, CHESS_CPU_COLOR, CHESS_CPU_SEED, CHESS_CPU_DELAY_MS"""
        values: dict[str, str] = {}
        env_names = {
            "default_mode": "CHESS_DEFAULT_MODE",
            "cpu_color": "CHESS_CPU_COLOR",
            "cpu_seed": "CHESS_CPU_SEED",
            "cpu_delay_ms": "CHESS_CPU_DELAY_MS",
        }
        for name, env_name in env_names.items():
            value = os.getenv(env_name)
            if value is not None:
                values[name] = value
        return cls.model_validate(values)
