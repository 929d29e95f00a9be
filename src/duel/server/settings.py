"""Duel server configuration via environment variables."""

from __future__ import annotations

import json
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode

from duel.logic.settings import MAX_OPEN_GAMES_PER_PLAYER, GameSettings
from ladder.standings import DEFAULT_LEADERBOARD_LIMIT


class DuelServerSettings(BaseSettings):
    model_config = {"env_prefix": "DUEL_"}

    db_path: str = "data/duel.sqlite3"
    log_format: Literal["console", "json"] = "console"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    # NoDecode: the raw env string reaches split_cors_origins undecoded
    cors_origins: Annotated[list[str], NoDecode] = ["http://localhost:3000"]
    leaderboard_limit: int = Field(default=DEFAULT_LEADERBOARD_LIMIT, ge=1)
    max_open_games: int = Field(default=MAX_OPEN_GAMES_PER_PLAYER, ge=1)

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, v: object) -> object:
        """Accept a JSON array ('["a","b"]') or a comma-separated string ('a,b')."""
        if not isinstance(v, str):
            return v
        text = v.strip()
        if text.startswith("["):
            return json.loads(text)
        return [origin.strip() for origin in text.split(",") if origin.strip()]

    def game_settings(self) -> GameSettings:
        return GameSettings(max_open_games=self.max_open_games)
