"""Scoreboard server configuration via environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings

from scoreboard.logic.settings import GameSettings


class ScoreboardServerSettings(BaseSettings):
    model_config = {"env_prefix": "SCOREBOARD_"}

    snapshot_path: str = Field(default="backend/data/bg_score_app_v1.json", min_length=1)
    log_dir: str | None = None
    goal_score: int = Field(default=200, ge=1)

    def game_settings(self) -> GameSettings:
        return GameSettings(goal_score=self.goal_score)
