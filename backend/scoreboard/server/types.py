from pydantic import BaseModel, ConfigDict, Field

from scoreboard.logic.enums import GameAction


class ActionRequest(BaseModel):
    """Body of POST /game/actions. Only the argument the action needs is used."""

    model_config = ConfigDict(extra="forbid")

    action: GameAction
    name: str | None = Field(default=None, max_length=50)
    player_id: str | None = Field(default=None, min_length=1, max_length=64)
    digit: str | None = Field(default=None, min_length=1, max_length=1)
    key: str | None = Field(default=None, min_length=1, max_length=2)

    def arguments(self) -> dict[str, str]:
        return self.model_dump(exclude={"action"}, exclude_none=True)
