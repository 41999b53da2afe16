"""Centralized gameplay settings for the scorekeeper."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Ordered palette; a player's color is palette[registration_index % len(palette)].
DEFAULT_PALETTE: tuple[str, ...] = (
    "#3b82f6",  # blue
    "#ef4444",  # red
    "#10b981",  # green
    "#f59e0b",  # amber
    "#8b5cf6",  # violet
    "#ec4899",  # pink
    "#06b6d4",  # cyan
    "#f97316",  # orange
)

MIN_PALETTE_SIZE = 8


class GameSettings(BaseModel):
    """
    Configuration inputs for scoring rules and player colors.

    All fields default to the stock behavior: the game ends once any total
    reaches 200 and colors cycle through eight distinct entries.
    """

    model_config = ConfigDict(frozen=True)

    goal_score: int = Field(default=200, ge=1)
    palette: tuple[str, ...] = DEFAULT_PALETTE
    max_entry_length: int = Field(default=5, ge=1)

    # scale used by presentation bars; totals above it render as full
    visual_max_score: int = Field(default=250, ge=1)

    @field_validator("palette")
    @classmethod
    def _validate_palette(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if len(value) < MIN_PALETTE_SIZE:
            raise ValueError(f"Palette must have at least {MIN_PALETTE_SIZE} colors, got {len(value)}")
        if any(not color for color in value):
            raise ValueError("Palette colors must not be empty")
        if len(set(value)) != len(value):
            raise ValueError("Palette colors must be distinct")
        return value
