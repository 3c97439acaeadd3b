from __future__ import annotations

import math
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_LIMIT = 3
MAX_LIMIT = 5
MIN_TASK_LENGTH = 8


class RecommendationQuery(BaseModel):
    task: str = Field(default="", description="Natural-language task description (trimmed)")
    agent: Literal["codex", "claude", "gemini", "any"] = Field(
        default="any", description="Benchmark agent used to weight scores; anything unknown means any"
    )
    limit: int = Field(default=DEFAULT_LIMIT, description="Number of candidates returned, 1-5")

    @field_validator("task", mode="before")
    @classmethod
    def _trim_task(cls, value: Any) -> str:
        return value.strip() if isinstance(value, str) else ""

    @field_validator("agent", mode="before")
    @classmethod
    def _known_agent(cls, value: Any) -> str:
        agent = value.strip().lower() if isinstance(value, str) else "any"
        return agent if agent in ("codex", "claude", "gemini") else "any"

    @field_validator("limit", mode="before")
    @classmethod
    def _clamp_limit(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return DEFAULT_LIMIT
        if not math.isfinite(value) or value <= 0:
            return DEFAULT_LIMIT
        return max(1, min(MAX_LIMIT, int(value)))

    @property
    def has_valid_task(self) -> bool:
        return len(self.task) >= MIN_TASK_LENGTH
