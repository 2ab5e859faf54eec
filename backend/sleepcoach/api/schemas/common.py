"""Schema pieces shared by the schedule and morning routine payloads."""
from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field, field_validator

MAX_TIPS = 3


def none_as_empty_list(value: Any) -> Any:
    """Treat an explicit null list field as an empty one."""
    return [] if value is None else value


class Recommendations(BaseModel):
    tips: List[str] = Field(default_factory=list)

    @field_validator("tips", mode="before")
    @classmethod
    def keep_first_tips(cls, value: Any) -> Any:
        value = none_as_empty_list(value)
        if isinstance(value, list):
            return value[:MAX_TIPS]
        return value
