"""Pydantic schemas for the sleep assistant chat endpoint."""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from sleepcoach.api.schemas.common import none_as_empty_list


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class CurrentSchedule(_CamelModel):
    bedtime: Optional[str] = None
    wakeup: Optional[str] = None
    sleep_goal: Optional[float] = None


class UserInfo(_CamelModel):
    age: Optional[int] = None
    lifestyle: Optional[str] = None
    sleep_issues: List[str] = Field(default_factory=list)
    work_schedule: Optional[str] = None

    @field_validator("sleep_issues", mode="before")
    @classmethod
    def null_list_as_empty(cls, value: Any) -> Any:
        return none_as_empty_list(value)


class SleepAssistantRequest(_CamelModel):
    message: Optional[str] = None
    current_schedule: Optional[CurrentSchedule] = None
    user_info: Optional[UserInfo] = None


class AssistantRecommendations(_CamelModel):
    bedtime: Optional[str] = None
    wakeup: Optional[str] = None
    sleep_duration: Optional[float] = None
    tips: Optional[List[str]] = None


class SleepAssistantResponse(_CamelModel):
    response: str
    recommendations: Optional[AssistantRecommendations] = None
    success: bool
    error: Optional[str] = None
