"""Schemas for the morning routine generation endpoint."""
from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from sleepcoach.api.schemas.common import Recommendations, none_as_empty_list

RoutineCategory = Literal["preparation", "wellness", "productivity", "energy"]


class MorningRoutineRequest(BaseModel):
    """Morning questionnaire answers; wire keys are camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    current_wake_up_time: Optional[str] = None
    desired_wake_up_time: Optional[str] = None
    morning_goal: Optional[str] = None
    available_time: Optional[str] = None
    morning_energy_level: Optional[str] = None
    motivation_style: Optional[str] = None
    morning_mood: Optional[str] = None
    current_morning_activities: List[str] = Field(default_factory=list)
    exercise_preference: Optional[str] = None
    caffeine_habits: Optional[str] = None
    work_start_time: Optional[str] = None
    morning_commute: Optional[str] = None
    weekend_difference: Optional[str] = None
    morning_challenges: List[str] = Field(default_factory=list)
    productivity_goals: List[str] = Field(default_factory=list)
    wellness_goals: List[str] = Field(default_factory=list)
    morning_environment: Optional[str] = None
    seasonal_preferences: Optional[str] = None
    additional_info: Optional[str] = None

    @field_validator(
        "current_morning_activities",
        "morning_challenges",
        "productivity_goals",
        "wellness_goals",
        mode="before",
    )
    @classmethod
    def null_list_as_empty(cls, value: Any) -> Any:
        return none_as_empty_list(value)


class RoutineItem(BaseModel):
    time: str
    activity: str
    description: str
    category: RoutineCategory


class MorningRoutineResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str = ""
    routine: List[RoutineItem] = Field(..., min_length=1)
    recommendations: Optional[Recommendations] = None
    fallback_used: Optional[bool] = Field(default=None, alias="fallbackUsed")


class MorningRoutineEnvelope(BaseModel):
    success: bool = True
    data: MorningRoutineResponse
