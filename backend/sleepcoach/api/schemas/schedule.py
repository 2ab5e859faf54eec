"""Schemas for the sleep schedule generation endpoint."""
from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from sleepcoach.api.schemas.common import Recommendations, none_as_empty_list

ScheduleCategory = Literal["evening", "night", "morning"]


class ScheduleRequest(BaseModel):
    """Chronotype questionnaire answers posted by the dashboard."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    chronotype: Optional[str] = None
    weekend_sleep_pattern: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("weekendSleep", "weekendSleepPattern", "weekend_sleep_pattern"),
    )
    energy_pattern: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("energyPattern", "energy_pattern"),
    )
    desired_bedtime: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("bedtime", "desiredBedtime", "desired_bedtime"),
        description="Authoritative bedtime, HH:MM 24h.",
    )
    desired_wake_time: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("wakeTime", "desiredWakeTime", "desired_wake_time"),
        description="Authoritative wake time, HH:MM 24h.",
    )
    challenges: List[str] = Field(default_factory=list)
    lifestyle: Optional[str] = None
    goals: List[str] = Field(default_factory=list)

    @field_validator("challenges", "goals", mode="before")
    @classmethod
    def null_list_as_empty(cls, value: Any) -> Any:
        return none_as_empty_list(value)


class ScheduleItem(BaseModel):
    time: str
    activity: str
    description: str
    category: ScheduleCategory


class ScheduleResponse(BaseModel):
    """Schedule payload, whether produced by the model or the fallback."""

    model_config = ConfigDict(populate_by_name=True)

    summary: str = ""
    schedule: List[ScheduleItem] = Field(..., min_length=1)
    recommendations: Optional[Recommendations] = None
    fallback_used: Optional[bool] = Field(default=None, alias="fallbackUsed")


class ScheduleEnvelope(BaseModel):
    success: bool = True
    data: ScheduleResponse
