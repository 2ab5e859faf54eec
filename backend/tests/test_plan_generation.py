"""Tests for parsing completions and the parse-or-fallback policy."""
from __future__ import annotations

import logging

import pytest

from helpers import FakeCompletionClient, as_json, routine_items, schedule_items
from sleepcoach.api.schemas.morning_routine import MorningRoutineResponse
from sleepcoach.api.schemas.schedule import ScheduleRequest, ScheduleResponse
from sleepcoach.core.errors import ConfigurationError, GenerationError, MalformedResponseError, UpstreamError
from sleepcoach.services.fallback_synthesizer import fallback_schedule_response
from sleepcoach.services.plan_generation import parse_or_fallback, parse_plan
from sleepcoach.services.schedule_generator import build_schedule_context, generate_schedule


def _fallback():
    return fallback_schedule_response(ScheduleRequest())


def test_parse_plan_accepts_valid_schedule() -> None:
    text = as_json({"summary": "Tailored", "schedule": schedule_items(12), "recommendations": {"tips": ["a", "b"]}})

    plan = parse_plan(text, ScheduleResponse, "schedule")

    assert plan.summary == "Tailored"
    assert len(plan.schedule) == 12
    assert plan.recommendations.tips == ["a", "b"]
    assert plan.fallback_used is None


def test_parse_plan_strips_markdown_fence() -> None:
    text = "```json\n" + as_json({"summary": "s", "routine": routine_items(6)}) + "\n```"

    plan = parse_plan(text, MorningRoutineResponse, "routine")

    assert len(plan.routine) == 6


def test_parse_plan_truncates_tips_to_three() -> None:
    text = as_json({"schedule": schedule_items(12), "recommendations": {"tips": ["1", "2", "3", "4"]}})

    plan = parse_plan(text, ScheduleResponse, "schedule")

    assert plan.recommendations.tips == ["1", "2", "3"]


def test_parse_plan_ignores_model_supplied_fallback_flag() -> None:
    text = as_json({"summary": "s", "schedule": schedule_items(12), "fallbackUsed": True})

    assert parse_plan(text, ScheduleResponse, "schedule").fallback_used is None


@pytest.mark.parametrize(
    "text",
    [
        "Here is your schedule: 6 PM dinner, 10 PM bed.",
        "[]",
        as_json({"summary": "no schedule key"}),
        as_json({"schedule": "6 PM dinner"}),
        as_json({"schedule": []}),
        as_json({"schedule": [{"time": "6:00 PM", "activity": "x", "description": "y", "category": "afternoon"}]}),
    ],
)
def test_parse_plan_rejects_unusable_text(text) -> None:
    with pytest.raises(MalformedResponseError):
        parse_plan(text, ScheduleResponse, "schedule")


def test_parse_or_fallback_returns_fallback_and_logs(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="sleepcoach.services.plan_generation"):
        plan = parse_or_fallback("not json", ScheduleResponse, "schedule", _fallback)

    assert plan.fallback_used is True
    assert len(plan.schedule) == 5
    assert any("using fallback" in record.getMessage() for record in caplog.records)


def test_context_message_flags_authoritative_times_and_lists() -> None:
    request = ScheduleRequest(
        chronotype="evening",
        weekendSleep="late",
        energyPattern="night",
        bedtime="23:30",
        wakeTime="07:15",
        challenges=["Racing mind", "Screen addiction"],
        lifestyle="Remote worker",
        goals=["More energy"],
    )

    context = build_schedule_context(request)

    assert "DESIRED Bedtime: 23:30 (USE THIS FOR THE SCHEDULE)" in context
    assert "DESIRED Wake Time: 07:15 (USE THIS FOR THE SCHEDULE)" in context
    assert "Racing mind, Screen addiction" in context
    assert "Weekend Sleep Pattern: late" in context
    assert "Goals: More energy" in context


def test_context_message_marks_empty_lists() -> None:
    context = build_schedule_context(ScheduleRequest(bedtime="22:00"))

    assert "Sleep Challenges: None specified" in context
    assert "Goals: None specified" in context


def test_generate_schedule_uses_json_mode_once() -> None:
    fake = FakeCompletionClient(reply=as_json({"summary": "s", "schedule": schedule_items(14)}))

    plan = generate_schedule(ScheduleRequest(), lambda: fake)

    assert len(fake.calls) == 1
    assert fake.calls[0]["json_mode"] is True
    assert "12-18" in fake.calls[0]["system_prompt"]
    assert len(plan.schedule) == 14


def test_generate_schedule_checks_config_before_building_context() -> None:
    def unconfigured():
        raise ConfigurationError("OpenAI API key not configured")

    with pytest.raises(ConfigurationError):
        generate_schedule(ScheduleRequest(), unconfigured)


def test_generate_schedule_propagates_upstream_error() -> None:
    fake = FakeCompletionClient(error=UpstreamError("rate limited"))

    with pytest.raises(UpstreamError, match="rate limited"):
        generate_schedule(ScheduleRequest(), lambda: fake)


def test_generate_schedule_wraps_unexpected_errors() -> None:
    fake = FakeCompletionClient(error=RuntimeError("socket closed"))

    with pytest.raises(GenerationError, match="socket closed"):
        generate_schedule(ScheduleRequest(), lambda: fake)
