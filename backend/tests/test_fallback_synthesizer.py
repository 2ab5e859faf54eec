"""Tests for the deterministic fallback schedule and routine builders."""
from __future__ import annotations

import pytest

from sleepcoach.api.schemas.morning_routine import MorningRoutineRequest
from sleepcoach.api.schemas.schedule import ScheduleRequest
from sleepcoach.services.fallback_synthesizer import (
    Chronotype,
    RACING_MIND,
    SCREEN_ADDICTION,
    classify_chronotype,
    fallback_routine,
    fallback_routine_response,
    fallback_schedule,
    fallback_schedule_response,
    format_clock,
    has_challenge,
    parse_clock,
)


def _minutes(display: str) -> int:
    clock, suffix = display.split(" ")
    hour, minute = (int(part) for part in clock.split(":"))
    return (hour % 12 + (12 if suffix == "PM" else 0)) * 60 + minute


@pytest.mark.parametrize(
    "value,expected",
    [
        ("early-morning", Chronotype.EARLY),
        ("morning", Chronotype.EARLY),
        ("late-morning", Chronotype.EARLY),
        ("evening", Chronotype.NIGHT),
        ("night-owl", Chronotype.NIGHT),
        ("afternoon", Chronotype.NEUTRAL),
        ("", Chronotype.NEUTRAL),
        (None, Chronotype.NEUTRAL),
    ],
)
def test_classify_chronotype_trigger_strings(value, expected) -> None:
    assert classify_chronotype(value) is expected


def test_challenge_labels_match_exactly() -> None:
    assert SCREEN_ADDICTION == "Screen addiction"
    assert RACING_MIND == "Racing mind"
    assert has_challenge(["Racing mind"], RACING_MIND)
    assert not has_challenge(["racing mind"], RACING_MIND)
    assert not has_challenge(["Screen addiction at night"], SCREEN_ADDICTION)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("22:00", (22, 0)),
        ("6:00", (6, 0)),
        ("06:45", (6, 45)),
        ("10:15 PM", (22, 15)),
        ("12:00 AM", (0, 0)),
        ("7", (7, 0)),
        ("25:00", None),
        ("soon", None),
        (None, None),
    ],
)
def test_parse_clock(raw, expected) -> None:
    assert parse_clock(raw) == expected


def test_format_clock_wraps_and_pads() -> None:
    assert format_clock(0) == "12:00 AM"
    assert format_clock(12 * 60) == "12:00 PM"
    assert format_clock(22 * 60) == "10:00 PM"
    assert format_clock(7 * 60 + 5) == "7:05 AM"
    assert format_clock(23 * 60 + 50 + 30) == "12:20 AM"
    assert format_clock(-60) == "11:00 PM"


def test_default_schedule_anchors_on_bedtime_and_wake_time() -> None:
    items = fallback_schedule(ScheduleRequest(bedtime="22:00", wakeTime="06:00"))

    assert len(items) == 5
    assert [item.time for item in items] == ["7:00 PM", "8:00 PM", "9:00 PM", "10:00 PM", "6:00 AM"]
    assert [item.category for item in items] == ["evening", "evening", "evening", "night", "morning"]
    assert items[3].activity == "Bedtime"


def test_schedule_defaults_when_times_missing_or_unparseable() -> None:
    missing = fallback_schedule(ScheduleRequest())
    garbage = fallback_schedule(ScheduleRequest(bedtime="whenever", wakeTime="late"))

    assert missing == garbage
    assert missing[3].time == "10:00 PM"
    assert missing[4].time == "6:00 AM"


def test_schedule_is_chronological_across_midnight() -> None:
    items = fallback_schedule(ScheduleRequest(bedtime="01:00", wakeTime="09:00"))

    assert [item.time for item in items] == ["10:00 PM", "11:00 PM", "12:00 AM", "1:00 AM", "9:00 AM"]
    offsets = [_minutes(item.time) for item in items]
    night_offsets = [(offset - offsets[0]) % (24 * 60) for offset in offsets]
    assert night_offsets == sorted(night_offsets)


def test_early_chronotype_uses_early_phrasing() -> None:
    early = fallback_schedule(ScheduleRequest(chronotype="early-morning"))
    neutral = fallback_schedule(ScheduleRequest(chronotype="evening"))

    assert early[0].activity == "Prepare for evening wind-down"
    assert early[4].activity == "Natural early awakening"
    assert neutral[0].activity == "Begin transition from day activities"
    assert neutral[4].activity == "Gentle wake-up routine"


def test_screen_addiction_swaps_digital_sunset_description() -> None:
    items = fallback_schedule(ScheduleRequest(challenges=["Screen addiction"]))

    assert "Replace screens" in items[1].description
    assert "Racing" not in items[2].activity


def test_racing_mind_swaps_pre_sleep_item() -> None:
    items = fallback_schedule(ScheduleRequest(challenges=["Racing mind"]))

    assert items[2].activity == "Mind-calming routine"
    assert "breathing" in items[2].description
    assert items[1].description == "Dim lights and create a calming environment"


def test_schedule_fallback_is_deterministic() -> None:
    request = ScheduleRequest(
        chronotype="morning",
        bedtime="23:00",
        wakeTime="07:00",
        challenges=["Screen addiction", "Racing mind"],
    )

    first = fallback_schedule_response(request)
    second = fallback_schedule_response(request)

    assert first.model_dump_json(by_alias=True) == second.model_dump_json(by_alias=True)
    assert first.fallback_used is True
    assert first.summary


def test_routine_offsets_from_desired_wake_time() -> None:
    items = fallback_routine(MorningRoutineRequest(desiredWakeUpTime="07:00", currentWakeUpTime="08:30"))

    assert [item.time for item in items] == ["7:00 AM", "7:05 AM", "7:15 AM", "7:30 AM"]
    assert [item.category for item in items] == ["preparation", "wellness", "wellness", "preparation"]
    assert [item.activity for item in items] == [
        "Gentle awakening",
        "Morning hydration",
        "Energizing movement",
        "Mindful preparation",
    ]


def test_routine_rolls_minutes_into_next_hour() -> None:
    items = fallback_routine(MorningRoutineRequest(desiredWakeUpTime="6:45"))

    assert [item.time for item in items] == ["6:45 AM", "6:50 AM", "7:00 AM", "7:15 AM"]


def test_routine_wraps_past_midnight() -> None:
    items = fallback_routine(MorningRoutineRequest(desiredWakeUpTime="23:50"))

    assert [item.time for item in items] == ["11:50 PM", "11:55 PM", "12:05 AM", "12:20 AM"]


def test_routine_falls_back_to_current_then_default() -> None:
    current = fallback_routine(MorningRoutineRequest(currentWakeUpTime="5:30"))
    default = fallback_routine(MorningRoutineRequest())

    assert current[0].time == "5:30 AM"
    assert default[0].time == "7:00 AM"


def test_routine_ignores_everything_but_wake_time() -> None:
    plain = fallback_routine_response(MorningRoutineRequest(desiredWakeUpTime="06:00"))
    detailed = fallback_routine_response(
        MorningRoutineRequest(
            desiredWakeUpTime="06:00",
            morningGoal="Run a marathon",
            morningEnergyLevel="low",
            wellnessGoals=["Meditate"],
        )
    )

    assert plain == detailed
    assert len(plain.routine) == 4
