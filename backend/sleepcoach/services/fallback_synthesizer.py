"""Deterministic fallback plans used when a completion cannot be parsed.

Both builders are pure functions of the questionnaire: the same request always
yields the same plan, independent of the current time.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from sleepcoach.api.schemas.morning_routine import MorningRoutineRequest, MorningRoutineResponse, RoutineItem
from sleepcoach.api.schemas.schedule import ScheduleItem, ScheduleRequest, ScheduleResponse

MINUTES_PER_DAY = 24 * 60

DEFAULT_BEDTIME = (22, 0)
DEFAULT_WAKE_TIME = (6, 0)
DEFAULT_ROUTINE_WAKE_TIME = (7, 0)

FALLBACK_SCHEDULE_SUMMARY = "Luna has created your personalized schedule"
FALLBACK_ROUTINE_SUMMARY = "Luna has created your personalized morning routine"

SCREEN_ADDICTION = "Screen addiction"
RACING_MIND = "Racing mind"

_CLOCK_RE = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?(?::\d{2})?\s*([AaPp])?\.?[Mm]?\.?\s*$")


class Chronotype(str, Enum):
    EARLY = "early"
    NIGHT = "night"
    NEUTRAL = "neutral"


# Checked in order; the first family with a matching marker wins.
CHRONOTYPE_MARKERS: Tuple[Tuple[Chronotype, Tuple[str, ...]], ...] = (
    (Chronotype.EARLY, ("early-morning", "morning")),
    (Chronotype.NIGHT, ("evening", "night")),
)


def classify_chronotype(chronotype: Optional[str]) -> Chronotype:
    """Map a free-text chronotype answer onto early / night / neutral.

    Matching is a case-sensitive substring test, so ``"late-morning"`` counts
    as an early type.
    """
    if not chronotype:
        return Chronotype.NEUTRAL
    for family, markers in CHRONOTYPE_MARKERS:
        if any(marker in chronotype for marker in markers):
            return family
    return Chronotype.NEUTRAL


def has_challenge(challenges: Iterable[str], challenge: str) -> bool:
    """Exact membership test against the questionnaire's challenge labels."""
    return challenge in set(challenges)


def parse_clock(value: Optional[str]) -> Optional[Tuple[int, int]]:
    """Parse ``"22:00"``, ``"6:30"`` or ``"10:15 PM"`` into (hour, minute)."""
    if not value:
        return None
    match = _CLOCK_RE.match(value)
    if not match:
        return None
    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    meridiem = (match.group(3) or "").upper()
    if meridiem:
        if not 1 <= hour <= 12:
            return None
        hour = hour % 12 + (12 if meridiem == "P" else 0)
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def format_clock(total_minutes: int) -> str:
    """Render minutes since midnight as a 12-hour clock, wrapping at 24h."""
    total_minutes %= MINUTES_PER_DAY
    hour, minute = divmod(total_minutes, 60)
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:{minute:02d} {suffix}"


def _hour_mark(hour: int) -> str:
    return format_clock(hour * 60)


def fallback_schedule(request: ScheduleRequest) -> List[ScheduleItem]:
    """Five-item evening-to-morning schedule anchored on the desired times."""
    bed_hour = (parse_clock(request.desired_bedtime) or DEFAULT_BEDTIME)[0]
    wake_hour = (parse_clock(request.desired_wake_time) or DEFAULT_WAKE_TIME)[0]
    early = classify_chronotype(request.chronotype) is Chronotype.EARLY
    screen_addiction = has_challenge(request.challenges, SCREEN_ADDICTION)
    racing_mind = has_challenge(request.challenges, RACING_MIND)

    return [
        ScheduleItem(
            time=_hour_mark(bed_hour - 3),
            activity="Prepare for evening wind-down" if early else "Begin transition from day activities",
            description=(
                "Early chronotype: Start preparing for your natural early bedtime routine"
                if early
                else "Begin shifting from high-energy activities to evening mode"
            ),
            category="evening",
        ),
        ScheduleItem(
            time=_hour_mark(bed_hour - 2),
            activity="Digital sunset and environment prep",
            description=(
                "Replace screens with calming alternatives - try reading, journaling, or gentle stretching"
                if screen_addiction
                else "Dim lights and create a calming environment"
            ),
            category="evening",
        ),
        ScheduleItem(
            time=_hour_mark(bed_hour - 1),
            activity="Mind-calming routine" if racing_mind else "Pre-sleep preparation",
            description=(
                "Practice mindfulness, breathing exercises, or gentle meditation to calm racing thoughts"
                if racing_mind
                else "Personal hygiene and final preparations for sleep"
            ),
            category="evening",
        ),
        ScheduleItem(
            time=_hour_mark(bed_hour),
            activity="Bedtime",
            description="Sleep time aligned with your desired schedule and chronotype",
            category="night",
        ),
        ScheduleItem(
            time=_hour_mark(wake_hour),
            activity="Natural early awakening" if early else "Gentle wake-up routine",
            description=(
                "Your chronotype thrives with early mornings - embrace this natural energy!"
                if early
                else "Wake up gently and gradually increase alertness"
            ),
            category="morning",
        ),
    ]


def fallback_schedule_response(request: ScheduleRequest) -> ScheduleResponse:
    return ScheduleResponse(
        summary=FALLBACK_SCHEDULE_SUMMARY,
        schedule=fallback_schedule(request),
        fallback_used=True,
    )


ROUTINE_STEPS: Tuple[Tuple[int, str, str, str], ...] = (
    (0, "Gentle awakening", "Wake up naturally and set a positive intention for your day", "preparation"),
    (5, "Morning hydration", "Drink 16-20oz of room temperature water to rehydrate your body", "wellness"),
    (15, "Energizing movement", "Light stretching or gentle exercise to activate your body", "wellness"),
    (30, "Mindful preparation", "Complete your morning routine with intention and focus", "preparation"),
)


def routine_wake_time(request: MorningRoutineRequest) -> Tuple[int, int]:
    """Desired wake time, else current, else 7:00."""
    raw = request.desired_wake_up_time or request.current_wake_up_time
    return parse_clock(raw) or DEFAULT_ROUTINE_WAKE_TIME


def fallback_routine(request: MorningRoutineRequest) -> List[RoutineItem]:
    """Four-step routine keyed only on the wake time."""
    hour, minute = routine_wake_time(request)
    start = hour * 60 + minute
    return [
        RoutineItem(time=format_clock(start + offset), activity=activity, description=description, category=category)
        for offset, activity, description, category in ROUTINE_STEPS
    ]


def fallback_routine_response(request: MorningRoutineRequest) -> MorningRoutineResponse:
    return MorningRoutineResponse(
        summary=FALLBACK_ROUTINE_SUMMARY,
        routine=fallback_routine(request),
        fallback_used=True,
    )
