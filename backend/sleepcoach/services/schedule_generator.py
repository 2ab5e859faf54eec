"""LLM-backed chronotype sleep schedule generation."""
from __future__ import annotations

from typing import List, Optional

from sleepcoach.api.schemas.schedule import ScheduleRequest, ScheduleResponse
from sleepcoach.core.errors import InvalidRequestError
from sleepcoach.services.completion_client import CompletionClientFactory
from sleepcoach.services.fallback_synthesizer import classify_chronotype, fallback_schedule_response
from sleepcoach.services.plan_generation import generate_plan

SCHEDULE_SYSTEM_PROMPT = (
    "You are Luna, an expert sleep optimization coach who creates transformation-level, highly personalized "
    "sleep schedules based on chronotype science and circadian rhythm optimization. Your schedule must work "
    "WITH the user's natural biology and address their specific challenges.\n\n"
    "CHRONOTYPE-FOCUSED APPROACH:\n"
    "- EARLY MORNING types (Lion): honor their natural early energy peak\n"
    "- MORNING types (Bear): optimize for steady energy and productivity patterns\n"
    "- LATE MORNING/AFTERNOON types (Wolf/Dolphin): work with their delayed circadian rhythms\n"
    "- EVENING types (Owl): accommodate night owl tendencies while achieving health goals\n\n"
    "Analyze their chronotype and challenges:\n"
    "- Racing mind: targeted anxiety reduction and mind-calming activities\n"
    "- Screen addiction: compelling, engaging alternatives to screens\n"
    "- Irregular schedule: consistency anchors that fit their chronotype\n"
    "- Energy mismatches: align activities with their natural energy peaks\n\n"
    "Respond with a JSON object with exactly this structure:\n"
    "{\n"
    '  "summary": "Analysis of their chronotype, challenges, and how the schedule addresses them",\n'
    '  "schedule": [\n'
    "    {\n"
    '      "time": "6:00 PM",\n'
    '      "activity": "Chronotype-aligned transition",\n'
    '      "description": "Activity designed for their energy pattern and challenges",\n'
    '      "category": "evening"\n'
    "    }\n"
    "  ],\n"
    '  "recommendations": {\n'
    '    "tips": ["Chronotype-specific tip", "Challenge-targeted strategy", "Goal-achievement technique"]\n'
    "  }\n"
    "}\n\n"
    "Schedule categories (use only these values):\n"
    '- "evening": activities from 6 PM to bedtime (wind-down preparation)\n'
    '- "night": sleep preparation and bedtime routine (1-2 hours before sleep)\n'
    '- "morning": wake-up routine and morning activities\n\n'
    "Guidelines:\n"
    "- Create a COMPLETE daily schedule with 12-18 specific timed activities in chronological order\n"
    "- Use exact times in 12-hour format (e.g. \"6:30 PM\", \"10:15 PM\", \"6:45 AM\")\n"
    "- Their DESIRED bedtime and wake time are the foundation; never move them to suit the chronotype\n"
    "- Address each mentioned challenge with a specific, targeted activity\n"
    "- Build their stated goals into motivating activities\n"
    "- Make each description actionable and chronotype-specific, with if-then backups for hard days\n"
    "- Give at most 3 tips"
)


def _joined(values: List[str]) -> str:
    return ", ".join(values) if values else "None specified"


def build_schedule_context(request: ScheduleRequest) -> str:
    """Render the questionnaire as the per-request user message."""
    return (
        "Please create a personalized sleep schedule based on the following user information:\n\n"
        "CHRONOTYPE & NATURAL PATTERNS:\n"
        f"- Chronotype: {request.chronotype} (when they naturally feel most alert)\n"
        f"- Weekend Sleep Pattern: {request.weekend_sleep_pattern} (their natural rhythm without constraints)\n"
        f"- Energy Pattern: {request.energy_pattern} (when they feel most creative/productive)\n\n"
        "DESIRED SCHEDULE:\n"
        f"- DESIRED Bedtime: {request.desired_bedtime} (USE THIS FOR THE SCHEDULE)\n"
        f"- DESIRED Wake Time: {request.desired_wake_time} (USE THIS FOR THE SCHEDULE)\n\n"
        "SPECIFIC CHALLENGES TO ADDRESS:\n"
        f"- Sleep Challenges: {_joined(request.challenges)} (MUST ADDRESS EACH WITH A TARGETED ACTIVITY)\n\n"
        "LIFESTYLE & GOALS:\n"
        f"- Lifestyle: {request.lifestyle}\n"
        f"- Goals: {_joined(request.goals)} (DESIGN THE SCHEDULE TO ACHIEVE THESE)\n\n"
        "Work WITH their chronotype for activity content, but keep the desired bedtime and wake time exactly "
        "as stated. Return the schedule as JSON."
    )


def generate_schedule(
    request: Optional[ScheduleRequest],
    client_factory: CompletionClientFactory,
    *,
    request_id: Optional[str] = None,
) -> ScheduleResponse:
    """Generate a sleep schedule, falling back to a fixed 5-item plan on bad output."""
    if request is None:
        raise InvalidRequestError("Questionnaire data is required")

    return generate_plan(
        kind="schedule",
        client_factory=client_factory,
        system_prompt=SCHEDULE_SYSTEM_PROMPT,
        build_context=lambda: build_schedule_context(request),
        model=ScheduleResponse,
        items_field="schedule",
        fallback=lambda: fallback_schedule_response(request),
        trace_metadata={
            "chronotype": classify_chronotype(request.chronotype).value,
            "challenges": len(request.challenges),
            "goals": len(request.goals),
        },
        request_id=request_id,
    )
