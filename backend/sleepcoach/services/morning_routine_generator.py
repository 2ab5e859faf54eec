"""LLM-backed morning routine generation."""
from __future__ import annotations

from typing import List, Optional

from sleepcoach.api.schemas.morning_routine import MorningRoutineRequest, MorningRoutineResponse
from sleepcoach.core.errors import InvalidRequestError
from sleepcoach.services.completion_client import CompletionClientFactory
from sleepcoach.services.fallback_synthesizer import fallback_routine_response
from sleepcoach.services.plan_generation import generate_plan

MORNING_ROUTINE_SYSTEM_PROMPT = (
    "You are Luna, a friendly and expert morning routine coach who helps users create personalized, "
    "energizing morning routines. Based on the user's questionnaire responses, create a detailed, practical "
    "routine of specific timed activities.\n\n"
    "Respond with a JSON object with exactly this structure:\n"
    "{\n"
    '  "summary": "Brief analysis of their morning goals and how this routine addresses their needs",\n'
    '  "routine": [\n'
    "    {\n"
    '      "time": "6:30 AM",\n'
    '      "activity": "Morning hydration",\n'
    '      "description": "Drink 16-20oz of room temperature water to rehydrate after sleep",\n'
    '      "category": "wellness"\n'
    "    }\n"
    "  ],\n"
    '  "recommendations": {\n'
    '    "tips": ["Evidence-based morning routine tip", "Habit formation advice", "Personalized recommendation"]\n'
    "  }\n"
    "}\n\n"
    "Routine categories (use only these values):\n"
    '- "preparation": getting ready and essential morning tasks\n'
    '- "wellness": health, fitness, mindfulness and self-care\n'
    '- "productivity": planning, organizing and mental preparation for the day\n'
    '- "energy": activities that boost energy, alertness and motivation\n\n'
    "Guidelines:\n"
    "- Create 6-12 specific timed activities that fit their available time\n"
    "- Start from their DESIRED wake-up time and work forward in chronological order\n"
    "- Use exact times in 12-hour format (e.g. \"6:30 AM\", \"7:15 AM\")\n"
    "- Tailor activities to their energy level, goals, challenges and motivation style\n"
    "- Respect their work start time and commute\n"
    "- Incorporate their exercise and caffeine preferences\n"
    "- Keep the routine achievable and sustainable, and give at most 3 tips"
)


def _joined(values: List[str]) -> str:
    return ", ".join(values) if values else "None specified"


def build_morning_context(request: MorningRoutineRequest) -> str:
    """Render the morning questionnaire as the per-request user message."""
    lines = [
        f"Current Wake-up Time: {request.current_wake_up_time}",
        f"DESIRED Wake-up Time: {request.desired_wake_up_time} (USE THIS FOR THE ROUTINE)",
        f"Morning Goal: {request.morning_goal}",
        f"Available Time: {request.available_time}",
        f"Energy Level: {request.morning_energy_level}",
        f"Motivation Style: {request.motivation_style}",
        f"Ideal Mood: {request.morning_mood}",
        f"Current Activities: {_joined(request.current_morning_activities)}",
        f"Exercise Preference: {request.exercise_preference}",
        f"Caffeine Habits: {request.caffeine_habits}",
        f"Work Start Time: {request.work_start_time}",
        f"Commute Time: {request.morning_commute}",
        f"Weekend Routine: {request.weekend_difference}",
        f"Morning Challenges: {_joined(request.morning_challenges)}",
        f"Productivity Goals: {_joined(request.productivity_goals)}",
        f"Wellness Goals: {_joined(request.wellness_goals)}",
        f"Environment Preference: {request.morning_environment}",
        f"Seasonal Preferences: {request.seasonal_preferences}",
        f"Additional Information: {request.additional_info}",
    ]
    return (
        "Please create a personalized morning routine based on the following user information:\n\n"
        + "\n".join(lines)
        + "\n\nPlease create a detailed, personalized morning routine as JSON that addresses their specific "
        "needs, goals, and constraints."
    )


def generate_morning_routine(
    request: Optional[MorningRoutineRequest],
    client_factory: CompletionClientFactory,
    *,
    request_id: Optional[str] = None,
) -> MorningRoutineResponse:
    """Generate a morning routine, falling back to a fixed 4-step plan on bad output."""
    if request is None:
        raise InvalidRequestError("Questionnaire data is required")

    return generate_plan(
        kind="morning_routine",
        client_factory=client_factory,
        system_prompt=MORNING_ROUTINE_SYSTEM_PROMPT,
        build_context=lambda: build_morning_context(request),
        model=MorningRoutineResponse,
        items_field="routine",
        fallback=lambda: fallback_routine_response(request),
        trace_metadata={
            "energy_level": request.morning_energy_level,
            "available_time": request.available_time,
        },
        request_id=request_id,
    )
