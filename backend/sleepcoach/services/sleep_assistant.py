"""Conversational sleep assistant backed by the completion client."""
from __future__ import annotations

import logging
from typing import Dict, Optional, Type

from sleepcoach.api.schemas.sleep_assistant import (
    AssistantRecommendations,
    SleepAssistantRequest,
    SleepAssistantResponse,
)
from sleepcoach.core.config import settings
from sleepcoach.core.errors import ConfigurationError, InvalidRequestError, SleepCoachError
from sleepcoach.observability.tracing import annotate, trace
from sleepcoach.services.completion_client import CompletionClientFactory, EmptyCompletionError
from sleepcoach.services.recommendation_extractor import extract_recommendations

logger = logging.getLogger(__name__)

SLEEP_ASSISTANT_SYSTEM_PROMPT = (
    "You are Luna, a friendly and expert sleep coach who helps users improve their sleep quality and morning "
    "routines. Answer the user's question conversationally and practically, grounded in sleep hygiene and "
    "circadian rhythm research.\n\n"
    "Guidelines:\n"
    "- When you recommend a bedtime or wake-up time, state it explicitly in HH:MM form (e.g. \"bedtime at 22:30\")\n"
    "- When you recommend a sleep duration, state it in hours (e.g. \"aim for 8 hours of sleep\")\n"
    "- Put concrete tips on their own numbered or bulleted lines\n"
    "- Tailor advice to their current schedule, lifestyle, work schedule and sleep issues when provided\n"
    "- Keep the answer focused and encouraging"
)

FAILURE_REPLIES: Dict[Type[SleepCoachError], str] = {
    InvalidRequestError: "Please provide a message for me to help you with your sleep schedule.",
    ConfigurationError: "I'm sorry, but the AI sleep assistant is currently unavailable. Please try again later.",
    EmptyCompletionError: "I'm having trouble generating a response right now. Please try again.",
}
DEFAULT_FAILURE_REPLY = "I'm experiencing some technical difficulties. Please try again in a moment."


def build_assistant_context(request: SleepAssistantRequest) -> str:
    context = f'User question: "{request.message}"'

    schedule = request.current_schedule
    if schedule:
        context += (
            "\n\nCurrent sleep schedule:\n"
            f"- Bedtime: {schedule.bedtime}\n"
            f"- Wake-up time: {schedule.wakeup}\n"
            f"- Sleep goal: {schedule.sleep_goal} hours"
        )

    info = request.user_info
    if info:
        context += "\n\nUser information:"
        if info.age:
            context += f"\n- Age: {info.age}"
        if info.lifestyle:
            context += f"\n- Lifestyle: {info.lifestyle}"
        if info.work_schedule:
            context += f"\n- Work schedule: {info.work_schedule}"
        if info.sleep_issues:
            context += f"\n- Sleep issues: {', '.join(info.sleep_issues)}"

    return context


def answer_question(
    request: Optional[SleepAssistantRequest],
    client_factory: CompletionClientFactory,
    *,
    request_id: Optional[str] = None,
) -> SleepAssistantResponse:
    """Answer a free-form sleep question and extract any recommendations."""
    if request is None or not (request.message or "").strip():
        raise InvalidRequestError("No message provided")

    client = client_factory()
    context_message = build_assistant_context(request)

    with trace("sleep_assistant.answer", metadata={"message_length": len(request.message)}, request_id=request_id) as span:
        reply = client.complete(
            SLEEP_ASSISTANT_SYSTEM_PROMPT,
            context_message,
            max_tokens=settings.assistant_max_tokens,
        )
        extracted = extract_recommendations(reply)
        annotate(span, recommendations=sorted(extracted) if extracted else None)

    recommendations = AssistantRecommendations.model_validate(extracted) if extracted else None
    return SleepAssistantResponse(response=reply, recommendations=recommendations, success=True)


def failure_response(exc: Exception) -> SleepAssistantResponse:
    """Friendly reply plus the error message for a failed assistant call."""
    reply = DEFAULT_FAILURE_REPLY
    for error_type, text in FAILURE_REPLIES.items():
        if isinstance(exc, error_type):
            reply = text
            break
    message = getattr(exc, "message", None) or str(exc) or "Unknown error"
    return SleepAssistantResponse(response=reply, success=False, error=message)
