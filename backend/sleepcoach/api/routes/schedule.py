"""Sleep schedule generation endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from sleepcoach.api.schemas.schedule import ScheduleEnvelope, ScheduleRequest
from sleepcoach.services.completion_client import CompletionClientFactory, get_completion_client_factory
from sleepcoach.services.schedule_generator import generate_schedule

router = APIRouter()


@router.post(
    "/api/generate-schedule",
    response_model=ScheduleEnvelope,
    response_model_exclude_none=True,
    tags=["generation"],
)
def generate_schedule_endpoint(
    http_request: Request,
    payload: ScheduleRequest | None = None,
    client_factory: CompletionClientFactory = Depends(get_completion_client_factory),
) -> ScheduleEnvelope:
    """Turn a chronotype questionnaire into a timed evening-to-morning schedule."""
    request_id = getattr(http_request.state, "request_id", None)
    data = generate_schedule(payload, client_factory, request_id=request_id)
    return ScheduleEnvelope(success=True, data=data)
