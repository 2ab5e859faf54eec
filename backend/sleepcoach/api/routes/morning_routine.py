"""Morning routine generation endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from sleepcoach.api.schemas.morning_routine import MorningRoutineEnvelope, MorningRoutineRequest
from sleepcoach.services.completion_client import CompletionClientFactory, get_completion_client_factory
from sleepcoach.services.morning_routine_generator import generate_morning_routine

router = APIRouter()


@router.post(
    "/api/generate-morning-routine",
    response_model=MorningRoutineEnvelope,
    response_model_exclude_none=True,
    tags=["generation"],
)
def generate_morning_routine_endpoint(
    http_request: Request,
    payload: MorningRoutineRequest | None = None,
    client_factory: CompletionClientFactory = Depends(get_completion_client_factory),
) -> MorningRoutineEnvelope:
    request_id = getattr(http_request.state, "request_id", None)
    data = generate_morning_routine(payload, client_factory, request_id=request_id)
    return MorningRoutineEnvelope(success=True, data=data)
