"""Sleep assistant chat endpoint."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from sleepcoach.api.schemas.sleep_assistant import SleepAssistantRequest, SleepAssistantResponse
from sleepcoach.core.errors import SleepCoachError
from sleepcoach.observability.metrics import log_metric
from sleepcoach.services.completion_client import CompletionClientFactory, get_completion_client_factory
from sleepcoach.services.sleep_assistant import answer_question, failure_response

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/api/sleep-assistant", response_model=SleepAssistantResponse, tags=["assistant"])
def sleep_assistant_endpoint(
    http_request: Request,
    payload: SleepAssistantRequest | None = None,
    client_factory: CompletionClientFactory = Depends(get_completion_client_factory),
):
    """Answer a sleep question; failures still carry a friendly ``response`` text."""
    request_id = getattr(http_request.state, "request_id", None)
    try:
        result = answer_question(payload, client_factory, request_id=request_id)
    except SleepCoachError as exc:
        return _failure(exc, exc.status_code)
    except Exception as exc:
        logger.exception("Sleep assistant error")
        return _failure(exc, 500)

    log_metric("sleep_assistant.recommendations", 1 if result.recommendations else 0)
    return JSONResponse(content=result.model_dump(by_alias=True, exclude_none=True))


def _failure(exc: Exception, status_code: int) -> JSONResponse:
    body = failure_response(exc)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True, exclude_none=True))
