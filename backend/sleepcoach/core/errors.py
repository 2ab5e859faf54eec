"""Error taxonomy for the generation endpoints.

Every error that can reach a client derives from ``SleepCoachError`` and
carries the HTTP status it maps to. ``MalformedResponseError`` is the one
exception: it is raised and absorbed inside the parse-or-fallback step and
never leaves the service layer.
"""
from __future__ import annotations

from typing import Any, Dict

from fastapi import Request, status
from fastapi.responses import JSONResponse


class SleepCoachError(Exception):
    """Base error rendered as ``{"success": false, "error": message}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidRequestError(SleepCoachError):
    """The caller omitted the questionnaire or message body."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConfigurationError(SleepCoachError):
    """The completion-service credential is not configured."""


class UpstreamError(SleepCoachError):
    """The completion service call failed or returned nothing."""


class GenerationError(SleepCoachError):
    """Any unexpected failure while generating a plan."""


class MalformedResponseError(ValueError):
    """Completion text is not JSON of the expected shape."""


def error_payload(message: str) -> Dict[str, Any]:
    return {"success": False, "error": message}


async def sleep_coach_error_handler(request: Request, exc: SleepCoachError) -> JSONResponse:
    """Render a SleepCoachError as the failure envelope."""
    return JSONResponse(status_code=exc.status_code, content=error_payload(exc.message))
