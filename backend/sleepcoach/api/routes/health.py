"""Liveness and readiness probes."""
from __future__ import annotations

from fastapi import APIRouter, Request

from sleepcoach.observability.tracing import trace

router = APIRouter()


@router.get("/health", tags=["health"], summary="Readiness probe")
async def health_check(request: Request) -> dict[str, str]:
    """Return a simple status payload so automation can probe the API."""
    with trace("http.health_check", metadata={"route": "/health"}, request_id=request.state.request_id):
        return {"status": "ok"}


@router.get("/api/ping", tags=["health"])
async def ping() -> dict[str, str]:
    return {"message": "Hello from the Luna sleep coach API!"}
