"""Regression tests for application route registration."""
import pytest
from fastapi.routing import APIRoute

from sleepcoach.main import app


@pytest.mark.parametrize(
    ("path", "method"),
    [
        ("/api/generate-schedule", "POST"),
        ("/api/generate-morning-routine", "POST"),
        ("/api/sleep-assistant", "POST"),
        ("/api/ping", "GET"),
        ("/health", "GET"),
    ],
)
def test_route_registered_once(path: str, method: str) -> None:
    """Each endpoint is mounted exactly once."""
    matches = [
        route
        for route in app.routes
        if isinstance(route, APIRoute) and route.path == path and method in route.methods
    ]
    assert len(matches) == 1
