"""Shared prompt → completion → parse-or-fallback pipeline for Luna plans."""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from sleepcoach.core.config import settings
from sleepcoach.core.errors import GenerationError, MalformedResponseError, SleepCoachError
from sleepcoach.observability.metrics import log_metric
from sleepcoach.observability.tracing import annotate, trace
from sleepcoach.services.completion_client import CompletionClientFactory

logger = logging.getLogger(__name__)

PlanT = TypeVar("PlanT", bound=BaseModel)

_CODE_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL | re.IGNORECASE)


def _strip_code_fence(text: str) -> str:
    match = _CODE_FENCE_RE.match(text)
    return match.group(1) if match else text


def parse_plan(text: str, model: Type[PlanT], items_field: str) -> PlanT:
    """Validate completion text as a plan; raise MalformedResponseError otherwise."""
    try:
        payload = json.loads(_strip_code_fence(text))
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(f"Completion is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict) or not isinstance(payload.get(items_field), list):
        raise MalformedResponseError(f"Invalid {items_field} format from AI")

    try:
        plan = model.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"{items_field} failed validation ({exc.error_count()} errors)"
        ) from exc
    # The flag is only ever set by the fallback path.
    return plan.model_copy(update={"fallback_used": None})


def parse_or_fallback(
    text: str,
    model: Type[PlanT],
    items_field: str,
    fallback: Callable[[], PlanT],
) -> PlanT:
    """Return the parsed plan, or the fallback plan when the text is unusable."""
    try:
        return parse_plan(text, model, items_field)
    except MalformedResponseError as exc:
        logger.warning("Error parsing AI %s response, using fallback: %s", items_field, exc)
        logger.debug("Raw AI response: %s", text)
        return fallback()


def generate_plan(
    *,
    kind: str,
    client_factory: CompletionClientFactory,
    system_prompt: str,
    build_context: Callable[[], str],
    model: Type[PlanT],
    items_field: str,
    fallback: Callable[[], PlanT],
    trace_metadata: Optional[Dict[str, Any]] = None,
    request_id: Optional[str] = None,
) -> PlanT:
    """Run one generation: check config, prompt once, parse or fall back.

    Errors from the SleepCoachError family propagate untouched; anything else
    is logged and wrapped in GenerationError.
    """
    client = client_factory()

    try:
        context_message = build_context()
        with trace(f"{kind}.generate", metadata=trace_metadata, request_id=request_id) as span:
            raw = client.complete(
                system_prompt,
                context_message,
                max_tokens=settings.plan_max_tokens,
                json_mode=True,
            )
            plan = parse_or_fallback(raw, model, items_field, fallback)
            fallback_used = bool(getattr(plan, "fallback_used", False))
            annotate(span, fallback_used=fallback_used, items=len(getattr(plan, items_field)))
    except SleepCoachError:
        raise
    except Exception as exc:
        logger.exception("%s generation error", kind.replace("_", " ").capitalize())
        raise GenerationError(str(exc) or "Unknown error") from exc

    log_metric(f"{kind}.fallback.used", 1 if fallback_used else 0)
    logger.info("Generated %s with %d items (fallback=%s)", kind, len(getattr(plan, items_field)), fallback_used)
    return plan
