"""Opik spans around generation steps; every helper is a no-op when tracing is off."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional

from sleepcoach.observability import client as opik_client

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from opik.api_objects.trace.trace_client import Trace
else:  # pragma: no cover - typing helper
    Trace = object  # type: ignore[assignment]

logger = logging.getLogger(__name__)

_EMPTY = (None, "", [])


def _clean(metadata: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {key: value for key, value in (metadata or {}).items() if value not in _EMPTY}


def _open(name: str, metadata: Dict[str, Any]) -> Optional["Trace"]:
    client = opik_client.get_opik_client()
    if not client:
        return None
    try:
        return client.trace(name=name, metadata=metadata or None)
    except Exception as exc:  # pragma: no cover - exporter failure
        logger.debug("Opik refused trace %s: %s", name, exc)
        return None


def _close(opik_trace: "Trace", name: str, error: Optional[BaseException]) -> None:
    try:
        if error is not None:
            opik_trace.update(error_info={"message": str(error)})
        opik_trace.end()
    except Exception:  # pragma: no cover - exporter failure
        logger.debug("Could not finish Opik trace %s", name, exc_info=True)


@contextmanager
def trace(
    name: str,
    metadata: Optional[Dict[str, Any]] = None,
    request_id: Optional[str] = None,
) -> Iterator[Optional["Trace"]]:
    """Yield an open Opik trace, or ``None`` when tracing is disabled.

    An exception raised in the block is recorded on the trace and re-raised.
    """
    span_metadata = _clean(metadata)
    if request_id:
        span_metadata.setdefault("request_id", request_id)
    opik_trace = _open(name, span_metadata)
    if opik_trace is None:
        yield None
        return

    error: Optional[BaseException] = None
    try:
        yield opik_trace
    except Exception as exc:
        error = exc
        raise
    finally:
        _close(opik_trace, name, error)


def annotate(opik_trace: Optional["Trace"], **metadata: Any) -> None:
    """Merge extra metadata into an open trace."""
    if not opik_trace:
        return
    try:
        opik_trace.update(metadata=_clean(metadata))
    except Exception:  # pragma: no cover - exporter failure
        logger.debug("Unable to update Opik trace metadata", exc_info=True)
