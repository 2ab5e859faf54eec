"""Regex heuristics for pulling recommendations out of free-form coach replies."""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

BEDTIME_RE = re.compile(r"(?:bedtime|go to bed|sleep).*?(\d{1,2}:\d{2})", re.IGNORECASE)
WAKEUP_RE = re.compile(r"(?:wake|get up|rise).*?(\d{1,2}:\d{2})", re.IGNORECASE)
DURATION_RE = re.compile(r"(\d+(?:\.\d+)?)\s*hours?.*?sleep", re.IGNORECASE)
TIP_LINE_RE = re.compile(r"(?:^|\n)\s*[\d\-\*•]\s*(.+)", re.MULTILINE)
TIP_PREFIX_RE = re.compile(r"^[\s\d\-\*•.)]+")

MIN_TIP_LENGTH = 10
MAX_TIPS = 3


def extract_recommendations(text: str) -> Optional[Dict[str, Any]]:
    """Return bedtime, wakeup, sleepDuration and tips found in ``text``.

    Missing pieces are simply left out; ``None`` means nothing matched.
    """
    recommendations: Dict[str, Any] = {}

    bedtime = BEDTIME_RE.search(text)
    if bedtime:
        recommendations["bedtime"] = bedtime.group(1)

    wakeup = WAKEUP_RE.search(text)
    if wakeup:
        recommendations["wakeup"] = wakeup.group(1)

    duration = DURATION_RE.search(text)
    if duration:
        recommendations["sleepDuration"] = float(duration.group(1))

    tips = _extract_tips(text)
    if tips is not None:
        recommendations["tips"] = tips

    return recommendations or None


def _extract_tips(text: str) -> Optional[List[str]]:
    lines = [match.group(0) for match in TIP_LINE_RE.finditer(text)]
    if not lines:
        return None
    cleaned = (TIP_PREFIX_RE.sub("", line).strip() for line in lines)
    return [tip for tip in cleaned if len(tip) > MIN_TIP_LENGTH][:MAX_TIPS]
