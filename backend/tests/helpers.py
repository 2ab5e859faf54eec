"""Shared test doubles and payload builders."""
from __future__ import annotations

import json
from typing import Any, Dict, List


class FakeCompletionClient:
    """Records prompts and replays a canned reply (or raises a canned error)."""

    def __init__(self, reply: str | None = None, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def complete(self, system_prompt: str, context_message: str, *, max_tokens: int, json_mode: bool = False) -> str:
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "context_message": context_message,
                "max_tokens": max_tokens,
                "json_mode": json_mode,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply or ""


def schedule_items(count: int) -> List[Dict[str, str]]:
    categories = ["evening"] * (count - 4) + ["night", "night", "morning", "morning"]
    return [
        {
            "time": f"{6 + index}:00 PM",
            "activity": f"Activity {index}",
            "description": f"Do thing {index}",
            "category": category,
        }
        for index, category in enumerate(categories)
    ]


def routine_items(count: int) -> List[Dict[str, str]]:
    categories = ["preparation", "wellness", "productivity", "energy"]
    return [
        {
            "time": f"7:{index * 5:02d} AM",
            "activity": f"Step {index}",
            "description": f"Morning step {index}",
            "category": categories[index % len(categories)],
        }
        for index in range(count)
    ]


def as_json(payload: Dict[str, Any]) -> str:
    return json.dumps(payload)
