"""Single-attempt chat completion client used by every Luna endpoint."""
from __future__ import annotations

import logging
from typing import Callable

import openai

from sleepcoach.core.config import settings
from sleepcoach.core.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


class EmptyCompletionError(UpstreamError):
    """The completion service answered without any content."""


class PromptedCompletionClient:
    """Send a fixed system instruction plus one user message, return the raw text.

    The SDK client is built with ``max_retries=0`` so each call is exactly one
    outbound request, bounded by ``timeout`` seconds.
    """

    def __init__(
        self,
        api_key: str,
        *,
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        timeout: float = 60.0,
    ):
        self.model = model
        self.temperature = temperature
        self._client = openai.OpenAI(api_key=api_key, max_retries=0, timeout=timeout)

    def complete(
        self,
        system_prompt: str,
        context_message: str,
        *,
        max_tokens: int,
        json_mode: bool = False,
    ) -> str:
        params = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": context_message},
            ],
            "max_tokens": max_tokens,
            "temperature": self.temperature,
        }
        if json_mode:
            params["response_format"] = {"type": "json_object"}

        try:
            completion = self._client.chat.completions.create(**params)
        except openai.OpenAIError as exc:
            logger.error("Completion request failed (%s): %s", type(exc).__name__, exc)
            raise UpstreamError(str(exc) or type(exc).__name__) from exc

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise EmptyCompletionError("No response from OpenAI")
        return content


CompletionClientFactory = Callable[[], PromptedCompletionClient]


def build_completion_client() -> PromptedCompletionClient:
    """Build a client from current settings; the credential is checked on every call."""
    api_key = settings.openai_api_key
    if not api_key:
        logger.error("OpenAI API key not found in environment variables")
        raise ConfigurationError("OpenAI API key not configured")
    return PromptedCompletionClient(
        api_key,
        model=settings.openai_model,
        temperature=settings.openai_temperature,
        timeout=settings.openai_timeout_seconds,
    )


def get_completion_client_factory() -> CompletionClientFactory:
    """FastAPI dependency returning the client factory.

    Routes receive a factory rather than a client so that a missing request
    body is reported before the credential is checked.
    """
    return build_completion_client
