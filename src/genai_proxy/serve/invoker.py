"""Calls the Gemini generate-content API with a bounded retry on overload.

Only transient overloads (HTTP 503) are retried: up to `retries` extra
attempts, each preceded by a fixed `retry_delay_s` sleep. Everything else
propagates on the first failure.
"""
from __future__ import annotations
import asyncio
import logging
from typing import Any, Awaitable, Callable, Sequence

from google import genai
from google.genai import errors, types

from genai_proxy.common.schema import ContentPart, InlineDataPart, TextPart

LOGGER = logging.getLogger("genai_proxy.invoker")

OVERLOADED_STATUS = 503

def is_transient(exc: BaseException) -> bool:
    """True when the upstream reports a temporary overload."""
    if isinstance(exc, errors.APIError) and exc.code == OVERLOADED_STATUS:
        return True
    return str(OVERLOADED_STATUS) in str(exc)

def to_genai_part(part: ContentPart) -> types.Part:
    if isinstance(part, TextPart):
        return types.Part.from_text(text=part.text)
    if isinstance(part, InlineDataPart):
        return types.Part.from_bytes(data=part.data, mime_type=part.mime_type)
    raise TypeError(f"Unsupported content part: {type(part).__name__}")

class GenerationInvoker:
    """
    Thin wrapper over `client.aio.models.generate_content`.

    Args:
        api_key: Gemini API key; the client is created on first use.
        model: Model identifier sent with every call.
        retries: Extra attempts allowed for transient failures.
        retry_delay_s: Fixed pause before each retry.
        client: Pre-built client, mainly for tests.
        sleep: Awaitable sleep, replaceable in tests.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str,
        retries: int = 3,
        retry_delay_s: float = 1.0,
        client: Any = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.model = model
        self.retries = retries
        self.retry_delay_s = retry_delay_s
        self._api_key = api_key
        self._client = client
        self._sleep = sleep

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def generate(self, parts: Sequence[ContentPart]) -> str:
        """
        Send one generation request and return the model's text.

        Args:
            parts: Ordered content parts, instruction text first.
        """
        contents = [to_genai_part(p) for p in parts]
        remaining = self.retries
        attempt = 0
        while True:
            attempt += 1
            LOGGER.debug("generate_content attempt %d (model=%s, parts=%d)", attempt, self.model, len(contents))
            try:
                response = await self.client.aio.models.generate_content(
                    model=self.model,
                    contents=contents,
                )
            except Exception as e:
                if remaining == 0 or not is_transient(e):
                    raise
                remaining -= 1
                LOGGER.warning(
                    "Upstream overloaded on attempt %d: %s; retrying in %.1fs (%d left)",
                    attempt,
                    e,
                    self.retry_delay_s,
                    remaining,
                )
                await self._sleep(self.retry_delay_s)
                continue
            return response.text or ""
