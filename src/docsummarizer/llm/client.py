"""Text-completion capability and its OpenAI-compatible implementation.

The pipeline only needs ``(model, prompt, credential) -> text``. The credential is supplied
per call because each summarization request brings its own API key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx
import openai
from openai import AsyncOpenAI, OpenAI

from docsummarizer.config import Settings
from docsummarizer.errors import CompletionError, CompletionTimeoutError
from docsummarizer.logging import get_logger

logger = get_logger(__name__)


class CompletionService(Protocol):
    """Text-completion capability consumed by the summarizer."""

    def complete(self, prompt: str, *, model: str, api_key: str) -> str:
        """Return the model's response text for a single user prompt."""

    async def complete_async(self, prompt: str, *, model: str, api_key: str) -> str:
        """Async variant of :meth:`complete`."""


@dataclass(frozen=True)
class OpenAICompletionClient:
    """Completion client using an OpenAI-compatible Chat Completions API.

    No retries: a failed call fails the unit of work immediately. ``transport`` lets tests
    route requests through ``httpx.MockTransport``.
    """

    settings: Settings
    transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = field(default=None, compare=False)

    def complete(self, prompt: str, *, model: str, api_key: str) -> str:
        """Generate a completion.

        Args:
            prompt: User prompt text.
            model: Model identifier.
            api_key: Credential for this call.

        Returns:
            Assistant message content ("" when the model returned none).
        """

        client = OpenAI(
            api_key=api_key,
            base_url=self.settings.completion_base_url,
            max_retries=0,
            http_client=httpx.Client(transport=self.transport) if self.transport is not None else None,  # type: ignore[arg-type]
        )
        try:
            resp = client.chat.completions.create(**self._request(prompt, model))
        except openai.APITimeoutError as e:
            raise CompletionTimeoutError(f"Model call timed out after {self.settings.completion_timeout_s}s") from e
        except openai.APIError as e:
            raise CompletionError(f"Model call failed: {e}") from e
        finally:
            client.close()
        return self._content(resp)

    async def complete_async(self, prompt: str, *, model: str, api_key: str) -> str:
        """Async variant of :meth:`complete`; cancelling the awaiting task aborts the request."""

        client = AsyncOpenAI(
            api_key=api_key,
            base_url=self.settings.completion_base_url,
            max_retries=0,
            http_client=httpx.AsyncClient(transport=self.transport) if self.transport is not None else None,  # type: ignore[arg-type]
        )
        try:
            resp = await client.chat.completions.create(**self._request(prompt, model))
        except openai.APITimeoutError as e:
            raise CompletionTimeoutError(f"Model call timed out after {self.settings.completion_timeout_s}s") from e
        except openai.APIError as e:
            raise CompletionError(f"Model call failed: {e}") from e
        finally:
            await client.close()
        return self._content(resp)

    def _request(self, prompt: str, model: str) -> dict[str, Any]:
        return {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.settings.temperature,
            "max_tokens": self.settings.max_output_tokens,
            "timeout": self.settings.completion_timeout_s,
        }

    @staticmethod
    def _content(resp: Any) -> str:
        if not resp.choices:
            return ""
        choice = resp.choices[0]
        if not choice.message or choice.message.content is None:
            return ""
        return choice.message.content
