"""
Perplexity chat-completions client.

One client is built at process start and shared read-only by every
invocation; its base URL and authorization header never change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import httpx

from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from .errors import BackendError

logger = logging.getLogger("sonar.common.completion_client")


@dataclass(frozen=True)
class BackendSettings:
    """Static connection settings for the completion backend."""
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class CompletionResult:
    """Answer text plus citations in the order the backend returned them."""
    content: str
    citations: List[str] = field(default_factory=list)


def _extract_error_message(response: httpx.Response) -> str:
    """Pull ``error.message`` out of an API error body, if there is one."""
    try:
        data = response.json()
    except ValueError:
        return ""
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return ""


class CompletionClient:
    """
    Async client for the Perplexity ``/chat/completions`` endpoint.

    Usage:
        client = CompletionClient(BackendSettings(api_key="pplx-..."))
        result = await client.complete("sonar-pro", "Provide a clear answer to: ...")
        await client.aclose()
    """

    def __init__(
        self,
        settings: BackendSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.base_url,
            headers={
                "Authorization": f"Bearer {settings.api_key}",
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(settings.timeout),
            transport=transport,
        )

    async def complete(self, model: str, prompt: str) -> CompletionResult:
        """
        Send a single-turn chat completion request.

        Args:
            model: Backend model identifier (e.g. "sonar-pro")
            prompt: Full prompt text, sent as the only user message

        Returns:
            CompletionResult with the answer text and citations

        Raises:
            BackendError: On transport failure, non-2xx status, or a body
                without choices
        """
        payload = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
        }
        logger.debug("POST /chat/completions model=%s prompt_len=%d", model, len(prompt))

        try:
            response = await self._client.post("/chat/completions", json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = _extract_error_message(e.response) or str(e)
            logger.warning("Perplexity API error %s: %s", e.response.status_code, message)
            raise BackendError(message, status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            message = str(e) or type(e).__name__
            logger.warning("Perplexity request failed: %s", message)
            raise BackendError(message) from e

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise BackendError(f"Malformed completion response: {e}") from e

        citations = [str(c) for c in (data.get("citations") or [])]
        logger.info(
            "Completion received model=%s response_len=%d citations=%d",
            model, len(content or ""), len(citations),
        )
        return CompletionResult(content=content or "", citations=citations)

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()
