from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx


class CompletionError(Exception):
    """Base exception for a failed completion call."""


class CompletionTransportError(CompletionError):
    """Raised when the request never produced an HTTP response."""


class CompletionStatusError(CompletionError):
    """Raised on a non-success HTTP status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"error: {status_code}")
        self.status_code = status_code
        self.body = body


class MalformedResponseError(CompletionError):
    """Raised when the response body lacks choices[0].message.content."""


@dataclass(frozen=True)
class CompletionRequest:
    model: str
    messages: list[dict[str, str]] = field(default_factory=list)
    max_tokens: int = 100

    @classmethod
    def build(cls, model: str, system_prompt: str, user_text: str, max_tokens: int = 100) -> "CompletionRequest":
        return cls(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_text},
            ],
            max_tokens=max_tokens,
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [dict(item) for item in self.messages],
            "max_tokens": self.max_tokens,
        }


def extract_content(data: Any) -> str:
    if not isinstance(data, dict):
        raise MalformedResponseError("malformed response")
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise MalformedResponseError("malformed response")
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        raise MalformedResponseError("malformed response")
    return content


class CompletionClient:
    def __init__(
        self,
        api_key: str,
        *,
        base_url: str,
        model: str,
        max_tokens: int = 100,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._max_tokens = max_tokens
        self._client = client or httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=timeout)
        self._logger = logging.getLogger("llm_client")

    @property
    def model(self) -> str:
        return self._model

    async def complete(self, system_prompt: str, user_text: str) -> str:
        request = CompletionRequest.build(self._model, system_prompt, user_text, self._max_tokens)
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        self._logger.info(
            "LLM completion model=%s max_tokens=%s user_chars=%s",
            request.model,
            request.max_tokens,
            len(user_text),
        )
        try:
            resp = await self._client.post("/chat/completions", json=request.to_payload(), headers=headers)
        except httpx.HTTPError as exc:
            raise CompletionTransportError(str(exc) or exc.__class__.__name__) from exc

        if not resp.is_success:
            body = resp.text
            self._logger.warning("LLM completion failed status=%s body=%s", resp.status_code, body)
            raise CompletionStatusError(resp.status_code, body)

        try:
            data = resp.json()
        except ValueError as exc:
            raise MalformedResponseError("malformed response") from exc
        result = extract_content(data)
        self._logger.info("LLM completion received chars=%s", len(result))
        return result

    async def aclose(self) -> None:
        await self._client.aclose()
