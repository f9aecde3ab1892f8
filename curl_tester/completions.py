from __future__ import annotations

from typing import Any

import httpx

from curl_tester.config import DEFAULT_UPSTREAM_BASE_URL
from curl_tester.schemas import ChatTurn


class CompletionsError(RuntimeError):
    """Base error for completions adapter failures."""


class CompletionsAPIError(CompletionsError):
    """Raised when the completions endpoint returns a non-success status code."""

    def __init__(self, *, status_code: int, message: str | None, body: Any) -> None:
        self.status_code = status_code
        self.message = message
        self.body = body
        super().__init__(f"Completions request failed [{self.status_code}]: {message or 'no error message'}")


class CompletionsClient:
    """Small httpx-based adapter for an OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = DEFAULT_UPSTREAM_BASE_URL,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        resolved_key = (api_key or "").strip()
        if not resolved_key:
            raise ValueError("Missing completions API key")

        resolved_base_url = (base_url or "").strip()
        if not resolved_base_url:
            raise ValueError("Completions base URL cannot be empty")
        if not resolved_base_url.endswith("/"):
            resolved_base_url = f"{resolved_base_url}/"

        self._client = httpx.Client(
            base_url=resolved_base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {resolved_key}",
                "Content-Type": "application/json",
            },
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "CompletionsClient":
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    def create_chat_completion(
        self,
        *,
        model: str,
        messages: list[ChatTurn],
        temperature: float,
        max_tokens: int,
    ) -> Any:
        response = self._client.post(
            "chat/completions",
            json={
                "model": model,
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
            },
        )
        if not response.is_success:
            body = _decode_body(response)
            raise CompletionsAPIError(
                status_code=response.status_code,
                message=_extract_error_message(body),
                body=body,
            )
        return response.json()


def first_choice_content(payload: Any) -> Any:
    """Return ``choices[0].message.content`` or None when any level is missing."""

    if not isinstance(payload, dict):
        return None
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    return message.get("content")


def encodable_text(text: str) -> str:
    """Replace lone surrogates so the text survives UTF-8 encoding."""

    return text.encode("utf-8", "replace").decode("utf-8")


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text.strip() or None


def _extract_error_message(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None

    error = body.get("error")
    if isinstance(error, dict):
        message = str(error.get("message") or "").strip()
        return message or None
    if isinstance(error, str) and error.strip():
        return error.strip()
    return None
