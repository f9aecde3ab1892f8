from __future__ import annotations

import logging
from typing import Any

import httpx

from curl_tester.completions import CompletionsAPIError, CompletionsClient, encodable_text, first_choice_content
from curl_tester.config import DEFAULT_UPSTREAM_BASE_URL
from curl_tester.errors import ConfigError, InputError, UpstreamError

logger = logging.getLogger("curl_tester.relay")

CHAT_TEMPERATURE = 0.7
CHAT_MAX_TOKENS = 1000
EMPTY_REPLY_PLACEHOLDER = "No response generated"


class ChatRelay:
    """Forwards browser chat turns to the completions endpoint and returns the reply text."""

    def __init__(
        self,
        *,
        api_key: str | None,
        model: str,
        base_url: str = DEFAULT_UPSTREAM_BASE_URL,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = (api_key or "").strip() or None
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    def reply(self, messages: Any) -> str:
        if messages is None or not isinstance(messages, list):
            raise InputError("Invalid messages format")
        if self.api_key is None:
            raise ConfigError()

        logger.info("chat_relay_request turns=%s model=%s", len(messages), self.model)
        try:
            with CompletionsClient(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                payload = client.create_chat_completion(
                    model=self.model,
                    messages=messages,
                    temperature=CHAT_TEMPERATURE,
                    max_tokens=CHAT_MAX_TOKENS,
                )
        except CompletionsAPIError as exc:
            logger.error("chat_relay_upstream_failed status=%s", exc.status_code)
            message = exc.message or "Chat API error"
            raise UpstreamError(message, status_code=exc.status_code) from exc

        content = first_choice_content(payload)
        if not isinstance(content, str) or not content:
            return EMPTY_REPLY_PLACEHOLDER
        return encodable_text(content)
