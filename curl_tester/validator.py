from __future__ import annotations

import json
import logging
import math
import re
from typing import Any

import httpx

from curl_tester.completions import CompletionsAPIError, CompletionsClient, encodable_text, first_choice_content
from curl_tester.config import DEFAULT_UPSTREAM_BASE_URL
from curl_tester.errors import ConfigError, InputError, UpstreamError
from curl_tester.schemas import DegradedVerdict

logger = logging.getLogger("curl_tester.validator")

VALIDATOR_TEMPERATURE = 0.3
VALIDATOR_MAX_TOKENS = 1024

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*", re.IGNORECASE)

_PROMPT_TEMPLATE = """You are an expert cURL command validator. Analyze this curl command and identify any issues:

curl command: {command}

You must respond with ONLY a valid JSON object, no markdown formatting, no code blocks, no backticks. Just the raw JSON object with this exact structure:
{{
  "isValid": true or false,
  "issues": ["array of issue strings, empty if none"],
  "suggestedFix": "corrected curl command string or null if valid",
  "explanation": "brief explanation string"
}}

Be strict about syntax, headers, URL format, and API best practices."""


def build_prompt(command: str) -> str:
    return _PROMPT_TEMPLATE.format(command=command)


def strip_code_fences(text: str) -> str:
    """
    Remove every markdown code-fence marker from a model reply.

    Markers are removed with or without a ``json`` language tag, together with
    the whitespace that follows them. Removal repeats until no marker is left,
    so the result never contains a triple backtick and a second call is a no-op.
    """

    cleaned = text
    while True:
        stripped = _FENCE_PATTERN.sub("", cleaned)
        if stripped == cleaned:
            break
        cleaned = stripped
    return cleaned.strip()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unsupported JSON constant {name}")


def _finite_float(value: str) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Out of range float {value}")
    return number


def interpret_model_reply(text: str) -> Any:
    """Parse a model reply as JSON, or return a degraded verdict carrying the raw text."""

    cleaned = strip_code_fences(text)
    try:
        result = json.loads(cleaned, parse_constant=_reject_constant, parse_float=_finite_float)
        # The verdict is sent back as strict UTF-8 JSON.
        json.dumps(result, allow_nan=False, ensure_ascii=False).encode("utf-8")
    except ValueError:
        logger.warning("validator_reply_unparseable length=%s", len(text))
        return DegradedVerdict(explanation=encodable_text(text)).model_dump()
    return result


class CurlValidator:
    """Asks the completions endpoint for a JSON verdict on a single curl command."""

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

    def validate(self, command: Any) -> Any:
        if not command:
            raise InputError("No curl command provided")
        if self.api_key is None:
            raise ConfigError()

        prompt = build_prompt(command if isinstance(command, str) else json.dumps(command))
        try:
            with CompletionsClient(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                payload = client.create_chat_completion(
                    model=self.model,
                    messages=[{"role": "user", "content": prompt}],
                    temperature=VALIDATOR_TEMPERATURE,
                    max_tokens=VALIDATOR_MAX_TOKENS,
                )
        except CompletionsAPIError as exc:
            logger.error("validator_upstream_failed status=%s", exc.status_code)
            raise UpstreamError(
                "Failed to validate curl command",
                status_code=exc.status_code,
                payload={"error": "Failed to validate curl command", "details": exc.body},
            ) from exc

        content = first_choice_content(payload)
        return interpret_model_reply(content if isinstance(content, str) else "")
