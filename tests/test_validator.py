from __future__ import annotations

import json

import httpx
import pytest

from curl_tester.errors import ConfigError, InputError, UpstreamError
from curl_tester.validator import CurlValidator, build_prompt, interpret_model_reply, strip_code_fences


VERDICT_JSON = '{"isValid":true,"issues":[],"suggestedFix":null,"explanation":"OK"}'


def _validator(handler, *, api_key: str | None = "test-key") -> CurlValidator:
    return CurlValidator(
        api_key=api_key,
        model="validator-model",
        base_url="https://llm.test/v1",
        transport=httpx.MockTransport(handler),
    )


def _reply(content: object) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


def _unreachable(_: httpx.Request) -> httpx.Response:
    raise AssertionError("upstream must not be called")


def test_build_prompt_embeds_command_once() -> None:
    prompt = build_prompt("curl -X POST https://api.example.com/items")

    assert prompt.count("curl -X POST https://api.example.com/items") == 1
    assert "curl command: curl -X POST https://api.example.com/items\n" in prompt
    for field in ('"isValid"', '"issues"', '"suggestedFix"', '"explanation"'):
        assert field in prompt
    assert "no markdown formatting" in prompt


def test_build_prompt_keeps_braces_in_command_literal() -> None:
    command = "curl -d '{\"a\": {\"b\": 1}}' https://example.com"
    assert command in build_prompt(command)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (VERDICT_JSON, VERDICT_JSON),
        (f"```json\n{VERDICT_JSON}\n```", VERDICT_JSON),
        (f"```\n{VERDICT_JSON}\n```", VERDICT_JSON),
        (f"  ```JSON {VERDICT_JSON}```  ", VERDICT_JSON),
        ("```json\n[1]\n```\n```json\n[2]\n```", "[1]\n[2]"),
        ("", ""),
        ("``````", ""),
    ],
)
def test_strip_code_fences(text: str, expected: str) -> None:
    assert strip_code_fences(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        VERDICT_JSON,
        f"```json\n{VERDICT_JSON}\n```",
        "``" + "```json" + "`",
        "````json\n{}\n````",
        "plain text with ``` inside",
    ],
)
def test_strip_code_fences_is_idempotent(text: str) -> None:
    once = strip_code_fences(text)
    assert strip_code_fences(once) == once
    assert "```" not in once


def test_interpret_model_reply_parses_fenced_verdict() -> None:
    assert interpret_model_reply(f"```json\n{VERDICT_JSON}\n```") == {
        "isValid": True,
        "issues": [],
        "suggestedFix": None,
        "explanation": "OK",
    }


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ('{"verdict": "fine"}', {"verdict": "fine"}),
        ("[1, 2, 3]", [1, 2, 3]),
        ("```\n42\n```", 42),
    ],
)
def test_interpret_model_reply_returns_any_json_verbatim(text: str, expected: object) -> None:
    assert interpret_model_reply(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "The command looks fine to me.",
        "```json\n{\"isValid\": true,\n```",
        "",
        "NaN",
        '{"score": Infinity}',
    ],
)
def test_interpret_model_reply_degrades_on_unparseable_text(text: str) -> None:
    assert interpret_model_reply(text) == {
        "isValid": False,
        "issues": ["Unable to parse validation response"],
        "explanation": text,
    }


@pytest.mark.parametrize(
    "text",
    [
        '{"isValid": true, "issues": [], "score": 1e400, "explanation": "ok"}',
        "[-1e999]",
        '{"explanation": "\\ud800"}',
        '```json\n{"issues": ["\\udfff"]}\n```',
    ],
)
def test_interpret_model_reply_degrades_on_json_that_cannot_be_sent_back(text: str) -> None:
    verdict = interpret_model_reply(text)

    assert verdict == {
        "isValid": False,
        "issues": ["Unable to parse validation response"],
        "explanation": text,
    }
    json.dumps(verdict, allow_nan=False, ensure_ascii=False).encode("utf-8")


def test_interpret_model_reply_replaces_lone_surrogates_in_degraded_text() -> None:
    verdict = interpret_model_reply("\ud800 not json")

    assert verdict["explanation"] == "? not json"


def test_interpret_model_reply_keeps_large_finite_numbers() -> None:
    assert interpret_model_reply('{"score": 1e300}') == {"score": 1e300}


def test_validate_sends_single_user_turn_with_structured_sampling() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content.decode("utf-8"))
        assert body["model"] == "validator-model"
        assert body["temperature"] == 0.3
        assert body["max_tokens"] == 1024
        assert body["messages"] == [{"role": "user", "content": build_prompt("curl http://example.com")}]
        return _reply(f"```json\n{VERDICT_JSON}\n```")

    assert _validator(handler).validate("curl http://example.com") == {
        "isValid": True,
        "issues": [],
        "suggestedFix": None,
        "explanation": "OK",
    }


@pytest.mark.parametrize("command", [None, ""])
def test_validate_rejects_missing_command(command: object) -> None:
    with pytest.raises(InputError) as error:
        _validator(_unreachable).validate(command)
    assert error.value.payload == {"error": "No curl command provided"}


def test_validate_without_credential_raises_config_error() -> None:
    with pytest.raises(ConfigError):
        _validator(_unreachable, api_key="").validate("curl http://example.com")


def test_validate_upstream_failure_includes_details() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"error": {"message": "rate limited"}})

    with pytest.raises(UpstreamError) as error:
        _validator(handler).validate("curl http://example.com")
    assert error.value.status_code == 429
    assert error.value.payload == {
        "error": "Failed to validate curl command",
        "details": {"error": {"message": "rate limited"}},
    }


def test_validate_missing_reply_content_degrades() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": []})

    verdict = _validator(handler).validate("curl http://example.com")
    assert verdict == {
        "isValid": False,
        "issues": ["Unable to parse validation response"],
        "explanation": "",
    }
