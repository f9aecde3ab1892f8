from __future__ import annotations

import json

import httpx
import pytest

from curl_tester.errors import ConfigError, InputError, UpstreamError
from curl_tester.relay import EMPTY_REPLY_PLACEHOLDER, ChatRelay


def _relay(handler, *, api_key: str | None = "test-key") -> ChatRelay:
    return ChatRelay(
        api_key=api_key,
        model="chat-model",
        base_url="https://llm.test/v1",
        transport=httpx.MockTransport(handler),
    )


def _unreachable(_: httpx.Request) -> httpx.Response:
    raise AssertionError("upstream must not be called")


def test_reply_forwards_turns_with_fixed_sampling_parameters() -> None:
    turns = [
        {"role": "assistant", "content": "Hi!"},
        {"role": "user", "content": "How do I send JSON with curl?"},
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content.decode("utf-8"))
        assert body == {
            "model": "chat-model",
            "messages": turns,
            "temperature": 0.7,
            "max_tokens": 1000,
        }
        return httpx.Response(200, json={"choices": [{"message": {"content": "Use --json."}}]})

    assert _relay(handler).reply(turns) == "Use --json."


@pytest.mark.parametrize("messages", [None, "hello", {"role": "user"}, 3])
def test_reply_rejects_missing_or_non_list_messages(messages: object) -> None:
    with pytest.raises(InputError) as error:
        _relay(_unreachable).reply(messages)
    assert error.value.status_code == 400
    assert error.value.payload == {"error": "Invalid messages format"}


def test_reply_checks_input_before_credential() -> None:
    with pytest.raises(InputError):
        _relay(_unreachable, api_key=None).reply(None)


@pytest.mark.parametrize("api_key", [None, "", "   "])
def test_reply_without_credential_raises_config_error(api_key: str | None) -> None:
    with pytest.raises(ConfigError) as error:
        _relay(_unreachable, api_key=api_key).reply([{"role": "user", "content": "hi"}])
    assert error.value.status_code == 500
    assert error.value.payload == {"error": "Groq API key not configured"}


def test_empty_turn_list_is_still_forwarded() -> None:
    calls: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(json.loads(request.content.decode("utf-8")))
        return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

    assert _relay(handler).reply([]) == "ok"
    assert calls[0]["messages"] == []


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"choices": []},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": ""}}]},
        {"choices": [{"message": {"content": None}}]},
    ],
)
def test_missing_content_returns_placeholder(payload: dict) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    assert _relay(handler).reply([{"role": "user", "content": "hi"}]) == EMPTY_REPLY_PLACEHOLDER


def test_reply_replaces_lone_surrogates() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=b'{"choices":[{"message":{"content":"\\ud800 hi"}}]}',
            headers={"Content-Type": "application/json"},
        )

    reply = _relay(handler).reply([{"role": "user", "content": "hi"}])

    assert reply == "? hi"
    reply.encode("utf-8")


def test_upstream_failure_carries_status_and_message() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"message": "invalid key"}})

    with pytest.raises(UpstreamError) as error:
        _relay(handler).reply([{"role": "user", "content": "hi"}])
    assert error.value.status_code == 401
    assert error.value.payload == {"error": "invalid key"}


def test_upstream_failure_without_message_uses_generic_text() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"status": "down"})

    with pytest.raises(UpstreamError) as error:
        _relay(handler).reply([])
    assert error.value.status_code == 503
    assert error.value.payload == {"error": "Chat API error"}
